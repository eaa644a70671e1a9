"""Password hashing service using bcrypt.

Provides password hashing, verification and strength validation. The
CPU-bound bcrypt calls have async counterparts that run in a worker
thread so request handlers never block the event loop.
"""

import asyncio
import re
from functools import cached_property

import bcrypt

from swachh_auth.exceptions import WeakPasswordError

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

# Verified against when an account does not exist so that lookups of
# unknown e-mails cost as much as real ones
_DUMMY_PASSWORD = b"Dummy-Passw0rd!"

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Also provides password strength validation.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("Str0ng!Pass")
    >>> service.verify("Str0ng!Pass", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    MIN_LENGTH = 8
    # bcrypt only considers the first 72 bytes of its input
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Tests use 4 to keep hashing fast.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise (including when the
        stored hash is malformed)
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long input
            return False

    async def hash_async(self, password: str) -> str:
        """Hash a password in a worker thread.

        Strength validation runs before the thread hop, so weak passwords
        fail fast.
        """
        self.validate_strength(password)
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash in a worker thread."""
        return await asyncio.to_thread(self.verify, password, password_hash)

    def check_strength(self, password: str) -> list[str]:
        """Return every unmet strength rule (empty when the password is fine)."""
        violations: list[str] = []
        password = password or ""

        if len(password) < self.MIN_LENGTH:
            violations.append(
                f"Password must be at least {self.MIN_LENGTH} characters long"
            )
        if len(password.encode("utf-8")) > self.MAX_BYTES:
            violations.append(f"Password cannot exceed {self.MAX_BYTES} bytes")
        if not _LOWERCASE.search(password):
            violations.append("Password must contain at least one lowercase letter")
        if not _UPPERCASE.search(password):
            violations.append("Password must contain at least one uppercase letter")
        if not _DIGIT.search(password):
            violations.append("Password must contain at least one number")
        if not any(char in SPECIAL_CHARACTERS for char in password):
            violations.append("Password must contain at least one special character")

        return violations

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Requirements:
        - At least 8 characters and at most 72 bytes (UTF-8)
        - At least one lowercase and one uppercase letter
        - At least one digit
        - At least one special character

        Raises
        ------
        WeakPasswordError
            Listing every unmet requirement
        """
        violations = self.check_strength(password)
        if violations:
            raise WeakPasswordError(violations)

    @cached_property
    def dummy_hash(self) -> str:
        """A valid hash of a throwaway password at the configured cost."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_DUMMY_PASSWORD, salt).decode("utf-8")
