"""Authentication exceptions.

These exceptions are raised by the swachh_auth package and should be
caught and handled by the application layer (identity services).
Messages are deliberately generic: they are safe to show to clients and
do not reveal whether an account exists or why a token was rejected.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed.

    The public message never distinguishes "expired" from "forged";
    ``reason`` holds the precise cause for internal logging only.
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        reason: str | None = None,
    ):
        self.reason = reason
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements.

    Carries every unmet rule, not just the first one.
    """

    def __init__(
        self,
        violations: list[str] | None = None,
        message: str = "Password does not meet requirements",
    ):
        self.violations = list(violations or [])
        if self.violations:
            message = f"{message}: {', '.join(self.violations)}"
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class MissingTokenError(AuthError):
    """Raised when a protected request carries no access token."""

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message)
