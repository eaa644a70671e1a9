"""JWT token service.

Mints and verifies the access/refresh token pair used for authentication.
The two token kinds are signed with independent secrets and carry
independent lifetimes, so a leaked refresh secret cannot forge access
tokens and vice versa.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt

from swachh_auth.exceptions import InvalidTokenError
from swachh_auth.schemas import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenPair,
    TokenPayload,
    TokenSubject,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class TokenService:
    """Service for JWT token creation and verification.

    Examples
    --------
    >>> service = TokenService(access_secret="a-secret", refresh_secret="r-secret")
    >>> pair = service.issue_pair(user)
    >>> payload = service.verify_access(pair.access_token)
    >>> print(payload.user_id)
    """

    DEFAULT_ACCESS_TTL = timedelta(minutes=15)
    DEFAULT_REFRESH_TTL = timedelta(days=7)
    ALGORITHM = "HS256"
    ISSUER = "swachhbuddy-auth"
    AUDIENCE = "swachhbuddy-api"

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = DEFAULT_ACCESS_TTL,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the token service.

        Parameters
        ----------
        access_secret
            Secret key for signing access tokens. Must be kept secure.
        refresh_secret
            Secret key for signing refresh tokens. Must differ in purpose
            from the access secret and be kept secure.
        access_ttl
            Lifetime of access tokens (default 15 minutes)
        refresh_ttl
            Lifetime of refresh tokens (default 7 days)
        clock
            Returns the current UTC time; injectable for tests

        Raises
        ------
        ValueError
            If either secret is empty. This is a startup precondition.
        """
        if not access_secret or not refresh_secret:
            msg = "JWT secrets are not configured"
            raise ValueError(msg)

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._clock = clock

    @property
    def access_ttl(self) -> timedelta:
        return self._access_ttl

    @property
    def refresh_ttl(self) -> timedelta:
        return self._refresh_ttl

    def __repr__(self) -> str:
        return (
            f"<TokenService(access_ttl={self._access_ttl}, "
            f"refresh_ttl={self._refresh_ttl}, secrets=***)>"
        )

    def issue_pair(self, user: TokenSubject) -> TokenPair:
        """Mint a fresh access/refresh token pair for a user.

        Every call yields tokens distinct from all previously issued ones,
        which is what makes refresh-token rotation detectable.
        """
        return TokenPair(
            access_token=self.create_access_token(user),
            refresh_token=self.create_refresh_token(user),
        )

    def create_access_token(self, user: TokenSubject) -> str:
        return self._create_token(
            user,
            token_type=ACCESS_TOKEN_TYPE,
            secret=self._access_secret,
            ttl=self._access_ttl,
        )

    def create_refresh_token(self, user: TokenSubject) -> str:
        return self._create_token(
            user,
            token_type=REFRESH_TOKEN_TYPE,
            secret=self._refresh_secret,
            ttl=self._refresh_ttl,
        )

    def verify_access(self, token: str) -> TokenPayload:
        """Verify and decode an access token.

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, malformed, issued for another
            service, or is not an access token.
        """
        return self._verify(token, self._access_secret, ACCESS_TOKEN_TYPE)

    def verify_refresh(self, token: str) -> TokenPayload:
        """Verify and decode a refresh token.

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, malformed, issued for another
            service, or is not a refresh token.
        """
        return self._verify(token, self._refresh_secret, REFRESH_TOKEN_TYPE)

    @staticmethod
    def extract_bearer_token(authorization: str | None) -> str | None:
        """Extract the token from an ``Authorization`` header value.

        Returns the token only if the header is exactly ``Bearer <token>``;
        anything else yields ``None``. Never raises.
        """
        if not authorization:
            return None

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
            return None

        return parts[1]

    def _create_token(
        self,
        user: TokenSubject,
        token_type: str,
        secret: str,
        ttl: timedelta,
    ) -> str:
        now = self._clock()
        role = getattr(user.role, "value", user.role)

        payload: dict[str, Any] = {
            "userId": str(user.id),
            "email": user.email,
            "role": str(role),
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + ttl,
            "iss": self.ISSUER,
            "aud": self.AUDIENCE,
        }

        return jwt.encode(payload, secret, algorithm=self.ALGORITHM)

    def _verify(self, token: str, secret: str, expected_type: str) -> TokenPayload:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                audience=self.AUDIENCE,
                issuer=self.ISSUER,
                options={"require": ["exp", "iat", "iss", "aud"]},
            )

            if payload.get("type") != expected_type:
                msg = f"expected {expected_type} token, got {payload.get('type')!r}"
                raise ValueError(msg)

            return TokenPayload(
                user_id=str(payload["userId"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
                token_type=payload["type"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            logger.debug("Rejected %s token: expired", expected_type)
            raise InvalidTokenError(reason="expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected %s token: %s", expected_type, e)
            raise InvalidTokenError(reason=str(e)) from e
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Rejected %s token: malformed payload (%s)", expected_type, e)
            raise InvalidTokenError(reason=f"malformed payload: {e}") from e
