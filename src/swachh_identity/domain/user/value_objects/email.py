"""E-mail address of a user: the login name for both roles."""

import re
from dataclasses import dataclass

from swachh_identity.domain.user.exceptions import InvalidEmailError
from swachh_identity.domain.user.field_limits import EMAIL_MAX_LENGTH

# local@domain.tld; deliverability is not checked
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")


@dataclass(frozen=True)
class Email:
    """Trimmed, lower-cased and format-checked e-mail address.

    Two addresses that differ only in case or surrounding whitespace
    compare equal, which is what makes uniqueness case-insensitive.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise InvalidEmailError("Email is required")
        if len(normalized) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError("Please enter a valid email")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
