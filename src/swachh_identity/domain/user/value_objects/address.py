"""Location value objects: coordinates, postal address and assigned area."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from swachh_identity.domain.user.exceptions import InvalidProfileDataError
from swachh_identity.domain.user.field_limits import (
    AREA_NAME_MAX_LENGTH,
    CITY_MAX_LENGTH,
    PINCODE_LENGTH,
    STATE_MAX_LENGTH,
    STREET_MAX_LENGTH,
)

PINCODE_PATTERN = re.compile(rf"^\d{{{PINCODE_LENGTH}}}$")

ADDRESS_MAX_LENGTHS = {
    "street": STREET_MAX_LENGTH,
    "city": CITY_MAX_LENGTH,
    "state": STATE_MAX_LENGTH,
}


def _clean(name: str, value: Any, max_length: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        msg = f"{name} cannot exceed {max_length} characters"
        raise InvalidProfileDataError(name, msg)
    return text or None


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 point."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            msg = "Latitude must be between -90 and 90"
            raise InvalidProfileDataError("latitude", msg)
        if not -180 <= self.longitude <= 180:
            msg = "Longitude must be between -180 and 180"
            raise InvalidProfileDataError("longitude", msg)

    @classmethod
    def from_value(cls, value: Coordinates | Mapping[str, Any]) -> Coordinates:
        if isinstance(value, Coordinates):
            return value
        try:
            return cls(
                latitude=float(value["latitude"]),
                longitude=float(value["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            msg = "Coordinates need numeric latitude and longitude"
            raise InvalidProfileDataError("coordinates", msg) from e

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class Address:
    """Citizen postal address. Every part is optional."""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    def __post_init__(self) -> None:
        for name, max_length in ADDRESS_MAX_LENGTHS.items():
            value = _clean(name, getattr(self, name), max_length)
            object.__setattr__(self, name, value)
        object.__setattr__(self, "pincode", _clean("pincode", self.pincode))

        if self.pincode is not None and not PINCODE_PATTERN.match(self.pincode):
            msg = "Please enter a valid 6-digit pincode"
            raise InvalidProfileDataError("pincode", msg)

    @classmethod
    def from_value(cls, value: Address | Mapping[str, Any]) -> Address:
        if isinstance(value, Address):
            return value
        coordinates = value.get("coordinates")
        return cls(
            street=value.get("street"),
            city=value.get("city"),
            state=value.get("state"),
            pincode=value.get("pincode"),
            coordinates=(
                Coordinates.from_value(coordinates) if coordinates is not None else None
            ),
        )


@dataclass(frozen=True)
class AssignedArea:
    """Named service area of an employee, optionally with a boundary polygon."""

    name: Optional[str] = None
    boundaries: tuple[Coordinates, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "name",
            _clean("assigned_area", self.name, AREA_NAME_MAX_LENGTH),
        )
        object.__setattr__(
            self,
            "boundaries",
            tuple(Coordinates.from_value(point) for point in self.boundaries),
        )

    @classmethod
    def from_value(cls, value: AssignedArea | Mapping[str, Any]) -> AssignedArea:
        if isinstance(value, AssignedArea):
            return value
        return cls(
            name=value.get("name"),
            boundaries=tuple(value.get("boundaries") or ()),
        )

    def boundaries_as_dicts(self) -> list[dict[str, float]]:
        return [point.to_dict() for point in self.boundaries]
