"""Citizen request schemas."""

from typing import Any, Optional

from pydantic import ConfigDict, EmailStr

from swachh_api.schemas.common import AddressSchema, CamelModel
from swachh_identity import CitizenRegistration


class CitizenRegisterRequest(CamelModel):
    """Request schema for citizen registration."""

    email: EmailStr
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    address: Optional[AddressSchema] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "Abc123!@#",
                "firstName": "Alice",
                "lastName": "Sharma",
                "address": {"city": "Pune", "state": "Maharashtra"},
            },
        },
    )

    def to_registration(self) -> CitizenRegistration:
        return CitizenRegistration(
            email=self.email,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            phone_number=self.phone_number,
            address=self.address.model_dump() if self.address else None,
        )


class CitizenProfileUpdate(CamelModel):
    """Editable citizen fields. Anything else in the body is ignored."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[AddressSchema] = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
