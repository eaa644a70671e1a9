"""Shared schema building blocks: camelCase models and the response envelope."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[DataT]):
    """Envelope of every response: ``{success, message, data}``."""

    success: bool = True
    message: str
    data: Optional[DataT] = None


class CoordinatesSchema(CamelModel):
    latitude: float
    longitude: float


class AddressSchema(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    coordinates: Optional[CoordinatesSchema] = None


class AssignedAreaSchema(CamelModel):
    name: Optional[str] = None
    boundaries: list[CoordinatesSchema] = []
