from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from app.db.models.contact import as_utc

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ContactCreate(BaseModel):
    name: RequiredText
    email: RequiredText
    phone: RequiredText
    message: RequiredText


class ContactRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    email: str
    phone: str
    message: str
    is_read: bool
    submitted_at: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("submitted_at", "created_at", "updated_at")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return as_utc(value)


class ContactCreated(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    contact_id: UUID


class ContactUpdated(BaseModel):
    message: str
    contact: ContactRead


class MessageResponse(BaseModel):
    message: str
