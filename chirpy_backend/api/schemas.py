import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TimestampedOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored in UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class UserCreate(BaseModel):
    email: str = Field(..., min_length=1, description="User's email address, stored as given")


class UserOut(TimestampedOut):
    email: str


class ChirpValidate(BaseModel):
    body: str


class ChirpCreate(ChirpValidate):
    user_id: uuid.UUID


class ChirpOut(TimestampedOut):
    body: str
    user_id: uuid.UUID


class ChirpValidated(BaseModel):
    valid: bool
    cleaned_body: str
