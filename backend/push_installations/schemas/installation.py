"""Installation schemas for API request/response models.

Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class InstallationBase(BaseModel):
    """Fields a client may set on an installation."""
    app_version: Optional[str] = None
    badge: int = Field(default=0, ge=0)
    status: Optional[str] = None
    subscriptions: List[str] = Field(default_factory=list)
    time_zone: Optional[str] = None  # IANA id, e.g. America/Vancouver
    user_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class InstallationCreate(InstallationBase):
    """Schema for registering an installation."""
    app_id: str = Field(..., min_length=1)
    device_token: str = Field(..., min_length=1)
    device_type: str = Field(..., min_length=1)


class InstallationUpdate(BaseModel):
    """Schema for a partial update of an installation."""
    app_id: Optional[str] = Field(None, min_length=1)
    app_version: Optional[str] = None
    badge: Optional[int] = Field(None, ge=0)
    device_token: Optional[str] = Field(None, min_length=1)
    device_type: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = None
    subscriptions: Optional[List[str]] = None
    time_zone: Optional[str] = None
    user_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator(
        "app_id", "badge", "device_token", "device_type", "subscriptions", mode="before"
    )
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class InstallationResponse(InstallationBase):
    """Schema for an installation in API responses."""
    id: int
    app_id: str
    device_token: str
    device_type: str
    badge: Optional[int] = 0
    created: datetime
    modified: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("subscriptions", mode="before")
    @classmethod
    def _as_list(cls, value):
        return list(value) if value is not None else []
