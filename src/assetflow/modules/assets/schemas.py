"""Pydantic schemas for asset operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from assetflow.core.constants import MAX_NAME_LENGTH, MAX_SERIAL_NUMBER_LENGTH
from assetflow.modules.assets.models import AssetStatus


class AssetCreate(BaseModel):
    """Schema for registering an asset."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    serial_number: str = Field(..., min_length=1, max_length=MAX_SERIAL_NUMBER_LENGTH)
    type: str = Field(..., min_length=1, max_length=100)
    status: AssetStatus = AssetStatus.OPERATIONAL
    location: str | None = Field(None, max_length=MAX_NAME_LENGTH)

    @field_validator("name", "serial_number", "type")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v


class AssetSummary(BaseModel):
    """Asset fields embedded in ticket payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    serial_number: str
    type: str


class AssetResponse(AssetSummary):
    status: str
    location: str | None = None
    organization_id: int
    created_at: datetime
