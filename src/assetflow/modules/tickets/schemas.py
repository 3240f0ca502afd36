"""Pydantic schemas for ticket operations."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from assetflow.modules.assets.schemas import AssetSummary


class TicketCreate(BaseModel):
    """Schema for filing a failure report.

    ``assetId`` is accepted as an alias of ``asset_id``; numeric strings are
    parsed to integers.
    """

    description: str
    asset_id: int = Field(
        ...,
        validation_alias=AliasChoices("asset_id", "assetId"),
    )

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v


class ReporterSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class TicketResponse(BaseModel):
    """Ticket with reporter and asset expanded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    user_id: int
    asset_id: int | None = None
    organization_id: int
    created_at: datetime
    reporter: ReporterSummary
    asset: AssetSummary | None = None
