"""Request/response schemas for the service catalog."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ServiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    required_documents: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class ServiceWriteRequest(BaseModel):
    """Create/update body. documents is the admin form's comma-separated label list."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    documents: str | list[str] = Field(
        default="",
        description='Required document labels, e.g. "Aadhaar, Photo" or ["Aadhaar", "Photo"].',
    )


class ServicesListResponse(BaseModel):
    services: list[ServiceOut]
