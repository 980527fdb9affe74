"""Request/response schemas for applications, admin review and public tracking."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.auth import UserProfile

ApplicationStatus = Literal["pending", "processing", "completed", "rejected"]


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    label: str
    file_url: str
    created_at: datetime | None = None


class ServiceRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ApplicationSummary(BaseModel):
    """Row of the customer dashboard or the admin table."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tracking_code: str
    status: ApplicationStatus
    remarks: str = ""
    created_at: datetime | None = None
    service: ServiceRef | None = None


class ApplicationDetail(ApplicationSummary):
    documents: list[DocumentOut] = Field(default_factory=list)


class AdminApplicationSummary(ApplicationSummary):
    user: UserProfile | None = None


class AdminApplicationDetail(AdminApplicationSummary):
    documents: list[DocumentOut] = Field(default_factory=list)


class ApplicationsListResponse(BaseModel):
    applications: list[ApplicationSummary]


class StatusCounts(BaseModel):
    total: int = Field(..., ge=0)
    pending: int = Field(default=0, ge=0)
    processing: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    rejected: int = Field(default=0, ge=0)


class AdminApplicationsResponse(BaseModel):
    applications: list[AdminApplicationSummary]
    stats: StatusCounts


class StatusUpdateRequest(BaseModel):
    """Admin review form: both fields are written together."""

    status: ApplicationStatus
    remarks: str = Field(default="", max_length=5000)


class TrackingResponse(BaseModel):
    """Public tracking view: no applicant data."""

    model_config = ConfigDict(from_attributes=True)

    tracking_code: str
    service_name: str | None = None
    status: ApplicationStatus
    created_at: datetime
