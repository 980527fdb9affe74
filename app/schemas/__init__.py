"""Pydantic request/response schemas."""

from app.schemas.applications import (
    AdminApplicationDetail,
    AdminApplicationsResponse,
    ApplicationDetail,
    ApplicationStatus,
    ApplicationsListResponse,
    ApplicationSummary,
    StatusUpdateRequest,
    TrackingResponse,
)
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    UserProfile,
)
from app.schemas.catalog import ServiceOut, ServicesListResponse, ServiceWriteRequest
from app.schemas.health import HealthResponse

__all__ = [
    "AdminApplicationDetail",
    "AdminApplicationsResponse",
    "ApplicationDetail",
    "ApplicationStatus",
    "ApplicationSummary",
    "ApplicationsListResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "ServiceOut",
    "ServiceWriteRequest",
    "ServicesListResponse",
    "SessionResponse",
    "StatusUpdateRequest",
    "TrackingResponse",
    "UserProfile",
]
