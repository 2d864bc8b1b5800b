"""
Report schemas.

Dependencies: pydantic
System role: Moderation report API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from explorely.boundary.db.models.report_model import ReportReason, ReportStatus, ReportedType
from explorely.models.common import APIModel, UserSummary


class CreateReportRequest(APIModel):
    """Request schema for reporting a user, post, review or community."""

    reported_type: ReportedType
    reported_item_id: uuid.UUID
    reason: ReportReason


class ReportResponse(APIModel):
    """Stored report."""

    id: uuid.UUID
    reporter: UserSummary | None = None
    reported_type: ReportedType
    reported_item_id: uuid.UUID | None = None
    reason: ReportReason
    status: ReportStatus
    admin_notes: str | None = None
    resolved_by_id: uuid.UUID | None = None
    resolved_at: datetime | None = None
    created_at: datetime


class UpdateReportStatusRequest(APIModel):
    """Request schema for moving a report through the workflow."""

    status: ReportStatus
    admin_notes: str | None = Field(None, max_length=2000)


class UpdateReportNotesRequest(APIModel):
    """Request schema for editing admin notes only."""

    admin_notes: str = Field(..., max_length=2000)


class ReportStatsResponse(APIModel):
    """Report counts for the moderation dashboard."""

    total: int
    by_status: dict[str, int]
    by_reason: dict[str, int]
    by_type: dict[str, int]
