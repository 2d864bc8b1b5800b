"""
Admin report workflow endpoints.

Routes:
- GET /api/admin/reports - Paginated reports (status, type filters)
- GET /api/admin/reports/stats - Counts by status, reason and type
- GET /api/admin/reports/item/{type}/{id} - Reports against one item
- PATCH /api/admin/reports/{id}/status - Move through the workflow
- PATCH /api/admin/reports/{id}/notes - Edit admin notes

Dependencies: fastapi, explorely.application.services
System role: Admin report review HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from explorely.api.deps.dependencies import get_report_service, require_admin
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.report_service import ReportService
from explorely.boundary.db.models.report_model import ReportStatus, ReportedType
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.common import PaginatedResponse
from explorely.models.report import (
    ReportResponse,
    ReportStatsResponse,
    UpdateReportNotesRequest,
    UpdateReportStatusRequest,
)

router = APIRouter(prefix="/reports")


@router.get("", response_model=PaginatedResponse[ReportResponse])
@handle_errors
async def list_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: ReportStatus | None = Query(None),
    type: ReportedType | None = Query(None),
    report_service: ReportService = Depends(get_report_service),
) -> PaginatedResponse[ReportResponse]:
    """Reports, newest first."""
    result = await report_service.list_reports(page, limit, status=status, reported_type=type)
    return PaginatedResponse[ReportResponse](**result)


@router.get("/stats", response_model=ReportStatsResponse)
@handle_errors
async def report_stats(
    report_service: ReportService = Depends(get_report_service),
) -> ReportStatsResponse:
    """Report counts for the dashboard."""
    return ReportStatsResponse(**await report_service.stats())


@router.get("/item/{reported_type}/{item_id}", response_model=list[ReportResponse])
@handle_errors
async def item_reports(
    reported_type: ReportedType,
    item_id: UUID,
    report_service: ReportService = Depends(get_report_service),
) -> list[ReportResponse]:
    """Every report filed against one item."""
    reports = await report_service.item_reports(reported_type, item_id)
    return [ReportResponse(**r) for r in reports]


@router.patch("/{report_id}/status", response_model=ReportResponse)
@handle_errors
async def update_status(
    report_id: UUID,
    payload: UpdateReportStatusRequest,
    admin: UserModel = Depends(require_admin),
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """
    Change a report's status.

    Raises:
        HTTPException(400): Transition not allowed
        HTTPException(404): Report not found
    """
    report = await report_service.update_status(
        report_id, admin, payload.status, admin_notes=payload.admin_notes
    )
    return ReportResponse(**report)


@router.patch("/{report_id}/notes", response_model=ReportResponse)
@handle_errors
async def update_notes(
    report_id: UUID,
    payload: UpdateReportNotesRequest,
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """Replace the admin notes."""
    return ReportResponse(**await report_service.update_notes(report_id, payload.admin_notes))
