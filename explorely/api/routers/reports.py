"""
Report submission endpoints.

Routes:
- POST /api/reports - Report a user, post, review or community
- GET /api/reports/user - Reports filed by the caller

Review of reports lives under /api/admin/reports.

Dependencies: fastapi, explorely.application.services
System role: Report HTTP API
"""

from fastapi import APIRouter, Depends

from explorely.api.deps.dependencies import get_current_user, get_report_service
from explorely.api.routers.router_utils import handle_errors
from explorely.application.services.report_service import ReportService
from explorely.boundary.db.models.user_model import UserModel
from explorely.models.report import CreateReportRequest, ReportResponse

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=201)
@handle_errors
async def create_report(
    payload: CreateReportRequest,
    user: UserModel = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """
    File a report.

    Raises:
        HTTPException(404): Reported item not found
        HTTPException(409): A pending report by the caller already exists
    """
    report = await report_service.create_report(
        reporter=user,
        reported_type=payload.reported_type,
        item_id=payload.reported_item_id,
        reason=payload.reason,
    )
    return ReportResponse(**report)


@router.get("/user", response_model=list[ReportResponse])
@handle_errors
async def my_reports(
    user: UserModel = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
) -> list[ReportResponse]:
    """Reports filed by the caller, newest first."""
    return [ReportResponse(**r) for r in await report_service.list_own(user)]
