"""
Report service.

Filing moderation reports and the admin report workflow. Each open
(non-dismissed) report counts once in the reported item's report_count.

Dependencies: sqlalchemy, explorely.boundary.db.CRUD, explorely.core
System role: Moderation report orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.serializers import report_dict
from explorely.boundary.db.base import utc_now
from explorely.boundary.db.CRUD.community_crud import community_crud
from explorely.boundary.db.CRUD.post_crud import post_crud
from explorely.boundary.db.CRUD.report_crud import report_crud
from explorely.boundary.db.CRUD.review_crud import review_crud
from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models.report_model import (
    REPORTED_COLUMNS,
    ReportModel,
    ReportReason,
    ReportStatus,
    ReportedType,
)
from explorely.boundary.db.models.user_model import UserModel
from explorely.core.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REPORTED_CRUD = {
    ReportedType.USER: user_crud,
    ReportedType.POST: post_crud,
    ReportedType.REVIEW: review_crud,
    ReportedType.COMMUNITY: community_crud,
}

ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset(
        {ReportStatus.REVIEWED, ReportStatus.RESOLVED, ReportStatus.DISMISSED}
    ),
    ReportStatus.REVIEWED: frozenset({ReportStatus.RESOLVED, ReportStatus.DISMISSED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.DISMISSED: frozenset(),
}


def check_transition(current: ReportStatus, target: ReportStatus) -> None:
    """
    Validate a report status change.

    Raises:
        ValidationError: If target is not reachable from current
    """
    if target != current and target not in ALLOWED_TRANSITIONS[current]:
        raise ValidationError(
            f"Cannot change report status from {current.value} to {target.value}",
            field="status",
        )


class ReportService:
    """Report orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize report service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get(self, report_id: UUID) -> ReportModel:
        report = await report_crud.get_by_id(self.db, report_id)
        if report is None:
            raise NotFoundError("Report", report_id)
        return report

    async def create_report(
        self,
        reporter: UserModel,
        reported_type: ReportedType,
        item_id: UUID,
        reason: ReportReason,
    ) -> dict:
        """
        File a report against a user, post, review or community.

        Args:
            reporter: Authenticated caller
            reported_type: Kind of the reported item
            item_id: Reported item
            reason: ReportReason

        Returns:
            dict: Created report

        Raises:
            NotFoundError: If the item does not exist
            ValidationError: If the caller reports themselves
            ConflictError: If the caller already has a pending report on the item
        """
        crud = REPORTED_CRUD[reported_type]
        if not await crud.exists(self.db, item_id):
            raise NotFoundError("Reported item", item_id)
        if reported_type == ReportedType.USER and item_id == reporter.id:
            raise ValidationError("You cannot report yourself")
        if await report_crud.find_pending(self.db, reporter.id, reported_type, item_id):
            raise ConflictError("You have already reported this item")

        report = await report_crud.create(
            self.db,
            reporter_id=reporter.id,
            reported_type=reported_type,
            reason=reason,
            **{REPORTED_COLUMNS[reported_type]: item_id},
        )
        await crud.increment(self.db, item_id, "report_count", 1)

        logger.info(
            "Report filed",
            extra={
                "report_id": str(report.id),
                "reported_type": reported_type.value,
                "item_id": str(item_id),
            },
        )
        return report_dict(report)

    async def list_own(self, user: UserModel) -> list[dict]:
        """Reports filed by the caller."""
        reports = await report_crud.list_by_reporter(self.db, user.id)
        return [report_dict(r) for r in reports]

    async def list_reports(
        self,
        page: int,
        limit: int,
        status: ReportStatus | None = None,
        reported_type: ReportedType | None = None,
    ) -> dict:
        """Admin listing of reports, newest first."""
        reports, total = await report_crud.list_filtered(
            self.db, limit, page_offset(page, limit), status=status, reported_type=reported_type
        )
        return {
            "items": [report_dict(r) for r in reports],
            **page_meta(total, page, limit, len(reports)),
        }

    async def item_reports(self, reported_type: ReportedType, item_id: UUID) -> list[dict]:
        """Every report against one item."""
        reports = await report_crud.list_for_item(self.db, reported_type, item_id)
        return [report_dict(r) for r in reports]

    async def update_status(
        self,
        report_id: UUID,
        admin: UserModel,
        status: ReportStatus,
        admin_notes: str | None = None,
    ) -> dict:
        """
        Move a report through the moderation workflow.

        Records who changed the status and when. Dismissing a report
        decrements the item's report_count.

        Args:
            report_id: Report to update
            admin: Acting admin
            status: Target status
            admin_notes: Optional notes to store alongside

        Returns:
            dict: Updated report

        Raises:
            ValidationError: If the transition is not allowed
        """
        report = await self._get(report_id)
        current = report.status
        check_transition(current, status)

        if admin_notes is not None:
            report.admin_notes = admin_notes
        if status != current:
            report.status = status
            report.resolved_by_id = admin.id
            report.resolved_at = utc_now()
            if status == ReportStatus.DISMISSED and report.reported_item_id is not None:
                crud = REPORTED_CRUD[report.reported_type]
                await crud.increment(self.db, report.reported_item_id, "report_count", -1)
        await self.db.flush()
        await self.db.refresh(report)

        logger.info(
            "Report status updated",
            extra={
                "report_id": str(report_id),
                "from_status": current.value,
                "to_status": status.value,
                "admin_id": str(admin.id),
            },
        )
        return report_dict(report)

    async def update_notes(self, report_id: UUID, admin_notes: str) -> dict:
        """Replace a report's admin notes without touching its status."""
        report = await self._get(report_id)
        report.admin_notes = admin_notes
        await self.db.flush()
        await self.db.refresh(report)
        return report_dict(report)

    async def stats(self) -> dict:
        """Report counts by status, reason and reported type."""
        return {
            "total": await report_crud.count(self.db),
            "by_status": await report_crud.counts_by(self.db, "status"),
            "by_reason": await report_crud.counts_by(self.db, "reason"),
            "by_type": await report_crud.counts_by(self.db, "reported_type"),
        }
