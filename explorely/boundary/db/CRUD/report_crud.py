"""
Report CRUD operations.

Duplicate detection, admin listings, per-item reason lookups and the
aggregate counts behind the report dashboard.

Dependencies: sqlalchemy, explorely.boundary.db.models
System role: Moderation report persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.base_crud import BaseCRUD
from explorely.boundary.db.models.report_model import (
    REPORTED_COLUMNS,
    ReportModel,
    ReportStatus,
    ReportedType,
)


def reported_column(reported_type: ReportedType):
    """Column of ReportModel holding the ID for reported_type."""
    return getattr(ReportModel, REPORTED_COLUMNS[reported_type])


class ReportCRUD(BaseCRUD[ReportModel]):
    """CRUD operations for ReportModel."""

    def __init__(self) -> None:
        """Initialize ReportCRUD with ReportModel."""
        super().__init__(ReportModel)

    async def find_pending(
        self,
        session: AsyncSession,
        reporter_id: UUID,
        reported_type: ReportedType,
        item_id: UUID,
    ) -> ReportModel | None:
        """Pending report by reporter_id against the item, if any."""
        stmt = select(ReportModel).where(
            ReportModel.reporter_id == reporter_id,
            ReportModel.reported_type == reported_type,
            reported_column(reported_type) == item_id,
            ReportModel.status == ReportStatus.PENDING,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_by_reporter(
        self,
        session: AsyncSession,
        reporter_id: UUID,
    ) -> Sequence[ReportModel]:
        """Reports filed by one user, newest first."""
        stmt = (
            select(ReportModel)
            .where(ReportModel.reporter_id == reporter_id)
            .order_by(ReportModel.created_at.desc(), ReportModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_filtered(
        self,
        session: AsyncSession,
        limit: int,
        offset: int,
        status: ReportStatus | None = None,
        reported_type: ReportedType | None = None,
    ) -> tuple[list[ReportModel], int]:
        """Admin listing with optional status and type filters."""
        stmt = select(ReportModel)
        if status is not None:
            stmt = stmt.where(ReportModel.status == status)
        if reported_type is not None:
            stmt = stmt.where(ReportModel.reported_type == reported_type)
        stmt = stmt.order_by(ReportModel.created_at.desc(), ReportModel.id)
        return await self.paginate(session, stmt, limit, offset)

    async def list_for_item(
        self,
        session: AsyncSession,
        reported_type: ReportedType,
        item_id: UUID,
    ) -> Sequence[ReportModel]:
        """Every report against one item, newest first."""
        stmt = (
            select(ReportModel)
            .where(
                ReportModel.reported_type == reported_type,
                reported_column(reported_type) == item_id,
            )
            .order_by(ReportModel.created_at.desc(), ReportModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def open_reasons_for_items(
        self,
        session: AsyncSession,
        reported_type: ReportedType,
        item_ids: Sequence[UUID],
    ) -> dict[UUID, list[str]]:
        """
        Reasons of non-dismissed reports, grouped by reported item.

        Args:
            session: Async database session
            reported_type: Kind of the items
            item_ids: Items to look up

        Returns:
            Mapping item ID -> list of reason strings
        """
        if not item_ids:
            return {}
        column = reported_column(reported_type)
        stmt = select(column, ReportModel.reason).where(
            ReportModel.reported_type == reported_type,
            column.in_(item_ids),
            ReportModel.status != ReportStatus.DISMISSED,
        )
        result = await session.execute(stmt)
        reasons: dict[UUID, list[str]] = {}
        for item_id, reason in result.all():
            reasons.setdefault(item_id, []).append(reason.value)
        return reasons

    async def counts_by(self, session: AsyncSession, column_name: str) -> dict[str, int]:
        """
        Number of reports grouped by status, reason or reported_type.

        Args:
            session: Async database session
            column_name: "status", "reason" or "reported_type"

        Returns:
            Mapping enum value -> count
        """
        column = getattr(ReportModel, column_name)
        stmt = select(column, func.count(ReportModel.id)).group_by(column)
        result = await session.execute(stmt)
        return {row[0].value: row[1] for row in result.all()}


report_crud = ReportCRUD()
