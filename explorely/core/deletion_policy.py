"""
Deletion policy.

One table lists, for every deletable entity kind, the rows that depend on
it. delete_entities() walks the table depth-first with set-based DELETE
statements inside the caller's transaction, so a user, community, post or
review disappears together with everything that references it. Counters
on surviving rows (votes, likes, top-level review comments, open reports)
are recounted afterwards from whatever rows are left.

Dependencies: sqlalchemy, explorely.boundary.db.models, explorely.boundary.db.CRUD
System role: Cascading delete executor shared by owners and admins
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Table, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.boundary.db.CRUD.user_crud import user_crud
from explorely.boundary.db.models import (
    AuthSessionModel,
    CommentLikeModel,
    CommentModel,
    CommunityItineraryModel,
    CommunityModel,
    CommunityRuleModel,
    NotificationModel,
    PostModel,
    PostVoteModel,
    ReportModel,
    ReportStatus,
    ReviewCommentLikeModel,
    ReviewCommentModel,
    ReviewLikeModel,
    ReviewModel,
    UserItineraryModel,
    UserModel,
    community_blocked_members,
    community_members,
    community_moderators,
    itinerary_participants,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dependent:
    """
    Rows that reference a parent entity.

    Attributes:
        target: ORM model or association table holding the rows
        column: Column pointing at the parent's id
        kind: Policy entry to apply to those rows first, if they have dependants
        nullify: Clear the column instead of deleting the rows
    """

    target: type | Table
    column: str
    kind: str | None = None
    nullify: bool = False

    @property
    def table(self) -> Table:
        return getattr(self.target, "__table__", self.target)


ROOT_TABLES: dict[str, type] = {
    "user": UserModel,
    "community": CommunityModel,
    "post": PostModel,
    "comment": CommentModel,
    "review": ReviewModel,
    "review_comment": ReviewCommentModel,
    "community_itinerary": CommunityItineraryModel,
}

DELETION_POLICY: dict[str, tuple[Dependent, ...]] = {
    "user": (
        Dependent(CommunityModel, "creator_id", kind="community"),
        Dependent(PostModel, "author_id", kind="post"),
        Dependent(CommentModel, "author_id", kind="comment"),
        Dependent(ReviewModel, "author_id", kind="review"),
        Dependent(ReviewCommentModel, "author_id", kind="review_comment"),
        Dependent(CommunityItineraryModel, "author_id", kind="community_itinerary"),
        Dependent(UserItineraryModel, "user_id"),
        Dependent(PostVoteModel, "user_id"),
        Dependent(CommentLikeModel, "user_id"),
        Dependent(ReviewLikeModel, "user_id"),
        Dependent(ReviewCommentLikeModel, "user_id"),
        Dependent(community_members, "user_id"),
        Dependent(community_moderators, "user_id"),
        Dependent(community_blocked_members, "user_id"),
        Dependent(itinerary_participants, "user_id"),
        Dependent(NotificationModel, "recipient_id"),
        Dependent(NotificationModel, "sender_id"),
        Dependent(ReportModel, "reporter_id"),
        Dependent(ReportModel, "reported_user_id"),
        Dependent(ReportModel, "resolved_by_id", nullify=True),
        Dependent(AuthSessionModel, "user_id"),
    ),
    "community": (
        Dependent(PostModel, "community_id", kind="post"),
        Dependent(CommunityItineraryModel, "community_id", kind="community_itinerary"),
        Dependent(CommunityRuleModel, "community_id"),
        Dependent(community_members, "community_id"),
        Dependent(community_moderators, "community_id"),
        Dependent(community_blocked_members, "community_id"),
        Dependent(NotificationModel, "community_id"),
        Dependent(ReportModel, "reported_community_id"),
    ),
    "post": (
        Dependent(CommentModel, "post_id", kind="comment"),
        Dependent(PostVoteModel, "post_id"),
        Dependent(NotificationModel, "post_id"),
        Dependent(ReportModel, "reported_post_id"),
    ),
    "comment": (
        Dependent(CommentModel, "parent_id", kind="comment"),
        Dependent(CommentLikeModel, "comment_id"),
        Dependent(NotificationModel, "comment_id"),
    ),
    "review": (
        Dependent(ReviewCommentModel, "review_id", kind="review_comment"),
        Dependent(ReviewLikeModel, "review_id"),
        Dependent(NotificationModel, "review_id"),
        Dependent(ReportModel, "reported_review_id"),
    ),
    "review_comment": (
        Dependent(ReviewCommentModel, "parent_id", kind="review_comment"),
        Dependent(ReviewCommentLikeModel, "review_comment_id"),
        Dependent(NotificationModel, "review_comment_id"),
    ),
    "community_itinerary": (
        Dependent(itinerary_participants, "itinerary_id"),
        Dependent(NotificationModel, "itinerary_id"),
    ),
}


@dataclass(frozen=True, eq=False)
class Counter:
    """
    Denormalised count stored on a parent row.

    Attributes:
        parent: ORM model carrying the counter
        column: Counter column on the parent
        source: ORM model whose rows feed the counter
        link: Column of source pointing at the parent's id
        summed: Column of source to sum; rows are counted when None
        criteria: Conditions a source row must meet to be counted
    """

    parent: type
    column: str
    source: type
    link: str
    summed: str | None = None
    criteria: tuple[Any, ...] = ()

    def total(self):
        """Correlated subquery computing the counter for each parent row."""
        if self.summed is None:
            value = func.count()
        else:
            value = func.coalesce(func.sum(getattr(self.source, self.summed)), 0)
        return (
            select(value)
            .select_from(self.source)
            .where(getattr(self.source, self.link) == self.parent.id, *self.criteria)
            .correlate(self.parent)
            .scalar_subquery()
        )


_OPEN_REPORT = (ReportModel.status != ReportStatus.DISMISSED,)

COUNTERS: tuple[Counter, ...] = (
    Counter(PostModel, "vote_count", PostVoteModel, "post_id", summed="value"),
    Counter(CommentModel, "like_count", CommentLikeModel, "comment_id"),
    Counter(ReviewModel, "like_count", ReviewLikeModel, "review_id"),
    Counter(
        ReviewModel,
        "comment_count",
        ReviewCommentModel,
        "review_id",
        criteria=(ReviewCommentModel.parent_id.is_(None),),
    ),
    Counter(ReviewCommentModel, "like_count", ReviewCommentLikeModel, "review_comment_id"),
    Counter(PostModel, "report_count", ReportModel, "reported_post_id", criteria=_OPEN_REPORT),
    Counter(UserModel, "report_count", ReportModel, "reported_user_id", criteria=_OPEN_REPORT),
    Counter(
        CommunityModel,
        "report_count",
        ReportModel,
        "reported_community_id",
        criteria=_OPEN_REPORT,
    ),
    Counter(ReviewModel, "report_count", ReportModel, "reported_review_id", criteria=_OPEN_REPORT),
)


async def _note_counters(
    db: AsyncSession,
    table: Table,
    condition: Any,
    touched: dict[Counter, set[UUID]],
) -> None:
    """Record the parents whose counters the rows matching condition feed."""
    for counter in COUNTERS:
        if counter.source.__table__ is not table:
            continue
        link = table.c[counter.link]
        stmt = select(link).distinct().where(condition, link.is_not(None), *counter.criteria)
        parent_ids = (await db.execute(stmt)).scalars().all()
        if parent_ids:
            touched.setdefault(counter, set()).update(parent_ids)


async def _purge(
    db: AsyncSession,
    kind: str,
    ids: list[UUID],
    removed: dict[str, int],
    touched: dict[Counter, set[UUID]],
) -> None:
    for dependent in DELETION_POLICY[kind]:
        table = dependent.table
        column = table.c[dependent.column]
        if dependent.nullify:
            await db.execute(update(table).where(column.in_(ids)).values({dependent.column: None}))
            continue
        if dependent.kind is not None:
            child_ids = list(
                (await db.execute(select(table.c.id).where(column.in_(ids)))).scalars().all()
            )
            if child_ids:
                await _purge(db, dependent.kind, child_ids, removed, touched)
        await _note_counters(db, table, column.in_(ids), touched)
        result = await db.execute(delete(table).where(column.in_(ids)))
        if result.rowcount:
            removed[table.name] = removed.get(table.name, 0) + result.rowcount


async def _recount(db: AsyncSession, touched: dict[Counter, set[UUID]]) -> None:
    """
    Rewrite touched counters from the rows that survived the cascade.

    Parents deleted by the cascade match nothing. Authors whose post votes
    or comment likes changed get their karma recalculated.
    """
    authors: set[UUID] = set()
    for counter, parent_set in touched.items():
        parent = counter.parent
        parent_ids = list(parent_set)
        await db.execute(
            update(parent)
            .where(parent.id.in_(parent_ids))
            .values({counter.column: counter.total()})
            .execution_options(synchronize_session=False)
        )
        if counter.column in ("vote_count", "like_count") and parent in (PostModel, CommentModel):
            stmt = select(parent.author_id).where(parent.id.in_(parent_ids))
            authors.update((await db.execute(stmt)).scalars().all())

    for author_id in authors:
        await user_crud.recalculate_karma(db, author_id)


async def delete_entities(db: AsyncSession, kind: str, ids: Sequence[UUID]) -> dict[str, int]:
    """
    Delete entities of one kind together with every dependant row.

    Args:
        db: Async database session; the caller owns the transaction
        kind: Key of DELETION_POLICY ("user", "community", "post", ...)
        ids: Primary keys of the entities to delete

    Returns:
        dict: Rows removed per table name, roots included

    Raises:
        KeyError: If kind has no policy entry
    """
    ids = list(ids)
    removed: dict[str, int] = {}
    if not ids:
        return removed

    touched: dict[Counter, set[UUID]] = {}
    await db.flush()
    await _purge(db, kind, ids, removed, touched)

    root = ROOT_TABLES[kind].__table__
    result = await db.execute(delete(root).where(root.c.id.in_(ids)))
    removed[root.name] = removed.get(root.name, 0) + result.rowcount
    await _recount(db, touched)

    logger.info(
        "Cascade delete complete",
        extra={
            "kind": kind,
            "count": len(ids),
            "removed": removed,
            "recounted": sum(len(p) for p in touched.values()),
        },
    )
    return removed
