"""
Test suite for pure domain rules: itinerary dates, report workflow,
pagination arithmetic and exception formatting.

System role: Verification of service-level invariants
"""

from datetime import datetime, timedelta, timezone

import pytest

from explorely.application.services.itinerary_service import check_dates, resolve_status
from explorely.application.services.pagination import page_meta, page_offset
from explorely.application.services.report_service import check_transition
from explorely.boundary.db.models.itinerary_model import ItineraryStatus
from explorely.boundary.db.models.report_model import ReportStatus
from explorely.core.exceptions import NotFoundError, ValidationError

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestItineraryDates:
    """Test suite for itinerary date rules."""

    def test_same_day_trip_is_valid(self) -> None:
        check_dates(NOW, NOW)

    def test_end_before_start_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="End date cannot be before start date"):
            check_dates(NOW, NOW - timedelta(days=1))

    def test_naive_dates_are_treated_as_utc(self) -> None:
        naive_start = datetime(2026, 6, 2)
        with pytest.raises(ValidationError):
            check_dates(naive_start, NOW)

    def test_past_trip_is_completed(self) -> None:
        status = resolve_status(ItineraryStatus.UPCOMING, NOW - timedelta(days=1), now=NOW)
        assert status == ItineraryStatus.COMPLETED

    def test_future_trip_keeps_requested_status(self) -> None:
        status = resolve_status(ItineraryStatus.UPCOMING, NOW + timedelta(days=1), now=NOW)
        assert status == ItineraryStatus.UPCOMING


class TestReportTransitions:
    """Test suite for the report workflow."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (ReportStatus.PENDING, ReportStatus.REVIEWED),
            (ReportStatus.PENDING, ReportStatus.DISMISSED),
            (ReportStatus.REVIEWED, ReportStatus.RESOLVED),
            (ReportStatus.RESOLVED, ReportStatus.RESOLVED),
        ],
    )
    def test_allowed(self, current: ReportStatus, target: ReportStatus) -> None:
        check_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (ReportStatus.REVIEWED, ReportStatus.PENDING),
            (ReportStatus.RESOLVED, ReportStatus.DISMISSED),
            (ReportStatus.DISMISSED, ReportStatus.PENDING),
        ],
    )
    def test_rejected(self, current: ReportStatus, target: ReportStatus) -> None:
        with pytest.raises(ValidationError, match="Cannot change report status"):
            check_transition(current, target)


class TestPagination:
    """Test suite for page arithmetic."""

    def test_offset(self) -> None:
        assert page_offset(1, 20) == 0
        assert page_offset(3, 20) == 40
        assert page_offset(0, 20) == 0

    def test_meta_middle_page(self) -> None:
        assert page_meta(total=45, page=2, limit=20, returned=20) == {
            "total": 45,
            "current_page": 2,
            "total_pages": 3,
            "has_more": True,
        }

    def test_meta_last_page(self) -> None:
        meta = page_meta(total=45, page=3, limit=20, returned=5)
        assert meta["has_more"] is False


class TestExceptions:
    """Test suite for domain exception formatting."""

    def test_not_found_message_and_status(self) -> None:
        error = NotFoundError("Community", "abc")

        assert error.message == "Community not found"
        assert error.status_code == 404
        assert error.details == {"entity_id": "abc"}

    def test_validation_error_records_field(self) -> None:
        error = ValidationError("Bad", field="rating")

        assert error.status_code == 400
        assert str(error) == "Bad | Details: {'field': 'rating'}"
