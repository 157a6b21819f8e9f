"""Tests for review schemas and priority derivation."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from reviewmate.config import PriorityConfig
from reviewmate.db.models import Priority, ReviewStatus
from reviewmate.schemas.enums import ReviewSortField, SortDirection
from reviewmate.schemas.review import ReviewFilters, derive_priority
from tests.factories import make_payload


class TestDerivePriority:
    """Tests for derive_priority."""

    @pytest.mark.parametrize(
        ("lines", "expected"),
        [
            (0, Priority.LOW),
            (49, Priority.LOW),
            (50, Priority.MEDIUM),
            (199, Priority.MEDIUM),
            (200, Priority.HIGH),
            (5000, Priority.HIGH),
        ],
    )
    def test_default_thresholds_inclusive(self, lines, expected):
        assert derive_priority(lines) == expected

    def test_monotonic_and_total(self):
        order = [Priority.LOW, Priority.MEDIUM, Priority.HIGH]
        tiers = [order.index(derive_priority(lines)) for lines in range(0, 1001)]

        assert tiers == sorted(tiers)

    def test_custom_thresholds(self):
        config = PriorityConfig(high_threshold=10, medium_threshold=5)

        assert derive_priority(4, config) == Priority.LOW
        assert derive_priority(5, config) == Priority.MEDIUM
        assert derive_priority(10, config) == Priority.HIGH

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            derive_priority(-1)


class TestReviewPayload:
    """Tests for ReviewPayload validation."""

    def test_valid_payload(self):
        payload = make_payload()

        assert payload.lines_changed == 250
        assert payload.priority == Priority.HIGH

    def test_lines_changed_must_match_sum(self):
        with pytest.raises(ValidationError, match="lines_changed"):
            make_payload(lines_changed=10)

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            make_payload(additions=-1, lines_changed=49)

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            make_payload(title="   ")

    def test_aware_opened_at_converted_to_naive_utc(self):
        plus_two = timezone(timedelta(hours=2))
        payload = make_payload(opened_at=datetime(2024, 1, 15, 12, 0, tzinfo=plus_two))

        assert payload.opened_at == datetime(2024, 1, 15, 10, 0)
        assert payload.opened_at.tzinfo is None

    def test_naive_opened_at_kept(self):
        payload = make_payload(opened_at=datetime(2024, 1, 15, 10, 0))
        assert payload.opened_at == datetime(2024, 1, 15, 10, 0)

    def test_utc_input(self):
        payload = make_payload(opened_at=datetime(2024, 1, 15, 10, 0, tzinfo=UTC))
        assert payload.opened_at == datetime(2024, 1, 15, 10, 0)


class TestReviewFilters:
    """Tests for ReviewFilters."""

    def test_defaults(self):
        filters = ReviewFilters()

        assert filters.status is None
        assert filters.priority is None
        assert filters.repository is None
        assert filters.sort_by == ReviewSortField.DATE
        assert filters.sort_dir == SortDirection.DESC

    @pytest.mark.parametrize("value", ["all", "ALL", "", "  "])
    def test_all_means_unfiltered(self, value):
        filters = ReviewFilters(status=value, priority=value, repository=value)

        assert filters.status is None
        assert filters.priority is None
        assert filters.repository is None

    def test_parses_values(self):
        filters = ReviewFilters.model_validate(
            {"status": "merged", "priority": "High", "sort_by": "lines", "sort_dir": "asc"}
        )

        assert filters.status == ReviewStatus.MERGED
        assert filters.priority == Priority.HIGH
        assert filters.sort_by == ReviewSortField.LINES
        assert filters.sort_dir == SortDirection.ASC

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ReviewFilters.model_validate({"status": "draft"})

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(ValidationError):
            ReviewFilters.model_validate({"sort_by": "title"})
