"""Tests for the per-user analytics summary."""

from datetime import UTC, datetime

from reviewmate.analytics import build_analytics
from reviewmate.db.models import Review, ReviewStatus


def _review(
    repository: str = "octocat/Hello-World",
    author: str = "octocat",
    status: ReviewStatus = ReviewStatus.OPEN,
    opened_at: datetime = datetime(2024, 1, 15, 10, 0),
    updated_at: datetime = datetime(2024, 1, 15, 10, 0),
) -> Review:
    return Review(
        repository=repository,
        author=author,
        status=status,
        opened_at=opened_at,
        updated_at=updated_at,
    )


class TestBuildAnalytics:
    """Tests for build_analytics."""

    def test_empty(self):
        summary = build_analytics([])

        assert summary.status_counts == {"open": 0, "closed": 0, "merged": 0}
        assert summary.average_review_time_hours == 0.0
        assert summary.repository_activity == []
        assert summary.top_contributors == []

    def test_status_counts(self):
        summary = build_analytics(
            [
                _review(status=ReviewStatus.OPEN),
                _review(status=ReviewStatus.MERGED),
                _review(status=ReviewStatus.MERGED),
            ]
        )

        assert summary.status_counts == {"open": 1, "closed": 0, "merged": 2}

    def test_average_review_time_uses_finished_reviews(self):
        summary = build_analytics(
            [
                _review(
                    status=ReviewStatus.MERGED,
                    updated_at=datetime(2024, 1, 16, 10, 0),
                ),
                _review(
                    status=ReviewStatus.CLOSED,
                    updated_at=datetime(2024, 1, 15, 22, 0),
                ),
                # Open reviews never count
                _review(updated_at=datetime(2024, 3, 1)),
            ]
        )

        assert summary.average_review_time_hours == 18.0

    def test_average_rounded_to_two_places(self):
        summary = build_analytics(
            [
                _review(
                    status=ReviewStatus.MERGED,
                    updated_at=datetime(2024, 1, 15, 10, 20),
                )
            ]
        )

        assert summary.average_review_time_hours == 0.33

    def test_mixed_timezone_awareness(self):
        summary = build_analytics(
            [
                _review(
                    status=ReviewStatus.MERGED,
                    opened_at=datetime(2024, 1, 15, 10, 0, tzinfo=UTC),
                    updated_at=datetime(2024, 1, 15, 12, 0),
                )
            ]
        )

        assert summary.average_review_time_hours == 2.0

    def test_top_five_repositories(self):
        reviews = []
        for index, count in enumerate([6, 5, 4, 3, 2, 1]):
            reviews += [_review(repository=f"org/repo{index}") for _ in range(count)]

        summary = build_analytics(reviews)

        assert [(r.repo, r.count) for r in summary.repository_activity] == [
            ("org/repo0", 6),
            ("org/repo1", 5),
            ("org/repo2", 4),
            ("org/repo3", 3),
            ("org/repo4", 2),
        ]

    def test_top_contributors(self):
        summary = build_analytics(
            [_review(author="alice"), _review(author="bob"), _review(author="alice")]
        )

        assert [(c.author, c.count) for c in summary.top_contributors] == [
            ("alice", 2),
            ("bob", 1),
        ]

    def test_json_shape(self):
        data = build_analytics([_review()]).model_dump(mode="json")

        assert set(data) == {
            "status_counts",
            "average_review_time_hours",
            "repository_activity",
            "top_contributors",
        }
        assert data["repository_activity"] == [{"repo": "octocat/Hello-World", "count": 1}]
