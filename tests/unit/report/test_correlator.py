"""Unit tests for MergeRequestCorrelator and slugify."""

from unittest.mock import MagicMock

import pytest

from weeports.gitlab import UpstreamError
from weeports.report import MergeRequestCorrelator, ReportContext, slugify


@pytest.fixture
def gitlab() -> MagicMock:
    return MagicMock()


@pytest.fixture
def correlator(gitlab: MagicMock) -> MergeRequestCorrelator:
    return MergeRequestCorrelator(ReportContext(client=gitlab, username="alice"))


@pytest.mark.unit
class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Fix Bug-42!", "fixbug42"),
            ("feature/add_login", "featureaddlogin"),
            ("Überarbeitung der API", "berarbeitungderapi"),
            ("---", ""),
            ("", ""),
        ],
    )
    def test_keeps_ascii_alphanumerics_lowercased(self, text, expected) -> None:
        assert slugify(text) == expected

    @pytest.mark.parametrize("text", ["Fix Bug-42!", "fix-42", "  Mixed_Case/Branch  ", "ÄÖÜ 1"])
    def test_idempotent(self, text) -> None:
        assert slugify(slugify(text)) == slugify(text)

    def test_case_and_punctuation_insensitive(self) -> None:
        assert slugify("Fix Bug-42!") == slugify("fixbug42")


@pytest.mark.unit
class TestFindLatest:
    """Tests for find_latest."""

    def test_no_candidates(self, correlator, gitlab, make_issue) -> None:
        gitlab.list_merge_requests.return_value = []

        assert correlator.find_latest(make_issue()) is None

    def test_no_matching_branch(self, correlator, gitlab, make_issue, make_merge_request) -> None:
        gitlab.list_merge_requests.return_value = [
            make_merge_request(source_branch="unrelated-work"),
        ]

        assert correlator.find_latest(make_issue(title="Fix login form")) is None

    def test_single_match(self, correlator, gitlab, make_issue, make_merge_request) -> None:
        match = make_merge_request(id=5001, source_branch="fix-login-form")
        gitlab.list_merge_requests.return_value = [
            make_merge_request(id=5000, source_branch="other"),
            match,
            make_merge_request(id=5002, source_branch="fix-login"),
        ]

        assert correlator.find_latest(make_issue(title="Fix login form")) == match

    def test_last_listed_match_wins(
        self, correlator, gitlab, make_issue, make_merge_request
    ) -> None:
        mr_a = make_merge_request(id=5001, source_branch="fix-42")
        mr_b = make_merge_request(id=5002, source_branch="Fix42")
        gitlab.list_merge_requests.return_value = [mr_a, mr_b]

        assert correlator.find_latest(make_issue(title="Fix 42")) == mr_b

    def test_adjacent_non_matches_are_all_dropped(
        self, correlator, gitlab, make_issue, make_merge_request
    ) -> None:
        """Consecutive non-matching candidates never leak into the result."""
        match = make_merge_request(id=5001, source_branch="fix-42")
        gitlab.list_merge_requests.return_value = [
            match,
            make_merge_request(id=5002, source_branch="other-1"),
            make_merge_request(id=5003, source_branch="other-2"),
        ]

        assert correlator.find_latest(make_issue(title="Fix 42")) == match

    def test_queries_open_merge_requests_of_assignee(
        self, correlator, gitlab, make_issue
    ) -> None:
        gitlab.list_merge_requests.return_value = []

        correlator.find_latest(make_issue(assignee_id=42))

        gitlab.list_merge_requests.assert_called_once_with(author_id=42, state="opened")

    def test_unassigned_issue_skips_lookup(self, correlator, gitlab, make_issue) -> None:
        assert correlator.find_latest(make_issue(assignee_id=None)) is None

        gitlab.list_merge_requests.assert_not_called()

    def test_upstream_error_propagates(self, correlator, gitlab, make_issue) -> None:
        gitlab.list_merge_requests.side_effect = UpstreamError("boom", "/merge_requests", 503)

        with pytest.raises(UpstreamError):
            correlator.find_latest(make_issue())
