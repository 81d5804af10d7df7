"""Tests for release_train/engine/release.py."""

import httpx
import pytest

from release_train.engine.release import ReleaseQuery
from release_train.exceptions import ResolutionError, TrackerError
from tests.conftest import InMemoryTracker, make_issue, make_pr


class TestFetchIssues:
    """Test release issue search."""

    @pytest.mark.asyncio
    async def test_returns_issues(self, release_query, release_tracker):
        issues = await release_query.fetch_issues("2.0.0")

        assert [issue.key for issue in issues] == ["DC-1", "DC-2"]
        assert release_tracker.searches == ["2.0.0"]

    @pytest.mark.asyncio
    async def test_no_issues_is_empty_not_none(self):
        query = ReleaseQuery(InMemoryTracker())

        assert await query.fetch_issues("9.9.9") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [TrackerError("search failed", status_code=401), httpx.ConnectError("connection refused")],
    )
    async def test_search_failure_returns_none(self, error):
        query = ReleaseQuery(InMemoryTracker(search_error=error))

        assert await query.fetch_issues("2.0.0") is None


class TestAttachPullRequests:
    """Test pull request lookup per issue."""

    @pytest.mark.asyncio
    async def test_attaches_in_issue_order(self, release_query, release_tracker):
        issues = await release_query.fetch_issues("2.0.0")

        attached = await release_query.attach_pull_requests(issues)

        assert release_tracker.lookups == ["DC-1", "DC-2"]
        assert attached[0].repository_names == ["developer-api", "scratchpad"]
        assert attached[1].author_names == ["Carol"]

    @pytest.mark.asyncio
    async def test_issue_without_pull_requests(self):
        query = ReleaseQuery(InMemoryTracker())

        [issue] = await query.attach_pull_requests([make_issue("DC-3")])

        assert issue.pull_requests == ()

    @pytest.mark.asyncio
    async def test_single_failure_fails_resolution(self):
        tracker = InMemoryTracker(
            pull_requests={"DC-1": [make_pr("developer-api")]},
            failing_issue_keys=("DC-2",),
        )
        query = ReleaseQuery(tracker)

        with pytest.raises(ResolutionError) as exc_info:
            await query.attach_pull_requests([make_issue("DC-1"), make_issue("DC-2"), make_issue("DC-3")])

        assert exc_info.value.issue_key == "DC-2"
        assert tracker.lookups == ["DC-1", "DC-2"]
