"""Shared fakes for the sprint_update tests."""

import pytest
from unittest.mock import MagicMock

from issue_tracker_interface.client import IssueTrackerClient
from issue_tracker_interface.issue import Issue, SearchPage


class FakeIssue(Issue):
    """Issue with fixed values, no tracker behind it."""

    def __init__(self, key, summary="", status="Done"):
        self._key = key
        self._summary = summary
        self._status = status

    @property
    def key(self):
        return self._key

    @property
    def summary(self):
        return self._summary

    @property
    def status(self):
        return self._status


@pytest.fixture
def make_issue():
    """Returns a factory for FakeIssue instances."""
    return FakeIssue


@pytest.fixture
def make_client():
    """Returns a factory for a mocked tracker client serving the given issues.

    The client pages through the issues like Jira does, capping each page at
    page_limit items regardless of the max_results requested.
    """
    def _make(issues, page_limit=1000):
        client = MagicMock(spec=IssueTrackerClient)

        def search(query, *, start_at=0, max_results=50):
            size = min(max_results, page_limit)
            return SearchPage(issues=list(issues[start_at:start_at + size]), total=len(issues), start_at=start_at)

        client.search.side_effect = search
        return client

    return _make
