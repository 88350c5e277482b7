"""Fetch every issue of a sprint, page by page."""

from __future__ import annotations

import logging

from issue_tracker_interface.client import IssueTrackerClient, TrackerError
from issue_tracker_interface.issue import Issue

logger = logging.getLogger(__name__)

#Jira never returns more than 1000 issues per search call
MAX_RESULTS = 1000

SPRINT_QUERY = 'assignee = currentUser() AND Sprint = "{sprint}" AND status != Recurring'


def build_sprint_query(sprint: str) -> str:
    """Return the JQL selecting the current user's issues in the given sprint."""
    return SPRINT_QUERY.format(sprint=sprint)


def fetch_issues(client: IssueTrackerClient, jql: str) -> list[Issue]:
    """
    Args:
        client: An authenticated tracker client
        jql:    The query to run

    Notes on usage:
        The search endpoint returns at most MAX_RESULTS issues per call, so pages are
        requested until the number of collected issues reaches the total reported
        by the server. The next offset is the offset served plus the number of issues
        actually received, so short pages are handled.

    Returns:
        Every matching issue, in the order the server returned them

    Raises:
        TrackerError: If a request fails, or a page comes back empty before the total is reached.
        Nothing collected so far is returned in that case.
    """
    issues: list[Issue] = []
    start_at = 0

    while True:
        page = client.search(jql, start_at=start_at, max_results=MAX_RESULTS)
        total = page.total

        if total == 0:
            break

        #an empty page before the total is reached would otherwise loop forever
        if not page.issues:
            raise TrackerError(f"Search returned no issues at offset {start_at} of {total}")

        issues.extend(page.issues)
        start_at = page.start_at + len(page.issues)

        if start_at >= total:
            break

    logger.debug("Fetched %d issues", len(issues))
    return issues
