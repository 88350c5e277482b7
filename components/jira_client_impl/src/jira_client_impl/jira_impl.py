"""
Authentication
--------------
The client authenticates every request with HTTP basic auth. On Jira Server and
Data Center the password is the account password; on Jira Cloud it is an API
token from https://id.atlassian.com/manage-profile/security/api-tokens.

Searching
---------
Only the REST v2 search endpoint is used:

    GET /rest/api/2/search?jql=...&startAt=...&maxResults=...

Jira caps maxResults on the server side (1000 by default), so a single call can
return fewer issues than requested.
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from issue_tracker_interface.client import IssueTrackerClient, TrackerError
from issue_tracker_interface.issue import SearchPage
from jira_client_impl.jira_issue import JiraIssue, get_issue as _make_issue

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

#the report only needs these; asking for fewer fields keeps large pages small
SEARCH_FIELDS = "summary,status"


class JiraError(TrackerError):
    """Raised when the Jira API returns an unexpected response."""

class AuthenticationError(JiraError):
    """Raised when Jira rejects the supplied credentials."""

# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        base_url: Jira instance root URL (e.g. 'https://jira.example.com')
        username: Jira username (or account email on Jira Cloud)
        password: Password or API token of the user
    """

    _API_PREFIX = "/rest/api/2"

    def __init__(self, base_url: str, username: str, password: str) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = HTTPBasicAuth(username, password)
        self._session = requests.Session()
        self._session.auth = self._auth
        self._session.headers.update({"Accept": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def _get(self, path: str, params: dict | None = None) -> Any:
        response = self._session.get(self._url(path), params=params)
        self._raise_for_status(response)
        return response.json()

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 401:
            raise AuthenticationError(f"Jira rejected the credentials for {response.url}")
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise JiraError(f"Jira API error {response.status_code}: {detail}")

    def _build_issue(self, issue: dict) -> JiraIssue:
        return _make_issue(issue)

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def search(self, query: str, *, start_at: int = 0, max_results: int = 50) -> SearchPage:
        """Run a single JQL search and return one page of results."""
        logger.debug("Searching Jira: startAt=%d maxResults=%d jql=%r", start_at, max_results, query)
        data = self._get(
            "/search",
            params={"jql": query, "startAt": start_at, "maxResults": max_results, "fields": SEARCH_FIELDS},
        )
        if not isinstance(data, dict):
            raise JiraError(f"Unexpected search response: {data!r}")

        raw_issues = data.get("issues") or []
        issues = [self._build_issue(i) for i in raw_issues if isinstance(i, dict)]
        #Jira always echoes startAt, but fall back to what we asked for if it does not
        served = data.get("startAt", start_at)
        total = data.get("total", 0)
        logger.debug("Jira returned %d of %d issues at offset %d", len(issues), total, served)

        return SearchPage(issues=issues, total=total, start_at=served)
