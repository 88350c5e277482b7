"""Jira Issue implementation."""

from issue_tracker_interface.issue import Issue

# ------------------------------------------------------------------
# Issue implementation
# ------------------------------------------------------------------
class JiraIssue(Issue):
    """Concrete Issue backed by a Jira issue API response.

    Construct via the module-level ``get_issue()`` factory rather than
    instantiating directly.

    Args:
        issue_key: The Jira issue key (e.g. 'PROJ-42').
        raw_data: The ``fields``-level dict from the Jira REST API response.

    """

    def __init__(self, issue_key: str, raw_data: dict) -> None:
        """Initialize JiraIssue."""
        self._key = issue_key
        self._raw = raw_data

    @property
    def key(self) -> str:
        """Return key."""
        return self._key

    @property
    def summary(self) -> str:
        """Return summary."""
        return self._raw.get("summary") or ""

    @property
    def status(self) -> str:
        """Return the raw Jira status name."""
        #Jira nests the name inside a status object: {"status": {"name": "In Progress", ...}}
        status = self._raw.get("status")
        if not isinstance(status, dict):
            return ""
        return status.get("name") or ""


# ---------------------------------------------------------------------------
# Get issue
# ---------------------------------------------------------------------------

def get_issue(issue: dict) -> JiraIssue:
    """Return a JiraIssue from one entry of a Jira search response.

    Args:
        issue: The issue payload, holding ``key`` and ``fields``.

    Returns:
        A JiraIssue instance conforming to the Issue contract.

    """
    fields = issue.get("fields")
    return JiraIssue(issue.get("key") or "", fields if isinstance(fields, dict) else {})
