"""Core client contract definitions."""

from abc import ABC, abstractmethod

from issue_tracker_interface.issue import SearchPage

__all__ = ["IssueTrackerClient", "TrackerError"]


class IssueTrackerClient(ABC):
    """Searches issues on a tracker server."""

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Return the server root URL, without a trailing slash."""
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str, *, start_at: int = 0, max_results: int = 50) -> SearchPage:
        """Run one search request."""
        """Args:
            query:       Query in the tracker's own language (JQL for Jira)
            start_at:    Offset of the first result to return
            max_results: Page size requested. Servers may cap it and return fewer items

        Notes on usage:
            Only a single page is fetched. Callers that need every match must keep
            calling with a larger start_at until they have collected SearchPage.total items.

        Returns:
            A SearchPage holding the issues received, the total match count and the
            offset the server actually served

        Raises:
            TrackerError: If the server rejects the request

        """
        raise NotImplementedError


class TrackerError(Exception):
    """Base exception raised when the tracker cannot answer a request."""
