"""Issue contract - Core issue representation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

__all__ = ["Issue", "SearchPage"]


class Issue(ABC):
    """Abstract base class representing a issue."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Return the unique issue key (e.g., PROJ-123)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def summary(self) -> str:
        """Return the issue summary, or an empty string if the tracker sent none."""
        raise NotImplementedError

    @property
    @abstractmethod
    def status(self) -> str:
        """Return the status name exactly as the tracker reports it (e.g. 'In Review')."""
        raise NotImplementedError

    #equivalent to Javas .toString()
    def __repr__(self) -> str:
        return f"<Issue key={self.key!r} summary={self.summary!r} status={self.status!r}>"


@dataclass(frozen=True)
class SearchPage:
    """
    One page of a search response.

    start_at is the offset the server actually served, which is not always the
    offset that was requested.
    """

    issues: list[Issue] = field(default_factory=list)
    total: int = 0
    start_at: int = 0
