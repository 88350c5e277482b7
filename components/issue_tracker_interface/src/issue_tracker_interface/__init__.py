"""Tracker-agnostic contracts used by the sprint update report."""

from issue_tracker_interface.client import IssueTrackerClient, TrackerError
from issue_tracker_interface.issue import Issue, SearchPage

__all__ = ["Issue", "IssueTrackerClient", "SearchPage", "TrackerError"]
