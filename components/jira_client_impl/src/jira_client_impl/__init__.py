"""Jira implementation of the issue tracker client."""

from jira_client_impl.jira_impl import AuthenticationError, JiraClient, JiraError
from jira_client_impl.jira_issue import JiraIssue

__all__ = ["AuthenticationError", "JiraClient", "JiraError", "JiraIssue"]
