"""
sprint-update
=============

Generates a mid- or end-of-sprint update from the Jira issues assigned to the
current user, formatted as Discourse Markdown.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
