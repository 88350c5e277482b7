"""Group sprint issues by status and render them as a Discourse Markdown post."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TextIO

from issue_tracker_interface.issue import Issue

__all__ = [
    "GroupedIssues",
    "Report",
    "ReportIssue",
    "build_report",
    "build_title",
    "classify_issue",
    "group_issues",
    "render_report",
    "write_report",
]

MAX_SUMMARY_LENGTH = 55
ELLIPSIS = "..."

MID_SPRINT = "Mid-sprint"
END_OF_SPRINT = "End of sprint"

# ---------------------------------------------------------------------------
# Template pieces. Discourse renders [details] blocks as collapsible sections.
# ---------------------------------------------------------------------------

TITLE_TEMPLATE = "**{title}**\n\n**Worked on**\n"

STATUS_BLOCK_TEMPLATE = '\n[details="{status}"]\n{items}[/details]\n'

ISSUE_LINE_TEMPLATE = "* [{key}]({url}) - {summary}:\n"

STATIC_SECTIONS = """
**Spillovers**

No spillovers in this sprint.

**Kudos**

* TODO

**Time off**

I did not plan any time off.
"""


@dataclass(frozen=True)
class ReportIssue:
    """A single line of the report."""

    key: str
    summary: str
    url: str
    status: str


#status name -> issues in the order they were seen; dicts keep first-seen group order
GroupedIssues = dict[str, list[ReportIssue]]


@dataclass(frozen=True)
class Report:
    """Everything the template needs."""

    title: str
    issues: GroupedIssues = field(default_factory=dict)


def _truncate(summary: str) -> str:
    if len(summary) > MAX_SUMMARY_LENGTH:
        return summary[: MAX_SUMMARY_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return summary


def classify_issue(base_url: str, issue: Issue) -> ReportIssue:
    """Project a tracker issue onto a report line.

    The base URL is used as given; pass it without a trailing slash.
    """
    key = issue.key or ""
    return ReportIssue(
        key=key,
        summary=_truncate(issue.summary or ""),
        url=f"{base_url}/browse/{key}",
        status=issue.status or "",
    )


def group_issues(base_url: str, issues: Iterable[Issue]) -> GroupedIssues:
    """Group issues by status name, keeping input order inside each group."""
    grouped: GroupedIssues = {}
    for issue in issues:
        report_issue = classify_issue(base_url, issue)
        grouped.setdefault(report_issue.status, []).append(report_issue)
    return grouped


def build_title(sprint: str, end_of_sprint: bool) -> str:
    return f"{sprint} - {END_OF_SPRINT if end_of_sprint else MID_SPRINT}"


def build_report(sprint: str, end_of_sprint: bool, base_url: str, issues: Iterable[Issue]) -> Report:
    return Report(title=build_title(sprint, end_of_sprint), issues=group_issues(base_url, issues))


def render_report(report: Report) -> str:
    """Render the report text.

    Sections always appear in the same order: title, worked on (one collapsible
    block per status), spillovers, kudos and time off. The last three are
    placeholders for the author to edit before posting.
    """
    parts = [TITLE_TEMPLATE.format(title=report.title)]
    for status, report_issues in report.issues.items():
        items = "".join(
            ISSUE_LINE_TEMPLATE.format(key=i.key, url=i.url, summary=i.summary) for i in report_issues
        )
        parts.append(STATUS_BLOCK_TEMPLATE.format(status=status, items=items))
    parts.append(STATIC_SECTIONS)
    return "".join(parts)


def write_report(report: Report, stream: TextIO) -> None:
    """Render the report and write it to stream. Write errors propagate."""
    stream.write(render_report(report))
    stream.flush()
