"""Command line entry point: sprint-update --sprint SE.253 -e"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

import requests

from issue_tracker_interface.client import IssueTrackerClient, TrackerError
from jira_client_impl.jira_impl import JiraClient
from sprint_update import __version__
from sprint_update.config import PROGRAM, Config, ConfigError, load_config_file, resolve_config
from sprint_update.fetch import build_sprint_query, fetch_issues
from sprint_update.report import build_report, write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="Generate a sprint update in Discourse-compatible Markdown format.",
        epilog=f"example: {PROGRAM} --sprint SE.253 -e",
    )
    parser.add_argument("--config", help=f"config file (default is $HOME/.{PROGRAM}.toml)")
    parser.add_argument("-s", "--sprint", help="sprint name (ex: SE.253)")
    #default None so that an absent flag falls back to the environment and config file
    parser.add_argument("-e", "--end-of-sprint", action="store_true", default=None, help="indicate end of sprint update")
    parser.add_argument("--jira-url", help="jira server URL")
    parser.add_argument("--jira-username", help="jira user username")
    parser.add_argument("--jira-password", help="jira user password")
    parser.add_argument("-i", "--interactive", action="store_true", help="prompt for missing settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
    parser.add_argument("--version", action="version", version=f"{PROGRAM} version {__version__}")
    return parser


def flags_from_args(args: argparse.Namespace) -> dict:
    return {
        "jira-url": args.jira_url,
        "jira-username": args.jira_username,
        "jira-password": args.jira_password,
        "sprint": args.sprint,
        "end-of-sprint": args.end_of_sprint,
    }


def run(config: Config, client: IssueTrackerClient, out: TextIO) -> None:
    """Fetch the sprint issues and write the report to out."""
    issues = fetch_issues(client, build_sprint_query(config.sprint))
    report = build_report(config.sprint, config.end_of_sprint, config.server_url, issues)
    write_report(report, out)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        file_values = load_config_file(args.config)
        config = resolve_config(flags_from_args(args), file_values=file_values, interactive=args.interactive)
        client = JiraClient(config.server_url, config.username, config.password)
        run(config, client, sys.stdout)
    except (ConfigError, TrackerError, requests.RequestException, OSError) as e:
        logger.debug("Sprint update failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
