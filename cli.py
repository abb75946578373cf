"""
CLI entry point for the daily GitHub activity report. Wires the pipeline:
resolve range -> fetch -> extract -> enrich -> bucket -> render
"""

import argparse
import logging
import os
import sys

from errors import FetchFailed, ValidationError
from ingest.github import GitHubClient
from ingest.retry import configure_retry
from normalize.dates import resolve_range
from normalize.models import DateRange
from correlate import aggregate_activity
from correlate.fetcher import DEFAULT_ORG
from report.renderer import render_report

logger = logging.getLogger(__name__)

EXAMPLE = "daily-activity --token=XXX --date=2021-01-01"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print a day-by-day report of your GitHub activity (issues, PRs, reviews, comments, commits).",
        epilog=f"Example: {EXAMPLE}",
    )
    parser.add_argument("--token", type=str, help="GitHub API token (or set GITHUB_TOKEN env var)")
    parser.add_argument("--date", type=str, help="Single day to report (YYYY-MM-DD)")
    parser.add_argument("--startDate", dest="start_date", type=str, help="First day of the range (YYYY-MM-DD)")
    parser.add_argument("--endDate", dest="end_date", type=str, help="Last day of the range (YYYY-MM-DD)")
    parser.add_argument("--org", type=str, default=DEFAULT_ORG, help=f"GitHub organization to search (default: {DEFAULT_ORG})")
    parser.add_argument("--max-retries", type=int, default=None, help="Retries after a rate-limit response (overrides ACTIVITY_MAX_RETRIES env)")
    parser.add_argument("--verbose", action="store_true", help="Log progress and debug details to stderr")
    return parser


def _resolve_token(args, parser):
    """CLI flag takes precedence over the GITHUB_TOKEN environment variable."""
    token = args.token if args.token else os.getenv('GITHUB_TOKEN')
    if not token:
        parser.error('No GitHub token provided (CLI flag --token or env GITHUB_TOKEN)')
    args.token = token


def validate_args(args, parser) -> DateRange:
    """Check flag combinations and dates. Calls parser.error() (exit status 2) before any network call."""
    _resolve_token(args, parser)
    has_pair = bool(args.start_date or args.end_date)
    if args.date and has_pair:
        parser.error('--date cannot be combined with --startDate/--endDate')
    if not args.date and not has_pair:
        parser.error('Must provide either --date or both --startDate and --endDate')
    if has_pair and not (args.start_date and args.end_date):
        parser.error('--startDate and --endDate must be provided together')
    try:
        return resolve_range(date=args.date, start_date=args.start_date, end_date=args.end_date)
    except ValidationError as e:
        parser.error(str(e))


def run_pipeline(args, date_range: DateRange) -> str:
    """Fetch, aggregate and render; returns the report text. Raises FetchFailed on any API error."""
    client = GitHubClient(args.token)
    identity = client.get_authenticated_login()
    if not identity:
        raise FetchFailed('Could not determine the authenticated GitHub user')
    logger.info("Collecting activity for %s in %s from %s to %s", identity, args.org, date_range.start, date_range.end)
    buckets = aggregate_activity(client, identity, date_range, org=args.org)
    return render_report(buckets)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    date_range = validate_args(args, parser)

    if args.max_retries is not None:
        configure_retry(max_retries=args.max_retries)

    try:
        rendered = run_pipeline(args, date_range)
    except FetchFailed as e:
        print(f"Error: Unexpected GitHub API error – {e}", file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(rendered)


if __name__ == "__main__":
    main()
