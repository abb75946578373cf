"""
CLI entry point for the status dump tagger:
parse dump + load project table -> tag per month -> print
"""

import argparse
import logging
import os
import sys

from errors import FileNotFound, InvalidFileType, ValidationError
from status.models import CostCenter
from status.parser import parse_dump
from status.projects import load_projects
from status.tagger import tag_dump
from report.renderer import render_dump

logger = logging.getLogger(__name__)

COST_CENTER_CHOICES = ', '.join(cc.value for cc in CostCenter)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tag a daily status dump with project cost centers and monthly counts.",
        epilog="Example: status-tagger ./tenAMDump.txt ./projectTab.csv CoR",
    )
    parser.add_argument("dump", help="Path to the status dump text file")
    parser.add_argument("projects", help="Path to the project table CSV file")
    parser.add_argument("home_cost_center", help=f"Your home cost center, one of: [{COST_CENTER_CHOICES}]")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr")
    return parser


def validate_inputs(dump_path: str, projects_path: str, home_cost_center: str) -> CostCenter:
    """Check the file arguments and cost center; returns the parsed home cost center."""
    if not os.path.isfile(dump_path):
        raise FileNotFound(f"{dump_path} not found")
    if not projects_path.endswith('.csv'):
        raise InvalidFileType("project tab file must be a .csv")
    if not os.path.isfile(projects_path):
        raise FileNotFound(f"{projects_path} not found")
    home = CostCenter.parse(home_cost_center)
    if home is None:
        raise ValidationError(f"Must provide a home cost center. Must be one of: [{COST_CENTER_CHOICES}]")
    return home


def run(dump_path: str, projects_path: str, home: CostCenter) -> str:
    with open(dump_path, 'r', encoding='utf-8', errors='replace') as fh:
        years = parse_dump(fh.read())
    projects = load_projects(projects_path)
    return render_dump(tag_dump(years, projects, home))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )
    try:
        home = validate_inputs(args.dump, args.projects, args.home_cost_center)
    except ValidationError as e:
        parser.error(str(e))
    try:
        rendered = run(args.dump, args.projects, home)
    except OSError as e:
        parser.error(f"could not read input: {e}")
    sys.stdout.write(rendered)


if __name__ == "__main__":
    main()
