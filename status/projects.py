"""
Project table loader. The table is a CSV export of the projects spreadsheet tab.
"""
import csv
import logging
from typing import Dict, List, Optional

from status.models import ProjectRecord

logger = logging.getLogger(__name__)

PROJECT_COLUMN_PREFIX = 'Project ('
PROJECT_COLUMNS = ('Project',)
ALIASES_COLUMNS = ('Project Aliases', 'Aliases')
COST_CENTER_COLUMNS = ('Cost Center',)


def split_aliases(value: Optional[str]) -> List[str]:
    """Split a comma-separated alias cell, trimming entries and discarding empty ones."""
    return [a.strip() for a in (value or '').split(',') if a.strip()]


def _column(row: Dict[str, str], names) -> Optional[str]:
    for name in names:
        if row.get(name) is not None:
            return row[name]
    return None


def _project_name(row: Dict[str, str]) -> Optional[str]:
    # the spreadsheet's header carries an editing note: "Project (PLEASE DON'T CHANGE ...)"
    for key, value in row.items():
        if key and key.startswith(PROJECT_COLUMN_PREFIX) and value is not None:
            return value.strip()
    value = _column(row, PROJECT_COLUMNS)
    return value.strip() if value is not None else None


def parse_row(row: Dict[str, str]) -> ProjectRecord:
    """Build a ProjectRecord from one CSV row; missing columns leave the field empty."""
    cost_center = _column(row, COST_CENTER_COLUMNS)
    return ProjectRecord(
        name=_project_name(row),
        aliases=split_aliases(_column(row, ALIASES_COLUMNS)),
        cost_center=cost_center.strip() if cost_center is not None else None,
    )


def load_projects(path: str) -> List[ProjectRecord]:
    with open(path, 'r', encoding='utf-8-sig', errors='replace', newline='') as fh:
        records = [parse_row(row) for row in csv.DictReader(fh)]
    logger.debug("Loaded %d project(s) from %s", len(records), path)
    return records
