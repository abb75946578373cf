"""
Cost-center tagging for status dump entries.

Tagging is two passes per month: tag_month() attaches annotations with running counts and an
open total, then finalize_month() fills in each cost center's monthly total.
"""
import logging
from typing import Dict, List, Optional, Tuple

from status.models import Annotation, CostCenter, DayEntry, ProjectRecord, StatusYear, TaggedEntry, TaggedLine

logger = logging.getLogger(__name__)


class CostCenterCounter:
    """Per-month running count of tagged lines, one counter per cost center."""

    def __init__(self):
        self.counts: Dict[CostCenter, int] = {cc: 0 for cc in CostCenter}

    def increment(self, cost_center: CostCenter) -> int:
        self.counts[cost_center] += 1
        return self.counts[cost_center]

    def total(self, cost_center: CostCenter) -> int:
        return self.counts[cost_center]


def match_project(line: str, projects: List[ProjectRecord], home: CostCenter) -> Optional[Tuple[ProjectRecord, CostCenter]]:
    """First project in table order whose name or alias occurs in the line; home cost center projects are skipped."""
    for project in projects:
        cost_center = CostCenter.parse(project.cost_center)
        if cost_center is None or cost_center == home:
            continue
        for keyword in project.keywords():
            if keyword in line:
                return project, cost_center
    return None


def tag_month(entries: List[DayEntry], projects: List[ProjectRecord], home: CostCenter) -> Tuple[List[TaggedEntry], CostCenterCounter]:
    counter = CostCenterCounter()
    tagged: List[TaggedEntry] = []
    for entry in entries:
        lines: List[TaggedLine] = []
        for text in entry.lines:
            match = match_project(text, projects, home)
            if match is None:
                lines.append(TaggedLine(text))
                continue
            project, cost_center = match
            annotation = Annotation(cost_center, counter.increment(cost_center), project.name or '')
            lines.append(TaggedLine(text, annotation))
        tagged.append(TaggedEntry(entry.date, entry.weekday, lines))
    return tagged, counter


def finalize_month(tagged: List[TaggedEntry], counter: CostCenterCounter) -> List[TaggedEntry]:
    """Fill every annotation's total from the month's final counts. Safe to run more than once."""
    for entry in tagged:
        for line in entry.lines:
            if line.annotation is not None:
                line.annotation.total_count = counter.total(line.annotation.cost_center)
    return tagged


class TaggedMonth:
    def __init__(self, name: str, entries: List[TaggedEntry], counter: CostCenterCounter):
        self.name = name
        self.entries = entries
        self.counter = counter


class TaggedYear:
    def __init__(self, year: str, months: List[TaggedMonth]):
        self.year = year
        self.months = months


def tag_dump(years: List[StatusYear], projects: List[ProjectRecord], home: CostCenter) -> List[TaggedYear]:
    """Tag and finalize every month of a parsed dump. Counters never carry over between months."""
    result: List[TaggedYear] = []
    for year in years:
        months: List[TaggedMonth] = []
        for month in year.months.values():
            tagged, counter = tag_month(month.entries, projects, home)
            finalize_month(tagged, counter)
            logger.debug("%s %s: %s", month.name, year.year, {cc.value: n for cc, n in counter.counts.items()})
            months.append(TaggedMonth(month.name, tagged, counter))
        result.append(TaggedYear(year.year, months))
    return result
