"""
Data models for the daily status ("10am") dump and the project table.
"""
from enum import Enum
from typing import Dict, List, Optional


class CostCenter(str, Enum):
    """Organizational cost centers a project can belong to."""
    GA = 'G&A'
    RD = 'R&D'
    SM = 'S&M'
    COR = 'CoR'

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['CostCenter']:
        """Return the matching member, or None for unknown/empty values."""
        for member in cls:
            if member.value == (value or '').strip():
                return member
        return None


class DayEntry:
    """
    One day's status update: header date/weekday labels plus its content lines.
    """
    def __init__(self, date: str, weekday: str, lines: Optional[List[str]] = None):
        self.date = date  # e.g. '2ND'
        self.weekday = weekday  # e.g. 'MONDAY'
        self.lines = lines or []


class StatusMonth:
    def __init__(self, name: str, entries: Optional[List[DayEntry]] = None):
        self.name = name
        self.entries = entries or []


class StatusYear:
    def __init__(self, year: str):
        self.year = year
        self.months: Dict[str, StatusMonth] = {}

    def month(self, name: str) -> StatusMonth:
        """Return the named month, creating it (in encounter order) when missing."""
        if name not in self.months:
            self.months[name] = StatusMonth(name)
        return self.months[name]


class ProjectRecord:
    """
    Row of the project table. Any field may be missing when the CSV row is incomplete.
    """
    def __init__(self, name: Optional[str] = None, aliases: Optional[List[str]] = None, cost_center: Optional[str] = None):
        self.name = name
        self.aliases = aliases or []
        self.cost_center = cost_center

    def keywords(self) -> List[str]:
        """Project name first, then aliases; empty strings never match."""
        return [k for k in [self.name] + list(self.aliases) if k]


class Annotation:
    """
    Cost-center tag attached to a status line. total_count stays None until the month is finalized.
    """
    def __init__(self, cost_center: CostCenter, matched_count: int, project: str, total_count: Optional[int] = None):
        self.cost_center = cost_center
        self.matched_count = matched_count
        self.project = project
        self.total_count = total_count

    def render(self) -> str:
        total = '?' if self.total_count is None else str(self.total_count)
        return f"[{self.cost_center.value} {self.matched_count}/{total} – {self.project}]"


class TaggedLine:
    def __init__(self, text: str, annotation: Optional[Annotation] = None):
        self.text = text
        self.annotation = annotation

    def render(self) -> str:
        if self.annotation is None:
            return self.text
        return f"{self.text} {self.annotation.render()}"


class TaggedEntry:
    def __init__(self, date: str, weekday: str, lines: List[TaggedLine]):
        self.date = date
        self.weekday = weekday
        self.lines = lines
