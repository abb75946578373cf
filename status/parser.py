"""
Status dump parser.

The dump is a loosely structured, human-written text file:

    2020
    March
    MAR 2ND 2020 MONDAY
    Worked on Foo
    Reviewed Bar

A line-based tokenizer classifies every line as YEAR, MONTH, DAY (an entry header) or TEXT, and
the parser folds the token stream into a year -> month -> [DayEntry] tree. Anything that does
not sit under a year and a month is dropped.
"""
import re
import logging
from typing import Iterator, List, Optional

from status.models import DayEntry, StatusMonth, StatusYear

logger = logging.getLogger(__name__)

MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]
MONTH_ABBREVIATIONS = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN', 'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']
WEEKDAYS = ['MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY']

YEAR_RE = re.compile(r'^(\d{4})$')
MONTH_RE = re.compile(r'^(%s)$' % '|'.join(MONTHS))
DAY_RE = re.compile(r'^(?:%s) (\d+(?:ST|ND|RD|TH)) \d+ (%s)\b(.*)$' % ('|'.join(MONTH_ABBREVIATIONS), '|'.join(WEEKDAYS)))

YEAR = 'YEAR'
MONTH = 'MONTH'
DAY = 'DAY'
TEXT = 'TEXT'


class Token:
    def __init__(self, kind: str, value: str, weekday: Optional[str] = None, rest: str = ''):
        self.kind = kind
        self.value = value
        self.weekday = weekday
        self.rest = rest

    def __repr__(self):
        return f"Token({self.kind}, {self.value!r})"


def tokenize(text: str) -> Iterator[Token]:
    for line in text.splitlines():
        marker = line.strip()
        m = YEAR_RE.match(marker)
        if m:
            yield Token(YEAR, m.group(1))
            continue
        m = MONTH_RE.match(marker)
        if m:
            yield Token(MONTH, m.group(1))
            continue
        m = DAY_RE.match(marker)
        if m:
            yield Token(DAY, m.group(1), weekday=m.group(2), rest=m.group(3).strip())
            continue
        yield Token(TEXT, line)


class _DumpParser:
    def __init__(self):
        self.years: dict = {}
        self.year: Optional[StatusYear] = None
        self.month: Optional[StatusMonth] = None
        self.entry: Optional[DayEntry] = None
        self.buffer: List[str] = []
        self.dropped = 0

    def close_entry(self):
        if self.entry is not None:
            content = '\n'.join(self.buffer).strip()
            self.entry.lines = content.split('\n') if content else []
            self.month.entries.append(self.entry)
        self.entry = None
        self.buffer = []

    def feed(self, token: Token):
        if token.kind == TEXT:
            if self.entry is not None:
                self.buffer.append(token.value)
            elif token.value.strip():
                self.dropped += 1
            return

        self.close_entry()
        if token.kind == YEAR:
            self.year = self.years.setdefault(token.value, StatusYear(token.value))
            self.month = None
        elif token.kind == MONTH:
            self.month = self.year.month(token.value) if self.year is not None else None
        elif token.kind == DAY:
            if self.month is None:
                self.dropped += 1
                return
            self.entry = DayEntry(token.value, token.weekday)
            if token.rest:
                self.buffer.append(token.rest)


def parse_dump(text: str) -> List[StatusYear]:
    """Parse dump text into years in encounter order. Unmatched regions are dropped, never fatal."""
    parser = _DumpParser()
    for token in tokenize(text):
        parser.feed(token)
    parser.close_entry()
    if parser.dropped:
        logger.debug("Dropped %d line(s) outside any year/month/day section", parser.dropped)
    return list(parser.years.values())
