"""Last-resort date recovery for Received values that failed tokenizing.

Only the calendar date is kept. Time and offset next to it are ignored: once
the surrounding text could not be classified they are not trusted.
"""
import re
from datetime import datetime, timezone
from typing import Optional

from .datetime_parser import MONTHS, WEEKDAYS, month_number

# A permissive pattern: [DOW,] D MON YYYY
MINIMAL_DATE_RE = re.compile(
    r'(?:\b(?:' + '|'.join(WEEKDAYS) + r')\s*,\s*)?'
    r'\b(?P<day>\d{1,2})\s+'
    r'(?P<month>' + '|'.join(MONTHS) + r')\s+'
    r'(?P<year>\d{4})\b',
    re.IGNORECASE,
)


def extract_fallback_date(raw: str) -> Optional[datetime]:
    """Return midnight UTC on the first usable date found anywhere in ``raw``."""
    for m in MINIMAL_DATE_RE.finditer(raw):
        try:
            return datetime(
                int(m.group('year')),
                month_number(m.group('month')),
                int(m.group('day')),
                tzinfo=timezone.utc,
            )
        except ValueError:
            continue
    return None
