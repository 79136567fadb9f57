"""Strict parsing of the date-time clause that ends a Received value."""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

WEEKDAYS = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
MONTHS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

DATE_TIME_RE = re.compile(
    r'(?:(?P<dow>' + '|'.join(WEEKDAYS) + r')\s*,\s*)?'
    r'(?P<day>\d{1,2})\s+'
    r'(?P<month>' + '|'.join(MONTHS) + r')\s+'
    r'(?P<year>\d{4})\s+'
    r'(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s+'
    r'(?P<sign>[+-])(?P<off_h>\d{2})(?P<off_m>\d{2})',
    re.IGNORECASE,
)
# a single trailing comment, typically the zone name: "(GMT)", "(PDT)"
TRAILING_COMMENT_RE = re.compile(r'\s*\([^()]*\)\Z')


def month_number(name: str) -> int:
    return MONTHS.index(name.title()) + 1


def parse_date_time(clause: str) -> Optional[datetime]:
    """Parse ``[Weekday, ] DD Month YYYY HH:MM[:SS] +HHMM``.

    The result carries the literal offset written in the clause. Returns None
    when the clause does not match the grammar or any field is out of range.
    """
    text = TRAILING_COMMENT_RE.sub('', clause.strip())
    m = DATE_TIME_RE.fullmatch(text)
    if not m:
        return None

    off_h, off_m = int(m.group('off_h')), int(m.group('off_m'))
    if off_m > 59 or off_h > 23:
        return None
    offset = timedelta(hours=off_h, minutes=off_m)
    if m.group('sign') == '-':
        offset = -offset

    try:
        return datetime(
            int(m.group('year')),
            month_number(m.group('month')),
            int(m.group('day')),
            int(m.group('hour')),
            int(m.group('minute')),
            int(m.group('second') or 0),
            tzinfo=timezone(offset),
        )
    except ValueError:
        # day past the end of the month, hour 25, second 60 and the like
        return None


def format_date_time(value: datetime) -> str:
    """Render as ``Www, DD Mon YYYY HH:MM:SS +ZZZZ`` independent of locale.

    A zero offset always renders as +0000. A parsed -0000 (RFC 5322's
    "local offset unknown") is held as a plain zero tzinfo, so its sign is
    not kept.
    """
    offset = value.utcoffset() or timedelta(0)
    sign = '-' if offset < timedelta(0) else '+'
    minutes = abs(int(offset.total_seconds())) // 60
    return '%s, %02d %s %04d %02d:%02d:%02d %s%02d%02d' % (
        WEEKDAYS[value.weekday()], value.day, MONTHS[value.month - 1], value.year,
        value.hour, value.minute, value.second, sign, minutes // 60, minutes % 60,
    )
