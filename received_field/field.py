"""The Received field value: parsed once, read-only afterwards."""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .datetime_parser import format_date_time, parse_date_time
from .fallback import extract_fallback_date
from .splitter import Structured, Unstructured, split_value, strip_trailing_comment

logger = logging.getLogger(__name__)

FIELD_NAME = 'Received'
CRLF = '\r\n'


@dataclass(frozen=True)
class ParsedDate:
    """A timestamp, if any, and whether it came from the strict parser.

    ``strict`` is False for fallback dates, whose time is always midnight
    and whose offset is always +0000.
    """

    value: Optional[datetime]
    strict: bool


@dataclass(frozen=True)
class ParsedReceived:
    info: str
    date: ParsedDate


def unfold(text: str) -> str:
    """Undo header folding so the value fits on one line."""
    text = re.sub(r'\r?\n(?=[ \t])', '', text)
    return re.sub(r'[\r\n]+', ' ', text)


def parse_received(raw: str) -> ParsedReceived:
    outcome = split_value(raw)
    if isinstance(outcome, Structured):
        value = parse_date_time(outcome.date_clause) if outcome.date_clause else None
        if outcome.date_clause and value is None:
            logger.debug(f"Invalid date clause in Received value: {outcome.date_clause!r}")
        return ParsedReceived(outcome.info, ParsedDate(value, strict=True))
    if isinstance(outcome, Unstructured):
        logger.debug(f"Received value failed tokenizing, using date fallback: {outcome.raw!r}")
        value = extract_fallback_date(outcome.raw)
        if value is None:
            logger.debug('No date found in unstructured Received value')
        return ParsedReceived('', ParsedDate(value, strict=False))
    raise TypeError(f'unexpected split outcome {outcome!r}')


class ReceivedField:
    """A single Received trace header, given its value without the field name.

    Parsing happens in the constructor and never raises; malformed values
    degrade to an empty info string and/or a missing date.
    """

    def __init__(self, value: Optional[str] = ''):
        self._value = value or ''
        self._parsed = parse_received(self._value)

    def __repr__(self):
        return f'ReceivedField({self._value!r})'

    def name(self) -> str:
        return FIELD_NAME

    def value(self) -> str:
        return self._value

    def parsed(self) -> ParsedReceived:
        return self._parsed

    def info(self) -> str:
        return self._parsed.info

    def date_time(self) -> Optional[datetime]:
        return self._parsed.date.value

    def formatted_date(self) -> Optional[str]:
        value = self.date_time()
        if value is None:
            return None
        return format_date_time(value)

    def decoded(self) -> str:
        if not self._value.strip():
            return ''
        return strip_trailing_comment(self._value)

    def encoded(self) -> str:
        return f'{FIELD_NAME}: {unfold(self.decoded())}{CRLF}'
