"""Parsing of the Received trace header: routing info plus a timestamp.

Malformed values never raise; they degrade to empty info and/or no date.
"""

from .field import ParsedDate, ParsedReceived, ReceivedField
from .splitter import Structured, Unstructured, split_value
from .datetime_parser import parse_date_time
from .fallback import extract_fallback_date
