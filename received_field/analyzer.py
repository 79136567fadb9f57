"""Relay-path analysis over the Received fields of one message.

Each relay prepends its Received header, so the header order is newest first.
The analysis reverses it into a hop list (oldest first) and measures the
delay between consecutive dated hops.

Notes are produced for:
- hops without any usable date
- hops whose date came from the fallback (date only, no time of day)
- negative delays, which usually mean a relay with a skewed clock
"""
from typing import List, Optional

from .field import ReceivedField
from .parser import extract_ips_from_received


def _hop_delay(prev: Optional[ReceivedField], field: ReceivedField) -> Optional[float]:
    # fallback dates carry no time of day, a delay against them is meaningless
    if prev is None or field.date_time() is None or not field.parsed().date.strict:
        return None
    return (field.date_time() - prev.date_time()).total_seconds()


def analyze_trace(parsed_header: dict) -> dict:
    """Return the hop list, total transit time, notes and extracted IPs."""
    received: List[ReceivedField] = parsed_header.get('Received', [])
    result = {}

    hops = []
    notes = []
    prev = None
    first = None
    last = None
    for index, field in enumerate(reversed(received), start=1):
        date = field.parsed().date
        delay = _hop_delay(prev, field)
        hops.append({
            'index': index,
            'info': field.info(),
            'date': field.formatted_date(),
            'strict': date.strict,
            'delay_seconds': delay,
        })

        if date.value is None:
            notes.append(f'Hop {index} has no usable date.')
            continue
        if not date.strict:
            notes.append(f'Hop {index} could not be tokenized; only its calendar date was recovered.')
        elif delay is not None and delay < 0:
            notes.append(f'Hop {index} is dated {-delay:.0f}s before the previous hop (clock skew?).')

        if date.strict:
            if first is None:
                first = field
            last = field
            prev = field

    result['hops'] = hops
    result['total_seconds'] = (
        (last.date_time() - first.date_time()).total_seconds() if first is not None else None
    )
    result['notes'] = notes
    result['extracted_ips'] = extract_ips_from_received(received)

    return result
