"""Read a raw header block and wrap each Received header as a ReceivedField.
Only the trace headers are modelled; the few other headers are passed through as text.
"""
import re
from email import policy
from email.parser import Parser

from .field import ReceivedField, unfold


def parse_email_header(header_text: str) -> dict:
    """Return a dict of important header fields and the Received fields in header order."""
    # compat32 keeps raw values; the default policy would re-parse them
    msg = Parser(policy=policy.compat32).parsestr(header_text, headersonly=True)

    parsed = {
        'From': msg.get('From'),
        'To': msg.get('To'),
        'Subject': msg.get('Subject'),
        'Date': msg.get('Date'),
        'Message-ID': msg.get('Message-ID'),
        'Received': [ReceivedField(unfold(str(v))) for v in msg.get_all('Received', []) or []]
    }

    return parsed


def extract_ips_from_received(received_fields):
    """Extract IPv4 addresses from Received fields (returns unique list)."""
    ips = []
    pattern = re.compile(r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b")
    for field in received_fields:
        # unstructured values have no info; search the whole value then
        found = pattern.findall(field.info() or field.value())
        for ip in found:
            if ip not in ips:
                ips.append(ip)
    return ips
