"""Datagram classification: envelope pre-filter, trigger predicate, report line."""

import re
from datetime import datetime
from typing import Dict, Optional

from ..models.contact import ContactField, ContactReport, MULTIPLIER_FIELDS
from ..models.datagram import Datagram
from .extractor import extract_fields

ENVELOPE_TAG = b"<contactinfo>"
_ENVELOPE_PATTERN = re.compile(re.escape(ENVELOPE_TAG), re.IGNORECASE)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
ALERT_MARKER = "  *** MULT → SOUND ***"


def has_envelope(payload: bytes) -> bool:
    """Return True if the payload contains <contactinfo> in any letter case.

    A matching </contactinfo> is not required.
    """
    return _ENVELOPE_PATTERN.search(payload) is not None


def decode_payload(payload: bytes) -> str:
    """Decode datagram bytes one character per byte so decoding cannot fail."""
    return payload.decode("latin-1")


def is_trigger(fields: Dict[ContactField, Optional[str]]) -> bool:
    """A multiplier is non-empty and newqso is "true" (any case)."""
    has_mult = any(fields.get(field) for field in MULTIPLIER_FIELDS)
    newqso = fields.get(ContactField.NEWQSO)
    is_new = newqso is not None and newqso.lower() == "true"
    return has_mult and is_new


def classify(datagram: Datagram) -> Optional[ContactReport]:
    """Classify a datagram.

    Returns:
        ContactReport for datagrams inside a <contactinfo> envelope, None for
        anything else
    """
    if not has_envelope(datagram.payload):
        return None

    text = decode_payload(datagram.payload)
    fields = extract_fields(text)
    return ContactReport.from_fields(datagram.sender, fields, is_trigger(fields))


def format_report(report: ContactReport, timestamp: Optional[datetime] = None) -> str:
    """Format a report as one human-readable console line."""
    if timestamp is None:
        timestamp = datetime.now()

    show = report.display_value
    line = (
        f"[{timestamp.strftime(TIMESTAMP_FORMAT)}] "
        f"PKT from {report.sender_host:<15} "
        f"call={show(ContactField.CALL):<8} "
        f"band={show(ContactField.BAND):<3} "
        f"mode={show(ContactField.MODE):<3} "
        f"mult1={show(ContactField.MULT1):<2}  "
        f"mult2={show(ContactField.MULT2):<2}  "
        f"mult3={show(ContactField.MULT3):<2} "
        f"newqso={show(ContactField.NEWQSO):<5} "
        f"xqso={show(ContactField.XQSO):<5}"
    )
    if report.triggered:
        line += ALERT_MARKER
    return line
