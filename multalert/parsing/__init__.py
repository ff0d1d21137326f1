"""Datagram parsing: field extraction and classification."""

from .extractor import extract_field, extract_fields
from .classifier import classify, format_report, has_envelope, is_trigger

__all__ = [
    "extract_field",
    "extract_fields",
    "classify",
    "format_report",
    "has_envelope",
    "is_trigger",
]
