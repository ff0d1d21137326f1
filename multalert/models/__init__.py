"""Data models for the multalert application."""

from .contact import (
    ContactField,
    ContactReport,
    FIELD_MAX_LENGTHS,
    MULTIPLIER_FIELDS,
    PLACEHOLDER,
)
from .datagram import Datagram, MAX_DATAGRAM_SIZE
from .audio import ToneSettings
from .stats import ListenerStats

__all__ = [
    "ContactField",
    "ContactReport",
    "FIELD_MAX_LENGTHS",
    "MULTIPLIER_FIELDS",
    "PLACEHOLDER",
    "Datagram",
    "MAX_DATAGRAM_SIZE",
    "ToneSettings",
    "ListenerStats",
]
