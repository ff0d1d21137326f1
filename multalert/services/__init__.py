"""Services layer for multalert application logic."""

from .contact_service import ContactService, REPORT_TOPIC
from .alert_service import AlertService

__all__ = [
    "ContactService",
    "AlertService",
    "REPORT_TOPIC",
]
