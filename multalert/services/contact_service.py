"""Contact service: classifies datagrams and publishes contact reports."""

import logging
from pubsub import pub

from ..models.datagram import Datagram
from ..parsing.classifier import classify

logger = logging.getLogger(__name__)


REPORT_TOPIC = "contact.report"


class ContactService:
    """Turns received datagrams into ContactReport events."""

    def __init__(self, topic: str = REPORT_TOPIC):
        """Initialize contact service.

        Args:
            topic: Pub/sub topic name for contact reports
        """
        self.topic = topic
        self.reports_published = 0
        self.datagrams_skipped = 0
        self.processing_errors = 0
        logger.info(f"ContactService initialized with topic: {topic}")

    def on_datagram(self, datagram: Datagram) -> None:
        """Classify one datagram and publish its report.

        Datagrams without a <contactinfo> envelope are dropped silently.
        Errors are logged and the datagram is abandoned.
        """
        try:
            report = classify(datagram)
            if report is None:
                self.datagrams_skipped += 1
                return

            logger.debug(f"Contact report from {datagram.sender[0]}: {report}")
            pub.sendMessage(self.topic, report=report)
            self.reports_published += 1
        except MemoryError:
            self.processing_errors += 1
            logger.error(f"Out of memory processing datagram from {datagram.sender[0]}")
        except Exception as e:
            self.processing_errors += 1
            logger.error(f"Error processing datagram from {datagram.sender[0]}: {e}")
