"""Alert service that plays the alert cue for triggering contacts."""

import logging
from pubsub import pub

from ..audio.base import AbstractAlertPlayer
from ..models.contact import ContactReport
from .contact_service import REPORT_TOPIC

logger = logging.getLogger(__name__)


class AlertService:
    """Subscribes to contact reports and plays the alert for triggered ones."""

    def __init__(self, player: AbstractAlertPlayer, topic: str = REPORT_TOPIC):
        """Initialize alert service.

        Args:
            player: The active alert player
            topic: Topic for contact reports
        """
        self.player = player
        self.topic = topic
        self.alerts_played = 0
        self.alerts_failed = 0

        pub.subscribe(self._on_report, topic)
        logger.info(f"AlertService initialized - subscribed to {topic}")

    def _on_report(self, report: ContactReport) -> None:
        """Handle contact report."""
        if not report.triggered:
            return

        logger.info(f"Multiplier contact {report.call or '-'} from {report.sender_host}, playing alert")
        try:
            played = self.player.play()
        except Exception as e:
            logger.warning(f"Alert playback raised: {e}")
            played = False

        if played:
            self.alerts_played += 1
        else:
            self.alerts_failed += 1

    def shutdown(self) -> None:
        """Unsubscribe and release the player."""
        try:
            pub.unsubscribe(self._on_report, self.topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")

        self.player.cleanup()
        logger.info(f"AlertService shutdown complete: played={self.alerts_played}, failed={self.alerts_failed}")
