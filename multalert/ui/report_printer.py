"""Console output: start-up banner and one line per contact report."""

import logging
from datetime import datetime
from typing import Optional
from pubsub import pub
from rich.console import Console

from ..models.audio import ToneSettings
from ..models.contact import ContactReport
from ..parsing.classifier import format_report
from ..services.contact_service import REPORT_TOPIC

logger = logging.getLogger(__name__)


TRIGGER_DESCRIPTION = "mult1/mult2/mult3 non-empty AND newqso=true"


class ReportPrinter:
    """Prints every contact report as it arrives."""

    def __init__(self, topic: str = REPORT_TOPIC, console: Optional[Console] = None):
        self.topic = topic
        self.console = console or Console(highlight=False, soft_wrap=True, emoji=False)
        self.lines_printed = 0

        pub.subscribe(self._on_report, topic)
        logger.info(f"ReportPrinter initialized - subscribed to {topic}")

    def _on_report(self, report: ContactReport) -> None:
        line = format_report(report, datetime.now())
        self.console.print(
            line,
            markup=False,
            emoji=False,
            soft_wrap=True,
            style="bold yellow" if report.triggered else None,
        )
        self.lines_printed += 1

    def print_banner(self, port: int, sound: str, tone: Optional[ToneSettings] = None) -> None:
        """Print the start-up banner."""
        self.console.print("=== DXLog Multiplier Listener ===", style="bold")
        self.console.print(f"Port      : UDP {port}", markup=False)
        self.console.print(f"Trigger   : {TRIGGER_DESCRIPTION}", markup=False)
        self.console.print(f"Sound     : {sound}", markup=False, emoji=False, soft_wrap=True)
        if tone is not None:
            self.console.print(
                f"Tone      : {tone.frequency_hz:g} Hz, {tone.duration_ms} ms, "
                f"volume {tone.volume * 100:.0f}%",
                markup=False,
            )
        self.console.print()

    def shutdown(self) -> None:
        try:
            pub.unsubscribe(self._on_report, self.topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
