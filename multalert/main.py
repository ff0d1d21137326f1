"""Main application entry point for multalert."""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from multalert.audio.factory import create_alert_player, tone_settings_from_config
from multalert.network.listener import DatagramListener, ListenerError
from multalert.services.alert_service import AlertService
from multalert.services.contact_service import ContactService
from multalert.ui.report_printer import ReportPrinter

from .config import ALERT_MODES, MultAlertConfig

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


class Server:

    def __init__(self, config_path: Optional[str] = None, port: Optional[int] = None,
                 sound: Optional[str] = None, log_level: Optional[str] = None):
        # Load configuration
        self.config = MultAlertConfig(config_path)
        # Command line overrides config
        if port is not None:
            self.config.set('listener.port', port)
        if sound is not None:
            self.config.set('alert.mode', sound)
        self.config.validate()

        setup_logging(self.config, log_level or self.config.get('logging.level', 'INFO'))
        self.listener: Optional[DatagramListener] = None
        self.printer: Optional[ReportPrinter] = None
        self.alert_service: Optional[AlertService] = None
        self.contact_service: Optional[ContactService] = None

    def init(self):
        # Initialize services
        logger.info("Initializing services...")

        host = self.config.get('listener.host', '0.0.0.0')
        port = self.config.get('listener.port')
        buffer_size = self.config.get('listener.buffer_size', 65536)

        player = create_alert_player(self.config)
        player.initialize()

        # Printer subscribes first so the report line appears before the alert plays
        self.printer = ReportPrinter()
        self.alert_service = AlertService(player)
        self.contact_service = ContactService()

        tone = None
        if self.config.get('alert.mode') != 'file':
            tone = tone_settings_from_config(self.config)
        self.printer.print_banner(port, player.describe(), tone)

        self.listener = DatagramListener(
            callback=self.contact_service.on_datagram,
            host=host,
            port=port,
            buffer_size=buffer_size,
        )
        self.listener.open()
        self.printer.console.print(f"Listening on {host}:{self.listener.address[1]} …\n", markup=False)

    def run(self):
        try:
            self.listener.serve_forever()
        finally:
            self.cleanup()

    def cleanup(self):
        if self.listener:
            stats = self.listener.get_stats()
            logger.info(f"Listener stats: {stats}")
            self.listener.close()
            self.listener = None
        if self.alert_service:
            self.alert_service.shutdown()
            self.alert_service = None
        if self.printer:
            self.printer.shutdown()
            self.printer = None


FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
CONSOLE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _make_handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(config: MultAlertConfig, level: str = "INFO") -> None:
    """Send everything to the log file and only warnings to the console.

    Report lines already go to stdout through the printer, so the console
    handler stays at WARNING whatever ``level`` is.
    """
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    log_file = Path(config.get_log_file_path())
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handlers = [_make_handler(logging.FileHandler(log_file), logging.DEBUG, FILE_LOG_FORMAT)]
    if config.get('logging.console_output', True):
        handlers.append(_make_handler(logging.StreamHandler(sys.stdout), logging.WARNING, CONSOLE_LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(root_level)
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info(f"multalert {VERSION} logging to {log_file} at {level.upper()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="multalert - audible alert for new multipliers in DXLog UDP broadcasts",
        epilog="Press Ctrl+C to stop listening"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="UDP port to listen on (overrides config)"
    )

    parser.add_argument(
        "--sound",
        type=str,
        choices=list(ALERT_MODES),
        help="Alert sound: file=WAV via aplay, tone=synthesised via aplay, device=synthesised via audio device"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"multalert v{VERSION}"
    )

    return parser


def main(argv=None) -> None:
    """Main entry point for multalert."""
    args = build_parser().parse_args(argv)

    server = None
    try:
        server = Server(args.config, port=args.port, sound=args.sound, log_level=args.log_level)
        server.init()
    except ListenerError as e:
        print(f"❌ {e}", file=sys.stderr)
        logging.error(f"Startup failed: {e}")
        server.cleanup()
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        logging.error(f"Application error: {e}")
        if server is not None:
            server.cleanup()
        sys.exit(1)

    try:
        server.run()
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    sys.exit(0)


if __name__ == "__main__":
    main()
