"""UDP datagram listener."""

import socket
import logging
from threading import Event
from datetime import datetime
from typing import Callable, Optional

from ..models.datagram import Datagram
from ..models.stats import ListenerStats

logger = logging.getLogger(__name__)


class ListenerError(RuntimeError):
    """The listening socket could not be created or bound."""


class DatagramListener:
    """Receives UDP datagrams on one port and hands each to a callback.

    Datagrams are processed one at a time in the order the kernel delivers
    them. Anything arriving while the callback runs waits in the socket
    receive buffer and may be dropped by the kernel once that is full.
    """

    def __init__(
        self,
        callback: Callable[[Datagram], None],
        host: str = "0.0.0.0",
        port: int = 12060,
        buffer_size: int = 65536,
        poll_interval: float = 0.5,
    ):
        """Initialize listener.

        Args:
            callback: Called with every received Datagram
            host: Interface address to bind
            port: UDP port to bind (0 picks a free port)
            buffer_size: Receive buffer size; one byte is reserved, so the
                largest accepted payload is buffer_size - 1 bytes
            poll_interval: Seconds between checks of the stop flag while idle
        """
        self.callback = callback
        self.host = host
        self.port = port
        self.buffer_size = buffer_size
        self.poll_interval = poll_interval

        self.sock: Optional[socket.socket] = None
        self.stop_event = Event()
        self.is_listening = False

        # Statistics tracking
        self.start_time: Optional[datetime] = None
        self.datagrams_received = 0
        self.receive_errors = 0
        self.callback_errors = 0

    @property
    def address(self):
        """Bound (host, port), or None before open()."""
        if self.sock is None:
            return None
        return self.sock.getsockname()

    def open(self) -> None:
        """Create and bind the UDP socket.

        Raises:
            ListenerError: If the socket cannot be created or bound
        """
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise ListenerError(f"Cannot create UDP socket: {e}") from e

        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
        except OSError as e:
            sock.close()
            raise ListenerError(f"Cannot bind UDP {self.host}:{self.port}: {e}") from e

        sock.settimeout(self.poll_interval)
        self.sock = sock
        logger.info(f"Listening on {self.host}:{self.address[1]}")

    def receive(self) -> Optional[Datagram]:
        """Wait for one datagram.

        Returns:
            The datagram, or None if the poll interval passed without one
        """
        try:
            data, sender = self.sock.recvfrom(self.buffer_size - 1)
        except socket.timeout:
            return None

        self.datagrams_received += 1
        return Datagram(payload=data, sender=(sender[0], sender[1]))

    def serve_forever(self) -> None:
        """Receive datagrams until stop() is called."""
        if self.sock is None:
            self.open()

        self.stop_event.clear()
        self.start_time = datetime.now()
        self.is_listening = True
        try:
            while not self.stop_event.is_set():
                try:
                    datagram = self.receive()
                except OSError as e:
                    if self.stop_event.is_set():
                        break
                    self.receive_errors += 1
                    logger.error(f"recvfrom failed: {e}")
                    continue

                if datagram is None:
                    continue

                try:
                    self.callback(datagram)
                except Exception as e:
                    self.callback_errors += 1
                    logger.error(f"Error processing datagram from {datagram.sender[0]}: {e}")
        finally:
            self.is_listening = False
            logger.info(f"Listener stopped. Datagrams received: {self.datagrams_received}")

    def stop(self) -> None:
        """Ask serve_forever() to return after the current datagram."""
        self.stop_event.set()

    def close(self) -> None:
        """Stop listening and release the socket."""
        self.stop()
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def get_stats(self) -> ListenerStats:
        """Get current listener statistics."""
        uptime = 0.0
        if self.start_time:
            uptime = (datetime.now() - self.start_time).total_seconds()

        return ListenerStats(
            is_listening=self.is_listening,
            uptime_seconds=uptime,
            datagrams_received=self.datagrams_received,
            receive_errors=self.receive_errors,
            callback_errors=self.callback_errors,
        )
