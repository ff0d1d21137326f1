"""Listener statistics models."""

from dataclasses import dataclass


@dataclass
class ListenerStats:
    """Listener counters since start-up."""
    is_listening: bool
    uptime_seconds: float
    datagrams_received: int
    receive_errors: int
    callback_errors: int
