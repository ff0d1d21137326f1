"""Datagram models for the UDP listener."""

from dataclasses import dataclass, field
from typing import Tuple
import time


MAX_DATAGRAM_SIZE = 65535


@dataclass(frozen=True)
class Datagram:
    """A received UDP payload and its sender."""
    payload: bytes
    sender: Tuple[str, int]
    received_at: float = field(default_factory=time.time, compare=False)

    def __post_init__(self):
        if len(self.payload) > MAX_DATAGRAM_SIZE:
            raise ValueError(
                f"Datagram payload of {len(self.payload)} bytes exceeds {MAX_DATAGRAM_SIZE}"
            )
