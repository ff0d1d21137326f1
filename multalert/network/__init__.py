"""UDP networking module."""

from .listener import DatagramListener, ListenerError

__all__ = [
    'DatagramListener',
    'ListenerError'
]
