"""Pytest configuration and fixtures for multalert tests."""

import pytest
import tempfile
import logging
from pathlib import Path
from unittest.mock import Mock, patch

import yaml
from pubsub import pub

from multalert.models import Datagram, ToneSettings


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SENDER = ("192.168.1.20", 50123)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line("markers", "integration: tests using real sockets")
    config.addinivalue_line("markers", "hardware: tests needing real audio hardware")


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop pub/sub listeners left over from a test."""
    yield
    pub.unsubAll()


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def contact_payload():
    """Build a DXLog-style contact datagram payload."""
    def build(envelope: bool = True, **fields) -> bytes:
        inner = "".join(f"<{tag}>{value}</{tag}>" for tag, value in fields.items())
        if envelope:
            inner = f"<contactinfo>{inner}</contactinfo>"
        return f'<?xml version="1.0" encoding="utf-8"?>\n{inner}'.encode("latin-1")

    return build


@pytest.fixture
def make_datagram():
    """Wrap payload bytes in a Datagram from a fixed sender."""
    def build(payload: bytes, sender=SENDER) -> Datagram:
        return Datagram(payload=payload, sender=sender)

    return build


@pytest.fixture
def short_tone():
    """A short tone that keeps synthesis tests fast."""
    return ToneSettings(frequency_hz=1000, duration_ms=100, volume=0.5, sample_rate=8000, fade_ms=20)


@pytest.fixture
def mock_pyaudio():
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()

        # Configure mock stream
        mock_stream.write.return_value = None
        mock_stream.stop_stream.return_value = None
        mock_stream.close.return_value = None

        # Configure mock PyAudio instance
        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_instance.terminate.return_value = None
        mock_pyaudio_instance.get_device_count.return_value = 2
        mock_pyaudio_instance.get_device_info_by_index.side_effect = lambda index: [
            {"index": 0, "name": "bcm2835 Headphones", "maxOutputChannels": 8},
            {"index": 1, "name": "USB Audio Device", "maxOutputChannels": 2},
        ][index]

        # Configure mock PyAudio class
        mock_pyaudio_class.return_value = mock_pyaudio_instance

        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


@pytest.fixture
def write_config(temp_data_dir):
    """Write a YAML config file into the temp directory and return its path."""
    def write(data: dict, name: str = "multalert.yaml") -> str:
        path = Path(temp_data_dir) / name
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f)
        return str(path)

    return write
