"""Alert playback module."""

from .base import AbstractAlertPlayer
from .file_player import FilePlaybackPlayer
from .external_tone import ExternalTonePlayer
from .device_tone import DeviceTonePlayer
from .factory import ALERT_MODES, create_alert_player
from .tone import synthesize_tone, tone_to_pcm

__all__ = [
    "AbstractAlertPlayer",
    "FilePlaybackPlayer",
    "ExternalTonePlayer",
    "DeviceTonePlayer",
    "ALERT_MODES",
    "create_alert_player",
    "synthesize_tone",
    "tone_to_pcm",
]
