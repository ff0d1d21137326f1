"""Select the configured alert player."""

import logging

from ..config import ALERT_MODES, MultAlertConfig
from ..models.audio import ToneSettings
from .base import AbstractAlertPlayer
from .file_player import FilePlaybackPlayer
from .external_tone import ExternalTonePlayer
from .device_tone import DeviceTonePlayer

logger = logging.getLogger(__name__)


def tone_settings_from_config(config: MultAlertConfig) -> ToneSettings:
    return ToneSettings(
        frequency_hz=float(config.get('alert.tone.frequency_hz')),
        duration_ms=int(config.get('alert.tone.duration_ms')),
        volume=float(config.get('alert.tone.volume')),
        sample_rate=int(config.get('alert.tone.sample_rate')),
        fade_ms=int(config.get('alert.tone.fade_ms')),
    )


def create_alert_player(config: MultAlertConfig) -> AbstractAlertPlayer:
    """Create the one alert player selected by ``alert.mode``."""
    mode = config.get('alert.mode')
    player_command = config.get('alert.player_command', 'aplay')

    if mode == "file":
        player = FilePlaybackPlayer(
            config.get('alert.file_path'),
            command=player_command,
        )
    elif mode == "tone":
        player = ExternalTonePlayer(tone_settings_from_config(config), command=player_command)
    elif mode == "device":
        player = DeviceTonePlayer(tone_settings_from_config(config), device=config.get('alert.device'))
    else:
        raise ValueError(f"Unknown alert mode '{mode}', expected one of {', '.join(ALERT_MODES)}")

    logger.info(f"Alert player: {player.describe()}")
    return player
