"""Synthesise the alert tone and write it straight to an audio device."""

import pyaudio
import logging
from typing import Optional, Union

from ..models.audio import ToneSettings
from .base import AbstractAlertPlayer
from .tone import synthesize_tone, tone_to_pcm

logger = logging.getLogger(__name__)


DEFAULT_DEVICE = "default"


class DeviceTonePlayer(AbstractAlertPlayer):
    """Blocking tone playback through PyAudio."""

    name = "device"

    def __init__(
        self,
        settings: ToneSettings,
        device: Union[str, int, None] = DEFAULT_DEVICE,
        format: int = pyaudio.paInt16,
    ):
        """Initialize device tone player.

        Args:
            settings: Tone parameters
            device: "default", an output device index, or a substring of the
                device name
            format: Sample format (16-bit signed int)
        """
        self.settings = settings
        self.device = device
        self.format = format
        self._pcm: Optional[bytes] = None

    def _resolve_device_index(self, pyaudio_instance: pyaudio.PyAudio) -> Optional[int]:
        """Map the configured device to a PyAudio output device index.

        Returns:
            Device index, or None for the host default device
        """
        device = self.device
        if device is None or device == DEFAULT_DEVICE:
            return None
        if isinstance(device, int):
            return device
        if str(device).isdigit():
            return int(device)

        wanted = str(device).lower()
        for index in range(pyaudio_instance.get_device_count()):
            info = pyaudio_instance.get_device_info_by_index(index)
            if info.get("maxOutputChannels", 0) > 0 and wanted in str(info.get("name", "")).lower():
                return index
        raise ValueError(f"No audio output device matches '{device}'")

    def _get_pcm(self) -> bytes:
        if self._pcm is None:
            self._pcm = tone_to_pcm(synthesize_tone(self.settings))
        return self._pcm

    def initialize(self) -> bool:
        pyaudio_instance = None
        try:
            pyaudio_instance = pyaudio.PyAudio()
            index = self._resolve_device_index(pyaudio_instance)
            logger.info(f"Alert output device: {'default' if index is None else index}")
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"Audio device check failed: {e}")
            return False
        finally:
            if pyaudio_instance:
                pyaudio_instance.terminate()

    def play(self) -> bool:
        try:
            pcm = self._get_pcm()
        except MemoryError:
            logger.error("Out of memory while synthesising alert tone")
            return False

        pyaudio_instance = None
        stream = None
        try:
            pyaudio_instance = pyaudio.PyAudio()
            stream = pyaudio_instance.open(
                format=self.format,
                channels=1,
                rate=self.settings.sample_rate,
                output=True,
                output_device_index=self._resolve_device_index(pyaudio_instance),
            )
            # Blocks until all frames are queued, stop_stream drains the rest
            stream.write(pcm)
            stream.stop_stream()
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"Audio device playback failed: {e}")
            return False
        finally:
            if stream:
                stream.close()
            if pyaudio_instance:
                pyaudio_instance.terminate()

    def describe(self) -> str:
        return f"synthesised tone via audio device ({self.device})"
