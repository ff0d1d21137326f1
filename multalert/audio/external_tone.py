"""Synthesise the alert tone and stream it to an external player."""

import shutil
import subprocess
import logging
from typing import List, Optional

from ..models.audio import ToneSettings
from .base import AbstractAlertPlayer
from .tone import synthesize_tone, tone_to_pcm

logger = logging.getLogger(__name__)


class ExternalTonePlayer(AbstractAlertPlayer):
    """Pipes raw PCM to ``aplay`` on stdin and waits for it to finish."""

    name = "tone"

    def __init__(self, settings: ToneSettings, command: str = "aplay",
                 timeout: Optional[float] = None):
        """Initialize external tone player.

        Args:
            settings: Tone parameters
            command: Player executable accepting aplay's raw-PCM options
            timeout: Seconds to wait for the player before giving up.
                Defaults to the tone duration plus five seconds.
        """
        self.settings = settings
        self.command = command
        if timeout is None:
            timeout = settings.duration_ms / 1000.0 + 5.0
        self.timeout = timeout
        self._pcm: Optional[bytes] = None

    def build_command(self) -> List[str]:
        return [
            self.command, "-q",
            "-t", "raw",
            "-f", "S16_LE",
            "-r", str(self.settings.sample_rate),
            "-c", "1",
        ]

    def initialize(self) -> bool:
        if shutil.which(self.command) is None:
            logger.warning(f"Audio player not found on PATH: {self.command}")
            return False
        return True

    def _get_pcm(self) -> bytes:
        if self._pcm is None:
            self._pcm = tone_to_pcm(synthesize_tone(self.settings))
        return self._pcm

    def play(self) -> bool:
        try:
            pcm = self._get_pcm()
        except MemoryError:
            logger.error("Out of memory while synthesising alert tone")
            return False

        try:
            completed = subprocess.run(
                self.build_command(),
                input=pcm,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.command} did not finish within {self.timeout:.1f}s")
            return False
        except OSError as e:
            logger.warning(f"Could not run {self.command}: {e}")
            return False

        if completed.returncode != 0:
            logger.warning(f"{self.command} exited with status {completed.returncode}")
            return False
        return True

    def describe(self) -> str:
        return f"synthesised tone via {self.command} (no file needed)"
