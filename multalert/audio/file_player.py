"""Play a WAV file through an external player without waiting for it."""

import shutil
import subprocess
import logging
from pathlib import Path
from typing import List, Optional

from .base import AbstractAlertPlayer

logger = logging.getLogger(__name__)


class FilePlaybackPlayer(AbstractAlertPlayer):
    """Fire-and-forget file playback, e.g. ``aplay -q handbell.wav``."""

    name = "file"

    def __init__(self, file_path: str, command: str = "aplay"):
        """Initialize file player.

        Args:
            file_path: Audio file to play
            command: Player executable, called as ``<command> -q <file>``
        """
        self.file_path = str(file_path)
        self.command = command
        self.last_process: Optional[subprocess.Popen] = None

    def build_command(self) -> List[str]:
        return [self.command, "-q", self.file_path]

    def initialize(self) -> bool:
        ok = True
        if not Path(self.file_path).is_file():
            logger.warning(f"Alert sound file not found: {self.file_path}")
            ok = False
        if shutil.which(self.command) is None:
            logger.warning(f"Audio player not found on PATH: {self.command}")
            ok = False
        return ok

    def play(self) -> bool:
        # Reap the previous player if it has finished
        if self.last_process is not None:
            self.last_process.poll()

        try:
            self.last_process = subprocess.Popen(
                self.build_command(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Could not launch {self.command}: {e}")
            return False

        logger.debug(f"Started {self.command} (pid {self.last_process.pid}) for {self.file_path}")
        return True

    def describe(self) -> str:
        return f"WAV file via {self.command} ({self.file_path})"
