"""Abstract base class for alert players."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class AbstractAlertPlayer(ABC):
    """Plays the alert cue. Playback is best effort and never raises."""

    name = "abstract"

    @abstractmethod
    def play(self) -> bool:
        """Play the alert cue.

        Returns:
            True if playback was started (or completed, for blocking players)
        """
        pass

    def initialize(self) -> bool:
        """Prepare player resources and check the configuration.

        Returns:
            True if the player looks usable, False otherwise
        """
        return True

    def cleanup(self) -> None:
        """Release player resources."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description for the start-up banner."""
        pass
