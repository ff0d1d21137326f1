"""Audio-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToneSettings:
    """Parameters of the synthesised alert tone."""
    frequency_hz: float = 880.0
    duration_ms: int = 400
    volume: float = 0.6       # 0.0 - 1.0
    sample_rate: int = 44100
    fade_ms: int = 20         # Linear fade at each end, avoids clicks

    def __post_init__(self):
        if self.frequency_hz <= 0:
            raise ValueError(f"Tone frequency must be positive: {self.frequency_hz}")
        if self.duration_ms <= 0:
            raise ValueError(f"Tone duration must be positive: {self.duration_ms}")
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"Tone volume must be between 0.0 and 1.0: {self.volume}")
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive: {self.sample_rate}")
        if self.fade_ms < 0:
            raise ValueError(f"Fade length cannot be negative: {self.fade_ms}")

    @property
    def num_samples(self) -> int:
        return (self.sample_rate * self.duration_ms) // 1000

    @property
    def fade_samples(self) -> int:
        return (self.sample_rate * self.fade_ms) // 1000
