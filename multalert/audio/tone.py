"""Alert tone synthesis."""

import numpy as np

from ..models.audio import ToneSettings


FULL_SCALE = 32767.0


def fade_envelope(num_samples: int, fade_samples: int) -> np.ndarray:
    """Linear 0->1 ramp over the first fade window and 1->0 over the last.

    When the windows overlap the fade-in takes precedence.
    """
    envelope = np.ones(num_samples, dtype=np.float64)
    if fade_samples <= 0 or num_samples == 0:
        return envelope

    index = np.arange(num_samples, dtype=np.float64)
    fade_out = index > num_samples - fade_samples
    envelope[fade_out] = (num_samples - index[fade_out]) / fade_samples
    fade_in = index < fade_samples
    envelope[fade_in] = index[fade_in] / fade_samples
    return envelope


def synthesize_tone(settings: ToneSettings) -> np.ndarray:
    """Generate a mono 16-bit sine tone with faded edges.

    Args:
        settings: Tone frequency, duration, volume, sample rate and fade length

    Returns:
        int16 samples
    """
    num_samples = settings.num_samples
    t = np.arange(num_samples, dtype=np.float64) / settings.sample_rate
    envelope = fade_envelope(num_samples, settings.fade_samples)

    wave_data = settings.volume * envelope * np.sin(2.0 * np.pi * settings.frequency_hz * t)
    # astype truncates toward zero
    return (wave_data * FULL_SCALE).astype(np.int16)


def tone_to_pcm(samples: np.ndarray) -> bytes:
    """Raw signed 16-bit little-endian PCM bytes."""
    return samples.astype("<i2").tobytes()
