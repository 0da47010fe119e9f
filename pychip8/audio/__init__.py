"""Audio output for the CHIP-8 sound timer."""

from .beeper import DEFAULT_FREQUENCY, SquareWaveBeeper, square_wave

__all__ = ["SquareWaveBeeper", "square_wave", "DEFAULT_FREQUENCY"]
