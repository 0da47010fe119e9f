"""Square-wave tone that sounds while the sound timer is running."""

from __future__ import annotations

from array import array
from typing import Optional

from pychip8.utils import debug_enabled, debug_log

DEFAULT_FREQUENCY = 440.0


def square_wave(sample_rate: int, frequency: float, amplitude: int = 8_000) -> array:
    """One period of a signed 16-bit square wave."""

    if sample_rate <= 0 or frequency <= 0.0:
        raise ValueError("sample rate and frequency must be positive")
    period = max(2, int(round(sample_rate / frequency)))
    half = period // 2
    return array("h", [amplitude] * half + [-amplitude] * (period - half))


class SquareWaveBeeper:
    """Loop a fixed-pitch tone on a pygame mixer channel."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = DEFAULT_FREQUENCY,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._volume = max(0.0, min(1.0, volume))
        self._sound = pygame.mixer.Sound(buffer=square_wave(max(1, sample_rate), frequency).tobytes())
        self._channel: Optional["pygame.mixer.Channel"] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        """Start or stop the tone; repeated calls with the same state are cheap."""

        if active == self._active:
            return
        self._active = active
        if debug_enabled("audio"):
            debug_log("audio", "tone=%s", "on" if active else "off")
        if not active:
            if self._channel is not None:
                self._channel.stop()
            return

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)

    def shutdown(self) -> None:
        """Stop any active tone and release the channel."""

        self.set_active(False)
        self._channel = None


__all__ = ["SquareWaveBeeper", "square_wave", "DEFAULT_FREQUENCY"]
