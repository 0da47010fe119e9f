"""Delay and sound countdown registers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.utils import debug_enabled, debug_log

TIMER_HZ = 60

SoundEndCallback = Callable[[], None]


@dataclass
class Timers:
    """Two 8-bit counters decremented by an external 60 Hz driver."""

    delay: int = 0
    sound: int = 0
    on_sound_end: Optional[SoundEndCallback] = None
    _sound_ended: bool = field(default=False, repr=False)

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def tick(self) -> bool:
        """Decrement both counters; return True when the sound timer reaches zero."""

        if self.delay > 0:
            self.delay -= 1

        if self.sound == 0:
            return False
        self.sound -= 1
        if self.sound != 0:
            return False

        self._sound_ended = True
        if debug_enabled("timer"):
            debug_log("timer", "sound timer reached 0")
        if self.on_sound_end is not None:
            self.on_sound_end()
        return True

    def consume_sound_ended(self) -> bool:
        """Report and clear the latched sound-ended event."""

        ended = self._sound_ended
        self._sound_ended = False
        return ended

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
        self._sound_ended = False


class TimerPacer:
    """Turns elapsed wall time into a whole number of timer ticks.

    The fractional remainder is carried so the long-run rate stays at ``rate``
    regardless of how unevenly the host loop calls :meth:`advance`.
    """

    def __init__(self, rate: float = TIMER_HZ, *, max_ticks: int = 8) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        self._rate = rate
        self._max_ticks = max_ticks
        self._pending = 0.0

    @property
    def rate(self) -> float:
        return self._rate

    def advance(self, elapsed: float) -> int:
        if elapsed < 0:
            raise ValueError("elapsed time must not be negative")
        self._pending += elapsed * self._rate
        ticks = int(self._pending)
        self._pending -= ticks
        if ticks > self._max_ticks:
            # Host stalled (debugger, window drag); drop the backlog.
            ticks = self._max_ticks
            self._pending = 0.0
        return ticks

    def reset(self) -> None:
        self._pending = 0.0
