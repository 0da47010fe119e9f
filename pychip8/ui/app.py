"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from pychip8.audio import SquareWaveBeeper
from pychip8.cpu import TIMER_HZ, CycleResult, TimerPacer
from pychip8.io import KEYPAD_LAYOUT, key_for_name
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Presenter, Renderer, palette_by_name

_FRAME_RATE = 60
_CYCLES_PER_FRAME = 10


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    program_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    cycles_per_frame: int = _CYCLES_PER_FRAME
    frame_rate: int = _FRAME_RATE
    timer_hz: float = TIMER_HZ
    palette: str = "mono"
    seed: Optional[int] = None
    mute: bool = False


class SurfacePresenter(Presenter):
    """Blit rendered frames onto a pygame display surface."""

    def __init__(self, pygame, screen, renderer: Renderer, scale: int) -> None:
        self._pygame = pygame
        self._screen = screen
        self._renderer = renderer
        self._scale = scale

    def present(self, buffer: Sequence[int]) -> None:
        frame = self._renderer.render(buffer, scale=self._scale)
        self._screen.blit(frame.to_surface(), (0, 0))
        self._pygame.display.flip()


class Chip8App:
    """Host loop: keyboard events in, cycles and timer ticks, frames and tone out."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._pacer = TimerPacer(config.timer_hz)
        self._keymap = dict(KEYPAD_LAYOUT)
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def initialise_machine(self) -> Machine:
        program_path = self._config.program_path
        if program_path is None:
            raise RuntimeError("a program image is required; pass the path to a ROM")

        machine = create_machine(
            MachineConfig(seed=self._config.seed, trace_sink=self._trace_recorder)
        )
        if not machine.load_program(program_path):
            raise RuntimeError(f"Failed to load program: {machine.last_load_error}")
        self._machine = machine
        return machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = self.initialise_machine()

        if not self._config.mute:
            pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        title = machine.program_image.name if machine.program_image else ""
        pygame.display.set_caption(f"CHIP-8 - {title}" if title else "CHIP-8")

        if not self._config.mute and pygame.mixer.get_init() is not None:
            try:
                self._beeper = SquareWaveBeeper(sample_rate=pygame.mixer.get_init()[0])
            except (RuntimeError, pygame.error) as exc:
                self._beeper = None
                if debug_enabled("audio"):
                    debug_log("audio", "beeper_init_failed=%s", exc)

        scale = self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale), flags)
        renderer = Renderer(palette_by_name(self._config.palette))
        presenter: Presenter = SurfacePresenter(pygame, screen, renderer, scale)
        presenter.present(machine.display_buffer)

        clock = pygame.time.Clock()
        self._running = True
        last_time = time.perf_counter()
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame.key.name(event.key), pressed=False)

                frame_start = time.perf_counter()
                self.run_frame(machine, presenter)

                now = time.perf_counter()
                self._tick_timers(machine, now - last_time)
                last_time = now
                if self._beeper is not None:
                    self._beeper.set_active(machine.sound_active)

                if self._perf_enabled:
                    debug_log(
                        "perf",
                        "frame=%d cycles=%d frame_ms=%.3f",
                        self._frame_counter,
                        machine.cpu.cycle_count,
                        (time.perf_counter() - frame_start) * 1000.0,
                    )
                clock.tick(self._config.frame_rate)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def run_frame(self, machine: Machine, presenter: Presenter | None = None) -> bool:
        """Execute one frame's worth of cycles; return True if a redraw is due.

        When a presenter is given it receives the display buffer on redraw.
        Raises ``RuntimeError`` carrying the diagnostic on the first fault.
        """

        redraw = False
        for _ in range(self._config.cycles_per_frame):
            result = machine.execute_cycle()
            redraw = redraw or result.redraw
            if not result.ok:
                self._running = False
                self._report_fault(machine, result)
                raise RuntimeError(f"{result.fault_kind.name.lower()}: {result.fault}")
        if redraw and presenter is not None:
            presenter.present(machine.display_buffer)
        return redraw

    def _tick_timers(self, machine: Machine, elapsed: float) -> int:
        ticks = self._pacer.advance(elapsed)
        for _ in range(ticks):
            if machine.tick_timers() and debug_enabled("audio"):
                debug_log("audio", "sound ended frame=%d", self._frame_counter)
        return ticks

    def _handle_key_event(self, name: str, *, pressed: bool) -> bool:
        if self._machine is None:
            return False
        key = key_for_name(name, self._keymap)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, key, pressed)
        if key is None:
            return False
        if pressed:
            self._machine.press(key)
        else:
            self._machine.release(key)
        return True

    def _report_fault(self, machine: Machine, result: CycleResult) -> None:
        state = machine.cpu.state
        registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
        debug_log("cpu", "fault at pc=%03X: %s", result.pc, result.fault)
        debug_log("cpu", "I=%03X SP=%d %s", state.i, state.stack_depth, registers)
        if self._trace_recorder is not None:
            self._trace_recorder.dump("trace", limit=32)
