"""CHIP-8 machine assembly and host-facing lifecycle operations."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from pychip8.bus import CallStack, Memory, STACK_DEPTH
from pychip8.cpu import Chip8CPU, CycleResult, CycleStatus, Timers
from pychip8.cpu.timers import SoundEndCallback
from pychip8.errors import ProgramLoadError
from pychip8.io import Keypad
from pychip8.loader import ProgramImage, ProgramSource, load_program_source
from pychip8.utils import TraceSink, debug_enabled, debug_log
from pychip8.video import FONT_DATA, FONT_START, Display


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program: Optional[ProgramSource] = None
    seed: Optional[int] = None
    trace_sink: Optional[TraceSink] = None
    stack_depth: int = STACK_DEPTH
    on_sound_end: Optional[SoundEndCallback] = None


@dataclass
class Machine:
    """Aggregates the CHIP-8 components behind the host lifecycle API."""

    memory: Memory
    cpu: Chip8CPU
    display: Display
    keypad: Keypad
    timers: Timers
    program_image: ProgramImage | None = None
    last_load_error: ProgramLoadError | None = field(default=None, repr=False)

    @property
    def stack(self) -> CallStack:
        return self.cpu.state.stack

    @property
    def display_buffer(self) -> memoryview:
        return self.display.buffer

    @property
    def program_loaded(self) -> bool:
        return self.program_image is not None

    def load_program(self, source: ProgramSource) -> bool:
        """Copy a program to 0x200 and reset the CPU; False if it cannot be loaded."""

        try:
            image = load_program_source(source)
        except ProgramLoadError as exc:
            self.last_load_error = exc
            if debug_enabled("loader"):
                debug_log("loader", "load_failed: %s", exc)
            return False

        self.memory.clear()
        self.memory.write_block(image.start, image.data)
        self.cpu.reset()
        self.timers.reset()
        self.display.clear()
        self.cpu.state.pc = image.start
        self.program_image = image
        self.last_load_error = None
        return True

    def execute_cycle(self) -> CycleResult:
        if self.program_image is None:
            error = self.last_load_error or ProgramLoadError("no program loaded")
            return CycleResult(CycleStatus.FAULTED, self.cpu.state.pc, fault=error)
        return self.cpu.execute_cycle()

    def tick_timers(self) -> bool:
        """Advance both timers by one 60 Hz step; True when the sound just ended."""

        return self.timers.tick()

    def press(self, key: int) -> None:
        self.keypad.press(key)

    def release(self, key: int) -> None:
        self.keypad.release(key)

    def consume_sound_ended(self) -> bool:
        return self.timers.consume_sound_ended()

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a machine with the font installed and, optionally, a program."""

    config = config or MachineConfig()

    memory = Memory()
    memory.install_reserved(FONT_START, FONT_DATA)

    display = Display()
    keypad = Keypad()
    timers = Timers(on_sound_end=config.on_sound_end)
    cpu = Chip8CPU(
        memory,
        display,
        keypad,
        timers,
        rng=random.Random(config.seed),
        trace_sink=config.trace_sink,
        stack_depth=config.stack_depth,
    )

    machine = Machine(memory=memory, cpu=cpu, display=display, keypad=keypad, timers=timers)
    if config.program is not None and not machine.load_program(config.program):
        raise machine.last_load_error or ProgramLoadError("program could not be loaded")
    return machine
