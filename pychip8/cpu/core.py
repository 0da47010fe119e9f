"""CHIP-8 fetch/decode/execute engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto

from pychip8.bus import PROGRAM_START, STACK_DEPTH, CallStack, Memory
from pychip8.errors import Chip8Error, FaultKind, MemoryAccessError, UnknownInstructionError
from pychip8.io import Keypad
from pychip8.utils import TraceSink, debug_enabled, debug_log
from pychip8.video import GLYPH_BYTES, Display

from .opcodes import OPCODE_TABLE, DecodedInstruction, OpcodeTable, decode, disassemble
from .timers import Timers

FLAG = 0xF
INSTRUCTION_BYTES = 2


class CycleStatus(Enum):
    """Outcome of one call to :meth:`Chip8CPU.execute_cycle`."""

    EXECUTED = auto()
    WAITING = auto()
    FAULTED = auto()


@dataclass(frozen=True)
class CycleResult:
    """What happened during a cycle, as seen by the host loop."""

    status: CycleStatus
    pc: int
    word: int | None = None
    redraw: bool = False
    fault: Chip8Error | None = None

    @property
    def ok(self) -> bool:
        return self.status is not CycleStatus.FAULTED

    @property
    def fault_kind(self) -> FaultKind | None:
        return None if self.fault is None else self.fault.kind


@dataclass
class CPUState:
    """Register file, index, program counter and return stack."""

    v: bytearray = field(default_factory=lambda: bytearray(16))
    i: int = 0x000
    pc: int = PROGRAM_START
    stack: CallStack = field(default_factory=CallStack)

    @property
    def stack_depth(self) -> int:
        return len(self.stack)


@dataclass
class Chip8CPU:
    """Interpreter for the 35 CHIP-8 instructions.

    Handlers raise :class:`Chip8Error` subclasses before mutating anything, so a
    faulting instruction leaves registers, memory and the display untouched.
    :meth:`execute_cycle` turns those exceptions into a :class:`CycleResult`;
    once faulted the CPU stays halted until :meth:`reset`.
    """

    memory: Memory
    display: Display
    keypad: Keypad
    timers: Timers
    instruction_table: OpcodeTable = field(default=OPCODE_TABLE)
    rng: random.Random = field(default_factory=random.Random)
    trace_sink: TraceSink | None = None
    stack_depth: int = STACK_DEPTH

    state: CPUState = field(init=False)
    cycle_count: int = 0
    fault: Chip8Error | None = None
    waiting_for_key: bool = False

    def __post_init__(self) -> None:
        self.state = CPUState(stack=CallStack(self.stack_depth))

    @property
    def halted(self) -> bool:
        return self.fault is not None

    def reset(self) -> None:
        """Clear registers and the stack and restart at the program entry point."""

        self.state = CPUState(stack=CallStack(self.stack_depth))
        self.cycle_count = 0
        self.fault = None
        self.waiting_for_key = False

    def execute_cycle(self) -> CycleResult:
        """Run one instruction and report the outcome instead of raising."""

        pc = self.state.pc
        if self.fault is not None:
            return CycleResult(CycleStatus.FAULTED, pc, fault=self.fault)

        word: int | None = None
        try:
            word = self.memory.load16(pc)
            self._execute(pc, word)
        except Chip8Error as exc:
            self.fault = exc
            if debug_enabled("cpu"):
                debug_log("cpu", "fault kind=%s pc=%03X: %s", exc.kind.name, pc, exc)
            return CycleResult(
                CycleStatus.FAULTED,
                pc,
                word,
                redraw=self.display.consume_redraw(),
                fault=exc,
            )

        status = CycleStatus.WAITING if self.waiting_for_key else CycleStatus.EXECUTED
        return CycleResult(status, pc, word, redraw=self.display.consume_redraw())

    def _execute(self, pc: int, word: int) -> None:
        """Decode and run one fetched word; raises :class:`Chip8Error` on any fatal condition."""

        decoded = decode(word)
        instruction = self.instruction_table.lookup(decoded)

        if self.trace_sink is not None:
            self.trace_sink.record(pc, word, disassemble(word, self.instruction_table), self.state)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03X op=%04X %s", pc, word, disassemble(word, self.instruction_table))

        if instruction is None:
            raise UnknownInstructionError(word, pc)

        self.waiting_for_key = False
        getattr(self, instruction.handler)(decoded)
        self.cycle_count += 1

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: DecodedInstruction) -> None:
        self.display.clear()
        self._advance()

    def op_ret(self, _: DecodedInstruction) -> None:
        self.state.pc = self.state.stack.pop()

    def op_jp(self, op: DecodedInstruction) -> None:
        self.state.pc = op.nnn

    def op_call(self, op: DecodedInstruction) -> None:
        self.state.stack.push(self.state.pc + INSTRUCTION_BYTES)
        self.state.pc = op.nnn

    def op_jp_offset(self, op: DecodedInstruction) -> None:
        self.state.pc = op.nnn + self.state.v[0]

    def op_se_byte(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] == op.kk)

    def op_sne_byte(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] != op.kk)

    def op_se_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        self._skip_if(v[op.x] == v[op.y])

    def op_sne_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        self._skip_if(v[op.x] != v[op.y])

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_byte(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = op.kk
        self._advance()

    def op_add_byte(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] = (v[op.x] + op.kk) & 0xFF
        self._advance()

    def op_ld_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] = v[op.y]
        self._advance()

    def op_or(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] |= v[op.y]
        self._advance()

    def op_and(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] &= v[op.y]
        self._advance()

    def op_xor(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] ^= v[op.y]
        self._advance()

    # The flag is written after the result so VF holds the flag when x == F.

    def op_add_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        total = v[op.x] + v[op.y]
        v[op.x] = total & 0xFF
        v[FLAG] = 1 if total > 0xFF else 0
        self._advance()

    def op_sub(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx, vy = v[op.x], v[op.y]
        v[op.x] = (vx - vy) & 0xFF
        v[FLAG] = 1 if vx > vy else 0
        self._advance()

    def op_subn(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx, vy = v[op.x], v[op.y]
        v[op.x] = (vy - vx) & 0xFF
        v[FLAG] = 1 if vy > vx else 0
        self._advance()

    def op_shr(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx = v[op.x]
        v[op.x] = vx >> 1
        v[FLAG] = vx & 0x01
        self._advance()

    def op_shl(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx = v[op.x]
        v[op.x] = (vx << 1) & 0xFF
        v[FLAG] = (vx >> 7) & 0x01
        self._advance()

    def op_rnd(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.rng.randrange(0x100) & op.kk
        self._advance()

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_index(self, op: DecodedInstruction) -> None:
        self.state.i = op.nnn
        self._advance()

    def op_add_index(self, op: DecodedInstruction) -> None:
        self.state.i = self._checked_index(self.state.i + self.state.v[op.x])
        self._advance()

    def op_ld_font(self, op: DecodedInstruction) -> None:
        self.state.i = GLYPH_BYTES * self.state.v[op.x]
        self._advance()

    def op_ld_bcd(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        self.memory.write_block(self.state.i, bytes((value // 100, (value // 10) % 10, value % 10)))
        self._advance()

    def op_store_registers(self, op: DecodedInstruction) -> None:
        count = op.x + 1
        index = self._checked_index(self.state.i + count)
        self.memory.write_block(self.state.i, bytes(self.state.v[:count]))
        self.state.i = index
        self._advance()

    def op_load_registers(self, op: DecodedInstruction) -> None:
        count = op.x + 1
        index = self._checked_index(self.state.i + count)
        self.state.v[:count] = self.memory.read_block(self.state.i, count)
        self.state.i = index
        self._advance()

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, op: DecodedInstruction) -> None:
        v = self.state.v
        sprite = self.memory.read_block(self.state.i, op.n)
        collision = self.display.draw_sprite(v[op.x], v[op.y], sprite)
        v[FLAG] = 1 if collision else 0
        self._advance()

    # ------------------------------------------------------------------
    # Keypad and timers

    def op_skp(self, op: DecodedInstruction) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.v[op.x] & 0xF))

    def op_sknp(self, op: DecodedInstruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.v[op.x] & 0xF))

    def op_wait_key(self, op: DecodedInstruction) -> None:
        key = self.keypad.first_pressed()
        if key is None:
            # PC stays put; the host calls us again next cycle.
            self.waiting_for_key = True
            return
        self.state.v[op.x] = key
        self._advance()

    def op_ld_from_delay(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.timers.delay
        self._advance()

    def op_ld_delay(self, op: DecodedInstruction) -> None:
        self.timers.set_delay(self.state.v[op.x])
        self._advance()

    def op_ld_sound(self, op: DecodedInstruction) -> None:
        self.timers.set_sound(self.state.v[op.x])
        self._advance()

    # ------------------------------------------------------------------
    # Helpers

    def _advance(self, count: int = 1) -> None:
        self.state.pc = (self.state.pc + INSTRUCTION_BYTES * count) & 0xFFFF

    def _skip_if(self, condition: bool) -> None:
        self._advance(2 if condition else 1)

    def _checked_index(self, value: int) -> int:
        """Return ``value`` as the next index register, faulting past the last address."""

        if value >= self.memory.size:
            raise MemoryAccessError(
                f"index register advanced to {value:#05x} past {self.memory.size - 1:#05x}"
            )
        return value
