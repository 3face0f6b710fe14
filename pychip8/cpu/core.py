"""CHIP-8 fetch-decode-execute engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable

from pychip8.bus import PROGRAM_START, Memory, Timers
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import DisplayBuffer, glyph_address

from .opcodes import OPCODE_TABLE, Instruction, OpcodeTable, decode
from .stack import CallStack, StackFault

REGISTER_COUNT = 16
FLAG = 0xF


def default_random_byte() -> int:
    return random.getrandbits(8)


class CPUStatus(Enum):
    RUNNING = auto()
    AWAITING_KEY = auto()


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x0000
    pc: int = PROGRAM_START

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc)


@dataclass
class Chip8CPU:
    """Executes one instruction per :meth:`step` against the machine state."""

    memory: Memory
    display: DisplayBuffer
    keypad: Keypad
    timers: Timers
    random_source: Callable[[], int] = field(default=default_random_byte)
    instruction_table: OpcodeTable = field(default=OPCODE_TABLE)

    state: CPUState = field(default_factory=CPUState)
    stack: CallStack = field(default_factory=CallStack)
    status: CPUStatus = CPUStatus.RUNNING
    wait_register: int = 0
    instruction: Instruction | None = None
    step_count: int = 0

    def reset(self, entry_point: int = PROGRAM_START) -> None:
        """Clear registers and stack and point ``PC`` at ``entry_point``."""

        self.state = CPUState(pc=entry_point)
        self.stack.clear()
        self.status = CPUStatus.RUNNING
        self.wait_register = 0
        self.instruction = None
        self.step_count = 0

    @property
    def awaiting_key(self) -> bool:
        return self.status is CPUStatus.AWAITING_KEY

    def step(self) -> int:
        """Execute a single instruction.

        Returns the number of instructions completed: 0 while spinning on a
        key wait, 1 otherwise. ``StackFault`` leaves ``PC`` on the faulting
        instruction with no other state changed.
        """

        if self.status is CPUStatus.AWAITING_KEY:
            return self._poll_key()

        pc_before = self.state.pc
        opcode = self.memory.load16(pc_before)
        self.state.pc = (pc_before + 2) & 0xFFFF
        instruction = decode(opcode)
        self.instruction = instruction
        operation = self.instruction_table.lookup(instruction)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x opcode=%04x %s", pc_before, opcode, operation.format(instruction))

        handler = getattr(self, operation.handler)
        try:
            handler(instruction)
        except StackFault:
            self.state.pc = pc_before
            raise
        self.step_count += 1
        return 1

    # ------------------------------------------------------------------
    # Control flow

    def op_nop(self, _: Instruction) -> None:
        """Undefined sub-codes execute as no-ops."""

    def op_cls(self, _: Instruction) -> None:
        self.display.clear()

    def op_ret(self, _: Instruction) -> None:
        self.state.pc = self.stack.pop()

    def op_sys(self, instruction: Instruction) -> None:
        """0NNN: the machine-code routine call, treated as a jump."""

        self.state.pc = instruction.nnn

    def op_jp(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_call(self, instruction: Instruction) -> None:
        self.stack.push(self.state.pc)
        self.state.pc = instruction.nnn

    def op_jp_offset(self, instruction: Instruction) -> None:
        self.state.pc = (instruction.nnn + self.state.v[0]) & 0xFFFF

    def op_se_immediate(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] == instruction.nn)

    def op_sne_immediate(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] != instruction.nn)

    def op_se_register(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] == v[instruction.y])

    def op_sne_register(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] != v[instruction.y])

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_ld_immediate(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = instruction.nn

    def op_add_immediate(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = (v[instruction.x] + instruction.nn) & 0xFF

    def op_ld_register(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.y]

    def op_or(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] |= v[instruction.y]

    def op_and(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] &= v[instruction.y]

    def op_xor(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] ^= v[instruction.y]

    # The flag is written before the result in the ops below, so with X=F
    # the result replaces the flag.

    def op_add_register(self, instruction: Instruction) -> None:
        v = self.state.v
        x, y = instruction.x, instruction.y
        v[FLAG] = 1 if v[x] + v[y] > 0xFF else 0
        v[x] = (v[x] + v[y]) & 0xFF

    def op_sub(self, instruction: Instruction) -> None:
        v = self.state.v
        x, y = instruction.x, instruction.y
        v[FLAG] = 0 if v[y] > v[x] else 1
        v[x] = (v[x] - v[y]) & 0xFF

    def op_subn(self, instruction: Instruction) -> None:
        v = self.state.v
        x, y = instruction.x, instruction.y
        v[FLAG] = 0 if v[x] > v[y] else 1
        v[x] = (v[y] - v[x]) & 0xFF

    def op_shr(self, instruction: Instruction) -> None:
        v = self.state.v
        x = instruction.x
        v[FLAG] = v[x] & 0x01
        v[x] >>= 1

    def op_shl(self, instruction: Instruction) -> None:
        v = self.state.v
        x = instruction.x
        v[FLAG] = v[x] >> 7
        v[x] = (v[x] << 1) & 0xFF

    def op_rnd(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.random_source() & instruction.nn & 0xFF

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_index(self, instruction: Instruction) -> None:
        self.state.i = instruction.nnn

    def op_add_index(self, instruction: Instruction) -> None:
        self.state.i = (self.state.i + self.state.v[instruction.x]) & 0xFFFF

    def op_ld_font(self, instruction: Instruction) -> None:
        self.state.i = glyph_address(self.state.v[instruction.x])

    def op_bcd(self, instruction: Instruction) -> None:
        value = self.state.v[instruction.x]
        base = self.state.i
        self.memory.store8(base, value // 100)
        self.memory.store8(base + 1, (value // 10) % 10)
        self.memory.store8(base + 2, value % 10)

    def op_store_registers(self, instruction: Instruction) -> None:
        base = self.state.i
        for offset in range(instruction.x + 1):
            self.memory.store8(base + offset, self.state.v[offset])

    def op_load_registers(self, instruction: Instruction) -> None:
        base = self.state.i
        for offset in range(instruction.x + 1):
            self.state.v[offset] = self.memory.load8(base + offset)

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, instruction: Instruction) -> None:
        v = self.state.v
        x = v[instruction.x]
        y = v[instruction.y]
        rows = self.memory.load_block(self.state.i, instruction.n)
        v[FLAG] = 0
        if self.display.draw_sprite(x, y, rows):
            v[FLAG] = 1

    # ------------------------------------------------------------------
    # Input and timers

    def op_skp(self, instruction: Instruction) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.v[instruction.x]))

    def op_sknp(self, instruction: Instruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.v[instruction.x]))

    def op_wait_key(self, instruction: Instruction) -> None:
        key = self.keypad.first_pressed()
        if key is not None:
            self.state.v[instruction.x] = key
            return
        # Park on this instruction until the host latches a key.
        self.state.pc = (self.state.pc - 2) & 0xFFFF
        self.status = CPUStatus.AWAITING_KEY
        self.wait_register = instruction.x
        if debug_enabled("cpu"):
            debug_log("cpu", "awaiting key pc=%04x V%X", self.state.pc, instruction.x)

    def op_ld_from_delay(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.timers.delay

    def op_ld_delay(self, instruction: Instruction) -> None:
        self.timers.set_delay(self.state.v[instruction.x])

    def op_ld_sound(self, instruction: Instruction) -> None:
        self.timers.set_sound(self.state.v[instruction.x])

    # ------------------------------------------------------------------
    # Internals

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _poll_key(self) -> int:
        key = self.keypad.first_pressed()
        if key is None:
            return 0
        register = self.wait_register
        self.state.v[register] = key
        self.state.pc = (self.state.pc + 2) & 0xFFFF
        self.status = CPUStatus.RUNNING
        self.step_count += 1
        if debug_enabled("cpu"):
            debug_log("cpu", "key %X latched into V%X", key, register)
        return 1
