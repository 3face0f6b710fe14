"""Instruction decoding and opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Iterable, Mapping


class InstructionFamily(Enum):
    """Behaviour group selected by the top nibble of an instruction word."""

    SYSTEM = 0x0
    JUMP = 0x1
    CALL = 0x2
    SKIP_EQ_IMMEDIATE = 0x3
    SKIP_NE_IMMEDIATE = 0x4
    SKIP_EQ_REGISTER = 0x5
    LOAD_IMMEDIATE = 0x6
    ADD_IMMEDIATE = 0x7
    ALU = 0x8
    SKIP_NE_REGISTER = 0x9
    LOAD_INDEX = 0xA
    JUMP_OFFSET = 0xB
    RANDOM = 0xC
    DRAW = 0xD
    KEY = 0xE
    MISC = 0xF


@dataclass(frozen=True)
class Instruction:
    """Decoded view of a 16-bit instruction word."""

    opcode: int
    family: InstructionFamily
    nnn: int
    nn: int
    n: int
    x: int
    y: int


def decode(word: int) -> Instruction:
    """Split ``word`` into its operand fields. Every 16-bit value decodes."""

    word &= 0xFFFF
    return Instruction(
        opcode=word,
        family=InstructionFamily(word >> 12),
        nnn=word & 0x0FFF,
        nn=word & 0x00FF,
        n=word & 0x000F,
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
    )


@dataclass(frozen=True)
class Operation:
    """Metadata describing one defined instruction."""

    family: InstructionFamily
    mnemonic: str
    handler: str
    selector: int | None = None

    def format(self, instruction: Instruction) -> str:
        return self.mnemonic.format(
            nnn=instruction.nnn,
            nn=instruction.nn,
            n=instruction.n,
            x=instruction.x,
            y=instruction.y,
        )


# Families that need a second field to pick the behaviour.
SELECTOR_FIELDS: Final[Mapping[InstructionFamily, str]] = {
    InstructionFamily.SYSTEM: "nn",
    InstructionFamily.ALU: "n",
    InstructionFamily.KEY: "nn",
    InstructionFamily.MISC: "nn",
}

NOP: Final[Operation] = Operation(InstructionFamily.SYSTEM, "???", "op_nop")


class OpcodeTable:
    """Lookup from decoded instructions to their operations.

    Families with a selector may register one operation without a selector
    as the family fallback (``0NNN`` is ``SYS``). Anything else not
    registered resolves to :data:`NOP`, which is how undefined sub-codes
    inside a known family become no-ops.
    """

    def __init__(self) -> None:
        self._primary: Dict[InstructionFamily, Operation] = {}
        self._secondary: Dict[InstructionFamily, Dict[int, Operation]] = {
            family: {} for family in SELECTOR_FIELDS
        }
        self._fallback: Dict[InstructionFamily, Operation] = {}

    def register(self, operation: Operation) -> None:
        family = operation.family
        if family in SELECTOR_FIELDS:
            if operation.selector is None:
                existing = self._fallback.get(family)
                if existing is not None:
                    raise ValueError(f"{family.name} fallback already registered as {existing.mnemonic}")
                self._fallback[family] = operation
                return
            table = self._secondary[family]
            existing = table.get(operation.selector)
            if existing is not None:
                raise ValueError(
                    f"{family.name} selector {operation.selector:#04x} already registered as {existing.mnemonic}"
                )
            table[operation.selector] = operation
            return
        if operation.selector is not None:
            raise ValueError(f"{family.name} operations take no selector")
        existing = self._primary.get(family)
        if existing is not None:
            raise ValueError(f"{family.name} already registered as {existing.mnemonic}")
        self._primary[family] = operation

    def register_all(self, operations: Iterable[Operation]) -> None:
        for operation in operations:
            self.register(operation)

    def lookup(self, instruction: Instruction) -> Operation:
        family = instruction.family
        field_name = SELECTOR_FIELDS.get(family)
        if field_name is None:
            return self._primary.get(family, NOP)
        operation = self._secondary[family].get(getattr(instruction, field_name))
        if operation is None:
            return self._fallback.get(family, NOP)
        return operation

    def operations(self) -> Iterable[Operation]:
        yield from self._primary.values()
        for table in self._secondary.values():
            yield from table.values()
        yield from self._fallback.values()


F = InstructionFamily

DEFAULT_OPERATIONS: tuple[Operation, ...] = (
    Operation(F.SYSTEM, "CLS", "op_cls", 0xE0),
    Operation(F.SYSTEM, "RET", "op_ret", 0xEE),
    Operation(F.SYSTEM, "SYS {nnn:#05x}", "op_sys"),
    Operation(F.JUMP, "JP {nnn:#05x}", "op_jp"),
    Operation(F.CALL, "CALL {nnn:#05x}", "op_call"),
    Operation(F.SKIP_EQ_IMMEDIATE, "SE V{x:X}, {nn:#04x}", "op_se_immediate"),
    Operation(F.SKIP_NE_IMMEDIATE, "SNE V{x:X}, {nn:#04x}", "op_sne_immediate"),
    Operation(F.SKIP_EQ_REGISTER, "SE V{x:X}, V{y:X}", "op_se_register"),
    Operation(F.LOAD_IMMEDIATE, "LD V{x:X}, {nn:#04x}", "op_ld_immediate"),
    Operation(F.ADD_IMMEDIATE, "ADD V{x:X}, {nn:#04x}", "op_add_immediate"),
    # 8XY_
    Operation(F.ALU, "LD V{x:X}, V{y:X}", "op_ld_register", 0x0),
    Operation(F.ALU, "OR V{x:X}, V{y:X}", "op_or", 0x1),
    Operation(F.ALU, "AND V{x:X}, V{y:X}", "op_and", 0x2),
    Operation(F.ALU, "XOR V{x:X}, V{y:X}", "op_xor", 0x3),
    Operation(F.ALU, "ADD V{x:X}, V{y:X}", "op_add_register", 0x4),
    Operation(F.ALU, "SUB V{x:X}, V{y:X}", "op_sub", 0x5),
    Operation(F.ALU, "SHR V{x:X}", "op_shr", 0x6),
    Operation(F.ALU, "SUBN V{x:X}, V{y:X}", "op_subn", 0x7),
    Operation(F.ALU, "SHL V{x:X}", "op_shl", 0xE),
    Operation(F.SKIP_NE_REGISTER, "SNE V{x:X}, V{y:X}", "op_sne_register"),
    Operation(F.LOAD_INDEX, "LD I, {nnn:#05x}", "op_ld_index"),
    Operation(F.JUMP_OFFSET, "JP V0, {nnn:#05x}", "op_jp_offset"),
    Operation(F.RANDOM, "RND V{x:X}, {nn:#04x}", "op_rnd"),
    Operation(F.DRAW, "DRW V{x:X}, V{y:X}, {n}", "op_drw"),
    # EX__
    Operation(F.KEY, "SKP V{x:X}", "op_skp", 0x9E),
    Operation(F.KEY, "SKNP V{x:X}", "op_sknp", 0xA1),
    # FX__
    Operation(F.MISC, "LD V{x:X}, DT", "op_ld_from_delay", 0x07),
    Operation(F.MISC, "LD V{x:X}, K", "op_wait_key", 0x0A),
    Operation(F.MISC, "LD DT, V{x:X}", "op_ld_delay", 0x15),
    Operation(F.MISC, "LD ST, V{x:X}", "op_ld_sound", 0x18),
    Operation(F.MISC, "ADD I, V{x:X}", "op_add_index", 0x1E),
    Operation(F.MISC, "LD F, V{x:X}", "op_ld_font", 0x29),
    Operation(F.MISC, "LD B, V{x:X}", "op_bcd", 0x33),
    Operation(F.MISC, "LD [I], V{x:X}", "op_store_registers", 0x55),
    Operation(F.MISC, "LD V{x:X}, [I]", "op_load_registers", 0x65),
)

del F


def build_opcode_table(operations: Iterable[Operation] = DEFAULT_OPERATIONS) -> OpcodeTable:
    table = OpcodeTable()
    table.register_all(operations)
    return table


OPCODE_TABLE: Final[OpcodeTable] = build_opcode_table()


def mnemonic(instruction: Instruction, table: OpcodeTable = OPCODE_TABLE) -> str:
    """Return a short disassembly of ``instruction``."""

    return table.lookup(instruction).format(instruction)


def disassemble(word: int, table: OpcodeTable = OPCODE_TABLE) -> str:
    return mnemonic(decode(word), table)
