"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, CPUState, CPUStatus
from .opcodes import Instruction, InstructionFamily, decode, disassemble, mnemonic
from .stack import STACK_DEPTH, CallStack, CPUError, StackFault
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUStatus",
    "CPUError",
    "StackFault",
    "CallStack",
    "STACK_DEPTH",
    "Instruction",
    "InstructionFamily",
    "decode",
    "disassemble",
    "mnemonic",
    "opcodes",
]
