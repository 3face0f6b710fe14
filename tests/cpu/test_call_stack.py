"""Call/return behaviour and the stack fault policy."""

from __future__ import annotations

import pytest

from pychip8.bus import PROGRAM_START
from pychip8.cpu import STACK_DEPTH, CallStack, StackFault
from pychip8.system import MachineConfig, create_machine


def _program(words: dict[int, int]) -> bytes:
    end = max(words) + 2
    image = bytearray(end - PROGRAM_START)
    for address, word in words.items():
        offset = address - PROGRAM_START
        image[offset:offset + 2] = word.to_bytes(2, "big")
    return bytes(image)


@pytest.mark.parametrize("depth", range(1, STACK_DEPTH + 1))
def test_nested_calls_return_to_call_sites(depth: int) -> None:
    # Each level at 0x300 + 2*k calls the next level; the deepest returns.
    words = {PROGRAM_START: 0x2300}
    for level in range(depth - 1):
        words[0x300 + 4 * level] = 0x2000 | (0x300 + 4 * (level + 1))
        words[0x300 + 4 * level + 2] = 0x00EE
    words[0x300 + 4 * (depth - 1)] = 0x00EE
    machine = create_machine(MachineConfig(program_image=_program(words)))

    for _ in range(depth):
        machine.step()
    assert machine.cpu.stack.depth == depth

    for _ in range(depth):
        machine.step()  # RET

    assert machine.cpu.stack.depth == 0
    assert machine.cpu.state.pc == PROGRAM_START + 2


def test_single_call_and_return() -> None:
    machine = create_machine(MachineConfig(program_image=_program({0x200: 0x2208, 0x208: 0x00EE})))

    machine.step()
    assert machine.cpu.state.pc == 0x208
    assert machine.cpu.stack.snapshot() == (0x202,)

    machine.step()
    assert machine.cpu.state.pc == 0x202


def test_return_with_empty_stack_faults_without_side_effects() -> None:
    machine = create_machine(MachineConfig(program_image=_program({0x200: 0x00EE})))

    with pytest.raises(StackFault):
        machine.step()

    assert machine.cpu.state.pc == 0x200
    assert machine.cpu.stack.depth == 0


def test_call_overflow_faults_and_keeps_stack() -> None:
    # 0x200 calls itself forever.
    machine = create_machine(MachineConfig(program_image=_program({0x200: 0x2200})))
    for _ in range(STACK_DEPTH):
        machine.step()
    assert machine.cpu.stack.depth == STACK_DEPTH
    before = machine.cpu.stack.snapshot()

    with pytest.raises(StackFault):
        machine.step()

    assert machine.cpu.stack.snapshot() == before
    assert machine.cpu.state.pc == 0x200


def test_call_stack_push_pop_order() -> None:
    stack = CallStack(capacity=3)
    stack.push(0x111)
    stack.push(0x222)
    assert stack.peek() == 0x222
    assert stack.pop() == 0x222
    assert stack.pop() == 0x111
    assert stack.peek() is None
    with pytest.raises(StackFault):
        stack.pop()


def test_call_stack_capacity_is_enforced() -> None:
    stack = CallStack(capacity=1)
    stack.push(0x200)
    with pytest.raises(StackFault):
        stack.push(0x202)
    assert len(stack) == 1
