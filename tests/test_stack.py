import pytest

from chip8vm.exceptions import ExecutionFault, StackOverflowException, StackUnderflowException
from chip8vm.stack import Stack


def test_push_sixteen_pop_sixteen_in_reverse_order():
    stack = Stack()
    addresses = [0x200 + 2 * i for i in range(16)]

    for address in addresses:
        stack.PUSH(address)

    assert len(stack) == 16
    assert [stack.POP() for _ in range(16)] == list(reversed(addresses))
    assert len(stack) == 0


def test_seventeenth_push_overflows():
    stack = Stack()
    for i in range(16):
        stack.PUSH(i)

    with pytest.raises(StackOverflowException):
        stack.PUSH(0x300)

    # The failed push does not clobber anything
    assert stack.PEEK() == 15


def test_pop_on_empty_underflows():
    with pytest.raises(StackUnderflowException):
        Stack().POP()


def test_stack_faults_are_execution_faults():
    assert issubclass(StackOverflowException, ExecutionFault)
    assert issubclass(StackUnderflowException, ExecutionFault)


def test_reset_empties_stack():
    stack = Stack()
    stack.PUSH(0x222)
    stack.RESET()

    assert stack.PEEK() is None
    assert len(stack) == 0
