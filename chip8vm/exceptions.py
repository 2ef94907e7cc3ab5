class Chip8Exception(Exception):
    """
    Base class for everything the emulator raises on purpose
    """


class RomLoadException(Chip8Exception):
    """
    Raised when a ROM cannot be read from disk. Happens before any
    interpreter is constructed.
    """

    def __init__(self, filename, reason):
        self.filename = filename
        self.reason = reason
        super().__init__('Unable to load ROM {}: {}'.format(filename, reason))


class RomTooLargeException(RomLoadException):

    def __init__(self, filename, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(filename, '{} bytes exceeds the {} byte program area'.format(size, limit))


class ExecutionFault(Chip8Exception):
    """
    Unrecoverable fault raised from STEP(). The interpreter is HALTED
    when one of these reaches the driving loop.

    pc and operand are filled in by the interpreter with the address and
    opcode of the faulting instruction.
    """

    def __init__(self, message, pc=None, operand=None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.operand = operand

    def __str__(self):
        if self.pc is None or self.operand is None:
            return self.message
        return '{} (PC={:#06x}, IR={:#06x})'.format(self.message, self.pc, self.operand)


class StackOverflowException(ExecutionFault):
    pass


class StackUnderflowException(ExecutionFault):
    pass


class ProgramCounterException(ExecutionFault):
    pass
