from chip8vm.architecture import Architecture
from chip8vm.exceptions import (
    Chip8Exception,
    ExecutionFault,
    ProgramCounterException,
    RomLoadException,
    RomTooLargeException,
    StackOverflowException,
    StackUnderflowException,
)

__version__ = '1.0.0'
