import logging

from chip8vm.exceptions import RomLoadException, RomTooLargeException
from chip8vm.memory import Memory

logger = logging.getLogger(__name__)


def VALIDATE_ROM(rom, filename='<rom>'):
    """
    Make sure a ROM fits in the program area (0x200 - 0xFFF)
    """
    if len(rom) > Memory.MAX_PROGRAM_SIZE:
        raise RomTooLargeException(filename, len(rom), Memory.MAX_PROGRAM_SIZE)
    return bytes(rom)


def LOAD_ROMFILE(filename):
    """
    Read the ROM indicated by the filename. Any problem is reported here,
    before an interpreter gets built around it.
    """
    try:
        with open(filename, 'rb') as rom_file:
            rom = rom_file.read()
    except OSError as error:
        raise RomLoadException(filename, error.strerror or str(error)) from error

    rom = VALIDATE_ROM(rom, filename)
    logger.info('Loaded %d byte ROM from %s', len(rom), filename)
    return rom
