import logging

logger = logging.getLogger(__name__)


class Memory:
    """
    The CHIP-8 had 4k (4096 bytes) of memory laid out as follows:

        0x000 - 0x04F   Built in font set (16 glyphs, 5 bytes each)
        0x050 - 0x1FF   Unused (originally the interpreter itself)
        0x200 - 0xFFF   Program ROM and working storage
    """

    MAX_MEMORY = 4096
    FONT_START = 0x000
    PROGRAM_START = 0x200
    MAX_PROGRAM_SIZE = MAX_MEMORY - PROGRAM_START

    # Every glyph is 4 pixels wide and 5 rows tall, e.g. for 0:
    #
    #   1 1 1 1     0xF0
    #   1 0 0 1     0x90
    #   1 0 0 1     0x90
    #   1 0 0 1     0x90
    #   1 1 1 1     0xF0
    FONT_SPRITE_SIZE = 5
    FONT_SET = bytes([
        0xF0, 0x90, 0x90, 0x90, 0xF0,   # 0
        0x20, 0x60, 0x20, 0x20, 0x70,   # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,   # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,   # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,   # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,   # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,   # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,   # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,   # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,   # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,   # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,   # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,   # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,   # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,   # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,   # F
    ])

    def __init__(self):
        self.data = bytearray(self.MAX_MEMORY)
        self.RESET()

    def RESET(self):
        """
        Zeroes all of memory and writes the font set back to 0x000
        """
        self.data[:] = bytes(self.MAX_MEMORY)
        self.LOAD(self.FONT_SET, self.FONT_START)

    def LOAD(self, data, offset=PROGRAM_START):
        """
        Copy a block of bytes into memory starting at offset
        """
        if offset + len(data) > self.MAX_MEMORY:
            raise ValueError('{} bytes at {:#05x} do not fit in memory'.format(len(data), offset))
        self.data[offset:offset + len(data)] = data

    def READ(self, address):
        return self.data[address % self.MAX_MEMORY]

    def READ_BLOCK(self, address, length):
        """
        Read length bytes starting at address, wrapping past 0xFFF
        """
        return bytes(self.READ(address + i) for i in range(length))

    def WRITE(self, address, value):
        """
        Store a byte. The font set is read only, writes landing on it
        (including ones that wrapped past 0xFFF) are dropped.
        """
        address %= self.MAX_MEMORY

        if self.IS_FONT_ADDRESS(address):
            logger.debug('Ignoring write of %#04x to font address %#05x', value & 0xFF, address)
            return

        self.data[address] = value & 0xFF

    @classmethod
    def IS_FONT_ADDRESS(cls, address):
        return cls.FONT_START <= address < cls.FONT_START + len(cls.FONT_SET)

    @classmethod
    def FONT_ADDRESS(cls, digit):
        """
        Address of the built in glyph for the hex digit (only the low nibble is used)
        """
        return cls.FONT_START + (digit & 0xF) * cls.FONT_SPRITE_SIZE
