import pytest

from chip8vm.memory import Memory


def test_font_set_loaded_at_zero():
    memory = Memory()

    assert memory.READ_BLOCK(0x000, 5) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
    assert memory.READ_BLOCK(Memory.FONT_ADDRESS(0xF), 5) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])
    assert len(Memory.FONT_SET) == 0x50


def test_font_address_uses_low_nibble():
    assert Memory.FONT_ADDRESS(0xA) == 50
    assert Memory.FONT_ADDRESS(0x1A) == 50


def test_load_places_program_at_0x200():
    memory = Memory()
    memory.LOAD(b'\x12\x34')

    assert memory.READ(0x200) == 0x12
    assert memory.READ(0x201) == 0x34


def test_load_rejects_data_past_end_of_memory():
    memory = Memory()

    with pytest.raises(ValueError):
        memory.LOAD(bytes(Memory.MAX_PROGRAM_SIZE + 1))


def test_write_masks_to_a_byte_and_wraps_address():
    memory = Memory()
    memory.WRITE(0x1000 + 0x300, 0x1FF)

    assert memory.READ(0x300) == 0xFF


def test_write_to_font_is_ignored():
    memory = Memory()
    memory.WRITE(0x000, 0x12)
    memory.WRITE(0x04F, 0x34)
    memory.WRITE(0x1000 + 0x010, 0x56)

    assert memory.READ_BLOCK(0x000, len(Memory.FONT_SET)) == Memory.FONT_SET

    # First byte past the font is ordinary memory
    memory.WRITE(0x050, 0x78)
    assert memory.READ(0x050) == 0x78


def test_reset_clears_program_but_keeps_font():
    memory = Memory()
    memory.LOAD(b'\xFF' * 10)
    memory.RESET()

    assert memory.READ_BLOCK(0x200, 10) == bytes(10)
    assert memory.READ(0) == 0xF0
