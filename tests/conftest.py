import os

# pygame needs somewhere to draw, run it headless
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')
os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pytest

from chip8vm.architecture import Architecture
from chip8vm.keyboard import Keypad


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingScreen:
    """Presentation sink that keeps a copy of every frame it is given."""

    def __init__(self):
        self.frames = []

    def PRESENT(self, framebuffer):
        self.frames.append(framebuffer.SNAPSHOT())

    @staticmethod
    def DECONSTRUCTOR():
        pass


def program(*opcodes):
    """Assemble 16-bit opcodes into ROM bytes."""
    rom = bytearray()
    for opcode in opcodes:
        rom += opcode.to_bytes(2, 'big')
    return bytes(rom)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def screen():
    return RecordingScreen()


@pytest.fixture
def keypad():
    return Keypad()


@pytest.fixture
def make_cpu(clock, screen, keypad):
    def factory(*opcodes, **kwargs):
        kwargs.setdefault('random_byte', lambda: 0xAB)
        return Architecture(program(*opcodes), keypad=keypad, screen=screen, clock=clock, **kwargs)
    return factory


@pytest.fixture
def cpu(make_cpu):
    return make_cpu()
