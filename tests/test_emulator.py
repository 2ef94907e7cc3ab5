import logging

import pygame
import pytest

from chip8vm.architecture import Architecture
from chip8vm.config import EmulatorConfig
from chip8vm.emulator import Emulator
from chip8vm.exceptions import StackUnderflowException

from conftest import program


@pytest.fixture
def make_emulator(screen, keypad):
    def factory(*opcodes, **config):
        return Emulator(program(*opcodes), EmulatorConfig(delay=0, **config), screen=screen, keypad=keypad)
    return factory


def test_run_frame_steps_configured_number_of_cycles(make_emulator):
    emulator = make_emulator(0x7001, 0x1200, cycles_per_frame=6)

    assert emulator.RUN_FRAME() == Architecture.RUNNING
    assert emulator.CPU.GeneralRegisters[0x0] == 3


def test_fault_stops_the_loop(make_emulator, caplog):
    emulator = make_emulator(0x00EE)
    emulator.running = True

    with caplog.at_level(logging.ERROR, logger='chip8vm.emulator'):
        assert emulator.RUN_FRAME() == Architecture.HALTED

    assert not emulator.running
    assert isinstance(emulator.fault, StackUnderflowException)
    assert 'Execution fault' in caplog.text


def test_key_wait_yields_back_to_event_loop(make_emulator):
    emulator = make_emulator(0xF50A, 0x1202)

    assert emulator.RUN_FRAME() == Architecture.AWAITING_KEY

    emulator.HANDLE_EVENTS([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_e)])

    assert emulator.RUN_FRAME() == Architecture.RUNNING
    assert emulator.CPU.GeneralRegisters[0x5] == 0x6


def test_quit_events(make_emulator):
    emulator = make_emulator(0x1200)

    emulator.running = True
    emulator.HANDLE_EVENTS([pygame.event.Event(pygame.QUIT)])
    assert not emulator.running

    emulator.running = True
    emulator.HANDLE_EVENTS([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)])
    assert not emulator.running


def test_backspace_resets_machine(make_emulator, keypad):
    emulator = make_emulator(0x6042, 0x1202)
    emulator.RUN_FRAME()
    keypad.PRESS(0x1)

    emulator.HANDLE_EVENTS([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_BACKSPACE)])

    assert emulator.CPU.GeneralRegisters[0x0] == 0
    assert emulator.CPU.CpuRegisters['PC'] == 0x200
    assert not keypad.IS_KEY_PRESSED(0x1)


def test_quirks_reach_the_interpreter(make_emulator):
    emulator = make_emulator(0x1200, shift_quirk=True, load_store_quirk=True)

    assert emulator.CPU.shift_quirk
    assert emulator.CPU.load_store_quirk


def test_main_loop_runs_until_quit(make_emulator):
    pygame.display.init()
    try:
        emulator = make_emulator(0x00E0, 0x1202)
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        assert emulator.main() is None
        assert emulator.CPU.framebuffer.IS_BLANK()
    finally:
        pygame.display.quit()


def test_main_loop_returns_fault(make_emulator):
    pygame.display.init()
    try:
        emulator = make_emulator(0x00EE)

        assert isinstance(emulator.main(), StackUnderflowException)
    finally:
        pygame.display.quit()
