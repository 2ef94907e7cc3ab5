import logging

import pygame

from chip8vm.architecture import Architecture
from chip8vm.config import EmulatorConfig
from chip8vm.exceptions import ExecutionFault
from chip8vm.keyboard import Keypad
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)


class Emulator:
    """
    The driving loop: pumps pygame events into the keypad, steps the
    interpreter and stops on quit or on an execution fault.

    Keys outside the keypad:
        ESCAPE      quit
        BACKSPACE   reset the machine
    """

    QUIT_KEY = pygame.K_ESCAPE
    RESET_KEY = pygame.K_BACKSPACE

    def __init__(self, rom, config=None, screen=None, keypad=None):
        self.config = config if config is not None else EmulatorConfig()
        self.keypad = keypad if keypad is not None else Keypad()

        if screen is None:
            screen = Screen(SCALE=self.config.scale, PIXEL_ON=self.config.pixel_on, PIXEL_OFF=self.config.pixel_off)
        self.screen = screen

        self.CPU = Architecture(rom, keypad=self.keypad, screen=self.screen, **self.config.quirks())

        self.running = False
        self.fault = None

    def HANDLE_EVENTS(self, events):
        """
        Deal with a batch of pygame events
        """
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key == self.QUIT_KEY:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key == self.RESET_KEY:
                self.keypad.RESET()
                self.CPU.RESET()

            else:
                self.keypad.HANDLE_EVENT(event)

    def RUN_FRAME(self):
        """
        Step the interpreter cycles_per_frame times. A fault halts the
        interpreter and stops the loop.
        """
        for _ in range(self.config.cycles_per_frame):
            try:
                state = self.CPU.STEP()
            except ExecutionFault as fault:
                logger.error('Execution fault: %s', fault)
                self.fault = fault
                self.running = False
                return Architecture.HALTED

            # No point spinning while FX0A waits, go and fetch more events
            if state == Architecture.AWAITING_KEY:
                return state

        return self.CPU.STATE

    def main(self):
        """
        Run until the window is closed, ESCAPE is pressed or the ROM faults.
        Returns the fault that stopped the machine, or None.
        """
        self.running = True

        while self.running:
            self.RUN_FRAME()

            # Check for various events
            self.HANDLE_EVENTS(pygame.event.get())

            pygame.time.wait(self.config.delay)

        self.screen.DECONSTRUCTOR()
        return self.fault
