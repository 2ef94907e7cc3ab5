from collections import deque

import pygame

# The keypad layout for the CHIP-8 is:
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
#
# which we map onto the left hand side of a QWERTY keyboard:
#   1 2 3 4
#   Q W E R
#   A S D F
#   Z X C V
KEY_MAPPINGS = {
    0x1: pygame.K_1,
    0x2: pygame.K_2,
    0x3: pygame.K_3,
    0xC: pygame.K_4,
    0x4: pygame.K_q,
    0x5: pygame.K_w,
    0x6: pygame.K_e,
    0xD: pygame.K_r,
    0x7: pygame.K_a,
    0x8: pygame.K_s,
    0x9: pygame.K_d,
    0xE: pygame.K_f,
    0xA: pygame.K_z,
    0x0: pygame.K_x,
    0xB: pygame.K_c,
    0xF: pygame.K_v,
}

# Reverse lookup used when translating pygame events
PYGAME_KEYS = {lookup_key: keyval for keyval, lookup_key in KEY_MAPPINGS.items()}

NUM_KEYS = 16


class Keypad:
    """
    State of the 16 key hexadecimal keypad.

    The driving loop calls PRESS / RELEASE as key events arrive. The
    interpreter asks IS_KEY_PRESSED for EX9E / EXA1, and POLL_NEXT_KEY while
    it is waiting on FX0A.
    """

    def __init__(self):
        self.pressed = [False] * NUM_KEYS
        self.pending = deque()

    def PRESS(self, key):
        key &= 0xF
        if not self.pressed[key]:
            self.pending.append(key)
        self.pressed[key] = True

    def RELEASE(self, key):
        self.pressed[key & 0xF] = False

    def IS_KEY_PRESSED(self, key):
        return self.pressed[key & 0xF]

    def POLL_NEXT_KEY(self):
        """
        Pop the oldest key press that has not been consumed yet, or None
        """
        if self.pending:
            return self.pending.popleft()
        return None

    def HANDLE_EVENT(self, event):
        """
        Feed a pygame event into the keypad. Returns True if the event
        was for one of the mapped keys.
        """
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False

        key = PYGAME_KEYS.get(event.key)
        if key is None:
            return False

        if event.type == pygame.KEYDOWN:
            self.PRESS(key)
        else:
            self.RELEASE(key)
        return True

    def RESET(self):
        self.pressed = [False] * NUM_KEYS
        self.pending.clear()
