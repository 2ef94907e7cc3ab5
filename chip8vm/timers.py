from time import perf_counter


class Timer:
    """
    A CHIP-8 countdown timer (delay or sound).

    Instead of being decremented by a background clock, the timer remembers
    the value it was armed with and the instant it was armed. READ() works out
    how many 60Hz ticks have passed since then, so the value is purely a
    function of (armed value, armed instant, now).
    """

    # Timers count down at 60Hz
    TIMER_FREQ = 60.0

    def __init__(self, clock=perf_counter):
        self.clock = clock
        self.value = 0
        self.armed_at = self.clock()

    def ARM(self, value):
        """
        Triggered by FX15 / FX18, start counting down from value
        """
        self.value = value & 0xFF
        self.armed_at = self.clock()

    def READ(self):
        if self.value == 0:
            return 0

        elapsed_ticks = int((self.clock() - self.armed_at) * self.TIMER_FREQ)
        return max(0, self.value - elapsed_ticks)

    def IS_ACTIVE(self):
        return self.READ() > 0

    def RESET(self):
        self.ARM(0)
