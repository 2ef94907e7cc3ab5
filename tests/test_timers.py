from chip8vm.timers import Timer


def test_read_immediately_after_arming(clock):
    timer = Timer(clock)
    timer.ARM(30)

    assert timer.READ() == 30


def test_reads_zero_after_half_a_second(clock):
    timer = Timer(clock)
    timer.ARM(30)
    clock.advance(0.5)

    assert timer.READ() == 0


def test_decays_at_sixty_hertz(clock):
    timer = Timer(clock)
    timer.ARM(60)
    clock.advance(0.25)

    assert timer.READ() == 45


def test_stays_at_zero_until_rearmed(clock):
    timer = Timer(clock)
    timer.ARM(5)
    clock.advance(10)

    assert timer.READ() == 0
    assert not timer.IS_ACTIVE()

    timer.ARM(7)
    assert timer.READ() == 7
    assert timer.IS_ACTIVE()


def test_arm_keeps_only_a_byte(clock):
    timer = Timer(clock)
    timer.ARM(0x1FF)

    assert timer.READ() == 0xFF


def test_reading_does_not_change_state(clock):
    timer = Timer(clock)
    timer.ARM(20)
    clock.advance(1 / 60.0 * 4 + 0.001)

    assert timer.READ() == 16
    assert timer.READ() == 16
