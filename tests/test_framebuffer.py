from chip8vm.framebuffer import Framebuffer


def test_new_framebuffer_is_blank():
    framebuffer = Framebuffer()

    assert framebuffer.IS_BLANK()
    assert len(framebuffer.ROWS()) == 32
    assert all(len(row) == 64 for row in framebuffer.ROWS())


def test_draw_sprite_sets_pixels_msb_first():
    framebuffer = Framebuffer()

    collision = framebuffer.DRAW_SPRITE(0, 0, [0b10000001])

    assert not collision
    assert framebuffer.GET_STATE(0, 0) == 1
    assert framebuffer.GET_STATE(7, 0) == 1
    assert sum(framebuffer.ROWS()[0]) == 2


def test_drawing_twice_restores_previous_state_and_collides():
    framebuffer = Framebuffer()
    framebuffer.SET_STATE(18, 10, 1)
    before = framebuffer.SNAPSHOT()
    sprite = [0xF0, 0x90, 0xF0]

    first = framebuffer.DRAW_SPRITE(18, 9, sprite)
    second = framebuffer.DRAW_SPRITE(18, 9, sprite)

    assert first is True    # (18, 10) was already on and the sprite covers it
    assert second is True
    assert framebuffer.SNAPSHOT() == before


def test_sprite_wraps_around_both_edges():
    framebuffer = Framebuffer()

    framebuffer.DRAW_SPRITE(60, 30, [0xFF] * 5)

    lit = {(x, y) for y, row in enumerate(framebuffer.ROWS()) for x, state in enumerate(row) if state}
    columns = [60, 61, 62, 63, 0, 1, 2, 3]
    rows = [30, 31, 0, 1, 2]
    assert lit == {(x, y) for x in columns for y in rows}


def test_zero_bits_leave_pixels_alone():
    framebuffer = Framebuffer()
    framebuffer.SET_STATE(1, 0, 1)

    collision = framebuffer.DRAW_SPRITE(0, 0, [0b10000000])

    assert not collision
    assert framebuffer.GET_STATE(1, 0) == 1


def test_empty_sprite_draws_nothing():
    framebuffer = Framebuffer()

    assert framebuffer.DRAW_SPRITE(5, 5, b'') is False
    assert framebuffer.IS_BLANK()


def test_clear_turns_everything_off():
    framebuffer = Framebuffer()
    framebuffer.DRAW_SPRITE(10, 10, [0xFF, 0xFF])
    framebuffer.CLEAR()

    assert framebuffer.IS_BLANK()
