class Framebuffer:
    """
    The logical 64 x 32 monochrome display.

    Pixels are stored one per byte, row major, 0 for off and 1 for on.
    This is the authoritative screen state; whatever presents it (see
    screen.Screen) only ever reads from here.
    """

    WIDTH = 64
    HEIGHT = 32

    PIXEL_OFF = 0
    PIXEL_ON = 1

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)

    def CLEAR(self):
        """
        Triggered by 00E0, turns every pixel off
        """
        self.pixels[:] = bytes(len(self.pixels))

    def GET_STATE(self, x, y):
        return self.pixels[(y % self.height) * self.width + (x % self.width)]

    def SET_STATE(self, x, y, state):
        self.pixels[(y % self.height) * self.width + (x % self.width)] = 1 if state else 0

    def DRAW_SPRITE(self, x, y, sprite):
        """
        XOR a sprite onto the display with its top left corner at (x, y).

        Each byte of sprite is one row, 8 pixels wide, most significant bit
        on the left. Say the sprite bytes look like this:

            sprite[0]:     0 1 1 1 1 1 0 0
            sprite[1]:     0 1 0 0 0 0 0 0
            sprite[2]:     0 1 1 1 1 1 0 0
            sprite[3]:     0 1 0 0 0 0 0 0
            sprite[4]:     0 1 1 1 1 1 0 0

        then an E gets drawn. Pixels that fall off the right or bottom edge
        wrap around to the opposite edge.

        Returns True if any pixel went from on to off (a collision).
        """
        collision = False

        for y_layer, row in enumerate(sprite):
            y_coordinate = (y + y_layer) % self.height

            for x_layer in range(8):
                if not (row >> (7 - x_layer)) & 0x1:
                    continue

                x_coordinate = (x + x_layer) % self.width

                # On to off is a collision
                if self.GET_STATE(x_coordinate, y_coordinate) == self.PIXEL_ON:
                    collision = True
                    self.SET_STATE(x_coordinate, y_coordinate, self.PIXEL_OFF)
                else:
                    self.SET_STATE(x_coordinate, y_coordinate, self.PIXEL_ON)

        return collision

    def ROWS(self):
        """
        The display as a list of rows, each a list of 0 / 1 pixel states
        """
        return [list(self.pixels[row * self.width:(row + 1) * self.width]) for row in range(self.height)]

    def SNAPSHOT(self):
        return bytes(self.pixels)

    def IS_BLANK(self):
        return not any(self.pixels)
