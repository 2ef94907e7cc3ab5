from pygame import display, DOUBLEBUF, Color, draw

from chip8vm.framebuffer import Framebuffer


class Screen(object):
    """
    pygame window presenting the framebuffer, each CHIP-8 pixel drawn as a
    SCALE x SCALE square.
    """

    PIXEL_OFF = Color(0, 0, 0, 255)
    PIXEL_ON = Color(255, 255, 255, 255)

    def __init__(self, SCALE=1, HEIGHT=Framebuffer.HEIGHT, WIDTH=Framebuffer.WIDTH, PIXEL_ON=None, PIXEL_OFF=None):

        # Setting the screen class height, width, and scale
        self.HEIGHT = HEIGHT
        self.WIDTH = WIDTH
        self.SCALE = SCALE

        if PIXEL_ON is not None:
            self.PIXEL_ON = Color(*PIXEL_ON)
        if PIXEL_OFF is not None:
            self.PIXEL_OFF = Color(*PIXEL_OFF)

        #  Initialize a variable to hold the surface but don't use it
        self.SURFACE = None

        # Last frame presented, used to skip redraws when nothing changed
        self.LAST_FRAME = None

        # Initialize the screen
        self.INITIALIZE()

    def INITIALIZE(self):

        # Initialize the display from pygame
        display.init()

        # Set the surface
        self.SURFACE = display.set_mode(((self.WIDTH * self.SCALE), (self.HEIGHT * self.SCALE)), DOUBLEBUF)

        # Setting the title of the display
        display.set_caption('CHIP-8 Emulator')

        # Clear the display, run update on it
        self.CLEAR()
        self.UPDATE()

    def DRAW(self, x, y, state):

        # Setting pixel coordinates
        x_origin = x * self.SCALE
        y_origin = y * self.SCALE

        # Whether to turn pixel on or off
        color = self.PIXEL_ON if state else self.PIXEL_OFF
        draw.rect(self.SURFACE, color, (x_origin, y_origin, self.SCALE, self.SCALE))

    def PRESENT(self, framebuffer):
        """
        Redraw the whole window from the logical framebuffer
        """
        frame = framebuffer.SNAPSHOT()
        if frame == self.LAST_FRAME:
            return
        self.LAST_FRAME = frame

        self.CLEAR()

        if not framebuffer.IS_BLANK():
            for y, row in enumerate(framebuffer.ROWS()):
                for x, state in enumerate(row):
                    if state:
                        self.DRAW(x, y, state)

        self.UPDATE()

    def CLEAR(self):
        """
        Sets the entire screen to PIXEL_OFF
        """
        self.SURFACE.fill(self.PIXEL_OFF)

    def UPDATE(self):
        display.flip()

    @staticmethod
    def DECONSTRUCTOR():
        """
        Destroys the current screen object.
        """
        display.quit()
