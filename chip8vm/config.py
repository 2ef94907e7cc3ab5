import logging
from dataclasses import dataclass, asdict
from typing import Tuple


@dataclass
class EmulatorConfig:
    """Settings for running a ROM in a window."""
    scale: int = 10                 # window pixels per CHIP-8 pixel
    delay: int = 1                  # ms to wait between batches of instructions
    cycles_per_frame: int = 10      # instructions run between event polls
    pixel_on: Tuple[int, int, int] = (255, 255, 255)
    pixel_off: Tuple[int, int, int] = (0, 0, 0)
    shift_quirk: bool = False       # 8XY6 / 8XYE shift VY into VX
    load_store_quirk: bool = False  # FX55 / FX65 advance I
    log_level: int = logging.WARNING

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError('scale must be at least 1, got {}'.format(self.scale))
        if self.cycles_per_frame < 1:
            raise ValueError('cycles_per_frame must be at least 1, got {}'.format(self.cycles_per_frame))
        if self.delay < 0:
            raise ValueError('delay cannot be negative, got {}'.format(self.delay))

    def quirks(self) -> dict:
        """Keyword arguments for Architecture."""
        return {
            'shift_quirk': self.shift_quirk,
            'load_store_quirk': self.load_store_quirk,
        }

    def to_dict(self) -> dict:
        return asdict(self)
