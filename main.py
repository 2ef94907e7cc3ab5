import argparse
import logging
import sys

from chip8vm.config import EmulatorConfig
from chip8vm.emulator import Emulator
from chip8vm.exceptions import RomLoadException
from chip8vm.log import SETUP_LOGGING
from chip8vm.rom import LOAD_ROMFILE

logger = logging.getLogger('chip8vm.main')


def PARSE_ARGS(argv=None):
    parser = argparse.ArgumentParser(description='CHIP-8 Emulator')
    parser.add_argument('rom', help='Path to the ROM file to run')
    parser.add_argument('--scale', type=int, default=10, help='Window pixels per CHIP-8 pixel')
    parser.add_argument('--delay', type=int, default=1, help='Milliseconds to wait between batches of instructions')
    parser.add_argument('--cycles', type=int, default=10, help='Instructions to run between event polls')
    parser.add_argument('--shift-quirk', action='store_true', help='8XY6/8XYE shift VY into VX (COSMAC VIP)')
    parser.add_argument('--load-store-quirk', action='store_true', help='FX55/FX65 advance I (COSMAC VIP)')
    parser.add_argument('--debug', action='store_true', help='Log every executed instruction')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log ROM loading and resets')
    return parser.parse_args(argv)


def CONFIG_FROM_ARGS(args):
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    return EmulatorConfig(
        scale=args.scale,
        delay=args.delay,
        cycles_per_frame=args.cycles,
        shift_quirk=args.shift_quirk,
        load_store_quirk=args.load_store_quirk,
        log_level=level,
    )


def main(argv=None):
    args = PARSE_ARGS(argv)

    try:
        config = CONFIG_FROM_ARGS(args)
    except ValueError as error:
        print('Invalid option: {}'.format(error), file=sys.stderr)
        return 2

    SETUP_LOGGING(config.log_level)

    try:
        rom = LOAD_ROMFILE(args.rom)
    except RomLoadException as error:
        logger.error('%s', error)
        return 1

    fault = Emulator(rom, config).main()
    return 1 if fault is not None else 0


if __name__ == '__main__':
    sys.exit(main())
