"""Command line entry point."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import EmulatorConfig, QuirkMode, Quirks, parse_color
from .disassembler import disassemble
from .emulator import Emulator
from .errors import Chip8Error

logger = logging.getLogger(__name__)

QUIRK_FLAGS = ("vf_reset", "shifting", "jumping", "wrap", "memory")


def _color(text: str) -> int:
    try:
        return parse_color(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _at_least_one(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"{value} is not in 1..")
    return value


def _pitch(text: str) -> int:
    value = int(text)
    if not 20 <= value <= 10_000:
        raise argparse.ArgumentTypeError(f"{value} is not in 20..=10000")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cat-chip8", description="CHIP-8 emulator")
    parser.add_argument("program", help="Path to the binary CHIP-8 program to run")
    parser.add_argument("--disasm", action="store_true",
                        help="Print the disassembled program before running it")
    parser.add_argument("--disasm-only", action="store_true",
                        help="Print the disassembled program and exit")
    parser.add_argument("-f", "--fps", type=_at_least_one, default=60,
                        help="Target frames per second (default: 60)")
    parser.add_argument("-i", "--ipf", type=_at_least_one, default=10,
                        help="Target instructions per frame (default: 10)")
    parser.add_argument("-s", "--scale", type=_at_least_one, default=10,
                        help="Window scale factor (default: 10)")
    parser.add_argument("-c", "--color", type=_color, default="0xFFFFFFFF",
                        help="Foreground color in RGBA8888 format (e.g. #FF0A2B1D or 0xFF0A2B1D)")
    parser.add_argument("-b", "--background", type=_color, default="0x000000",
                        help="Background color in RGBA8888 format")
    parser.add_argument("-p", "--pitch", type=_pitch, default=440,
                        help="Pitch of the buzzer in Hz (default: 440)")
    parser.add_argument("-d", "--display-wait", action="store_true",
                        help="Limit drawing to one sprite per frame")
    parser.add_argument("--quirks", choices=[mode.name.lower() for mode in QuirkMode],
                        default=QuirkMode.CLASSIC.name.lower(),
                        help="Start from a named quirk preset (default: classic)")
    for name in QUIRK_FLAGS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, action="store_true",
                            help=f"Enable the {name} quirk on top of the preset")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: WARNING)")
    return parser


def config_from_args(args: argparse.Namespace) -> EmulatorConfig:
    quirks = Quirks.for_mode(QuirkMode[args.quirks.upper()])
    enabled = {name: True for name in QUIRK_FLAGS if getattr(args, name)}
    if enabled:
        quirks = quirks.replace(**enabled)

    return EmulatorConfig(
        fps=args.fps,
        ipf=args.ipf,
        scale=args.scale,
        fg=args.color,
        bg=args.background,
        pitch=args.pitch,
        display_wait=args.display_wait,
        quirks=quirks,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[%(levelname)s]:  %(message)s", stream=sys.stderr)

    try:
        with open(args.program, 'rb') as f:
            rom = f.read()
    except OSError as e:
        logger.error("'%s': file could not be opened: %s", args.program, e)
        return 1

    if not rom:
        logger.error("'%s': not a valid CHIP-8 program: file is empty", args.program)
        return 1

    if args.disasm or args.disasm_only:
        for line in disassemble(rom):
            print(line)
        if args.disasm_only:
            return 0

    try:
        emulator = Emulator(rom, config_from_args(args))
    except Chip8Error as e:
        logger.error("'%s': not a valid CHIP-8 program: %s", args.program, e)
        return 1

    # Imported late so --disasm-only works without a display
    from .gui import Chip8GUI

    app = Chip8GUI(emulator, title=f"Cat's Chip-8 Emulator - {os.path.basename(args.program)}")
    app.run()
    return 0
