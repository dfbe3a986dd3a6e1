"""
Cat's Chip-8 Emulator

CHIP-8 virtual machine with configurable quirks, a disassembler and a
Tkinter front end.

Author: Team Flames / Samsoft
"""

from .config import EmulatorConfig, QuirkMode, Quirks
from .cpu import Chip8CPU
from .disassembler import disassemble
from .emulator import Emulator
from .errors import (
    Chip8Error, Chip8Fault, ConfigError, InvalidFontDigitError, InvalidKeyError,
    MachineHalted, MemoryAccessError, RomTooLargeError, StackOverflowError,
    StackUnderflowError,
)
from .framebuffer import Framebuffer
from .instruction import Instruction, Op, decode
from .keypad import Keypad

__version__ = "1.0.0"
