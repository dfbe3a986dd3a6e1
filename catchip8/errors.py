"""Exceptions raised by the emulator core.

Two tiers: load-time errors the caller can recover from by not starting,
and run-time faults that halt the machine.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every emulator error"""


class RomTooLargeError(Chip8Error, ValueError):
    """The program does not fit between PROGRAM_START and the end of memory"""

    def __init__(self, size: int, max_size: int):
        super().__init__(f"ROM too large: {size} bytes (max {max_size})")
        self.size = size
        self.max_size = max_size


class ConfigError(Chip8Error, ValueError):
    """Invalid run option"""


class Chip8Fault(Chip8Error):
    """Fatal run-time condition; the machine halts"""

    def __init__(self, message: str, pc: Optional[int] = None):
        if pc is not None:
            message = f"{message} (pc=0x{pc:03X})"
        super().__init__(message)
        self.pc = pc


class StackOverflowError(Chip8Fault):
    pass


class StackUnderflowError(Chip8Fault):
    pass


class MemoryAccessError(Chip8Fault):
    pass


class InvalidKeyError(Chip8Fault):
    pass


class InvalidFontDigitError(Chip8Fault):
    pass


class MachineHalted(Chip8Fault):
    """step() called after a fault already stopped the machine"""
