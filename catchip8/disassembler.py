"""Address-ordered listing of a ROM, one decoded word per line."""

from typing import Iterator, List, Tuple

from .constants import PROGRAM_START
from .instruction import Instruction, decode


def iter_instructions(rom: bytes, origin: int = PROGRAM_START) -> Iterator[Tuple[int, Instruction]]:
    """Yield (address, instruction) for every 16-bit word of the ROM.

    A trailing odd byte is treated as the high byte of a word ending in 0x00.
    """
    for offset in range(0, len(rom), 2):
        high = rom[offset]
        low = rom[offset + 1] if offset + 1 < len(rom) else 0
        yield origin + offset, decode((high << 8) | low)


def disassemble(rom: bytes, origin: int = PROGRAM_START) -> List[str]:
    return [f"0x{addr:04X}: {instr}" for addr, instr in iter_instructions(rom, origin)]
