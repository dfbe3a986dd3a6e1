"""Quirk toggles and run options."""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, auto

from .errors import ConfigError


class QuirkMode(Enum):
    """CHIP-8 interpreter quirk modes for compatibility"""
    CLASSIC = auto()          # Every quirk off
    COSMAC_VIP = auto()       # Original COSMAC VIP behavior
    CHIP48 = auto()           # CHIP-48 (HP48) behavior
    SUPERCHIP_MODERN = auto() # Modern SUPER-CHIP
    XO_CHIP = auto()          # XO-CHIP extended


@dataclass(frozen=True)
class Quirks:
    """
    Behavioral toggles, fixed for the lifetime of a machine.

    Each one selects between two historically divergent behaviors:

    - vf_reset: 8XY1/2/3 zero VF afterwards
    - shifting: 8XY6/8XYE copy Vy into Vx before shifting
    - jumping:  BNNN adds the register named by the top nibble of NNN, not V0
    - wrap:     sprites wrap around the screen edges instead of clipping
    - memory:   FX55/FX65 advance I past the last register transferred
    """
    vf_reset: bool = False
    shifting: bool = False
    jumping: bool = False
    wrap: bool = False
    memory: bool = False

    @classmethod
    def for_mode(cls, mode: QuirkMode) -> "Quirks":
        return _PRESETS[mode]

    def replace(self, **changes) -> "Quirks":
        """Return a copy with some toggles changed"""
        return dataclasses.replace(self, **changes)


_PRESETS = {
    QuirkMode.CLASSIC: Quirks(),
    QuirkMode.COSMAC_VIP: Quirks(vf_reset=True, shifting=True, memory=True),
    QuirkMode.CHIP48: Quirks(jumping=True),
    QuirkMode.SUPERCHIP_MODERN: Quirks(jumping=True),
    QuirkMode.XO_CHIP: Quirks(shifting=True, wrap=True, memory=True),
}


@dataclass
class EmulatorConfig:
    """Emulator configuration settings"""
    # Timing
    fps: int = 60                 # Frames per second (timer rate)
    ipf: int = 10                 # Instructions per frame

    # Display
    scale: int = 10
    fg: int = 0xFFFFFFFF          # RGBA8888
    bg: int = 0x00000000          # RGBA8888
    display_wait: bool = False    # At most one DXYN per frame

    # Audio
    pitch: int = 440              # Buzzer pitch in Hz

    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self):
        if self.fps < 1:
            raise ConfigError(f"fps must be at least 1, got {self.fps}")
        if self.ipf < 1:
            raise ConfigError(f"ipf must be at least 1, got {self.ipf}")
        if self.scale < 1:
            raise ConfigError(f"scale must be at least 1, got {self.scale}")
        if not 20 <= self.pitch <= 10_000:
            raise ConfigError(f"pitch must be between 20 and 10000 Hz, got {self.pitch}")
        for name in ("fg", "bg"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFFFFFF:
                raise ConfigError(f"{name} is not a valid RGBA8888 color: {value:#x}")


def parse_color(text: str) -> int:
    """
    Parse an RGBA8888 color.

    Both "#" and "0x" are accepted as optional prefixes. The value is read
    as hexadecimal first and, failing that, as decimal.
    """
    stripped = text.strip()
    if stripped.startswith("#"):
        stripped = stripped[1:]
    elif stripped.lower().startswith("0x"):
        stripped = stripped[2:]

    # A hex reading that overflows 32 bits falls back to decimal
    for base in (16, 10):
        try:
            value = int(stripped, base)
        except ValueError:
            continue
        if 0 <= value <= 0xFFFFFFFF:
            return value
    raise ValueError(f"{text} is not a valid color in RGBA8888 format")


def color_to_rgb(value: int) -> bytes:
    """RGB bytes of an RGBA8888 color (alpha dropped)"""
    return bytes([(value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF])


def color_to_hex(value: int) -> str:
    """Tk color string of an RGBA8888 color"""
    return "#" + color_to_rgb(value).hex().upper()
