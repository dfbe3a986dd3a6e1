"""
Frame driver.

Runs the machine the way a display would: a batch of instructions, then a
single timer tick. Key events are delivered between frames by whoever owns
the event loop.
"""

import logging
from typing import Optional

from .config import EmulatorConfig, color_to_rgb
from .cpu import Chip8CPU
from .instruction import Op

logger = logging.getLogger(__name__)


class Emulator:
    """Chip8CPU plus the run options that pace it"""

    def __init__(self, rom: bytes, config: Optional[EmulatorConfig] = None, rng=None):
        self.config = config or EmulatorConfig()
        self.cpu = Chip8CPU(rom, self.config.quirks, rng=rng)
        self.speed_multiplier = 1
        self.frames = 0
        logger.info("Loaded %d byte ROM", len(rom))

    @property
    def instructions_per_frame(self) -> int:
        return self.config.ipf * self.speed_multiplier

    @property
    def sound_active(self) -> bool:
        return self.cpu.sound_timer > 0

    def run_frame(self) -> int:
        """
        Execute one frame's worth of instructions, then tick the timers.

        With display_wait set the batch ends after the first DXYN. Returns
        the number of instructions executed. Faults propagate; the timers
        are not ticked for a frame that faulted.
        """
        executed = 0
        for _ in range(self.instructions_per_frame):
            self.cpu.step()
            executed += 1
            if self.config.display_wait and self.cpu.last_instruction.op is Op.DRAW:
                break

        self.cpu.update_timers()
        self.frames += 1
        return executed

    def key_down(self, key: int):
        self.cpu.key_pressed(key)

    def key_up(self, key: int):
        self.cpu.key_released(key)

    def pixels(self) -> bytes:
        """RGB888 image of the screen in the configured colors"""
        return self.cpu.framebuffer.to_color_model(
            color_to_rgb(self.config.fg), color_to_rgb(self.config.bg))

    def reset(self):
        self.cpu.reset()
        self.frames = 0
