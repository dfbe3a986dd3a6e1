"""Square-wave buzzer driven by the sound timer."""

import logging
from array import array
from typing import Optional

import pygame

from .constants import AUDIO_SAMPLE_RATE, AUDIO_VOLUME

logger = logging.getLogger(__name__)


class Chip8Audio:
    """Plays a tone for as long as the sound timer is non-zero"""

    def __init__(self, pitch: int = 440):
        self.pitch = pitch
        self.is_beeping = False
        self._sound: Optional[pygame.mixer.Sound] = None

        try:
            pygame.mixer.init(frequency=AUDIO_SAMPLE_RATE, size=-16, channels=1)
            frequency, _, channels = pygame.mixer.get_init()
            self._sound = pygame.mixer.Sound(buffer=self._square_wave(frequency, channels))
        except pygame.error as e:
            logger.warning("Audio unavailable, running silent: %s", e)

    def _square_wave(self, frequency: int, channels: int) -> bytes:
        """One period of a 16-bit square wave, repeated up to ~0.1 s"""
        period = max(2, round(frequency / self.pitch))
        amplitude = int(32767 * AUDIO_VOLUME)
        half = period // 2
        cycle = [amplitude] * half + [-amplitude] * (period - half)
        samples = array('h')
        for _ in range(max(1, frequency // 10 // period)):
            for value in cycle:
                samples.extend([value] * channels)
        return samples.tobytes()

    def start_beep(self):
        if not self.is_beeping:
            self.is_beeping = True
            if self._sound is not None:
                self._sound.play(loops=-1)

    def stop_beep(self):
        if self.is_beeping:
            self.is_beeping = False
            if self._sound is not None:
                self._sound.stop()

    def update(self, sound_active: bool):
        """Start or stop the tone to follow the sound timer"""
        if sound_active and not self.is_beeping:
            self.start_beep()
        elif not sound_active and self.is_beeping:
            self.stop_beep()

    def close(self):
        self.stop_beep()
        if self._sound is not None:
            pygame.mixer.quit()
