"""16-key hex keypad with the key-release wait used by FX0A."""

import logging
from enum import Enum, auto
from typing import List, Optional

from .constants import NUM_KEYS
from .errors import InvalidKeyError

logger = logging.getLogger(__name__)


class KeyWait(Enum):
    IDLE = auto()
    ARMED = auto()


class Keypad:
    """
    Key states plus a two-state wait machine.

    IDLE  --poll-->              ARMED
    ARMED --poll, no release-->  ARMED
    ARMED --poll after release-> IDLE (the released key is handed out)

    `released_key` is only ever set while ARMED and is cleared together
    with the return to IDLE.
    """

    def __init__(self):
        self.keys: List[bool] = [False] * NUM_KEYS
        self.state = KeyWait.IDLE
        self.released_key: Optional[int] = None

    @property
    def waiting(self) -> bool:
        return self.state is KeyWait.ARMED

    @staticmethod
    def _check(key: int):
        if not 0 <= key < NUM_KEYS:
            raise InvalidKeyError(f"invalid key index: {key}")

    def press(self, key: int):
        """Handle key press event"""
        self._check(key)
        self.keys[key] = True

    def release(self, key: int):
        """Handle key release event; the first release while armed is kept"""
        self._check(key)
        self.keys[key] = False
        if self.state is KeyWait.ARMED and self.released_key is None:
            logger.debug("Key %X released while waiting", key)
            self.released_key = key

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self.keys[key]

    def poll_release(self) -> Optional[int]:
        """
        Advance the wait machine by one step.

        Returns the released key once one has been captured, else None.
        """
        if self.state is KeyWait.IDLE:
            logger.debug("Waiting for key release")
            self.state = KeyWait.ARMED
            return None

        if self.released_key is None:
            return None

        key = self.released_key
        self.released_key = None
        self.state = KeyWait.IDLE
        return key

    def reset(self):
        self.keys = [False] * NUM_KEYS
        self.state = KeyWait.IDLE
        self.released_key = None
