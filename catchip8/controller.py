"""Gamepad input mapped onto the hex keypad."""

import logging
from typing import Callable, Dict, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)


class Chip8Controller:
    """
    Controller input handler.

    poll() is called from the UI loop, so key changes reach the machine on
    the same thread that steps it.
    """

    # Controller button mappings for PS5/Atari style
    BUTTON_SQUARE = 0
    BUTTON_CIRCLE = 1
    BUTTON_CROSS = 2
    BUTTON_TRIANGLE = 3
    BUTTON_L1 = 4
    BUTTON_R1 = 5
    BUTTON_L2 = 6
    BUTTON_R2 = 7
    BUTTON_SHARE = 8
    BUTTON_OPTIONS = 9
    BUTTON_PS = 12
    BUTTON_TOUCHPAD = 13

    BUTTON_TO_KEY: Dict[int, int] = {
        BUTTON_CIRCLE: 0x1,
        BUTTON_SQUARE: 0x2,
        BUTTON_TRIANGLE: 0x3,
        BUTTON_CROSS: 0xC,
        BUTTON_L1: 0x4,
        BUTTON_R1: 0x5,
        BUTTON_L2: 0xD,
        BUTTON_R2: 0xE,
        BUTTON_SHARE: 0x7,
        BUTTON_OPTIONS: 0x8,
        BUTTON_PS: 0x9,
        BUTTON_TOUCHPAD: 0xA,
    }

    # D-Pad (as hat) to keypad arrows: 2=down, 4=left, 6=right, 8=up
    HAT_TO_KEY: Dict[Tuple[int, int], int] = {
        (0, 1): 0x8,
        (0, -1): 0x2,
        (-1, 0): 0x4,
        (1, 0): 0x6,
    }

    def __init__(self, on_key_change: Callable[[int, bool], None]):
        self.on_key_change = on_key_change
        self.joystick: Optional["pygame.joystick.JoystickType"] = None
        self.connected = False
        self.name = "None"
        self._held: Dict[int, bool] = {}
        self.enabled = True

        try:
            pygame.init()
            pygame.joystick.init()
        except pygame.error as e:
            logger.warning("Controller support disabled: %s", e)
            self.enabled = False

    def poll(self):
        """Check the connection and forward any button changes"""
        if not self.enabled:
            return
        try:
            pygame.event.pump()
            self._check_connection()
            if self.connected:
                self._process_input()
        except pygame.error as e:
            logger.warning("Controller polling failed: %s", e)
            self._disconnect()

    def _check_connection(self):
        joystick_count = pygame.joystick.get_count()

        if joystick_count > 0 and not self.connected:
            # Connect to first available controller
            self.joystick = pygame.joystick.Joystick(0)
            self.joystick.init()
            self.connected = True
            self.name = self.joystick.get_name()
            logger.info("Controller connected: %s", self.name)

        elif joystick_count == 0 and self.connected:
            logger.info("Controller disconnected")
            self._disconnect()

    def _disconnect(self):
        for key, held in self._held.items():
            if held:
                self.on_key_change(key, False)
        self._held.clear()
        self.connected = False
        self.joystick = None
        self.name = "None"

    def _process_input(self):
        """Diff the current button/hat state against the last poll"""
        pressed = {key: False for key in self._all_keys()}

        for button, key in self.BUTTON_TO_KEY.items():
            if button < self.joystick.get_numbuttons() and self.joystick.get_button(button):
                pressed[key] = True

        if self.joystick.get_numhats() > 0:
            hat_key = self.HAT_TO_KEY.get(self.joystick.get_hat(0))
            if hat_key is not None:
                pressed[hat_key] = True

        for key, down in pressed.items():
            if self._held.get(key, False) != down:
                self._held[key] = down
                self.on_key_change(key, down)

    def _all_keys(self):
        return set(self.BUTTON_TO_KEY.values()) | set(self.HAT_TO_KEY.values())
