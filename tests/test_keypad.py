"""Key states and the key-release wait machine."""

import pytest

from catchip8.errors import InvalidKeyError
from catchip8.keypad import KeyWait, Keypad


class TestKeyStates:
    def test_press_and_release(self):
        keypad = Keypad()
        keypad.press(0xA)
        assert keypad.is_pressed(0xA)
        keypad.release(0xA)
        assert not keypad.is_pressed(0xA)

    @pytest.mark.parametrize("key", [-1, 16, 255])
    def test_invalid_index(self, key):
        keypad = Keypad()
        with pytest.raises(InvalidKeyError):
            keypad.press(key)
        with pytest.raises(InvalidKeyError):
            keypad.release(key)
        with pytest.raises(InvalidKeyError):
            keypad.is_pressed(key)


class TestWaitMachine:
    def test_first_poll_arms(self):
        keypad = Keypad()
        assert keypad.poll_release() is None
        assert keypad.state is KeyWait.ARMED
        assert keypad.waiting

    def test_stays_armed_without_release(self):
        keypad = Keypad()
        keypad.poll_release()
        keypad.press(3)
        assert keypad.poll_release() is None
        assert keypad.waiting

    def test_release_while_armed_is_handed_out_once(self):
        keypad = Keypad()
        keypad.poll_release()
        keypad.press(3)
        keypad.release(3)
        assert keypad.released_key == 3
        assert keypad.poll_release() == 3
        assert keypad.state is KeyWait.IDLE
        assert keypad.released_key is None

    def test_release_while_idle_is_ignored(self):
        keypad = Keypad()
        keypad.press(5)
        keypad.release(5)
        assert keypad.released_key is None
        keypad.poll_release()
        assert keypad.poll_release() is None

    def test_first_release_wins(self):
        keypad = Keypad()
        keypad.poll_release()
        keypad.release(1)
        keypad.release(2)
        assert keypad.poll_release() == 1

    def test_reset(self):
        keypad = Keypad()
        keypad.press(1)
        keypad.poll_release()
        keypad.reset()
        assert not keypad.is_pressed(1)
        assert keypad.state is KeyWait.IDLE
