import pytest

from catchip8.config import EmulatorConfig
from catchip8.emulator import Emulator
from catchip8.errors import StackUnderflowError


def assemble(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)


class TestRunFrame:
    def test_runs_instructions_per_frame(self):
        emu = Emulator(assemble(0x7001, 0x1200), EmulatorConfig(ipf=10))
        assert emu.run_frame() == 10
        assert emu.cpu.v[0] == 5
        assert emu.frames == 1

    def test_timers_tick_once_per_frame(self):
        emu = Emulator(assemble(0x6005, 0xF015, 0xF018, 0x1206), EmulatorConfig(ipf=4))
        emu.run_frame()
        assert emu.cpu.delay_timer == 4
        assert emu.cpu.sound_timer == 4
        assert emu.sound_active

    def test_display_wait_stops_after_draw(self):
        rom = assemble(0xD000, 0x1200)
        assert Emulator(rom, EmulatorConfig(display_wait=True)).run_frame() == 1
        assert Emulator(rom, EmulatorConfig(display_wait=False)).run_frame() == 10

    def test_speed_multiplier(self):
        emu = Emulator(assemble(0x1200), EmulatorConfig(ipf=3))
        emu.speed_multiplier = 4
        assert emu.run_frame() == 12

    def test_fault_skips_timer_tick(self):
        emu = Emulator(assemble(0x00EE))
        emu.cpu.delay_timer = 3
        with pytest.raises(StackUnderflowError):
            emu.run_frame()
        assert emu.cpu.delay_timer == 3

    def test_key_events_reach_keypad(self):
        emu = Emulator(assemble(0xF10A))
        emu.run_frame()
        emu.key_down(0xB)
        emu.key_up(0xB)
        emu.run_frame()
        assert emu.cpu.v[1] == 0xB


class TestOutput:
    def test_pixels_use_configured_colors(self):
        emu = Emulator(assemble(0xA000, 0xD001, 0x1204),
                       EmulatorConfig(fg=0x11223344, bg=0xAABBCCDD, ipf=2))
        emu.run_frame()
        data = emu.pixels()
        assert len(data) == 64 * 32 * 3
        assert data[:3] == b"\x11\x22\x33"
        assert data[4 * 3:5 * 3] == b"\xaa\xbb\xcc"

    def test_reset(self):
        emu = Emulator(assemble(0x7001, 0x1200))
        emu.run_frame()
        emu.reset()
        assert emu.cpu.v[0] == 0
        assert emu.frames == 0
