import dataclasses

import pytest

from catchip8.config import (
    EmulatorConfig, QuirkMode, Quirks, color_to_hex, color_to_rgb, parse_color,
)
from catchip8.errors import ConfigError


class TestQuirks:
    def test_defaults_are_classic(self):
        assert Quirks() == Quirks.for_mode(QuirkMode.CLASSIC)
        assert not any(dataclasses.astuple(Quirks()))

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Quirks().wrap = True

    def test_replace_returns_copy(self):
        base = Quirks()
        changed = base.replace(wrap=True)
        assert changed.wrap
        assert not base.wrap

    def test_vip_preset(self):
        vip = Quirks.for_mode(QuirkMode.COSMAC_VIP)
        assert vip.vf_reset and vip.shifting and vip.memory
        assert not vip.jumping and not vip.wrap

    def test_every_mode_has_a_preset(self):
        for mode in QuirkMode:
            assert isinstance(Quirks.for_mode(mode), Quirks)


class TestEmulatorConfig:
    def test_defaults(self):
        config = EmulatorConfig()
        assert (config.fps, config.ipf, config.scale, config.pitch) == (60, 10, 10, 440)
        assert config.fg == 0xFFFFFFFF
        assert not config.display_wait

    @pytest.mark.parametrize("kwargs", [
        {"fps": 0}, {"ipf": 0}, {"scale": 0}, {"pitch": 19}, {"pitch": 10_001},
        {"fg": -1}, {"bg": 0x1_0000_0000},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            EmulatorConfig(**kwargs)


class TestColors:
    @pytest.mark.parametrize("text, value", [
        ("#FF0A2B1D", 0xFF0A2B1D),
        ("0xFF0A2B1D", 0xFF0A2B1D),
        ("FFFFFFFF", 0xFFFFFFFF),
        ("0x000000", 0),
        ("12", 0x12),
        ("4000000000", 4000000000),
    ])
    def test_parse(self, text, value):
        assert parse_color(text) == value

    @pytest.mark.parametrize("text", ["", "zz", "#GG0000", "1FFFFFFFF", "5000000000"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            parse_color(text)

    def test_conversions(self):
        assert color_to_rgb(0xFF0A2B1D) == b"\xff\x0a\x2b"
        assert color_to_hex(0xFF0A2B1D) == "#FF0A2B"
