from catchip8.cli import build_parser, config_from_args, main
from catchip8.config import QuirkMode, Quirks


class TestArguments:
    def test_defaults(self):
        args = build_parser().parse_args(["game.ch8"])
        config = config_from_args(args)
        assert (config.fps, config.ipf, config.scale, config.pitch) == (60, 10, 10, 440)
        assert config.fg == 0xFFFFFFFF
        assert config.bg == 0
        assert config.quirks == Quirks()

    def test_preset_plus_flags(self):
        args = build_parser().parse_args(["game.ch8", "--quirks", "chip48", "--wrap"])
        quirks = config_from_args(args).quirks
        assert quirks == Quirks.for_mode(QuirkMode.CHIP48).replace(wrap=True)

    def test_colors_and_timing(self):
        args = build_parser().parse_args(
            ["game.ch8", "-c", "#FF0000FF", "-b", "0x00FF00FF", "-f", "30", "-i", "20", "-d"])
        config = config_from_args(args)
        assert config.fg == 0xFF0000FF
        assert config.bg == 0x00FF00FF
        assert (config.fps, config.ipf) == (30, 20)
        assert config.display_wait


class TestMain:
    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.ch8")]) == 1

    def test_empty_file(self, tmp_path):
        rom = tmp_path / "empty.ch8"
        rom.write_bytes(b"")
        assert main([str(rom)]) == 1

    def test_rom_too_large(self, tmp_path):
        rom = tmp_path / "huge.ch8"
        rom.write_bytes(bytes(4096))
        assert main([str(rom)]) == 1

    def test_disasm_only(self, tmp_path, capsys):
        rom = tmp_path / "tiny.ch8"
        rom.write_bytes(bytes([0x00, 0xE0, 0x12, 0x00]))
        assert main([str(rom), "--disasm-only"]) == 0
        assert capsys.readouterr().out.splitlines() == ["0x0200: CLS  ", "0x0202: JMP   0x200"]
