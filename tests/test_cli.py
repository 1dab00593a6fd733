"""cli.py のテスト。"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from color_matcher.cli import main, parse_args, parse_color_arg
from color_matcher.domain.color import RGB
from color_matcher.errors import ConfigError, InvalidColorError


class TestParseColorArg:
    def test_hex(self) -> None:
        assert parse_color_arg("#102030") == RGB(16, 32, 48)

    def test_channels(self) -> None:
        assert parse_color_arg("255, 165,0") == RGB(255, 165, 0)

    @pytest.mark.parametrize("text", ["1,2", "1,2,3,4", "a,b,c", "300,0,0", "red"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidColorError):
            parse_color_arg(text)


class TestParseArgs:
    def test_default_command_is_gui(self) -> None:
        _, args = parse_args([])
        assert args.command == "gui"

    def test_global_options(self, tmp_path: Path) -> None:
        config, args = parse_args(
            ["--projects-dir", str(tmp_path), "--log-level", "info", "--debug", "convert", "#000000"]
        )
        assert args.command == "convert"
        assert config.projects_dir == str(tmp_path)
        assert config.log_level == "INFO"
        assert config.debug

    def test_read_options(self) -> None:
        config, _ = parse_args(["read", "--seed", "3", "--min-quality", "80", "--retries", "5"])
        assert config.sensor_seed == 3
        assert config.sensor_min_quality == 80
        assert config.sensor_max_retries == 5

    def test_invalid_quality(self) -> None:
        with pytest.raises(ConfigError):
            parse_args(["read", "--min-quality", "150"])

    def test_invalid_max_samples(self) -> None:
        with pytest.raises(ConfigError):
            parse_args(["sample", "x.png", "--max-samples", "0"])

    def test_unknown_command(self) -> None:
        with pytest.raises(ConfigError):
            parse_args(["paint"])


class TestMain:
    def test_compare_identical(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compare", "#336699", "51,102,153"]) == 0
        out = capsys.readouterr().out
        assert "Delta E:   0.00 (Imperceptible)" in out
        assert "Recommendation: Colors are very close" in out

    def test_compare_different(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compare", "#FF0000", "#00FF00"]) == 0
        out = capsys.readouterr().out
        assert "Obvious mismatch" in out
        assert "Add Red" in out

    def test_bad_color(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compare", "#GGGGGG", "#000000"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_convert(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["convert", "255,165,0"]) == 0
        out = capsys.readouterr().out
        assert "Hex:  #FFA500" in out
        assert "Name: Orange" in out

    def test_sample(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "swatch.png"
        Image.fromarray(np.full((8, 8, 3), (0, 0, 250), dtype=np.uint8)).save(path)
        assert main(["sample", str(path)]) == 0
        out = capsys.readouterr().out
        assert "#0000FA" in out
        assert "nearest: Blue" in out

    def test_sample_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["sample", str(tmp_path / "missing.png")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_read(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["read", "--seed", "3", "--min-quality", "0"]) == 0
        out = capsys.readouterr().out
        assert "NIX Mini 3 (Stub)" in out
        assert "Quality:" in out

    def test_usage_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compare", "#000000"]) == 1
        assert "usage:" in capsys.readouterr().err
