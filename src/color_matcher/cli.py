"""コマンドラインインターフェース。

    color-matcher compare "#FF0000" 200,30,40
    color-matcher convert 12,200,90
    color-matcher sample photo.jpg
    color-matcher read --seed 1
    color-matcher gui
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from color_matcher.application.sensor_service import SensorService
from color_matcher.config import Config, validate_config
from color_matcher.domain.color import RGB, nearest_named_color
from color_matcher.domain.comparison import ColorComparison
from color_matcher.domain.conversion import rgb_to_lab
from color_matcher.errors import ColorMatcherError, ConfigError, InvalidColorError
from color_matcher.infrastructure.image_io import DEFAULT_MAX_SAMPLES, sample_image_color
from color_matcher.infrastructure.stub_sensor import StubSensorReader

logger = logging.getLogger(__name__)

COMMANDS = ("compare", "convert", "sample", "read", "gui")


class _ArgumentParser(argparse.ArgumentParser):
    """エラー時に終了せず ConfigError を送出する ArgumentParser。"""

    def error(self, message: str) -> NoReturn:
        raise ConfigError(f"{message}\n{self.format_usage().strip()}")


def parse_color_arg(text: str) -> RGB:
    """"#RRGGBB" / "RRGGBB" / "r,g,b" 形式の色指定をパース。"""
    if "," in text:
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 3:
            raise InvalidColorError(f"Expected r,g,b but got {text!r}")
        try:
            r, g, b = (int(p) for p in parts)
        except ValueError as exc:
            raise InvalidColorError(f"Invalid RGB channels: {text!r}") from exc
        return RGB(r, g, b)
    return RGB.from_hex(text)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="color-matcher",
        description="Compare a reference and a sample color in CIE L*a*b*.",
    )
    parser.add_argument("--projects-dir", help="directory for project JSON files")
    parser.add_argument("--log-level", help="logging level (default: WARNING)")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")

    sub = parser.add_subparsers(dest="command")

    compare = sub.add_parser("compare", help="compare two colors")
    compare.add_argument("reference", help="reference color (#RRGGBB or r,g,b)")
    compare.add_argument("sample", help="sample color (#RRGGBB or r,g,b)")

    convert = sub.add_parser("convert", help="show LAB and hex for a color")
    convert.add_argument("color", help="color (#RRGGBB or r,g,b)")

    sample = sub.add_parser("sample", help="average color of an image file")
    sample.add_argument("image", help="image file path")
    sample.add_argument(
        "--max-samples", type=int, default=DEFAULT_MAX_SAMPLES,
        help=f"approximate number of pixels to sample (default: {DEFAULT_MAX_SAMPLES})",
    )

    read = sub.add_parser("read", help="take a reading from the stub sensor")
    read.add_argument("--seed", type=int, help="random seed for the stub sensor")
    read.add_argument("--min-quality", type=int, help="minimum quality score (0-100)")
    read.add_argument("--retries", type=int, help="maximum number of attempts")

    sub.add_parser("gui", help="launch the desktop application (default)")
    return parser


def parse_args(argv: Sequence[str]) -> tuple[Config, argparse.Namespace]:
    """引数をパースして設定とコマンド引数を返す。

    Raises:
        ConfigError: 引数・設定値が不正な場合
    """
    args = build_parser().parse_args(list(argv))
    if args.command is None:
        args.command = "gui"

    config = Config.from_env()
    if args.projects_dir is not None:
        config.projects_dir = args.projects_dir
    if args.log_level is not None:
        config.log_level = args.log_level.upper()
    config.debug = args.debug
    if args.command == "read":
        if args.seed is not None:
            config.sensor_seed = args.seed
        if args.min_quality is not None:
            config.sensor_min_quality = args.min_quality
        if args.retries is not None:
            config.sensor_max_retries = args.retries
    if args.command == "sample" and args.max_samples <= 0:
        raise ConfigError(f"max-samples must be positive, got {args.max_samples}")

    validate_config(config)
    return config, args


def configure_logging(config: Config) -> None:
    logging.basicConfig(level=config.effective_log_level, format="%(name)s: %(message)s")
    logging.getLogger("color_matcher").setLevel(config.effective_log_level)


def _describe(label: str, color: RGB) -> str:
    return f"{label:<10} {color.to_hex()}  {color}  {rgb_to_lab(color)}"


def run_compare(args: argparse.Namespace) -> int:
    reference = parse_color_arg(args.reference)
    sample = parse_color_arg(args.sample)
    comparison = ColorComparison.from_rgb(reference, sample)
    print(_describe("Reference:", reference))
    print(_describe("Sample:", sample))
    print(f"Delta E:   {comparison.delta_e:.2f} ({comparison.band.value})")
    print(f"Recommendation: {comparison.recommendation}")
    return 0


def run_convert(args: argparse.Namespace) -> int:
    color = parse_color_arg(args.color)
    name, _ = nearest_named_color(color)
    print(f"RGB:  {color}")
    print(f"Hex:  {color.to_hex()}")
    print(f"LAB:  {rgb_to_lab(color)}")
    print(f"Name: {name}")
    return 0


def run_sample(args: argparse.Namespace) -> int:
    color = sample_image_color(args.image, args.max_samples)
    name, _ = nearest_named_color(color)
    print(f"Average: {color.to_hex()}  {color}  (nearest: {name})")
    return 0


def run_read(config: Config) -> int:
    with StubSensorReader(seed=config.sensor_seed) as reader:
        service = SensorService(reader, config)
        service.connect()
        reading = service.read_sample()
        print(f"Device:  {reader.device_name} ({reader.device_id})")
        print(_describe("Reading:", reading.rgb_color))
        print(f"Quality: {reading.quality_score}")
    return 0


def run_gui(config: Config) -> int:
    # PyQt6 は GUI 起動時のみ読み込む
    from color_matcher.presentation.app import run

    return run(config)


def main(argv: Sequence[str] | None = None) -> int:
    """エントリーポイント。

    Args:
        argv: プログラム名を除いたコマンドライン引数（None なら sys.argv）

    Returns:
        終了コード (0: 成功, 1: エラー)
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        config, args = parse_args(argv)
        configure_logging(config)
        logger.debug("Running command %s", args.command)
        if args.command == "compare":
            return run_compare(args)
        if args.command == "convert":
            return run_convert(args)
        if args.command == "sample":
            return run_sample(args)
        if args.command == "read":
            return run_read(config)
        return run_gui(config)
    except ColorMatcherError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
