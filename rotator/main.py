"""Точка входа командной строки.

Код возврата: 0, если запуск завершился (даже с ошибками отдельных файлов);
1 при фатальной ошибке каталогов; 2 при ошибке аргументов (argparse).
"""
from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from rotator.app import RotatorApp
from rotator.config import LOG_LEVELS, RotatorConfig
from rotator.errors import DirectoryAccessError, OutputDirError

EXIT_OK = 0
EXIT_FATAL = 1

BANNER = "Image Processing - Parallel Processing with Thread Pool"


def _package_version() -> str:
    try:
        return version("batch-rotator")
    except PackageNotFoundError:
        return "unknown"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ожидалось целое число, получено {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"значение должно быть >= 1, получено {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rotator",
        description="Processes images by rotating them 90 degrees clockwise",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument(
        "-i", "--input", required=True, metavar="INPUT_DIRECTORY", help="Sets the input directory to use"
    )
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        metavar="OUTPUT_DIRECTORY",
        help="Sets the output directory to save processed images.",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of worker threads (default: available CPU cores)",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, запускает пакет и печатает сводку."""
    args = build_parser().parse_args(argv)
    config = RotatorConfig.from_args(args)

    print(BANNER)
    try:
        report = RotatorApp(config).run()
    except (DirectoryAccessError, OutputDirError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    print(report.summary())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
