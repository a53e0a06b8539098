"""Настройки запуска пакетного поворота."""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_workers() -> int:
    """Число доступных аппаратных потоков (минимум 1)."""
    return os.cpu_count() or 1


@dataclass
class RotatorConfig:
    """Параметры одного запуска.

    Fields:
        input_dir: Каталог с исходными изображениями.
        output_dir: Каталог для результатов, создаётся при необходимости.
        workers: Размер пула потоков.
        show_progress: Показывать ли прогресс в терминале.
        log_level: Уровень логирования пакета `rotator`.
    """
    input_dir: Path
    output_dir: Path
    workers: int = field(default_factory=default_workers)
    show_progress: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        if self.workers < 1:
            raise ValueError(f"workers должно быть >= 1, получено {self.workers}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {self.log_level}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RotatorConfig":
        return cls(
            input_dir=Path(args.input),
            output_dir=Path(args.output),
            workers=args.workers if args.workers is not None else default_workers(),
            show_progress=not args.no_progress,
            log_level=args.log_level,
        )
