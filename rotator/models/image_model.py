"""Модели данных для изображений и пакетной обработки.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import numpy as np

CHANNELS = 4  # RGBA, 8 бит на канал


@dataclass(frozen=True, eq=False)
class Raster:
    """Неизменяемый растр RGBA в памяти.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pixels: Массив `uint8` формы (height, width, 4), построчно (row-major).

    Длина буфера всегда равна width * height * 4, шаг строки width * 4 байт.
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Отрицательный размер растра: {self.width}x{self.height}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Ожидался буфер uint8, получен {self.pixels.dtype}")
        if self.pixels.shape != (self.height, self.width, CHANNELS):
            raise ValueError(
                f"Форма буфера {self.pixels.shape} не соответствует {self.width}x{self.height}x{CHANNELS}"
            )

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "Raster":
        """Строит растр из плоского буфера RGBA длиной width * height * 4."""
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise ValueError(f"Длина буфера {len(data)} != {expected}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, CHANNELS).copy()
        return cls(width=width, height=height, pixels=pixels)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    # буфер изменяемый, растр не хешируется
    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class FileTask:
    """Единица параллельной работы: входной и выходной путь."""
    input_path: Path
    output_path: Path

    @property
    def name(self) -> str:
        return self.input_path.name


@dataclass(frozen=True)
class FailedItem:
    """Файл, обработка которого завершилась ошибкой."""
    path: Path
    error_kind: str
    message: str = field(default="", compare=False)


@dataclass
class BatchReport:
    """Итог запуска: всего задач, успешных и список неудач.

    Fields:
        total: Число запущенных задач.
        succeeded: Число успешно обработанных файлов.
        failures: Неудачи, отсортированные по пути.
        duration: Длительность, сек. (информативно, не участвует в сравнении).
    """
    total: int = 0
    succeeded: int = 0
    failures: List[FailedItem] = field(default_factory=list)
    duration: float = field(default=0.0, compare=False)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        lines = [f"Processed {self.total} files: {self.succeeded} succeeded, {self.failed} failed."]
        for item in self.failures:
            lines.append(f"  {item.path.name}: {item.error_kind} ({item.message})")
        return "\n".join(lines)
