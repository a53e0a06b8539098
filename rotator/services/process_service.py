from __future__ import annotations

import numpy as np

from rotator.errors import InvalidDimensions
from rotator.models.image_model import CHANNELS, Raster


class ProcessService:
    def rotate_clockwise_90(self, raster: Raster) -> Raster:
        """
        Поворот на 90° по часовой стрелке.
        Пиксель (x, y) исходного растра переходит в (height - 1 - y, x) нового;
        ширина и высота меняются местами. Значения каналов копируются как есть.
        Возвращает новый растр, исходный не изменяется.
        """
        width, height = raster.width, raster.height
        if width < 1 or height < 1:
            raise InvalidDimensions(f"Растр нулевой площади: {width}x{height}")

        src = raster.pixels
        # Новый буфер: строк = width, столбцов = height
        out = np.empty((width, height, CHANNELS), dtype=np.uint8)

        # Векторизованная перестановка: каждая точка читается и пишется ровно один раз
        ys, xs = np.indices((height, width))
        out[xs, height - 1 - ys] = src[ys, xs]

        return Raster(width=height, height=width, pixels=out)


_default_service = ProcessService()


def rotate_clockwise_90(raster: Raster) -> Raster:
    return _default_service.rotate_clockwise_90(raster)
