"""Иерархия ошибок пакетного поворота.

Принципы:
- Фатальные ошибки (уровень каталогов) прерывают весь запуск до старта задач.
- Ошибки задачи (`TaskError`) локальны: фиксируются в отчёте, пакет продолжается.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class RotatorError(Exception):
    """Базовая ошибка приложения; хранит путь, к которому она относится."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path

    @property
    def kind(self) -> str:
        return type(self).__name__


# ---- Fatal ----
class DirectoryAccessError(RotatorError):
    """Входной каталог отсутствует или не читается."""


class OutputDirError(RotatorError):
    """Выходной каталог нельзя создать или использовать."""


# ---- Per-task ----
class TaskError(RotatorError):
    """Ошибка одного файла; не влияет на остальные задачи."""


class DecodeError(TaskError):
    """Файл не читается как изображение."""


class InvalidDimensions(TaskError):
    """Растр нулевой ширины или высоты."""


class EncodeError(TaskError):
    """Не удалось записать обработанный файл."""
