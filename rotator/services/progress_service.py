"""Состояние прогресса, общее для всех рабочих потоков.

Принципы:
- Каждое обновление (инкремент счётчика или смена метки) атомарно под одной блокировкой,
  которая удерживается только на время этого обновления.
- Приёмник (`ProgressSink`) только отображает события и не влияет на результат.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    def start(self, total: int) -> None: ...

    def advance(self) -> None: ...

    def set_message(self, text: str) -> None: ...

    def close(self) -> None: ...


class NullProgressSink:
    """Приёмник, который ничего не отображает."""

    def start(self, total: int) -> None:
        pass

    def advance(self) -> None:
        pass

    def set_message(self, text: str) -> None:
        pass

    def close(self) -> None:
        pass


class ProgressState:
    """Счётчики выполненных задач и метка текущего файла.

    `completed` растёт ровно на 1 за каждую завершённую задачу и не превышает `total`.
    """

    def __init__(self, total: int, sink: Optional[ProgressSink] = None) -> None:
        if total < 0:
            raise ValueError(f"total не может быть отрицательным: {total}")
        self._lock = threading.Lock()
        self._total = total
        self._completed = 0
        self._label = ""
        self._sink: ProgressSink = sink if sink is not None else NullProgressSink()
        self._notify(self._sink.start, total)

    @property
    def total(self) -> int:
        return self._total

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def label(self) -> str:
        with self._lock:
            return self._label

    def snapshot(self) -> Tuple[int, int, str]:
        with self._lock:
            return self._completed, self._total, self._label

    def set_current(self, name: str) -> None:
        """Событие «сейчас обрабатывается <name>»."""
        with self._lock:
            self._label = name
            self._notify(self._sink.set_message, f"Processing {name}")

    def task_done(self) -> int:
        """Событие «задача завершена»; возвращает новое значение счётчика."""
        with self._lock:
            if self._completed >= self._total:
                raise RuntimeError("Завершено больше задач, чем запущено")
            self._completed += 1
            self._notify(self._sink.advance)
            return self._completed

    def close(self) -> None:
        with self._lock:
            self._notify(self._sink.close)

    def _notify(self, callback: Callable[..., Any], *args: Any) -> None:
        # sink failures never reach the counters or the caller
        try:
            callback(*args)
        except Exception:  # noqa: BLE001
            logger.exception("Progress sink %s failed", getattr(callback, "__name__", callback))
