"""Контроллер пакетной обработки: перечисление файлов, пул потоков, отчёт.

SOLID:
- SRP: класс управляет потоком задач, не зная деталей кодеков и геометрии.
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются снаружи.
Clean Code:
- Ошибка одного файла ловится на границе задачи и попадает в отчёт.
"""
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rotator.config import default_workers
from rotator.errors import DirectoryAccessError, OutputDirError, TaskError
from rotator.models.image_model import BatchReport, FailedItem, FileTask
from rotator.services.image_service import ImageService
from rotator.services.process_service import ProcessService
from rotator.services.progress_service import ProgressSink, ProgressState

logger = logging.getLogger(__name__)


@dataclass
class BatchController:
    """Поворачивает все файлы каталога на пуле из `workers` потоков.

    Ответственности:
    - Проверка входного каталога и создание выходного (фатальные ошибки).
    - Построение `FileTask` на каждый обычный файл.
    - Параллельное выполнение decode -> rotate -> encode.
    - Обновление прогресса и сборка `BatchReport`.
    """
    workers: int = field(default_factory=default_workers)
    sink: Optional[ProgressSink] = None

    _image_service: ImageService = field(default_factory=ImageService)
    _process_service: ProcessService = field(default_factory=ProcessService)

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers должно быть >= 1, получено {self.workers}")

    def run(self, input_dir: str | Path, output_dir: str | Path) -> BatchReport:
        """Обрабатывает каталог и возвращает отчёт.

        Raises:
            DirectoryAccessError: входной каталог отсутствует или не читается.
            OutputDirError: выходной каталог нельзя создать.
        """
        started = time.monotonic()
        input_path = Path(input_dir)
        output_path = Path(output_dir)

        inputs = self.list_input_files(input_path)
        self.ensure_output_dir(output_path)
        tasks = [FileTask(input_path=p, output_path=output_path / p.name) for p in inputs]
        logger.info("Rotating %d files from %s with %d workers", len(tasks), input_path, self.workers)

        progress = ProgressState(total=len(tasks), sink=self.sink)
        failures: List[FailedItem] = []
        try:
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="rotator") as executor:
                results = list(executor.map(lambda t: self._process_task(t, progress), tasks))
        finally:
            progress.close()

        for failure in results:
            if failure is not None:
                failures.append(failure)
        failures.sort(key=lambda item: str(item.path))

        report = BatchReport(
            total=len(tasks),
            succeeded=len(tasks) - len(failures),
            failures=failures,
            duration=time.monotonic() - started,
        )
        logger.info(
            "Batch finished: %d succeeded, %d failed in %.2fs", report.succeeded, report.failed, report.duration
        )
        return report

    # ---- Helpers ----
    def list_input_files(self, input_dir: Path) -> List[Path]:
        """Обычные файлы каталога (без рекурсии), отсортированные по имени."""
        if not input_dir.is_dir():
            raise DirectoryAccessError(f"Входной каталог не найден: {input_dir}", input_dir)
        try:
            entries = list(os.scandir(input_dir))
        except OSError as exc:
            raise DirectoryAccessError(f"Не удалось прочитать каталог {input_dir}: {exc}", input_dir) from exc

        files: List[Path] = []
        for entry in entries:
            try:
                if entry.is_file():
                    files.append(Path(entry.path))
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry.path, exc)
        files.sort(key=lambda p: p.name)
        return files

    def ensure_output_dir(self, output_dir: Path) -> None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirError(f"Не удалось создать выходной каталог {output_dir}: {exc}", output_dir) from exc
        if not os.access(output_dir, os.W_OK | os.X_OK):
            raise OutputDirError(f"Нет прав на запись в {output_dir}", output_dir)

    def _process_task(self, task: FileTask, progress: ProgressState) -> Optional[FailedItem]:
        progress.set_current(task.name)
        try:
            raster = self._image_service.decode(task.input_path)
            rotated = self._process_service.rotate_clockwise_90(raster)
            self._image_service.encode(rotated, task.output_path)
        except TaskError as exc:
            logger.warning("Failed to process %s: %s: %s", task.name, exc.kind, exc)
            return FailedItem(path=task.input_path, error_kind=exc.kind, message=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while processing %s", task.name)
            return FailedItem(path=task.input_path, error_kind=type(exc).__name__, message=str(exc))
        else:
            logger.debug("Rotated %s -> %s", task.input_path, task.output_path)
            return None
        finally:
            progress.task_done()
