from __future__ import annotations

from typing import Optional

from rotator.config import RotatorConfig
from rotator.controllers.batch_controller import BatchController
from rotator.logging_config import setup_logging
from rotator.models.image_model import BatchReport
from rotator.services.progress_service import NullProgressSink, ProgressSink
from rotator.ui.progress_bar import TqdmProgressSink


class RotatorApp:
    def __init__(self, config: RotatorConfig, sink: Optional[ProgressSink] = None) -> None:
        self.config = config
        setup_logging(config.log_level)

        # explicit sink wins, otherwise terminal bar or nothing
        if sink is None:
            sink = TqdmProgressSink() if config.show_progress else NullProgressSink()
        self._controller = BatchController(workers=config.workers, sink=sink)

    def run(self) -> BatchReport:
        return self._controller.run(self.config.input_dir, self.config.output_dir)
