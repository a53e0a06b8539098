from __future__ import annotations

import sys
from typing import IO, Optional

from tqdm import tqdm


class TqdmProgressSink:
    """Терминальный прогресс: счётчик файлов и строка статуса под ним."""

    def __init__(self, stream: Optional[IO[str]] = None, disable: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._disable = disable
        self._bar: Optional[tqdm] = None
        self._status: Optional[tqdm] = None

    def start(self, total: int) -> None:
        # counter bar
        self._bar = tqdm(
            total=total,
            unit="file",
            desc="files processed",
            bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}] {postfix}",
            ascii=" ->#",
            file=self._stream,
            position=0,
            leave=True,
            disable=self._disable,
        )
        # status line, text only
        self._status = tqdm(
            total=0,
            bar_format="{desc}",
            desc="Processing images...",
            file=self._stream,
            position=1,
            leave=True,
            disable=self._disable,
        )

    def advance(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def set_message(self, text: str) -> None:
        if self._status is not None:
            self._status.set_description_str(text)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.set_postfix_str("All files processed.")
            self._bar.close()
            self._bar = None
        if self._status is not None:
            self._status.set_description_str("Processing complete.")
            self._status.close()
            self._status = None
