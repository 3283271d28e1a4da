from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

One bar per upload, advanced once per create call. In non-TTY environments
(CI, piped output) no bar is created so the labeled log lines stay clean.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Row progress for one batch import."""

    def __init__(self, total_rows: int, *, description: str = "Importing rows") -> None:
        """Initialize progress tracker.

        Args:
            total_rows: Number of rows the batch will attempt at most
            description: Description for the progress bar
        """
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0
        self.failed = False

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, success: bool = True) -> None:
        """Record one finished create call."""
        self.current_row += 1
        if not success:
            self.failed = True
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            if not success:
                self.pbar.set_description(f"{self.description} (stopped at row {self.current_row})")

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
