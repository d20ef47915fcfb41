"""Progress and summary output to the host status bar and console."""
from __future__ import annotations

import logging

from beamoffsets.config import FixOptions, PROGRESS_STEP_PERCENT
from beamoffsets.host.base import ElementHost

logger = logging.getLogger(__name__)


class Reporter:
    def __init__(self, host: ElementHost, options: FixOptions) -> None:
        self.host = host
        self.options = options
        self._last_percent = -1

    def status(self, text: str) -> None:
        """Transient status message only."""
        self.host.user_message(text)

    def line(self, text: str) -> None:
        """Console line, suppressed in quiet mode."""
        logger.info(text)
        if not self.options.quiet:
            self.host.console(text)

    def both(self, text: str) -> None:
        self.line(text)
        self.status(text)

    def progress(self, label: str, done: int, total: int) -> None:
        """Status message each time another PROGRESS_STEP_PERCENT is reached."""
        percent = (done * 100) // total
        if percent != self._last_percent and percent % PROGRESS_STEP_PERCENT == 0:
            self.status(f"{label}: {percent}% ({done}/{total})")
            self._last_percent = percent

    def element_error(self, action: str, elem_id: int, error: Exception) -> None:
        logger.debug(f"Error {action} element {elem_id}: {error}")
        if self.options.debug:
            self.host.console(f"Error {action} element {elem_id}: {error}")
