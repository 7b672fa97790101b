#!/usr/bin/env python3
"""User-facing notifications for code-pusher."""

import sys
from typing import Optional, TextIO

from utils.logger import get_logger

logger = get_logger(__name__)


class Notifier:
    """Shows notices to the user and mirrors them into the log."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        """Initialize notifier.

        Args:
            out: Stream for informational notices (default: stdout)
            err: Stream for error notices (default: stderr)
        """
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def info(self, message: str) -> None:
        logger.debug(f"notice: {message}")
        print(message, file=self.out, flush=True)

    def error(self, message: str) -> None:
        logger.debug(f"error notice: {message}")
        print(message, file=self.err, flush=True)

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question.

        Only an explicit 'y' or 'yes' counts as agreement.

        Args:
            question: Prompt text

        Returns:
            True if user confirms
        """
        print(question, file=self.err, end=' ', flush=True)
        try:
            response = input().strip().lower()
            return response in ('y', 'yes')
        except (EOFError, KeyboardInterrupt):
            print(file=self.err)
            return False
