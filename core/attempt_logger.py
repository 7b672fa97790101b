#!/usr/bin/env python3
"""Plain-text attempt log for code-pusher."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Union

from utils.file_utils import append_to_file
from utils.logger import get_logger

logger = get_logger(__name__)

LOG_FILE_NAME = 'code-pusher.log'
SEPARATOR = '-' * 48


class Outcome(str, Enum):
    SUCCESS = 'Success'
    FAILED = 'Failed'


class AttemptKind(str, Enum):
    COMMIT = 'commit'
    PUSH = 'push'


@dataclass
class AttemptRecord:
    """One commit or push attempt, as written to the log."""
    outcome: Outcome
    message: str = ''
    affected_files: List[str] = field(default_factory=list)
    kind: AttemptKind = AttemptKind.COMMIT
    timestamp: datetime = field(default_factory=datetime.now)


def format_record(record: AttemptRecord) -> str:
    """Render a record in the log layout.

    Push records carry only the timestamp and status lines.

    Args:
        record: Attempt to render

    Returns:
        Entry text ending with the separator line and a newline
    """
    lines = [
        f"Date/Time: {record.timestamp.strftime('%c')}",
        f"Status: {record.outcome.value}",
    ]
    if record.kind == AttemptKind.COMMIT:
        lines.append(f"Commit Message: {record.message}")
        lines.append("Files Changed:")
        if record.affected_files:
            lines.extend(record.affected_files)
        else:
            lines.append("No files changed")
    lines.append(SEPARATOR)
    return '\n'.join(lines) + '\n'


def log_path_for(log_dir: Union[str, Path]) -> Path:
    return Path(log_dir).expanduser() / LOG_FILE_NAME


def record_attempt(log_dir: Union[str, Path], record: AttemptRecord) -> Path:
    """Append one record to the attempt log in log_dir.

    log_dir must already exist.

    Args:
        log_dir: Directory holding code-pusher.log
        record: Attempt to record

    Returns:
        Path to the log file
    """
    log_path = log_path_for(log_dir)
    append_to_file(log_path, format_record(record))
    logger.debug(f"Recorded {record.kind.value} attempt ({record.outcome.value}) in {log_path}")
    return log_path
