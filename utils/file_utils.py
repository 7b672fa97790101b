#!/usr/bin/env python3
"""File utilities for code-pusher."""

from pathlib import Path
from typing import Union
from utils.logger import get_logger

logger = get_logger(__name__)


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def append_to_file(file_path: Union[str, Path], content: str) -> None:
    """Append content to a file in a single write.

    The parent directory is not created here.

    Args:
        file_path: Path to file
        content: Content to append
    """
    file_path = Path(file_path)

    try:
        with open(file_path, 'a', encoding='utf-8') as f:
            f.write(content)

    except (IOError, OSError) as e:
        logger.error(f"Failed to append to file {file_path}: {e}")
        raise
