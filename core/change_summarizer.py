#!/usr/bin/env python3
"""Commit message derivation for code-pusher."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List

from core.git_sync import GitSync, GitSyncError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MESSAGE = 'Code update'
MAX_NAMED_FILES = 3


@dataclass
class ChangeSet:
    """Changed paths plus git's size summary for one attempt."""
    files: List[str] = field(default_factory=list)
    size_summary: str = ''


def summarize_changes(change_set: ChangeSet) -> str:
    """Build a single-line commit message.

    Names the first three changed files by basename and appends the
    size summary in parentheses when there is one.

    Args:
        change_set: Files and size summary to describe

    Returns:
        Commit message, 'Code update' when no files are named
    """
    names = [
        PurePosixPath(path).name
        for path in [p for p in change_set.files if p][:MAX_NAMED_FILES]
    ]
    message = ', '.join(names) or DEFAULT_MESSAGE

    summary = (change_set.size_summary or '').replace('\r', '').replace('\n', '').strip()
    if summary:
        message += f" ({summary})"

    return message


def collect_change_set(git: GitSync, staged: bool = True) -> ChangeSet:
    """Ask git for the current changes.

    Never raises: a git failure gives an empty ChangeSet.

    Args:
        git: Git collaborator for the working tree
        staged: Describe the index rather than the working tree

    Returns:
        ChangeSet for the pending commit
    """
    try:
        return ChangeSet(
            files=git.changed_files(staged=staged),
            size_summary=git.short_stat(staged=staged)
        )
    except GitSyncError as e:
        logger.warning(f"Could not read change set, using default message: {e}")
        return ChangeSet()


def derive_commit_message(git: GitSync, staged: bool = True) -> str:
    """Commit message for the pending changes, 'Code update' on any git error."""
    return summarize_changes(collect_change_set(git, staged=staged))
