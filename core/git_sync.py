#!/usr/bin/env python3
"""Git access for code-pusher."""

import subprocess
from pathlib import Path
from typing import List, Union
from utils.logger import get_logger

logger = get_logger(__name__)


class GitSyncError(Exception):
    """Raised when a git command fails or git is unavailable."""

    def __init__(self, args: List[str], detail: str):
        self.command = ' '.join(['git'] + args)
        self.detail = detail
        super().__init__(f"{self.command} failed: {detail}")


class GitSync:
    """Runs git commands against a single working tree."""

    def __init__(self, repo_root: Union[str, Path]):
        """Initialize git sync.

        Args:
            repo_root: Path to the working tree root
        """
        self.repo_root = Path(repo_root).expanduser()

    def _run(self, args: List[str]) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitSyncError: If git exits non-zero or cannot be started
        """
        logger.debug(f"git {' '.join(args)}")
        try:
            result = subprocess.run(
                ['git'] + args,
                cwd=self.repo_root,
                check=True,
                capture_output=True,
                text=True
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip() or (e.stdout or '').strip() or str(e)
            raise GitSyncError(args, detail) from e
        except FileNotFoundError as e:
            raise GitSyncError(args, "git is not installed or not found in PATH") from e
        return result.stdout

    def is_repository(self) -> bool:
        """Check for a .git entry at the working tree root."""
        return (self.repo_root / '.git').exists()

    def status(self) -> str:
        """Short status of the working tree, branch line included."""
        return self._run(['status', '--short', '--branch']).rstrip('\n')

    def has_changes(self) -> bool:
        """True if anything is modified, staged or untracked."""
        return bool(self._run(['status', '--porcelain']).strip())

    def changed_files(self, staged: bool = True) -> List[str]:
        """Changed file paths in the order git reports them.

        Args:
            staged: Compare the index instead of the working tree

        Returns:
            List of repository-relative paths
        """
        # Unquoted, so non-ASCII names come back as written
        args = ['-c', 'core.quotePath=false', 'diff', '--name-only']
        if staged:
            args.insert(3, '--cached')
        return [line for line in self._run(args).split('\n') if line]

    def short_stat(self, staged: bool = True) -> str:
        """One-line change-size summary, e.g. '2 files changed, 4 insertions(+)'."""
        args = ['diff', '--shortstat']
        if staged:
            args.insert(1, '--cached')
        return self._run(args)

    def stage_all(self) -> None:
        self._run(['add', '.'])

    def commit(self, message: str) -> None:
        self._run(['commit', '-m', message])

    def push(self, remote: str, branch: str) -> None:
        self._run(['push', remote, branch])
