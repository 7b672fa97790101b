#!/usr/bin/env python3
"""Periodic commit session for code-pusher.

A PusherSession owns the timer and the initialization state for one
working tree. Attempts never overlap: a periodic tick that fires while
another attempt is still running is skipped, and on-demand attempts
wait for the running one to finish.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.attempt_logger import AttemptRecord, log_path_for
from core.attempt_runner import AttemptRunner
from core.git_sync import GitSync
from utils.file_utils import ensure_directory
from utils.logger import get_logger
from utils.notifier import Notifier

logger = get_logger(__name__)


def resolve_log_dir(config: Dict[str, Any], repo_root: Union[str, Path]) -> Path:
    """Log directory for a working tree.

    Args:
        config: code-pusher configuration
        repo_root: Working tree root

    Returns:
        Configured log_dir, or a per-workspace subdirectory of it
    """
    log_dir = Path(config.get('log_dir', '~/.code-pusher')).expanduser()
    if config.get('log_per_workspace'):
        log_dir = log_dir / Path(repo_root).name
    return log_dir


class PusherSession:
    """Scheduler handle plus attempt state for one working tree."""

    def __init__(
        self,
        repo_root: Union[str, Path],
        config: Dict[str, Any],
        notifier: Optional[Notifier] = None,
        git: Optional[GitSync] = None
    ):
        """Initialize session.

        Args:
            repo_root: Working tree root
            config: code-pusher configuration
            notifier: Where user-facing notices go
            git: Git collaborator (default: GitSync on repo_root)
        """
        self.repo_root = Path(repo_root).expanduser().resolve()
        self.config = config
        self.notifier = notifier or Notifier()
        self.git = git or GitSync(self.repo_root)
        self.log_dir = resolve_log_dir(config, self.repo_root)

        git_config = config.get('git_config', {})
        self.remote = git_config.get('remote_name', 'origin')
        self.branch = git_config.get('branch_name', 'master')
        self.push_after_commit = bool(git_config.get('push_after_commit', False))
        self.interval_minutes = config.get('schedule_config', {}).get('interval_minutes', 30)

        self.initialized = False
        self.runner: Optional[AttemptRunner] = None
        self._timer: Optional[threading.Timer] = None
        self._running = False
        self._state_lock = threading.Lock()
        self._attempt_lock = threading.Lock()
        self._stopped = threading.Event()

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60

    @property
    def running(self) -> bool:
        return self._running

    def initialize(self) -> bool:
        """Check the repository and prepare the log directory.

        Returns:
            True if the session can run attempts
        """
        if self.initialized:
            return True

        if not self.git.is_repository():
            self.notifier.error("No git repository found in the root directory")
            logger.error(f"No .git in {self.repo_root}")
            return False

        try:
            ensure_directory(self.log_dir)
        except OSError as e:
            self.notifier.error(f"Cannot create log directory {self.log_dir}: {e}")
            return False

        self.runner = AttemptRunner(
            self.git,
            self.notifier,
            self.log_dir,
            remote=self.remote,
            branch=self.branch,
            interval_minutes=self.interval_minutes
        )
        self.initialized = True
        self.notifier.info(f"saving logs to {log_path_for(self.log_dir)}")
        return True

    def start(self) -> bool:
        """Start periodic attempts.

        Returns:
            True if the session is running
        """
        if not self.initialize():
            return False

        with self._state_lock:
            if self._running:
                logger.info("Session already running")
                return True
            self._running = True
            self._stopped.clear()
            self._schedule_next()

        logger.info(f"Committing {self.repo_root} every {self.interval_minutes} minute(s)")
        self.notifier.info('starting to commit ...')
        return True

    def stop(self, push: bool = False) -> Optional[AttemptRecord]:
        """Stop periodic attempts.

        Waits for an attempt already running to finish.

        Args:
            push: Push the configured branch once after stopping

        Returns:
            The push record when push is requested
        """
        with self._state_lock:
            was_running = self._running
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

        # Let an attempt that is already running write its record
        with self._attempt_lock:
            pass

        record = None
        if push:
            record = self.push_now()

        self._stopped.set()
        if was_running:
            self.notifier.info('Code pushing stopped!')
        return record

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stop() is called; True if it was."""
        return self._stopped.wait(timeout)

    def tick(self) -> Optional[AttemptRecord]:
        """Run one periodic attempt unless another is in flight."""
        with self._state_lock:
            if not self._running:
                return None
            self._schedule_next()

        if not self._attempt_lock.acquire(blocking=False):
            logger.warning("Previous attempt still running, skipping this tick")
            return None

        try:
            return self.runner.commit_changes(push=self.push_after_commit)
        except Exception as e:
            # Keep the timer alive whatever the attempt raised
            logger.error(f"Periodic attempt crashed: {e}", exc_info=True)
            return None
        finally:
            self._attempt_lock.release()

    def commit_now(self, push: Optional[bool] = None) -> Optional[AttemptRecord]:
        """Run one commit attempt immediately.

        Args:
            push: Push after committing (default: push_after_commit setting)

        Returns:
            The recorded attempt, or None if skipped
        """
        if not self.initialize():
            return None
        if push is None:
            push = self.push_after_commit
        with self._attempt_lock:
            return self.runner.commit_changes(push=push)

    def push_now(self) -> Optional[AttemptRecord]:
        """Run one push attempt immediately."""
        if not self.initialize():
            return None
        with self._attempt_lock:
            return self.runner.push_changes()

    def _schedule_next(self) -> None:
        # Caller holds _state_lock
        self._timer = threading.Timer(self.interval_seconds, self.tick)
        self._timer.daemon = True
        self._timer.start()
