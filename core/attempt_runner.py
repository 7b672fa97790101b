#!/usr/bin/env python3
"""Commit and push attempts for code-pusher.

Each attempt runs its git steps in order and appends exactly one record
to the attempt log. Nothing raised by git or by the log write leaves
this module; failures become a Failed record and an error notice.
"""

from pathlib import Path
from typing import Optional, Union

from core.attempt_logger import AttemptKind, AttemptRecord, Outcome, record_attempt
from core.change_summarizer import collect_change_set, summarize_changes
from core.git_sync import GitSync, GitSyncError
from utils.logger import get_logger
from utils.notifier import Notifier

logger = get_logger(__name__)

COMMIT_FAILED_MESSAGE = 'Failed to commit code'
PUSH_FAILED_MESSAGE = 'Failed to push code'


def _minutes_label(minutes: float) -> str:
    if minutes == int(minutes):
        minutes = int(minutes)
    return f"{minutes} {'minute' if minutes == 1 else 'minutes'}"


class AttemptRunner:
    """Runs commit and push attempts against one working tree."""

    def __init__(
        self,
        git: GitSync,
        notifier: Notifier,
        log_dir: Union[str, Path],
        remote: str = 'origin',
        branch: str = 'master',
        interval_minutes: float = 30
    ):
        """Initialize attempt runner.

        Args:
            git: Git collaborator for the working tree
            notifier: Where user-facing notices go
            log_dir: Existing directory for code-pusher.log
            remote: Remote to push to
            branch: Branch to push
            interval_minutes: Periodic interval, used in notices
        """
        self.git = git
        self.notifier = notifier
        self.log_dir = Path(log_dir)
        self.remote = remote
        self.branch = branch
        self.interval_minutes = interval_minutes

    def commit_changes(self, push: bool = False) -> Optional[AttemptRecord]:
        """Stage, commit and optionally push pending changes.

        Args:
            push: Push to the configured remote/branch after committing

        Returns:
            The recorded attempt, or None when there was nothing to commit
        """
        try:
            has_changes = self.git.has_changes()
        except GitSyncError as e:
            logger.error(f"Change detection failed: {e}")
            return self._commit_failed(e, COMMIT_FAILED_MESSAGE)

        if not has_changes:
            logger.info("No changes to commit")
            self.notifier.info(
                "No changes to commit right now, will check again after "
                f"{_minutes_label(self.interval_minutes)}"
            )
            return None

        step_failed_message = COMMIT_FAILED_MESSAGE
        try:
            self.git.stage_all()
            change_set = collect_change_set(self.git)
            message = summarize_changes(change_set)
            self.git.commit(message)
            logger.info(f"Committed: {message}")

            if push:
                step_failed_message = PUSH_FAILED_MESSAGE
                self.git.push(self.remote, self.branch)
                logger.info(f"Pushed to {self.remote}/{self.branch}")

        except GitSyncError as e:
            logger.error(f"Commit attempt failed: {e}")
            return self._commit_failed(e, step_failed_message)

        record = AttemptRecord(
            outcome=Outcome.SUCCESS,
            message=message,
            affected_files=change_set.files
        )
        self._record(record)

        notice = f"Code committed successfully with message: {message}"
        if push:
            notice += f" and pushed to {self.remote}/{self.branch}"
        self.notifier.info(notice)
        return record

    def push_changes(self) -> AttemptRecord:
        """Push the configured branch and record a push attempt."""
        try:
            self.git.push(self.remote, self.branch)
        except GitSyncError as e:
            logger.error(f"Push failed: {e}")
            record = AttemptRecord(outcome=Outcome.FAILED, kind=AttemptKind.PUSH)
            self._record(record)
            self.notifier.error(f"{PUSH_FAILED_MESSAGE}: {e}")
            self._remote_hint()
            return record

        logger.info(f"Pushed to {self.remote}/{self.branch}")
        record = AttemptRecord(outcome=Outcome.SUCCESS, kind=AttemptKind.PUSH)
        self._record(record)
        self.notifier.info('Code pushed successfully')
        return record

    def _commit_failed(self, error: Exception, message: str) -> AttemptRecord:
        record = AttemptRecord(outcome=Outcome.FAILED, message=message)
        self._record(record)
        self.notifier.error(f"{message}: {error}")
        if message == PUSH_FAILED_MESSAGE:
            self._remote_hint()
        return record

    def _remote_hint(self) -> None:
        self.notifier.info(
            f"Current remote and branch are: {self.remote} {self.branch}, "
            "please change them in settings and try again"
        )

    def _record(self, record: AttemptRecord) -> None:
        try:
            record_attempt(self.log_dir, record)
        except OSError as e:
            self.notifier.error(f"Could not write attempt log in {self.log_dir}: {e}")
