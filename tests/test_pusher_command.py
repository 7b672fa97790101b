"""Tests for the code-pusher command."""

import io
from unittest.mock import MagicMock, patch

import pytest

from commands import pusher
from core.session import PusherSession
from tests.fixtures.sample_changes import FakeGit, RecordingNotifier, get_sample_config
from utils.notifier import Notifier


def test_confirm_yes(monkeypatch):
    """'y' and 'yes' count as agreement."""
    notifier = Notifier(out=io.StringIO(), err=io.StringIO())
    for answer in ("y", "YES", " yes "):
        monkeypatch.setattr("builtins.input", lambda a=answer: a)
        assert notifier.confirm(pusher.PUSH_QUESTION) is True


def test_confirm_defaults_to_no(monkeypatch):
    """Empty or other answers do not push."""
    err = io.StringIO()
    notifier = Notifier(out=io.StringIO(), err=err)

    for answer in ("", "n", "maybe"):
        monkeypatch.setattr("builtins.input", lambda a=answer: a)
        assert notifier.confirm(pusher.PUSH_QUESTION) is False

    assert pusher.PUSH_QUESTION in err.getvalue()


def test_confirm_keyboard_interrupt(monkeypatch):
    """Interrupt at the prompt means no."""

    def raise_interrupt():
        raise KeyboardInterrupt()

    monkeypatch.setattr("builtins.input", raise_interrupt)
    notifier = Notifier(out=io.StringIO(), err=io.StringIO())

    assert notifier.confirm(pusher.PUSH_QUESTION) is False


def test_overrides_from_arguments(sample_config):
    """Command-line options replace configured values."""
    args = pusher.build_parser().parse_args(["start", "--interval", "5", "--push"])
    config = pusher.apply_overrides(sample_config, args)

    assert config["schedule_config"]["interval_minutes"] == 5
    assert config["git_config"]["push_after_commit"] is True


def test_non_positive_interval_ignored(sample_config):
    """--interval 0 keeps the configured value."""
    args = pusher.build_parser().parse_args(["start", "--interval", "0"])
    config = pusher.apply_overrides(sample_config, args)

    assert config["schedule_config"]["interval_minutes"] == 30


@pytest.mark.parametrize("value", ["nan", "inf"])
def test_non_finite_interval_ignored(sample_config, value):
    """--interval nan/inf keeps the configured value."""
    args = pusher.build_parser().parse_args(["start", "--interval", value])
    config = pusher.apply_overrides(sample_config, args)

    assert config["schedule_config"]["interval_minutes"] == 30


def test_push_remote_override(sample_config):
    """push --remote/--branch override configuration."""
    args = pusher.build_parser().parse_args(["push", "--remote", "fork", "--branch", "dev"])
    config = pusher.apply_overrides(sample_config, args)

    assert config["git_config"]["remote_name"] == "fork"
    assert config["git_config"]["branch_name"] == "dev"


def test_missing_command_exits():
    """A subcommand is required."""
    with pytest.raises(SystemExit):
        pusher.build_parser().parse_args([])


def test_run_start_interrupt_pushes_when_confirmed(repo_dir, sample_config):
    """Ctrl+C asks to push and pushes on yes."""
    notifier = RecordingNotifier(answer=True)
    git = FakeGit()
    session = PusherSession(repo_dir, sample_config, notifier=notifier, git=git)
    session.start = MagicMock(return_value=True)
    session.wait = MagicMock(side_effect=KeyboardInterrupt)

    assert pusher.run_start(session) == 0
    assert notifier.questions == [pusher.PUSH_QUESTION]
    assert git.pushes == [("origin", "master")]


def test_run_start_interrupt_without_push(repo_dir, sample_config):
    """Declining the prompt stops without pushing."""
    notifier = RecordingNotifier(answer=False)
    git = FakeGit()
    session = PusherSession(repo_dir, sample_config, notifier=notifier, git=git)
    session.start = MagicMock(return_value=True)
    session.wait = MagicMock(side_effect=KeyboardInterrupt)

    assert pusher.run_start(session) == 0
    assert git.pushes == []


def test_run_start_outside_repository(repo_dir, sample_config):
    """Start fails without a repository."""
    notifier = RecordingNotifier()
    session = PusherSession(repo_dir, sample_config, notifier=notifier, git=FakeGit(is_repo=False))

    assert pusher.run_start(session) == 1


def test_run_commit_exit_codes(repo_dir, sample_config):
    """Failed commit exits 1, clean tree exits 0."""
    failing = PusherSession(
        repo_dir, sample_config, notifier=RecordingNotifier(), git=FakeGit(fail_on="commit")
    )
    clean = PusherSession(
        repo_dir, sample_config, notifier=RecordingNotifier(), git=FakeGit(dirty=False)
    )

    assert pusher.run_commit(failing, push=False) == 1
    assert pusher.run_commit(clean, push=False) == 0


def test_run_push_exit_codes(repo_dir, sample_config):
    """Push exit status follows the recorded outcome."""
    ok = PusherSession(repo_dir, sample_config, notifier=RecordingNotifier(), git=FakeGit())
    bad = PusherSession(repo_dir, sample_config, notifier=RecordingNotifier(), git=FakeGit(fail_on="push"))

    assert pusher.run_push(ok) == 0
    assert pusher.run_push(bad) == 1


def test_run_status(repo_dir, sample_config):
    """Status prints tree state, push target and log path."""
    notifier = RecordingNotifier()
    session = PusherSession(repo_dir, sample_config, notifier=notifier, git=FakeGit())

    assert pusher.run_status(session) == 0
    assert notifier.infos[0].startswith("## master")
    assert "remote: origin  branch: master" in notifier.infos[1]
    assert notifier.infos[2].endswith("code-pusher.log")


@patch("commands.pusher.run_commit")
@patch("commands.pusher.load_config")
def test_main_dispatches_commit(mock_config, mock_run_commit, repo_dir, log_dir):
    """main builds a session and dispatches to the subcommand."""
    mock_config.return_value = get_sample_config(log_dir=str(log_dir))
    mock_run_commit.return_value = 0

    assert pusher.main(["commit", "--repo", str(repo_dir), "--push"]) == 0

    session, push = mock_run_commit.call_args[0]
    assert session.repo_root == repo_dir.resolve()
    assert push is True
