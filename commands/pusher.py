#!/usr/bin/env python3
"""Command-line entry point for code-pusher.

Commands:
    start   commit the working tree every interval until Ctrl+C
    commit  commit pending changes once
    push    push the configured branch once
    status  show working tree status and the log location
"""

import argparse
import math
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path when run as a script
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.attempt_logger import Outcome, log_path_for
from core.config_loader import load_config
from core.git_sync import GitSyncError
from core.session import PusherSession
from utils.logger import get_logger
from utils.notifier import Notifier

logger = get_logger(__name__)

PUSH_QUESTION = 'Do you want to push the code before stopping? (yes/no)'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='code-pusher',
        description='Periodically commit, and optionally push, a git working tree'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    def add_repo(p: argparse.ArgumentParser) -> None:
        p.add_argument('--repo', default=os.getcwd(), help='Working tree root (default: cwd)')

    start = sub.add_parser('start', help='Commit every interval until interrupted')
    add_repo(start)
    start.add_argument('--interval', type=float, help='Minutes between attempts')
    start.add_argument('--push', action='store_true', help='Push after every commit')

    commit = sub.add_parser('commit', help='Commit pending changes now')
    add_repo(commit)
    commit.add_argument('--push', action='store_true', help='Push after committing')

    push = sub.add_parser('push', help='Push the configured branch now')
    add_repo(push)
    push.add_argument('--remote', help='Remote name override')
    push.add_argument('--branch', help='Branch name override')

    status = sub.add_parser('status', help='Show working tree status')
    add_repo(status)

    return parser


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Fold command-line options into the loaded configuration."""
    interval = getattr(args, 'interval', None)
    if interval is not None:
        if not math.isfinite(interval) or interval <= 0:
            logger.warning(f"Ignoring invalid --interval {interval}")
        else:
            config['schedule_config']['interval_minutes'] = interval
    if getattr(args, 'push', False) and args.command == 'start':
        config['git_config']['push_after_commit'] = True
    if getattr(args, 'remote', None):
        config['git_config']['remote_name'] = args.remote
    if getattr(args, 'branch', None):
        config['git_config']['branch_name'] = args.branch
    return config


def run_start(session: PusherSession) -> int:
    if not session.start():
        return 1

    try:
        session.wait()
    except KeyboardInterrupt:
        print(file=sys.stderr)
        push = session.notifier.confirm(PUSH_QUESTION)
        record = session.stop(push=push)
        if record is not None and record.outcome == Outcome.FAILED:
            return 1
    return 0


def run_commit(session: PusherSession, push: bool) -> int:
    if not session.initialize():
        return 1
    record = session.commit_now(push=push or None)
    return 1 if record is not None and record.outcome == Outcome.FAILED else 0


def run_push(session: PusherSession) -> int:
    record = session.push_now()
    return 0 if record is not None and record.outcome == Outcome.SUCCESS else 1


def run_status(session: PusherSession) -> int:
    if not session.git.is_repository():
        session.notifier.error("No git repository found in the root directory")
        return 1
    try:
        session.notifier.info(session.git.status())
    except GitSyncError as e:
        session.notifier.error(f"Failed to read status: {e}")
        return 1
    session.notifier.info(
        f"remote: {session.remote}  branch: {session.branch}  "
        f"interval: {session.interval_minutes} minute(s)"
    )
    session.notifier.info(f"log: {log_path_for(session.log_dir)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the code-pusher command."""
    args = build_parser().parse_args(argv)
    config = apply_overrides(load_config(), args)
    session = PusherSession(args.repo, config, notifier=Notifier())

    if args.command == 'start':
        return run_start(session)
    if args.command == 'commit':
        return run_commit(session, args.push)
    if args.command == 'push':
        return run_push(session)
    return run_status(session)


if __name__ == '__main__':
    sys.exit(main())
