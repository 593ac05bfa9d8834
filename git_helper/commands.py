"""
Command dispatch for git-helper.

Each operation is a member of the Command enumeration with exactly one
handler in HANDLERS. Handlers receive a Context (configuration,
confirmation provider, clock) and the positional arguments that follow
the command name, and return the process exit status.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from .config import Config
from .errors import UsageError
from .git_adapter import (
    commit,
    discard,
    list_remotes,
    log_oneline,
    pull,
    push,
    reset_soft,
    revert,
    set_remote_url,
    short_status,
    stage,
    status,
)

LOG = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_COUNT = 10

_AFFIRMATIVE = re.compile(r"^[Yy]$")

ConfirmFn = Callable[[str], bool]


class Command(str, Enum):
    ADD = "add"
    COMMIT = "commit"
    PUSH = "push"
    PULL = "pull"
    STATUS = "status"
    AUTO = "auto"
    SYNC = "sync"
    ADD_COMMIT = "add-commit"
    LOG = "log"
    CONFIG = "config"
    REVERT = "revert"
    UNDO = "undo"
    DISCARD = "discard"
    FORCE_PUSH = "force-push"
    HELP = "help"

    @classmethod
    def from_selector(cls, selector: Optional[str]) -> "Command":
        """
        Map the first command-line argument to a Command.

        Anything that is not a known command name selects HELP.
        """

        try:
            return cls(selector)
        except ValueError:
            return cls.HELP

    @property
    def touches_repo(self) -> bool:
        return self is not Command.HELP


def prompt_confirm(question: str) -> bool:
    """
    Ask a yes/no question on the terminal.

    Reads one line from stdin rather than a single keypress. After
    surrounding whitespace is stripped, only "y" or "Y" confirms; end of
    input declines.
    """

    try:
        reply = input(f"{question} (y/N): ")
    except EOFError:
        print()
        return False
    return bool(_AFFIRMATIVE.match(reply.strip()))


@dataclass
class Context:
    config: Config
    confirm: ConfirmFn = prompt_confirm
    clock: Callable[[], datetime] = datetime.now
    prog: str = "git-helper"

    def timestamp(self) -> str:
        return self.clock().strftime(TIMESTAMP_FORMAT)


def _arg(args: List[str], index: int = 0) -> Optional[str]:
    # An empty string counts as a missing argument.
    if len(args) > index and args[index]:
        return args[index]
    return None


def _message_or_default(ctx: Context, args: List[str], prefix: str) -> str:
    message = _arg(args)
    if message is None:
        message = f"{prefix} {ctx.timestamp()}"
        print(f"Using auto-generated commit message: {message}")
    else:
        print(f"Using provided commit message: {message}")
    return message


def cmd_add(ctx: Context, args: List[str]) -> int:
    path = _arg(args)
    if path is None:
        print("Adding all files...")
    else:
        print(f"Adding file: {path}")
    stage(path)
    short_status()
    return 0


def cmd_commit(ctx: Context, args: List[str]) -> int:
    message = _arg(args)
    if message is None:
        raise UsageError(f"Usage: {ctx.prog} commit 'commit message'")
    print(f"Committing with message: {message}")
    commit(message)
    return 0


def cmd_push(ctx: Context, args: List[str]) -> int:
    config = ctx.config
    print("Pushing changes to GitHub...")
    if push(config.remote_name, config.branch):
        print("Push successful")
        return 0

    print("Push failed. Trying with force option...")
    if ctx.confirm("Force push? This may overwrite remote changes!"):
        push(config.remote_name, config.branch, force=True)
    else:
        print("Push cancelled. Use 'git pull' first to merge remote changes.")
    return 0


def cmd_pull(ctx: Context, args: List[str]) -> int:
    print("Pulling latest changes from GitHub...")
    pull(ctx.config.remote_name, ctx.config.branch)
    return 0


def cmd_status(ctx: Context, args: List[str]) -> int:
    status()
    return 0


def cmd_auto(ctx: Context, args: List[str]) -> int:
    """
    Pull, stage everything, commit, then push with a force fallback.

    Only the push result is inspected; a failed pull or commit does not
    stop the later steps.
    """

    config = ctx.config
    print("Starting automatic process...")
    message = _message_or_default(ctx, args, "Auto-commit")

    print("Pulling latest changes...")
    pull(config.remote_name, config.branch)

    stage()
    commit(message)

    if push(config.remote_name, config.branch):
        print("Auto process completed successfully")
        return 0

    print("Push failed. Trying with force...")
    if ctx.confirm("Force push?"):
        push(config.remote_name, config.branch, force=True)
    else:
        print("Auto process completed but push failed")
    return 0


def cmd_sync(ctx: Context, args: List[str]) -> int:
    """
    Pull, stage everything, commit and push, ignoring every step's result.
    """

    config = ctx.config
    print("Starting full sync process...")
    message = _message_or_default(ctx, args, "Sync")

    print("Pulling latest changes...")
    pull(config.remote_name, config.branch)

    print("Adding all changes...")
    stage()

    print("Committing...")
    commit(message)

    print("Pushing...")
    push(config.remote_name, config.branch)

    print("Sync completed")
    return 0


def cmd_add_commit(ctx: Context, args: List[str]) -> int:
    message = _arg(args)
    if message is None:
        raise UsageError(f"Usage: {ctx.prog} add-commit 'commit message'")
    stage()
    commit(message)
    return 0


def cmd_log(ctx: Context, args: List[str]) -> int:
    log_oneline(LOG_COUNT)
    return 0


def cmd_config(ctx: Context, args: List[str]) -> int:
    set_remote_url(ctx.config.remote_name, ctx.config.remote_url)
    print("Remote URL configured")
    list_remotes()
    return 0


def _revert_usage(prog: str) -> str:
    return "\n".join(
        [
            f"Usage: {prog} revert {{last|commit_hash}}",
            "",
            "Options:",
            "  last      - Revert last commit",
            "  commit_hash - Revert specific commit (use hash from git log)",
            "",
            "Examples:",
            f"  {prog} revert last                    # Revert last commit",
            f"  {prog} revert abc123def              # Revert specific commit",
        ]
    )


def cmd_revert(ctx: Context, args: List[str]) -> int:
    target = _arg(args)
    if target is None:
        raise UsageError(_revert_usage(ctx.prog))

    if target == "last":
        print("Reverting last commit...")
        revert("HEAD")
        print("Last commit reverted")
    else:
        print(f"Reverting commit: {target}")
        revert(target)
        print(f"Commit {target} reverted")
    return 0


def cmd_undo(ctx: Context, args: List[str]) -> int:
    print("Undoing last commit (changes will be kept in staging)...")
    reset_soft("HEAD~1")
    print("Last commit undone. Changes are staged for new commit.")
    return 0


def cmd_discard(ctx: Context, args: List[str]) -> int:
    path = _arg(args)
    if path is None:
        print("Discarding all uncommitted changes...")
        discard()
        print("All uncommitted changes discarded")
    else:
        print(f"Discarding file: {path}")
        discard(path)
        print(f"File {path} reverted to last commit")
    return 0


def cmd_force_push(ctx: Context, args: List[str]) -> int:
    print("Force pushing to GitHub...")
    push(ctx.config.remote_name, ctx.config.branch, force=True)
    print("Force push completed")
    return 0


def usage_text(prog: str) -> str:
    return "\n".join(
        [
            "Git Helper Script",
            "=================",
            f"Usage: {prog} {{command}} [arguments]",
            "",
            "Commands:",
            "  add [file]              - Add file(s) to staging",
            "  commit 'message'        - Commit changes",
            "  push                    - Push to GitHub (with force option if needed)",
            "  pull                    - Pull from GitHub",
            "  status                  - Show status",
            "  auto ['message']        - Auto add+commit+push (with pull first)",
            "  sync ['message']        - Full sync: pull, add, commit, push",
            "  add-commit 'message'    - Add all and commit",
            "  log                     - Show commit history",
            "  config                  - Configure remote URL",
            "  revert {last|hash}      - Revert a commit",
            "  undo                    - Undo last commit (soft reset)",
            "  discard [file]          - Discard uncommitted changes",
            "  force-push              - Force push without confirmation",
            "",
            "Examples:",
            f"  {prog} add file.txt               # Add specific file",
            f"  {prog} commit 'Fixed bug'         # Commit with message",
            f"  {prog} pull                       # Pull latest changes",
            f"  {prog} sync 'Updated files'       # Full sync with remote",
            f"  {prog} auto                       # Auto process with pull first",
            f"  {prog} auto 'Custom message'      # Auto process with custom message",
            f"  {prog} revert last                # Revert last commit",
            f"  {prog} undo                       # Undo last commit",
            f"  {prog} discard                    # Discard all uncommitted changes",
            f"  {prog} force-push                 # Force push (use carefully!)",
        ]
    )


def cmd_help(ctx: Context, args: List[str]) -> int:
    print(usage_text(ctx.prog))
    return 1


HANDLERS: Dict[Command, Callable[[Context, List[str]], int]] = {
    Command.ADD: cmd_add,
    Command.COMMIT: cmd_commit,
    Command.PUSH: cmd_push,
    Command.PULL: cmd_pull,
    Command.STATUS: cmd_status,
    Command.AUTO: cmd_auto,
    Command.SYNC: cmd_sync,
    Command.ADD_COMMIT: cmd_add_commit,
    Command.LOG: cmd_log,
    Command.CONFIG: cmd_config,
    Command.REVERT: cmd_revert,
    Command.UNDO: cmd_undo,
    Command.DISCARD: cmd_discard,
    Command.FORCE_PUSH: cmd_force_push,
    Command.HELP: cmd_help,
}


def dispatch(command: Command, args: List[str], ctx: Context) -> int:
    """
    Run the handler for command and return its exit status.
    """

    LOG.debug("Dispatching %s with arguments %s", command.value, args)
    return HANDLERS[command](ctx, args)
