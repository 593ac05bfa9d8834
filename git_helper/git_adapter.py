"""
Git integration for git-helper.

Every invocation of the git executable goes through _run_git so that
logging and error handling live in one place. Most wrappers stream
git's output straight to the terminal and report success as a bool;
the commands decide what to do with a failure.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from .errors import GitError
from .logging_utils import redact_credentials

LOG = logging.getLogger(__name__)


def _run_git(
    args: list[str],
    capture: bool = True,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    With capture disabled git writes directly to the terminal. With
    check enabled a non-zero exit raises GitError carrying git's stderr.
    """

    cmd = ["git", *args]
    display = redact_credentials(" ".join(cmd))
    LOG.debug("Running git command: %s", display)
    try:
        completed = subprocess.run(
            cmd,
            check=False,
            text=True,
            capture_output=capture,
        )
    except OSError as exc:  # noqa: BLE001
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        LOG.debug("git exited with %d: %s", completed.returncode, stderr)
        if check:
            message = f"git command failed: {display}"
            if stderr:
                message = f"{message}\n{stderr}"
            raise GitError(message)

    return completed


def _passthrough(args: list[str]) -> bool:
    return _run_git(args, capture=False, check=False).returncode == 0


def set_global_identity(name: str, email: str) -> bool:
    """
    Set user.name and user.email in the global git configuration.
    """

    ok_name = _passthrough(["config", "--global", "user.name", name])
    ok_email = _passthrough(["config", "--global", "user.email", email])
    return ok_name and ok_email


def remote_exists(name: str) -> bool:
    try:
        _run_git(["remote", "get-url", name])
    except GitError:
        # git exits non-zero when no remote has that name.
        return False
    return True


def add_remote(name: str, url: str) -> bool:
    # Output is discarded: a failure here is not reported to the user.
    return _run_git(["remote", "add", name, url], check=False).returncode == 0


def set_remote_url(name: str, url: str) -> bool:
    return _passthrough(["remote", "set-url", name, url])


def list_remotes() -> bool:
    return _passthrough(["remote", "-v"])


def stage(path: Optional[str] = None) -> bool:
    """
    Stage path, or every change under the current directory.
    """

    return _passthrough(["add", path if path else "."])


def short_status() -> bool:
    return _passthrough(["status", "-s"])


def status() -> bool:
    return _passthrough(["status"])


def commit(message: str) -> bool:
    return _passthrough(["commit", "-m", message])


def push(remote: str, branch: str, force: bool = False) -> bool:
    args = ["push"]
    if force:
        args.append("--force")
    args.extend([remote, branch])
    return _passthrough(args)


def pull(remote: str, branch: str) -> bool:
    return _passthrough(["pull", remote, branch])


def log_oneline(count: int = 10) -> bool:
    return _passthrough(["log", "--oneline", f"-{count}"])


def revert(rev: str) -> bool:
    """
    Revert rev with git's default message, without opening an editor.
    """

    return _passthrough(["revert", rev, "--no-edit"])


def reset_soft(rev: str = "HEAD~1") -> bool:
    """
    Move the current branch to rev, keeping the undone changes staged.
    """

    return _passthrough(["reset", "--soft", rev])


def discard(path: Optional[str] = None) -> bool:
    """
    Restore path, or the whole working tree, from the index.
    """

    return _passthrough(["checkout", "--", path if path else "."])
