"""
Preparation steps that run before a command touches the repository.

These mirror what has to be true for every command: git knows who is
committing, the process is inside the configured repository, and the
origin remote points at the authenticated endpoint.
"""

from __future__ import annotations

import logging
import os

from .config import Config
from .errors import DirectoryUnreachableError
from .git_adapter import add_remote, remote_exists, set_global_identity, set_remote_url

LOG = logging.getLogger(__name__)


def configure_identity(config: Config) -> None:
    """
    Write the configured name and email into the global git config.
    """

    if not set_global_identity(config.user_name, config.user_email):
        LOG.info("Could not update the global git identity")


def enter_repo(config: Config) -> None:
    """
    Switch the process working directory to the configured repository.
    """

    try:
        os.chdir(config.repo_dir)
    except OSError as exc:
        raise DirectoryUnreachableError(f"cannot cd to {config.repo_dir}") from exc
    LOG.debug("Working directory is now %s", config.repo_dir)


def ensure_origin_remote(config: Config) -> None:
    """
    Point the origin remote at the authenticated URL, creating it if needed.
    """

    if not remote_exists(config.remote_name):
        LOG.info("Adding remote %s", config.remote_name)
        add_remote(config.remote_name, config.remote_url)
    else:
        set_remote_url(config.remote_name, config.remote_url)


def prepare_repo(config: Config) -> None:
    enter_repo(config)
    ensure_origin_remote(config)
