"""
Configuration model for git-helper.

The configuration lives in an external file of shell-style
``KEY="value"`` lines. The CLI loads it once into a frozen Config and
passes it down to preflight and the command handlers, so nothing reads
configuration from global state.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from .errors import ConfigError, ConfigMissingError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "git-helper.cfg"
CONFIG_ENV_VAR = "GIT_HELPER_CONFIG"

REMOTE_NAME = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE_HOST = "github.com"

REQUIRED_KEYS = (
    "USER_NAME",
    "USER_EMAIL",
    "GITHUB_USERNAME",
    "GITHUB_TOKEN",
    "REPO_DIR",
    "REPO_NAME",
)


def build_remote_url(
    username: str,
    token: str,
    repo_name: str,
    host: str = DEFAULT_REMOTE_HOST,
) -> str:
    """
    Return the HTTPS remote URL with the access token embedded.

    The token ends up in the repository's git config and in the output
    of ``git remote -v``.
    """

    return f"https://{username}:{token}@{host}/{username}/{repo_name}.git"


@dataclass(frozen=True)
class Config:
    """
    Values loaded from the git-helper configuration file.
    """

    user_name: str
    user_email: str
    github_username: str
    github_token: str
    repo_dir: Path
    repo_name: str
    branch: str = DEFAULT_BRANCH
    remote_host: str = DEFAULT_REMOTE_HOST

    @property
    def remote_name(self) -> str:
        return REMOTE_NAME

    @property
    def remote_url(self) -> str:
        return build_remote_url(
            self.github_username,
            self.github_token,
            self.repo_name,
            host=self.remote_host,
        )


def default_config_path() -> Path:
    """
    Return the configuration file that sits next to the invoked program.
    """

    program = Path(sys.argv[0]).resolve() if sys.argv and sys.argv[0] else Path.cwd()
    return program.parent / DEFAULT_CONFIG_NAME


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """
    Pick the configuration file: explicit path, environment, then default.
    """

    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return default_config_path()


def load_config(path: Path) -> Config:
    """
    Load and validate the configuration file at path.

    Raises ConfigMissingError when the file does not exist and
    ConfigError when any required key is absent or empty.
    """

    path = Path(path)
    if not path.is_file():
        raise ConfigMissingError(f"configuration file not found: {path}")

    LOG.debug("Loading configuration from %s", path)
    values = dotenv_values(path)

    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if missing:
        raise ConfigError(
            f"configuration file {path} is missing required values: {', '.join(missing)}"
        )

    return Config(
        user_name=values["USER_NAME"],
        user_email=values["USER_EMAIL"],
        github_username=values["GITHUB_USERNAME"],
        github_token=values["GITHUB_TOKEN"],
        repo_dir=Path(values["REPO_DIR"]).expanduser(),
        repo_name=values["REPO_NAME"],
        branch=values.get("BRANCH") or DEFAULT_BRANCH,
        remote_host=values.get("REMOTE_HOST") or DEFAULT_REMOTE_HOST,
    )
