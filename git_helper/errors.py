"""
Custom exception types used across git-helper.

Defining explicit error classes lets the CLI tell user-facing failures
(missing configuration, bad arguments) apart from unexpected bugs.
"""

from __future__ import annotations


class GitHelperError(Exception):
    """Base class for all git-helper specific errors."""


class ConfigMissingError(GitHelperError):
    """Raised when the configuration file does not exist."""


class ConfigError(GitHelperError):
    """Raised when the configuration file lacks required values."""


class DirectoryUnreachableError(GitHelperError):
    """Raised when the configured repository directory cannot be entered."""


class UsageError(GitHelperError):
    """Raised when a command is missing a required argument."""


class GitError(GitHelperError):
    """Raised when git cannot be executed or a checked command fails."""
