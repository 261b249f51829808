"""Helper library for build scripts.

Wraps git, docker, rancher and the go toolchain, and decodes
``git status --porcelain=v2`` output for clean/sync checks.
"""

from .errors import (
    BuildLibError,
    CommandError,
    GitError,
    NotAGitRepositoryError,
    PromptAborted,
    StatusCheckFailed,
    StatusDecodeError,
)
from .git import ChangeArea, StatusInfo, parse_status_output
from .shell import (
    ShellCommands,
    chain,
    chained,
    copy_file,
    deferred,
    in_directory,
    remove_path,
)

__version__ = "0.3.0"

__all__ = [
    "BuildLibError",
    "ChangeArea",
    "CommandError",
    "GitError",
    "NotAGitRepositoryError",
    "PromptAborted",
    "ShellCommands",
    "StatusCheckFailed",
    "StatusDecodeError",
    "StatusInfo",
    "chain",
    "chained",
    "copy_file",
    "deferred",
    "in_directory",
    "parse_status_output",
    "remove_path",
]
