"""Clean/sync checks on a decoded git status."""

from __future__ import annotations

from pathlib import Path

from buildlib.errors import StatusCheckFailed

from .models import ChangeArea, StatusInfo

STAGED_CHANGES = "staged files have been changed in repo"
UNSTAGED_CHANGES = "unstaged files have been modified in repo"
NOT_SYNCED = "repo is not in sync with remote repo"


def status_error(path: str | Path, status: StatusInfo) -> StatusCheckFailed | None:
    """Return the first failed check for ``status``, or None if it is clean.

    Checks run in order: staged changes, unstaged changes, sync with upstream.

    Args:
        path: Repository path or package name used in the message
        status: Decoded status of the repository

    Returns:
        A StatusCheckFailed describing the problem, or None
    """
    if status.has_staged_changes():
        return StatusCheckFailed(path, STAGED_CHANGES, details=_describe(status.staged))
    if status.has_unstaged_changes():
        return StatusCheckFailed(
            path, UNSTAGED_CHANGES, details=_describe(status.unstaged)
        )
    if not status.is_synced():
        return StatusCheckFailed(
            path,
            NOT_SYNCED,
            details=(
                f"{status.upstream or 'upstream'}: "
                f"ahead {status.ahead}, behind {status.behind}"
            ),
        )
    return None


def ensure_clean(path: str | Path, status: StatusInfo) -> None:
    """Raise StatusCheckFailed unless ``status`` is clean and synced."""
    error = status_error(path, status)
    if error is not None:
        raise error


def _describe(area: ChangeArea) -> str:
    counts = vars(area)
    return ", ".join(f"{name} {count}" for name, count in counts.items() if count)
