"""Data types for decoded git status output."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

DETACHED_HEAD = "(detached)"


@dataclass
class ChangeArea:
    """Counts of changed paths in one change-set (index or worktree).

    Attributes:
        modified: Paths with content changes
        added: Newly added paths
        deleted: Removed paths
        renamed: Renamed paths
        copied: Copied paths
    """

    modified: int = 0
    added: int = 0
    deleted: int = 0
    renamed: int = 0
    copied: int = 0

    def has_changed(self) -> bool:
        """Return True if any counter is nonzero."""
        return any(getattr(self, f.name) for f in fields(self))

    @property
    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


@dataclass
class StatusInfo:
    """Snapshot of one ``git status --porcelain=v2 --branch`` run.

    A StatusInfo is created empty for a working directory and filled in by a
    single parse pass. After that it is treated as a read-only value.

    Attributes:
        working_dir: Directory the status was taken from
        branch: Current branch name, or "(detached)"
        commit: Commit hash of HEAD
        remote: Remote name (no porcelain header sets it)
        upstream: Upstream ref, e.g. "origin/main"
        ahead: Commits on the local branch missing upstream
        behind: Commits on upstream missing locally
        untracked: Number of untracked paths
        unmerged: Number of paths with merge conflicts
        staged: Changes between HEAD and the index
        unstaged: Changes between the index and the worktree
    """

    working_dir: Path
    branch: str = ""
    commit: str = ""
    remote: str = ""
    upstream: str = ""
    ahead: int = 0
    behind: int = 0
    untracked: int = 0
    unmerged: int = 0
    staged: ChangeArea = field(default_factory=ChangeArea)
    unstaged: ChangeArea = field(default_factory=ChangeArea)

    def has_staged_changes(self) -> bool:
        """Return True if the index differs from HEAD."""
        return self.staged.has_changed()

    def has_unstaged_changes(self) -> bool:
        """Return True if the worktree differs from the index."""
        return self.unstaged.has_changed()

    def is_synced(self) -> bool:
        """Return True if the branch is neither ahead of nor behind upstream."""
        return self.ahead == 0 and self.behind == 0

    def is_clean(self) -> bool:
        return (
            not self.has_staged_changes()
            and not self.has_unstaged_changes()
            and self.is_synced()
        )

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED_HEAD

    def debug(self) -> str:
        return repr(self)
