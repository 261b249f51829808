"""Git command abstractions.

This module provides commands for git repository operations, primarily
used to decide whether a checkout is clean and in sync before a build.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from buildlib.errors import CommandError, GitError, NotAGitRepositoryError
from buildlib.git import StatusInfo, ensure_clean, parse_status_output

from .runner import raise_for_result

if TYPE_CHECKING:
    from .runner import CommandRunner

# git exits with 128 for "fatal: not a git repository"
NOT_A_REPO_EXIT_CODE = 128

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

DEFAULT_AUTHOR_NAME = "Repo Maintainer"
DEFAULT_AUTHOR_EMAIL = "unknown@github"


class GitCommands:
    """Git-related shell commands.

    Provides operations for:
    - Repository detection
    - Porcelain v2 status retrieval and decoding
    - Clean/sync checks
    - Branch lookup and checkout
    - Cloning and committing
    """

    def __init__(
        self,
        runner: CommandRunner,
        binary: str = "git",
        author_name: str = DEFAULT_AUTHOR_NAME,
        author_email: str = DEFAULT_AUTHOR_EMAIL,
    ) -> None:
        """Initialize Git commands.

        Args:
            runner: Command runner for executing shell commands
            binary: git executable to invoke
            author_name: Identity used by commit_all
            author_email: Email used by commit_all
        """
        self._runner = runner
        self._git = binary
        self._author_name = author_name
        self._author_email = author_email

    def is_inside_work_tree(self, path: str | Path) -> bool:
        """Check whether ``path`` is inside a git work tree.

        Args:
            path: Directory to check

        Returns:
            The boolean git reports (False inside a bare repo's git dir)

        Raises:
            NotAGitRepositoryError: If git exits with status 128
            CommandError: If git fails in any other way
            GitError: If git prints something other than a boolean
        """
        cmd = [self._git, "rev-parse", "--is-inside-work-tree"]
        result = self._runner.run(cmd, cwd=Path(path))
        if result.returncode == NOT_A_REPO_EXIT_CODE:
            raise NotAGitRepositoryError(path)
        raise_for_result(result, operation="git rev-parse --is-inside-work-tree")

        value = result.stdout.strip()
        if value in _TRUE_LITERALS:
            return True
        if value in _FALSE_LITERALS:
            return False
        raise GitError(
            "unexpected output from git rev-parse --is-inside-work-tree",
            details=repr(value),
        )

    def status_output(self, path: str | Path) -> bytes:
        """Return raw ``git status --porcelain=v2 --branch`` output for ``path``.

        Raises:
            NotAGitRepositoryError: If ``path`` is not inside a work tree
            CommandError: If git fails
        """
        try:
            inside = self.is_inside_work_tree(path)
        except NotAGitRepositoryError:
            raise
        except CommandError as e:
            raise CommandError(
                e.cmd, e.returncode, stderr=e.stderr, operation="IsInsideWorkTree"
            ) from e
        except GitError as e:
            raise GitError(f"IsInsideWorkTree: {e.message}", details=e.details) from e

        if not inside:
            raise NotAGitRepositoryError(path)

        # Paths may be raw bytes (core.quotePath=false), so keep stdout undecoded.
        result = self._runner.run_bytes(
            [self._git, "status", "--porcelain=v2", "--branch"], cwd=Path(path)
        )
        raise_for_result(result, operation="git status --porcelain=v2 --branch")
        return result.raw_stdout

    def status(self, path: str | Path) -> StatusInfo:
        """Retrieve and decode the status of the repository at ``path``.

        Example:
            >>> status = git.status(".")
            >>> if status.is_clean():
            ...     print(f"{status.branch} at {status.commit[:7]} is clean")
        """
        return parse_status_output(self.status_output(path), path)

    def check_clean(self, path: str | Path, name: str | None = None) -> StatusInfo:
        """Raise StatusCheckFailed unless the repository is clean and synced.

        Args:
            path: Repository directory
            name: Name to use in the error message (defaults to ``path``)

        Returns:
            The decoded status when every check passes
        """
        status = self.status(path)
        logger.debug(f"status of {path}: {status.debug()}")
        ensure_clean(name or path, status)
        return status

    def git_dir(self, path: str | Path) -> Path:
        """Return the absolute path of the repository's git directory."""
        out = self._runner.output(
            [self._git, "rev-parse", "--absolute-git-dir"], cwd=Path(path)
        )
        return Path(out)

    def current_branch(self, path: str | Path) -> str:
        """Return the checked out branch name ("HEAD" when detached)."""
        return self._runner.output(
            [self._git, "rev-parse", "--abbrev-ref", "HEAD"], cwd=Path(path)
        )

    def checkout(self, branch: str, path: str | Path | None = None) -> None:
        """Check out ``branch``, in ``path`` or the runner's default directory."""
        logger.info(f"checkout [{branch}] in repository [{path or '.'}]")
        self._runner.run_checked(
            [self._git, "checkout", branch],
            cwd=Path(path) if path else None,
        )

    def clone(self, url: str, path: str | Path) -> str:
        """Clone ``url`` into ``path``.

        Returns:
            The progress output git printed while cloning

        Raises:
            CommandError: If the clone fails
        """
        target = Path(path).absolute()
        logger.info(f"clone [{url}] into [{target}]")
        result = self._runner.run(
            [self._git, "clone", "--progress", url, str(target)]
        )
        raise_for_result(result, operation="git clone")
        # git writes clone progress to stderr.
        return result.stderr

    def commit_all(
        self,
        path: str | Path,
        message: str,
        author: tuple[str, str] | None = None,
    ) -> str:
        """Stage every change in ``path`` and commit it.

        Args:
            path: Repository directory
            message: Commit message
            author: ``(name, email)`` to commit as (defaults to the configured
                    author)

        Returns:
            Hash of the new commit

        Raises:
            CommandError: If staging or committing fails, including when
                          there is nothing to commit
        """
        name, email = author or (self._author_name, self._author_email)
        workdir = Path(path)

        self._runner.run_checked([self._git, "add", "-A"], cwd=workdir)
        self._runner.run_checked(
            [
                self._git,
                "-c",
                f"user.name={name}",
                "-c",
                f"user.email={email}",
                "commit",
                "-m",
                message,
            ],
            cwd=workdir,
        )
        commit = self._runner.output([self._git, "rev-parse", "HEAD"], cwd=workdir)
        logger.info(f"committed {commit} in [{workdir}] as {name} <{email}>")
        return commit
