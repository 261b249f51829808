"""Go toolchain command abstractions.

This module provides helpers for GOPATH packages and Go modules: locating
package directories, checking their git status, and updating dependencies.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from buildlib.config import GoConfig
from buildlib.errors import BuildLibError
from buildlib.git import StatusInfo

from .scope import chain, in_directory
from .types import CommandResult, Step

if TYPE_CHECKING:
    from .git import GitCommands
    from .runner import CommandRunner


class GoCommands:
    """Go toolchain shell commands.

    Provides operations for:
    - Reading ``go env`` values and resolving GOPATH package directories
    - Checking that a package checkout is clean
    - Updating, tidying, vendoring and installing packages
    """

    def __init__(
        self,
        runner: CommandRunner,
        git: GitCommands,
        config: GoConfig | None = None,
    ) -> None:
        """Initialize Go commands.

        Args:
            runner: Command runner for executing shell commands
            git: Git commands used for package status checks
            config: Go binary and module environment (defaults if omitted)
        """
        self._runner = runner
        self._git = git
        self._config = config or GoConfig()
        self._go = self._config.binary

    # =========================================================================
    # Environment and package paths
    # =========================================================================

    def env(self, name: str) -> str:
        """Return the value of a ``go env`` variable.

        Raises:
            BuildLibError: If the variable is empty
            CommandError: If ``go env`` fails
        """
        value = self._runner.output([self._go, "env", name])
        if not value:
            raise BuildLibError(f"{name} is undefined")
        return value

    def package_dir(self, pkg: str) -> Path:
        """Return the GOPATH source directory of ``pkg``.

        ``$VARS`` in ``pkg`` are expanded. When GOPATH lists several entries
        the first one is used, matching ``go get``.
        """
        gopath = self.env("GOPATH").split(os.pathsep)[0]
        return Path(gopath) / "src" / os.path.expandvars(pkg)

    @contextmanager
    def in_package_dir(self, pkg: str) -> Iterator[Path]:
        """Run the block inside the GOPATH directory of ``pkg``."""
        with in_directory(self.package_dir(pkg)) as path:
            yield path

    def is_package_clean(self, pkg: str) -> StatusInfo:
        """Check that the git checkout of ``pkg`` is clean and synced.

        Returns:
            The decoded status when the package is clean

        Raises:
            StatusCheckFailed: If there are changes or it is out of sync
            NotAGitRepositoryError: If the package is not a git checkout
        """
        return self._git.check_clean(self.package_dir(pkg), name=pkg)

    # =========================================================================
    # Modules and packages
    # =========================================================================

    def update_module(self, path: str | Path, vendor: bool = False) -> None:
        """Refresh the dependencies of the Go module at ``path``.

        Runs ``go get -d``, ``go mod tidy`` and, if ``vendor`` is set,
        ``go mod vendor``, stopping at the first failure.

        Raises:
            CommandError: If any step fails
        """
        steps = [["get", "-d"], ["mod", "tidy"]]
        if vendor:
            steps.append(["mod", "vendor"])

        with in_directory(path) as workdir:
            chain(*(self._module_step(args, workdir) for args in steps))

    def _module_step(self, args: list[str], workdir: Path) -> Step:
        cmd = [self._go, *args]

        def step() -> CommandResult:
            logger.info(f"run -> {' '.join(cmd)}")
            return self._runner.run_verbose(
                cmd, cwd=workdir, env=self._config.module_env
            )

        return step

    def update_package(self, package: str) -> CommandResult:
        return self._runner.run_verbose([self._go, "get", "-u", package])

    def install_package(self, package: str) -> CommandResult:
        logger.info(f"install go package {package}")
        return self._runner.run_verbose([self._go, "install", package])

    def mod_tidy(self, path: str | Path | None = None) -> CommandResult:
        return self._runner.run_verbose(
            [self._go, "mod", "tidy"], cwd=Path(path) if path else None
        )

    def is_app_installed(self, app: str) -> bool:
        return shutil.which(app) is not None

    def ensure_package_installed(self, app: str, package: str) -> None:
        """Install ``package`` unless the ``app`` binary is already on PATH."""
        if not self.is_app_installed(app):
            self.install_package(package)
