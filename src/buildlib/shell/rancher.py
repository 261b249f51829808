"""Rancher command abstractions.

Wraps the legacy ``rancher`` and ``rancher-compose`` CLIs used to deploy
stacks, installing them on demand from the Rancher release server.
"""

from __future__ import annotations

import shlex
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from buildlib.config import RancherConfig

from .runner import raise_for_result
from .scope import in_directory
from .types import CommandResult, EnvMap

if TYPE_CHECKING:
    from .runner import CommandRunner

RANCHER = "rancher"
RANCHER_COMPOSE = "rancher-compose"


class RancherCommands:
    """Rancher-related shell commands.

    Provides operations for:
    - Installing the rancher and rancher-compose binaries
    - Deploying stacks with ``rancher up`` or ``rancher-compose up``
    - Container lookup on a Rancher host
    """

    def __init__(
        self, runner: CommandRunner, config: RancherConfig | None = None
    ) -> None:
        """Initialize Rancher commands.

        Args:
            runner: Command runner for executing shell commands
            config: Versions and install location (defaults if omitted)
        """
        self._runner = runner
        self._config = config or RancherConfig()

    # =========================================================================
    # Installation
    # =========================================================================

    def cli_url(self, version: str) -> str:
        return self._config.cli_url_template.format(version=version)

    def compose_url(self, version: str) -> str:
        return self._config.compose_url_template.format(version=version)

    def ensure_rancher(self) -> None:
        """Install the rancher CLI unless it is already on PATH."""
        if shutil.which(RANCHER) is None:
            logger.info("install rancher CLI")
            self.install_rancher(self._config.cli_version)

    def ensure_compose(self) -> None:
        """Install rancher-compose unless it is already on PATH."""
        if shutil.which(RANCHER_COMPOSE) is None:
            logger.info("install rancher-compose")
            self.install_compose(self._config.compose_version)

    def install_rancher(self, version: str) -> CommandResult:
        return self._install(RANCHER, self.cli_url(version))

    def install_compose(self, version: str) -> CommandResult:
        return self._install(RANCHER_COMPOSE, self.compose_url(version))

    def _install(self, binary: str, url: str) -> CommandResult:
        install_dir = self._config.install_dir
        target = f"{install_dir.rstrip('/')}/{binary}"
        script = (
            f"curl -fsSL {shlex.quote(url)}"
            f" | sudo tar --strip-components 2 -C {shlex.quote(install_dir)} -xzf -"
            f" && ls -la {shlex.quote(target)}"
        )
        result = self._runner.run_shell(script)
        output = (result.stdout + result.stderr).strip()
        if output:
            logger.info(output)
        raise_for_result(result, operation=f"install {binary}")
        return result

    # =========================================================================
    # Deployment
    # =========================================================================

    def container_name_by_label(self, host: str, label: str) -> str:
        """Return the newest container on ``host`` carrying ``label``."""
        return self._runner.output(
            [
                RANCHER,
                "--host",
                host,
                "docker",
                "ps",
                "-n",
                "1",
                "--filter",
                f"label={label}",
                "--format",
                "{{.Names}}",
            ]
        )

    def compose(
        self, module_dir: str | Path, stack: str, env: EnvMap | None = None
    ) -> CommandResult:
        """Bring up ``stack`` with rancher-compose from ``module_dir``.

        Args:
            module_dir: Directory holding docker-compose.yml/rancher-compose.yml
            stack: Rancher stack name
            env: Extra environment variables for the compose files

        Raises:
            CommandError: If installation or deployment fails
        """
        self.ensure_compose()
        with in_directory(module_dir) as workdir:
            logger.info(f"rancher-compose up stack {stack}")
            return self._runner.run_verbose(
                [RANCHER_COMPOSE, "-p", stack, "up", "-d", "--force-upgrade"],
                cwd=workdir,
                env=env,
            )

    def up(
        self, module_dir: str | Path, stack: str, env: EnvMap | None = None
    ) -> CommandResult:
        """Bring up ``stack`` with ``rancher up`` from ``module_dir``.

        Raises:
            CommandError: If installation or deployment fails
        """
        self.ensure_rancher()
        with in_directory(module_dir) as workdir:
            logger.info(f"rancher up stack {stack}")
            return self._runner.run_verbose(
                [RANCHER, "up", "-s", stack, "-d", "--force-upgrade"],
                cwd=workdir,
                env=env,
            )
