"""Shell command abstractions for build scripts.

This package wraps the external programs build scripts drive. It is
organized into specialized modules for each tool:

- git: repository detection, porcelain status, clean/sync checks
- docker: image build, tag, push and container lookup
- rancher: rancher / rancher-compose install and stack deployment
- golang: go env, GOPATH packages, module updates
- scope: directory-scoped execution and step chaining

Usage:
    from buildlib.shell import ShellCommands

    commands = ShellCommands()
    commands.git.check_clean(".")
    commands.docker.build("services/api", "registry.example.com/api:1.4.0")
"""

from pathlib import Path

from buildlib.config import BuildConfig, get_config

from .docker import DockerCommands
from .git import GitCommands
from .golang import GoCommands
from .rancher import RancherCommands
from .runner import CommandRunner, raise_for_result
from .scope import (
    chain,
    chained,
    copy_file,
    deferred,
    in_directory,
    remove_path,
)
from .types import CommandResult, EnvMap, Step


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        git: Git repository commands
        docker: Docker image and container commands
        rancher: Rancher deployment commands
        go: Go toolchain commands

    Example:
        >>> commands = ShellCommands(Path("."))
        >>> if not commands.docker.image_exists("app:latest"):
        ...     commands.docker.build(".", "app:latest")
    """

    def __init__(
        self, project_root: Path | None = None, config: BuildConfig | None = None
    ) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Default working directory for commands. When None,
                         commands run in the current process directory.
            config: Settings to use (defaults to ``get_config()``)
        """
        self._project_root = Path(project_root) if project_root else None
        self._config = config or get_config()
        self._runner = CommandRunner(self._project_root)

        self.git = GitCommands(
            self._runner,
            binary=self._config.git.binary,
            author_name=self._config.git.author_name,
            author_email=self._config.git.author_email,
        )
        self.docker = DockerCommands(self._runner, binary=self._config.docker.binary)
        self.rancher = RancherCommands(self._runner, self._config.rancher)
        self.go = GoCommands(self._runner, self.git, self._config.go)

    @property
    def project_root(self) -> Path | None:
        """Get the default working directory."""
        return self._project_root

    @property
    def runner(self) -> CommandRunner:
        return self._runner


__all__ = [
    "ShellCommands",
    "CommandResult",
    "CommandRunner",
    "EnvMap",
    "Step",
    "chain",
    "chained",
    "copy_file",
    "deferred",
    "in_directory",
    "remove_path",
    "raise_for_result",
    # Specialized command classes for direct usage
    "DockerCommands",
    "GitCommands",
    "GoCommands",
    "RancherCommands",
]
