"""Docker command abstractions.

This module provides commands for building, tagging and pushing images and
for looking up running containers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .scope import in_directory
from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Image management (build, tag, push, check existence)
    - Container lookup by label
    """

    def __init__(self, runner: CommandRunner, binary: str = "docker") -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
            binary: docker executable to invoke
        """
        self._runner = runner
        self._docker = binary

    # =========================================================================
    # Image Management
    # =========================================================================

    def image_exists(self, image_tag: str) -> bool:
        """Check if a Docker image with the given tag exists locally.

        Example:
            >>> docker.image_exists("my-service:latest")
            True
        """
        result = self._runner.run([self._docker, "images", "-q", image_tag])
        return bool(result.stdout.strip())

    def build(self, module_dir: str | Path, tag: str) -> CommandResult:
        """Build the Dockerfile in ``module_dir`` and tag the image.

        Runs ``docker build -t <tag> .`` from inside ``module_dir`` with output
        going to the terminal.

        Raises:
            CommandError: If the build fails
        """
        with in_directory(module_dir) as workdir:
            logger.info(f"build image {tag}")
            return self._runner.run_verbose(
                [self._docker, "build", "-t", tag, "."], cwd=workdir
            )

    def tag_image(self, source_tag: str, target_tag: str) -> CommandResult:
        """Tag a Docker image with a new tag.

        Args:
            source_tag: Existing image tag (e.g., "my-service:latest")
            target_tag: New tag to apply (e.g., "registry.example.com/my-service:1.2.0")
        """
        return self._runner.run([self._docker, "tag", source_tag, target_tag])

    def push(self, image_tag: str) -> CommandResult:
        """Push a Docker image to its registry.

        Raises:
            CommandError: If the push fails
        """
        logger.info(f"push image {image_tag}")
        return self._runner.run_verbose([self._docker, "push", image_tag])

    # =========================================================================
    # Containers
    # =========================================================================

    def container_name_by_label(self, label: str) -> str:
        """Return the name of the newest container carrying ``label``.

        Args:
            label: Label selector, "key" or "key=value"

        Returns:
            Container name, or "" if none matches

        Raises:
            CommandError: If docker fails
        """
        return self._runner.output(
            [
                self._docker,
                "ps",
                "-n",
                "1",
                "--filter",
                f"label={label}",
                "--format",
                "{{.Names}}",
            ]
        )
