"""CLI command groups, one per wrapped tool."""

from .docker import docker_app
from .git import git_app
from .go import go_app
from .rancher import rancher_app

__all__ = [
    "docker_app",
    "git_app",
    "go_app",
    "rancher_app",
]
