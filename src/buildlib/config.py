"""Configuration loading for buildlib.

Settings live in a YAML file with a top-level ``config:`` key. Values may
reference environment variables:

    config:
      rancher:
        cli_version: ${RANCHER_CLI_VERSION:-v0.6.10}
        install_dir: /usr/local/bin
      go:
        module_env:
          GO111MODULE: "on"
          GOFLAGS: ${GOFLAGS:-}

The file path defaults to ``buildlib.yaml`` in the current directory and can
be overridden with the ``BUILDLIB_CONFIG`` environment variable. A missing
file yields the defaults below.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

CONFIG_PATH = Path("buildlib.yaml")
CONFIG_ENV_VAR = "BUILDLIB_CONFIG"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


class GitConfig(BaseModel):
    binary: str = "git"
    author_name: str = "Repo Maintainer"
    author_email: str = "unknown@github"


class GoConfig(BaseModel):
    binary: str = "go"
    module_env: dict[str, str] = Field(default_factory=lambda: {"GO111MODULE": "on"})


class RancherConfig(BaseModel):
    cli_version: str = "v0.6.10"
    compose_version: str = "v0.12.5"
    install_dir: str = "/usr/bin"
    cli_url_template: str = (
        "https://releases.rancher.com/cli/{version}/"
        "rancher-linux-amd64-{version}.tar.gz"
    )
    compose_url_template: str = (
        "https://releases.rancher.com/compose/{version}/"
        "rancher-compose-linux-amd64-{version}.tar.gz"
    )


class DockerConfig(BaseModel):
    binary: str = "docker"


class BuildConfig(BaseModel):
    """Top-level buildlib settings."""

    git: GitConfig = Field(default_factory=GitConfig)
    go: GoConfig = Field(default_factory=GoConfig)
    rancher: RancherConfig = Field(default_factory=RancherConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = os.getenv(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _ENV_PATTERN.sub(replacer, text)


def config_path() -> Path:
    """Return the config file path, honouring BUILDLIB_CONFIG."""
    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(file_path: Path | None = None) -> BuildConfig:
    """Load settings from YAML, falling back to defaults.

    Args:
        file_path: YAML file to read (default: see ``config_path``)

    Returns:
        Validated BuildConfig

    Raises:
        ValueError: If a required environment variable is missing, the YAML is
                    malformed, or the values fail validation
    """
    path = file_path or config_path()
    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return BuildConfig()

    logger.debug(f"Loading configuration from {path}")
    content = substitute_env_vars(path.read_text(encoding="utf-8"))

    try:
        loaded: dict[str, Any] | None = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    if not loaded:
        return BuildConfig()
    if not isinstance(loaded, dict) or "config" not in loaded:
        raise ValueError("Invalid YAML structure: missing 'config' key")

    try:
        return BuildConfig(**(loaded["config"] or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_config() -> BuildConfig:
    """Return the process-wide configuration, loaded once."""
    return load_config()
