"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from buildlib.config import (
    BuildConfig,
    config_path,
    get_config,
    load_config,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("BUILDLIB_UNSET", raising=False)

        assert substitute_env_vars("v=${BUILDLIB_UNSET:-fallback}") == "v=fallback"

    def test_value_wins_over_default(self, monkeypatch):
        monkeypatch.setenv("BUILDLIB_SET", "real")

        assert substitute_env_vars("${BUILDLIB_SET:-fallback}") == "real"

    def test_required_missing_raises(self, monkeypatch):
        monkeypatch.delenv("BUILDLIB_UNSET", raising=False)

        with pytest.raises(ValueError, match="BUILDLIB_UNSET not set"):
            substitute_env_vars("${BUILDLIB_UNSET}")

    def test_custom_error_message(self, monkeypatch):
        monkeypatch.delenv("BUILDLIB_UNSET", raising=False)

        with pytest.raises(ValueError, match="set it in CI"):
            substitute_env_vars("${BUILDLIB_UNSET:?set it in CI}")


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")

        assert config == BuildConfig()
        assert config.rancher.cli_version == "v0.6.10"
        assert config.rancher.compose_version == "v0.12.5"
        assert config.go.module_env == {"GO111MODULE": "on"}

    def test_loads_yaml_with_substitution(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RANCHER_CLI_VERSION", "v0.6.14")
        path = tmp_path / "buildlib.yaml"
        path.write_text(
            "config:\n"
            "  rancher:\n"
            "    cli_version: ${RANCHER_CLI_VERSION:-v0.6.10}\n"
            "    install_dir: /usr/local/bin\n"
            "  go:\n"
            "    module_env:\n"
            '      GO111MODULE: "on"\n'
            "      GOFLAGS: -mod=mod\n"
        )

        config = load_config(path)

        assert config.rancher.cli_version == "v0.6.14"
        assert config.rancher.install_dir == "/usr/local/bin"
        assert config.rancher.compose_version == "v0.12.5"
        assert config.go.module_env == {"GO111MODULE": "on", "GOFLAGS": "-mod=mod"}
        assert config.git.binary == "git"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "buildlib.yaml"
        path.write_text("")

        assert load_config(path) == BuildConfig()

    def test_missing_config_key(self, tmp_path: Path):
        path = tmp_path / "buildlib.yaml"
        path.write_text("rancher:\n  cli_version: v1\n")

        with pytest.raises(ValueError, match="missing 'config' key"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "buildlib.yaml"
        path.write_text("config: [unclosed\n")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_config(path)

    def test_validation_error(self, tmp_path: Path):
        path = tmp_path / "buildlib.yaml"
        path.write_text("config:\n  go:\n    module_env: not-a-mapping\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(path)


class TestConfigPath:
    def test_env_override(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("BUILDLIB_CONFIG", str(tmp_path / "ci.yaml"))

        assert config_path() == tmp_path / "ci.yaml"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("BUILDLIB_CONFIG", raising=False)

        assert config_path() == Path("buildlib.yaml")

    def test_get_config_is_cached(self):
        assert get_config() is get_config()
