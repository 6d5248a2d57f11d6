"""Unit tests for the layered YAML configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_generator.core.config.settings import Settings
from recipe_generator.core.config.yaml_source import (
    MultiYamlConfigSettingsSource,
    deep_merge,
    load_yaml_directory,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Config tree with a base layer and a staging override."""
    base = tmp_path / "base"
    base.mkdir()
    (base / "app.yaml").write_text("app:\n  name: Base Name\n  version: 1.0.0\n")
    (base / "llm.yaml").write_text(
        "llm:\n  base_url: http://localhost:1234/v1\n  model: base-model\n  max_retries: 2\n"
    )

    staging = tmp_path / "environments" / "staging"
    staging.mkdir(parents=True)
    (staging / "llm.yaml").write_text("llm:\n  model: staging-model\n")
    return tmp_path


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_keys_merge(self) -> None:
        """Should merge nested mappings key by key."""
        base = {"llm": {"model": "a", "timeout": 10}, "app": {"name": "x"}}
        override = {"llm": {"model": "b"}}

        assert deep_merge(base, override) == {
            "llm": {"model": "b", "timeout": 10},
            "app": {"name": "x"},
        }

    def test_non_mapping_replaces(self) -> None:
        """Should replace lists and scalars wholesale."""
        base = {"api": {"cors_origins": ["a", "b"]}}

        assert deep_merge(base, {"api": {"cors_origins": ["c"]}}) == {
            "api": {"cors_origins": ["c"]}
        }

    def test_base_not_mutated(self) -> None:
        """Should leave the inputs untouched."""
        base = {"llm": {"model": "a"}}

        deep_merge(base, {"llm": {"model": "b"}})

        assert base == {"llm": {"model": "a"}}


class TestLoadYamlDirectory:
    """Tests for load_yaml_directory."""

    def test_merges_files(self, config_dir: Path) -> None:
        """Should merge every YAML file of the directory."""
        data = load_yaml_directory(config_dir / "base")

        assert data["app"]["name"] == "Base Name"
        assert data["llm"]["model"] == "base-model"

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Should return an empty dict for a missing directory."""
        assert load_yaml_directory(tmp_path / "nope") == {}

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should tolerate empty YAML files."""
        (tmp_path / "empty.yaml").write_text("")

        assert load_yaml_directory(tmp_path) == {}


class TestMultiYamlConfigSettingsSource:
    """Tests for the YAML settings source."""

    def test_environment_overrides_base(self, config_dir: Path) -> None:
        """Should layer the environment directory over the base one."""
        source = MultiYamlConfigSettingsSource(Settings, config_dir=config_dir, app_env="staging")

        data = source()

        assert data["llm"]["model"] == "staging-model"
        assert data["llm"]["max_retries"] == 2
        assert data["app"]["version"] == "1.0.0"

    def test_unknown_environment_uses_base(self, config_dir: Path) -> None:
        """Should fall back to the base layer alone."""
        source = MultiYamlConfigSettingsSource(Settings, config_dir=config_dir, app_env="qa")

        assert source()["llm"]["model"] == "base-model"

    def test_settings_from_config_dir(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should build Settings from CONFIG_DIR with environment variables on top."""
        monkeypatch.setenv("CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("APP_ENV", "staging")
        monkeypatch.setenv("LLM__TIMEOUT", "30")

        settings = Settings()

        assert settings.app.name == "Base Name"
        assert settings.llm.model == "staging-model"
        assert settings.llm.timeout == 30.0
        assert settings.is_non_production is False


class TestProjectConfig:
    """Tests for the shipped test-environment configuration."""

    def test_test_environment(self, test_settings: Settings) -> None:
        """Should disable the LLM and metrics under APP_ENV=test."""
        assert test_settings.is_testing
        assert test_settings.llm.enabled is False
        assert test_settings.observability.metrics.enabled is False
        assert test_settings.recipes.duplicate_window_seconds == 300
