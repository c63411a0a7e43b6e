"""Tests for configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from artemis.config import Config, get_default_config, load_config, load_environment_file
from artemis.config.env import find_environment_file
from artemis.config.loader import DEFAULT_ARTIFACTS, default_config_path


class TestConfigLoader:
    """Tests for load_config function."""

    def test_default_file_exists(self) -> None:
        assert default_config_path().exists()

    def test_load_default_values(self) -> None:
        config = load_config()

        assert config.agent.name == "artemis"
        assert config.agent.render_budget_min == 0
        assert config.agent.render_budget_max == 13
        assert config.agent.max_ticks == 300
        assert config.world.size == 200
        assert config.explore.radius == 10
        assert config.explore.scan_budget is None
        assert config.explore.categories == ["rock", "tree"]
        assert config.tracker.report_category == "tree"
        assert config.artifacts.terminal == "meow.png"
        assert config.artifacts.names == DEFAULT_ARTIFACTS
        assert config.artifacts.load_images is False
        assert config.simulation.factory is None

    def test_default_file_matches_model_defaults(self) -> None:
        assert load_config() == get_default_config()

    def test_load_custom_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(
            yaml.dump({"agent": {"max_ticks": 50, "seed": 7}, "explore": {"radius": 4}})
        )

        config = load_config(config_file)

        assert config.agent.max_ticks == 50
        assert config.agent.seed == 7
        assert config.explore.radius == 4
        assert config.world.size == 200

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) == Config()

    def test_missing_config_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_inverted_budget_range_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(
            yaml.dump({"agent": {"render_budget_min": 9, "render_budget_max": 2}})
        )

        with pytest.raises(ValidationError, match="render_budget_min"):
            load_config(config_file)

    @pytest.mark.parametrize(
        "data",
        [
            {"explore": {"radius": 0}},
            {"explore": {"categories": []}},
            {"logging": {"level": "LOUD"}},
            {"logging": {"format": "xml"}},
            {"simulation": {"factory": "no_colon_here"}},
            {"artifacts": {"height": 0}},
        ],
    )
    def test_invalid_values_rejected(self, tmp_path: Path, data: dict) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(yaml.dump(data))

        with pytest.raises(ValidationError):
            load_config(config_file)


class TestEnvironmentOverrides:
    """Tests for ARTEMIS_* environment overrides."""

    def test_int_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARTEMIS_AGENT__MAX_TICKS", "50")
        assert load_config().agent.max_ticks == 50

    def test_bool_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARTEMIS_ARTIFACTS__LOAD_IMAGES", "true")
        monkeypatch.setenv("ARTEMIS_AGENT__DEBUG", "yes")

        config = load_config()

        assert config.artifacts.load_images is True
        assert config.agent.debug is True

    def test_list_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARTEMIS_EXPLORE__CATEGORIES", "rock, tree ,gold")
        assert load_config().explore.categories == ["rock", "tree", "gold"]

    def test_override_of_null_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARTEMIS_EXPLORE__SCAN_BUDGET", "42.5")
        monkeypatch.setenv("ARTEMIS_SIMULATION__FACTORY", "my_sim.world:build")

        config = load_config()

        assert config.explore.scan_budget == 42.5
        assert config.simulation.factory == "my_sim.world:build"

    def test_invalid_override_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARTEMIS_WORLD__SIZE", "0")
        with pytest.raises(ValidationError):
            load_config()


class TestEnvironmentFile:
    """Tests for dotenv discovery and loading."""

    @pytest.fixture(autouse=True)
    def _isolate_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        keys = ("ARTEMIS_ENV_FILE", "ARTEMIS_AGENT__NAME", "ARTEMIS_WORLD__SIZE", "UNRELATED_TOKEN")
        for key in keys:
            monkeypatch.setenv(key, "")
            monkeypatch.delenv(key)

    def test_loads_explicit_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "sim.env"
        env_file.write_text("ARTEMIS_AGENT__NAME=apollo\n")

        exported = load_environment_file(env_file)

        assert exported == {"ARTEMIS_AGENT__NAME": "apollo"}
        assert load_config().agent.name == "apollo"

    def test_relative_explicit_path_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "sim.env").write_text("ARTEMIS_AGENT__NAME=apollo\n")

        assert find_environment_file("sim.env", cwd=tmp_path) == (tmp_path / "sim.env").resolve()

    def test_env_var_points_to_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / "other.env"
        env_file.write_text("ARTEMIS_AGENT__NAME=apollo\n")
        monkeypatch.setenv("ARTEMIS_ENV_FILE", str(env_file))

        assert find_environment_file(cwd=tmp_path) == env_file.resolve()

    def test_prefers_env_beside_config_file(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "sims" / "meadow"
        config_dir.mkdir(parents=True)
        config_file = config_dir / "meadow.yaml"
        config_file.write_text(yaml.dump({"agent": {"name": "yaml"}, "world": {"size": 64}}))
        (config_dir / ".env").write_text("ARTEMIS_AGENT__NAME=meadow\n")
        (tmp_path / ".env").write_text("ARTEMIS_AGENT__NAME=cwd\n")

        exported = load_environment_file(config_path=config_file, cwd=tmp_path)

        assert exported == {"ARTEMIS_AGENT__NAME": "meadow"}
        config = load_config(config_file)
        assert config.agent.name == "meadow"
        assert config.world.size == 64

    def test_falls_back_to_cwd(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "sims"
        config_dir.mkdir()
        (tmp_path / ".env").write_text("ARTEMIS_AGENT__NAME=cwd\n")

        path = find_environment_file(config_path=config_dir / "sim.yaml", cwd=tmp_path)

        assert path == (tmp_path / ".env").resolve()

    def test_no_file_found(self, tmp_path: Path) -> None:
        assert find_environment_file(cwd=tmp_path) is None
        assert load_environment_file(cwd=tmp_path) == {}

    def test_only_prefixed_keys_are_exported(self, tmp_path: Path) -> None:
        env_file = tmp_path / "sim.env"
        env_file.write_text("ARTEMIS_WORLD__SIZE=80\nUNRELATED_TOKEN=secret\n")

        exported = load_environment_file(env_file)

        assert exported == {"ARTEMIS_WORLD__SIZE": "80"}
        assert "UNRELATED_TOKEN" not in os.environ
        assert load_config().world.size == 80

    def test_missing_explicit_file_strict(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_environment_file(tmp_path / "missing.env")

    def test_missing_explicit_file_lenient(self, tmp_path: Path) -> None:
        assert load_environment_file(tmp_path / "missing.env", strict=False) == {}

    def test_existing_values_win_without_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / "sim.env"
        env_file.write_text("ARTEMIS_AGENT__NAME=apollo\n")
        monkeypatch.setenv("ARTEMIS_AGENT__NAME", "hermes")

        assert load_environment_file(env_file) == {}
        assert load_config().agent.name == "hermes"

    def test_override_replaces_existing_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / "sim.env"
        env_file.write_text("ARTEMIS_AGENT__NAME=apollo\n")
        monkeypatch.setenv("ARTEMIS_AGENT__NAME", "hermes")

        load_environment_file(env_file, override=True)

        assert load_config().agent.name == "apollo"
