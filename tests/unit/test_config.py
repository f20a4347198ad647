"""Tests for siteprobe.core.config."""

from pathlib import Path

from siteprobe.core.config import DEFAULTS, _deep_merge, config_path, load_config


class TestDeepMerge:
    def test_simple_override(self):
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self):
        base = {"report": {"url_width": 60, "max_api_endpoints": 15}}
        result = _deep_merge(base, {"report": {"url_width": 100}})
        assert result["report"]["url_width"] == 100
        assert result["report"]["max_api_endpoints"] == 15

    def test_does_not_mutate_base(self):
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base["a"]["b"] == 1


class TestLoadConfig:
    def test_returns_defaults_when_no_file(self, tmp_path: Path):
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config["robots"]["timeout"] == DEFAULTS["robots"]["timeout"]
        assert config["report"]["max_api_endpoints"] == 15

    def test_loads_and_merges(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("robots:\n  timeout: 3.5\n")
        config = load_config(config_file)
        assert config["robots"]["timeout"] == 3.5
        assert config["robots"]["follow_redirects"] is True

    def test_home_env_override(self, tmp_path: Path, monkeypatch):
        custom_home = tmp_path / "custom"
        monkeypatch.setenv("SITEPROBE_HOME", str(custom_home))
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config["home"] == str(custom_home.resolve())
        assert config_path() == custom_home.resolve() / "config.yaml"

    def test_handles_empty_file(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file)["report"]["url_width"] == 60

    def test_handles_corrupt_yaml(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(": : : invalid yaml [[[")
        config = load_config(config_file)
        assert "robots" in config

    def test_non_mapping_yaml_ignored(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        assert load_config(config_file)["logging"]["level"] == "warning"
