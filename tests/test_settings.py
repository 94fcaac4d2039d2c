"""Tests for src.shared.settings and the YAML loader."""

from __future__ import annotations

import pytest

from src.shared.config_loader import load_yaml
from src.shared.settings import DEFAULT_CONFIG_PATH, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ALERTS_API_URL", "ALERTS_STORAGE_DIR", "ALERTS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_bundled_config(self):
        settings = load_settings(DEFAULT_CONFIG_PATH)
        assert settings.default_page_size == 50
        assert settings.partition_for("active") == ["firing"]
        assert settings.partition_for("history") == ["resolved"]

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.yaml")
        assert settings.api_base_url == "http://localhost:8080"
        assert settings.views == {}
        assert settings.partition_for("active") == []

    def test_values_from_file(self, tmp_path):
        cfg = tmp_path / "dashboard.yaml"
        cfg.write_text(
            "api:\n  base_url: http://alerts:9000\n  timeout_sec: 3\n"
            "alerts:\n  default_page_size: 500\n  views:\n    open: [firing, pending]\n",
            encoding="utf-8",
        )
        settings = load_settings(cfg)
        assert settings.api_base_url == "http://alerts:9000"
        assert settings.request_timeout_sec == 3.0
        assert settings.default_page_size == 100
        assert settings.partition_for("open") == ["firing", "pending"]
        assert settings.partition_for(None) == []

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ALERTS_API_URL", "http://env:1")
        monkeypatch.setenv("ALERTS_STORAGE_DIR", str(tmp_path))
        monkeypatch.setenv("ALERTS_LOG_LEVEL", "DEBUG")
        settings = load_settings(tmp_path / "missing.yaml")
        assert settings.api_base_url == "http://env:1"
        assert settings.storage_dir == str(tmp_path)
        assert settings.log_level == "DEBUG"


class TestLoadYaml:
    def test_empty_file(self, tmp_path):
        p = tmp_path / "empty.yaml"
        p.write_text("", encoding="utf-8")
        assert load_yaml(p) == {}

    def test_non_mapping_rejected(self, tmp_path):
        p = tmp_path / "list.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_yaml(p)

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "x.yaml")
