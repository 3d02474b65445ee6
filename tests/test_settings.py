"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from familycart.config.settings import Settings


class TestSettings:
    """Tests for Settings load/save."""

    def test_defaults_when_missing(self, tmp_path):
        settings = Settings.load(tmp_path / "config.yaml")

        assert settings.catalog.path is None
        assert settings.defaults.period == "week"
        assert settings.defaults.output_format == "table"
        assert settings.logging.level == "WARNING"

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "catalog:\n"
            "  path: /data/catalog.yaml\n"
            "defaults:\n"
            "  period: month\n"
            "  diet: healthy\n"
            "logging:\n"
            "  level: debug\n"
        )
        settings = Settings.load(path)

        assert settings.catalog.path == Path("/data/catalog.yaml")
        assert settings.defaults.period == "month"
        assert settings.defaults.diet == "healthy"
        assert settings.logging.level == "DEBUG"

    def test_save_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.defaults.period = "day"
        settings.defaults.output_format = "markdown"
        settings.save(path)

        restored = Settings.load(path)
        assert restored.defaults.period == "day"
        assert restored.defaults.output_format == "markdown"
        assert restored.catalog.path is None

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("defaults: [unclosed")
        with pytest.raises(yaml.YAMLError):
            Settings.load(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            Settings.load(path)
