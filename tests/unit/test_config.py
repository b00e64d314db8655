"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from knowledgedoc.config import (
    DEFAULT_CONFIG_PATH,
    ENV_DOCUMENT,
    ENV_SECTION_LEVEL,
    Settings,
    load_config,
    load_settings,
)


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "knowledgedoc.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_is_empty(self, tmp_path):
        """No config file means no overrides."""
        assert load_config(tmp_path / "missing.yaml") == {}

    def test_empty_file_is_empty(self, tmp_path):
        """An empty YAML document is treated as no config."""
        assert load_config(write_config(tmp_path, "")) == {}

    def test_non_mapping_raises(self, tmp_path):
        """Top-level lists are rejected."""
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, "- a\n- b\n"))

    def test_bundled_config_parses(self):
        """The shipped config file is valid."""
        config = load_config(DEFAULT_CONFIG_PATH)
        assert config["section_level"] == 2
        assert config["server"]["port"] == 8000


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self, tmp_path):
        """Without file or environment the defaults apply."""
        settings = load_settings(tmp_path / "missing.yaml", environ={})
        assert settings == Settings()

    def test_values_from_file(self, tmp_path):
        """File values override defaults."""
        path = write_config(tmp_path, (
            "document: notes/kb.md\n"
            "section_level: 1\n"
            "server:\n"
            "  host: 0.0.0.0\n"
            "  port: 9000\n"
            "unknown: ignored\n"
        ))
        settings = load_settings(path, environ={})
        assert settings.document == tmp_path / "notes" / "kb.md"
        assert settings.section_level == 1
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000

    def test_absolute_document_path_kept(self, tmp_path):
        """Absolute paths are not rebased on the config directory."""
        target = tmp_path / "abs.md"
        path = write_config(tmp_path, f"document: {target}\n")
        assert load_settings(path, environ={}).document == target

    def test_environment_overrides_file(self, tmp_path):
        """Environment variables win over the config file."""
        path = write_config(tmp_path, "document: kb.md\nsection_level: 1\n")
        settings = load_settings(path, environ={
            ENV_DOCUMENT: "/tmp/other.md",
            ENV_SECTION_LEVEL: "3",
        })
        assert settings.document == Path("/tmp/other.md")
        assert settings.section_level == 3

    @pytest.mark.parametrize("text", [
        "section_level: 0\n",
        "section_level: 7\n",
        "section_level: two\n",
        "server:\n  port: 70000\n",
        "server:\n  port: http\n",
    ])
    def test_invalid_values_raise(self, tmp_path, text):
        """Out-of-range or non-numeric values are rejected."""
        with pytest.raises(ValueError):
            load_settings(write_config(tmp_path, text), environ={})

    def test_invalid_environment_level_raises(self, tmp_path):
        """Bad environment values are rejected too."""
        with pytest.raises(ValueError):
            load_settings(tmp_path / "missing.yaml", environ={ENV_SECTION_LEVEL: "9"})
