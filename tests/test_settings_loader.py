"""
Settings loader tests for hifztrack.
"""

import pytest
from pydantic import ValidationError

from hifztrack.utils import load_settings, read_settings_file, DEFAULT_SETTINGS_PATH
from hifztrack.utils.settings_loader import SETTINGS_ENV_VAR, resolve_settings_path


@pytest.fixture(autouse=True)
def clear_settings_env(monkeypatch):
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)


class TestReadSettingsFile:
    """Test YAML parsing."""

    def test_nested_section(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("memorization:\n  first_page_lines: 5\n", encoding="utf-8")
        assert read_settings_file(path) == {"first_page_lines": 5}

    def test_flat_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("total_pages: 10\n", encoding="utf-8")
        assert read_settings_file(path) == {"total_pages": 10}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert read_settings_file(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            read_settings_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_settings_file(tmp_path / "nope.yaml")


class TestLoadSettings:
    """Test settings resolution and validation."""

    def test_bundled_defaults(self):
        settings = load_settings()
        assert settings.first_page_lines == 7
        assert settings.total_pages == 602
        assert settings.repetition_count == 80

    def test_bundled_file_exists(self):
        assert DEFAULT_SETTINGS_PATH.exists()

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("memorization:\n  first_page_lines: 5\n  repetition_count: 40\n", encoding="utf-8")
        settings = load_settings(path)
        assert settings.first_page_lines == 5
        assert settings.repetition_count == 40
        assert settings.standard_page_lines == 15

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("total_pages: 20\n", encoding="utf-8")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert resolve_settings_path() == (path, True)
        assert load_settings().total_pages == 20

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("first_page_lines: 0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)

    def test_misspelled_key_raises(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("memorization:\n  first_page_line: 5\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)
