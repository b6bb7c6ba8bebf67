"""Unit tests for settings loading."""

from pathlib import Path

import pytest
import yaml

from dotfile.config.settings import Settings, load_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure no override leaks in from the environment."""
    monkeypatch.delenv("DOTFILE_DEFAULT_PACKAGE_MANAGER", raising=False)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Test that no settings file means default settings."""
        settings = load_settings(tmp_path)
        assert settings == Settings()
        assert settings.default_package_manager == ""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Test loading the default package manager from the file."""
        (tmp_path / "config.yaml").write_text(yaml.dump({"default-package-manager": "pacman"}))
        assert load_settings(tmp_path).default_package_manager == "pacman"

    def test_accepts_field_name(self, tmp_path: Path) -> None:
        """Test that the underscore spelling is accepted too."""
        (tmp_path / "config.yaml").write_text("default_package_manager: yay\n")
        assert load_settings(tmp_path).default_package_manager == "yay"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file gives defaults."""
        (tmp_path / "config.yaml").write_text("")
        assert load_settings(tmp_path) == Settings()

    def test_environment_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the environment overrides the file."""
        (tmp_path / "config.yaml").write_text("default-package-manager: pacman\n")
        monkeypatch.setenv("DOTFILE_DEFAULT_PACKAGE_MANAGER", "yay")
        assert load_settings(tmp_path).default_package_manager == "yay"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that invalid YAML raises ValueError."""
        (tmp_path / "config.yaml").write_text("invalid: yaml: content: [[[")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_settings(tmp_path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test that a non-mapping document raises ValueError."""
        (tmp_path / "config.yaml").write_text("- pacman\n")
        with pytest.raises(ValueError, match="must contain a YAML mapping"):
            load_settings(tmp_path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        """Test that a schema violation raises ValueError."""
        (tmp_path / "config.yaml").write_text("default-package-manager: [pacman]\n")
        with pytest.raises(ValueError, match="Failed to parse settings"):
            load_settings(tmp_path)
