"""
Tests for settings and override environment loading
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from playbook_toolkit.core.config import Settings, get_settings, load_override_environment


class TestSettings:
    """Tests for environment-driven settings"""

    def test_defaults(self):
        settings = Settings()

        assert settings.playbook_dir == Path("playbooks/")
        assert settings.inventory_dir == Path("inventory.yaml")
        assert settings.verbose is False
        assert settings.playbook_command == "ansible-playbook"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("PLAYBOOK_DIR", "/srv/playbooks")
        monkeypatch.setenv("INVENTORY_DIR", "/srv/hosts.yaml")
        monkeypatch.setenv("VERBOSE", "true")

        settings = Settings()

        assert settings.playbook_dir == Path("/srv/playbooks")
        assert settings.inventory_dir == Path("/srv/hosts.yaml")
        assert settings.verbose is True

    @pytest.mark.parametrize("value", ["yes", "1", "nonsense", "TRUE", "True", " true"])
    def test_unrecognised_verbose_is_false(self, monkeypatch, value):
        monkeypatch.setenv("VERBOSE", value)

        assert Settings().verbose is False

    def test_env_file_in_working_directory(self):
        Path(".env").write_text("PLAYBOOK_DIR=from-dotenv\n")

        assert Settings().playbook_dir == Path("from-dotenv")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_playbook_command_rejected(self, monkeypatch, value):
        monkeypatch.setenv("PLAYBOOK_COMMAND", value)

        with pytest.raises(ValidationError):
            Settings()

    def test_playbook_command_with_arguments(self, monkeypatch):
        monkeypatch.setenv("PLAYBOOK_COMMAND", "ansible-playbook --diff")

        assert Settings().playbook_command == "ansible-playbook --diff"

    def test_log_level_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_get_settings_singleton(self):
        assert get_settings() is get_settings()


class TestOverrideEnvironment:
    """Tests for per-playbook override variables"""

    def test_reads_env_file(self):
        Path(".env").write_text("deploy.yaml=ENV=staging\n")

        assert load_override_environment()["deploy.yaml"] == "ENV=staging"

    def test_process_environment_wins(self, monkeypatch):
        Path(".env").write_text("deploy.yaml=ENV=staging\n")
        monkeypatch.setenv("deploy.yaml", "ENV=prod")

        assert load_override_environment()["deploy.yaml"] == "ENV=prod"

    def test_missing_env_file(self, monkeypatch):
        monkeypatch.setenv("backup.yaml", "A=1")

        assert load_override_environment()["backup.yaml"] == "A=1"
