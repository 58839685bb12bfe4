"""
Configuration management

Centralized settings using Pydantic BaseSettings for type-safe configuration
with environment variable and .env file support.
"""

import logging
import os
import shlex
from pathlib import Path

from dotenv import dotenv_values
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_FILE = ".env"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings with environment variable support

    Settings can be overridden via environment variables or a .env file in
    the working directory:
    - PLAYBOOK_DIR=/srv/playbooks
    - INVENTORY_DIR=/srv/inventory.yaml
    - VERBOSE=true
    - PLAYBOOK_COMMAND="ansible-playbook --diff"
    """

    playbook_dir: Path = Path("playbooks/")
    inventory_dir: Path = Path("inventory.yaml")
    verbose: bool = False

    # Engine executable, optionally with extra leading arguments
    playbook_command: str = "ansible-playbook"

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("verbose", mode="before")
    @classmethod
    def parse_verbose(cls, v: object) -> object:
        """Only the exact string "true" enables verbose output"""
        if isinstance(v, str):
            return v == "true"
        return v

    @field_validator("playbook_command")
    @classmethod
    def validate_playbook_command(cls, v: str) -> str:
        if not shlex.split(v):
            raise ValueError("Playbook command must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'")
        return level


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_override_environment(env_file: Path | str = ENV_FILE) -> dict[str, str]:
    """
    Get the variables that may hold per-playbook overrides

    Values from the .env file are included so a variable such as
    "deploy.yaml=ENV=prod" can live there; the process environment wins.

    Returns:
        Merged mapping of variable name -> value
    """
    environ = {key: value for key, value in dotenv_values(env_file).items() if value is not None}
    environ.update(os.environ)
    return environ
