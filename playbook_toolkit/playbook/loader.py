"""
Playbook loader - YAML parsing and metadata extraction

Reads playbook files and pulls the declared name and templated variables
out of the first play. The automation content itself is never validated.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from playbook_toolkit.playbook.exceptions import (
    FileNotReadableError,
    MissingNameFieldError,
    NotParsableError,
)
from playbook_toolkit.playbook.models import PlaybookMetadata

logger = logging.getLogger(__name__)

TEMPLATE_OPEN = "{{"
TEMPLATE_CLOSE = "}}"


class PlaybookLoader:
    """
    Load playbooks and extract their metadata

    Example:
        metadata = PlaybookLoader.load_metadata(Path("playbooks/install.yaml"))
        print(metadata.name, metadata.templated_vars)
    """

    @staticmethod
    def read_contents(file_path: Path) -> str:
        """
        Read a playbook file verbatim

        Raises:
            FileNotReadableError: If the file cannot be opened or decoded
        """
        try:
            with open(file_path, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileNotReadableError(file_path, str(e)) from e

    @staticmethod
    def load_first_play(file_path: Path) -> Any:
        """
        Parse a playbook and return its first play

        Args:
            file_path: Path to YAML file

        Returns:
            The first element of the top-level sequence (any YAML value)

        Raises:
            FileNotReadableError: If the file cannot be read
            NotParsableError: If the YAML is invalid or not a non-empty sequence
        """
        contents = PlaybookLoader.read_contents(file_path)

        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_number = mark.line + 1 if mark is not None else None
            raise NotParsableError(file_path, "invalid YAML syntax", line_number) from e

        if not isinstance(data, list):
            raise NotParsableError(file_path, "playbook must be a list of plays")
        if not data:
            raise NotParsableError(file_path, "playbook contains no plays")

        return data[0]

    @staticmethod
    def declared_name(file_path: Path) -> str:
        """
        Get the 'name' field of the first play

        Raises:
            MissingNameFieldError: If the field is absent or not a string
        """
        return PlaybookLoader._name_of(PlaybookLoader.load_first_play(file_path), file_path)

    @staticmethod
    def templated_vars(file_path: Path) -> list[str]:
        """
        Get the variables referenced as {{ name }} in the first play's 'vars'

        Returns:
            Variable names in the order their values appear in the file
        """
        return PlaybookLoader._vars_of(PlaybookLoader.load_first_play(file_path), file_path)

    @staticmethod
    def load_metadata(file_path: Path) -> PlaybookMetadata:
        """Extract name and templated variables with a single parse"""
        play = PlaybookLoader.load_first_play(file_path)
        return PlaybookMetadata(
            name=PlaybookLoader._name_of(play, file_path),
            templated_vars=PlaybookLoader._vars_of(play, file_path),
        )

    @staticmethod
    def _name_of(play: Any, file_path: Path) -> str:
        if not isinstance(play, dict):
            raise MissingNameFieldError(file_path)
        name = play.get("name")
        if not isinstance(name, str):
            raise MissingNameFieldError(file_path)
        return name

    @staticmethod
    def _vars_of(play: Any, file_path: Path) -> list[str]:
        if not isinstance(play, dict) or play.get("vars") is None:
            return []

        play_vars = play["vars"]
        if not isinstance(play_vars, dict):
            raise NotParsableError(file_path, "'vars' must be a mapping")

        result = []
        for value in play_vars.values():
            if not isinstance(value, str):
                continue
            var = extract_template_var(value)
            if var is not None:
                result.append(var)

        logger.debug(f"Found {len(result)} templated vars in {file_path}")
        return result


def extract_template_var(value: str) -> str | None:
    """
    Return the trimmed text between the first '{{' and the next '}}'

    >>> extract_template_var("prefix-{{ package_name }}")
    'package_name'
    """
    start = value.find(TEMPLATE_OPEN)
    if start == -1:
        return None
    end = value.find(TEMPLATE_CLOSE, start + len(TEMPLATE_OPEN))
    if end == -1:
        return None
    return value[start + len(TEMPLATE_OPEN):end].strip()
