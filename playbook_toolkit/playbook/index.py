"""
Playbook index - ordinal assignment for a playbook directory

Playbooks are numbered by their position in the sorted list of file names.
Nothing is cached: every call lists the directory again.
"""

import logging
import os
from pathlib import Path

from playbook_toolkit.playbook.exceptions import (
    DirectoryNotFoundError,
    NameNotFoundError,
    OrdinalNotFoundError,
)
from playbook_toolkit.playbook.models import PLAYBOOK_EXTENSION, PlaybookMap

logger = logging.getLogger(__name__)


def enumerate_playbooks(directory: Path | str, extension: str = PLAYBOOK_EXTENSION) -> PlaybookMap:
    """
    Map ordinals to playbook file names

    Args:
        directory: Playbook directory
        extension: File suffix that marks a playbook

    Returns:
        Dict of ordinal -> file name, ordinals contiguous from 0 in sorted name order

    Raises:
        DirectoryNotFoundError: If the directory cannot be listed
    """
    try:
        entries = os.listdir(directory)
    except OSError as e:
        raise DirectoryNotFoundError(directory, e.strerror or str(e)) from e

    names = sorted(
        name
        for name in entries
        if name.endswith(extension) and not os.path.isdir(os.path.join(directory, name))
    )
    logger.debug(f"Indexed {len(names)} playbooks in {directory}")
    return dict(enumerate(names))


class PlaybookIndex:
    """
    Snapshot of a playbook directory

    Lookups run against a single enumeration, so a command resolving several
    tokens sees one consistent numbering even if the directory changes.

    Example:
        index = PlaybookIndex.from_directory(Path("playbooks"))
        index.name_for(0)  # "deploy.yaml"
    """

    def __init__(self, directory: Path | str, playbooks: PlaybookMap):
        self.directory = Path(directory)
        self.playbooks = playbooks

    @classmethod
    def from_directory(cls, directory: Path | str) -> "PlaybookIndex":
        return cls(directory, enumerate_playbooks(directory))

    def name_for(self, ordinal: int) -> str:
        try:
            return self.playbooks[ordinal]
        except KeyError:
            raise OrdinalNotFoundError(ordinal, self.directory) from None

    def ordinal_for(self, name: str) -> int:
        for ordinal, file_name in self.playbooks.items():
            if file_name == name:
                return ordinal
        raise NameNotFoundError(name, self.directory)

    def __len__(self) -> int:
        return len(self.playbooks)


def name_for_ordinal(ordinal: int, directory: Path | str) -> str:
    """Look up the file name at an ordinal, re-enumerating the directory"""
    return PlaybookIndex.from_directory(directory).name_for(ordinal)


def ordinal_for_name(name: str, directory: Path | str) -> int:
    """Look up the ordinal of a file name, re-enumerating the directory"""
    return PlaybookIndex.from_directory(directory).ordinal_for(name)
