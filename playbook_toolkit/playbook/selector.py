"""
Playbook selection - resolve user tokens to indexed playbooks

Tokens may be an index ("3"), an inclusive range ("2-4") or a file name
("deploy.yaml"). For the run command a token may also carry environment
overrides: "deploy.yaml,ENV=prod,REGION=us".
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from playbook_toolkit.playbook.exceptions import (
    InvalidSelectionError,
    MalformedEnvAssignmentError,
)
from playbook_toolkit.playbook.index import PlaybookIndex
from playbook_toolkit.playbook.models import EnvSelection, PlaybookMap

logger = logging.getLogger(__name__)

_INDEX_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_index(text: str) -> int | None:
    if _INDEX_PATTERN.fullmatch(text):
        return int(text)
    return None


def parse_token(token: str) -> range | str:
    """
    Classify a selection token

    Returns:
        A range of ordinals for index and range tokens, or the token itself
        when it names a playbook

    Raises:
        InvalidSelectionError: If a range runs backwards ("5-2")
    """
    if "-" in token:
        parts = token.split("-")
        if len(parts) == 2:
            start, end = _parse_index(parts[0]), _parse_index(parts[1])
            if start is not None and end is not None:
                if start > end:
                    raise InvalidSelectionError(token, "range start is greater than range end")
                return range(start, end + 1)
        # e.g. "install-nginx.yaml"
        return token

    ordinal = _parse_index(token)
    if ordinal is not None:
        return range(ordinal, ordinal + 1)
    return token


def parse_env_assignments(segments: Iterable[str], source: str = "") -> dict[str, str]:
    """
    Parse KEY=VALUE segments into a dict

    Raises:
        MalformedEnvAssignmentError: If a segment lacks exactly one '=' or has an empty key
    """
    env: dict[str, str] = {}
    for segment in segments:
        parts = segment.split("=")
        if len(parts) != 2 or not parts[0]:
            raise MalformedEnvAssignmentError(segment, source)
        env[parts[0]] = parts[1]
    return env


def _resolve_token(token: str, index: PlaybookIndex) -> PlaybookMap:
    parsed = parse_token(token)
    if isinstance(parsed, str):
        return {index.ordinal_for(parsed): parsed}
    return {ordinal: index.name_for(ordinal) for ordinal in parsed}


def resolve(tokens: Iterable[str], directory: Path | str) -> PlaybookMap:
    """
    Resolve selection tokens to playbooks

    Args:
        tokens: Index, range or name tokens
        directory: Playbook directory

    Returns:
        Dict of ordinal -> file name. A playbook selected twice appears once.

    Raises:
        DirectoryNotFoundError: If the directory cannot be listed
        OrdinalNotFoundError: If an index is out of range
        NameNotFoundError: If a name matches no playbook
        InvalidSelectionError: If a range runs backwards
    """
    tokens = list(tokens)
    index = PlaybookIndex.from_directory(directory)
    selection: PlaybookMap = {}
    for token in tokens:
        selection.update(_resolve_token(token, index))

    logger.debug(f"Resolved {tokens} to ordinals {sorted(selection)}")
    return selection


def resolve_with_env(tokens: Iterable[str], directory: Path | str) -> EnvSelection:
    """
    Resolve tokens that may carry comma-separated KEY=VALUE overrides

    A token with overrides must select exactly one playbook; a bare token
    behaves as in resolve() and gets no overrides.

    Raises:
        MalformedEnvAssignmentError: If an override segment is not KEY=VALUE
        InvalidSelectionError: If overrides are attached to a range
    """
    tokens = list(tokens)
    index = PlaybookIndex.from_directory(directory)
    selection: EnvSelection = {}

    for token in tokens:
        reference, *segments = token.split(",")
        if not segments:
            for ordinal, name in _resolve_token(token, index).items():
                selection[ordinal] = (name, {})
            continue

        env = parse_env_assignments(segments, source=token)
        resolved = _resolve_token(reference, index)
        if len(resolved) != 1:
            raise InvalidSelectionError(
                token, "environment overrides must target a single playbook, not a range"
            )
        for ordinal, name in resolved.items():
            selection[ordinal] = (name, env)

    logger.debug(f"Resolved {tokens} to ordinals {sorted(selection)}")
    return selection


def merge_environment_overrides(
    selection: EnvSelection, environ: Mapping[str, str]
) -> EnvSelection:
    """
    Add overrides declared in the environment under each playbook's file name

    A variable named e.g. "deploy.yaml" holding "ENV=prod,REGION=us" applies
    to that playbook. Overrides already on the selection win on collision.

    Args:
        selection: Output of resolve_with_env()
        environ: Environment mapping (usually the process environment)

    Returns:
        New selection; the input is not modified

    Raises:
        MalformedEnvAssignmentError: If the variable value is not KEY=VALUE pairs
    """
    merged: EnvSelection = {}
    for ordinal, (name, env) in selection.items():
        value = environ.get(name)
        if value is None:
            merged[ordinal] = (name, dict(env))
            continue
        from_environ = parse_env_assignments(value.split(","), source=f"${name}")
        logger.debug(f"Applying {len(from_environ)} environment overrides to {name}")
        merged[ordinal] = (name, {**from_environ, **env})
    return merged
