"""
Playbook resolution and execution

This module provides:
- Ordinal indexing of a playbook directory
- Index, range and name selection with per-playbook environment overrides
- Name and templated variable extraction from playbook YAML
- Sequential execution through ansible-playbook, quiet or streamed
"""

from playbook_toolkit.playbook.exceptions import (
    DirectoryNotFoundError,
    ExecutionLaunchError,
    FileNotReadableError,
    InvalidSelectionError,
    MalformedEnvAssignmentError,
    MissingNameFieldError,
    NameNotFoundError,
    NotParsableError,
    OrdinalNotFoundError,
    PlaybookError,
)
from playbook_toolkit.playbook.index import (
    PlaybookIndex,
    enumerate_playbooks,
    name_for_ordinal,
    ordinal_for_name,
)
from playbook_toolkit.playbook.loader import PlaybookLoader
from playbook_toolkit.playbook.models import (
    ExecutionOutcome,
    ExecutionStatus,
    PlaybookMetadata,
)
from playbook_toolkit.playbook.runner import PlaybookRunner
from playbook_toolkit.playbook.selector import (
    merge_environment_overrides,
    resolve,
    resolve_with_env,
)

__all__ = [
    "PlaybookIndex",
    "PlaybookLoader",
    "PlaybookRunner",
    "PlaybookMetadata",
    "ExecutionOutcome",
    "ExecutionStatus",
    "enumerate_playbooks",
    "name_for_ordinal",
    "ordinal_for_name",
    "resolve",
    "resolve_with_env",
    "merge_environment_overrides",
    "PlaybookError",
    "DirectoryNotFoundError",
    "OrdinalNotFoundError",
    "NameNotFoundError",
    "MalformedEnvAssignmentError",
    "InvalidSelectionError",
    "FileNotReadableError",
    "NotParsableError",
    "MissingNameFieldError",
    "ExecutionLaunchError",
]
