"""
Playbook models and data structures

Defines the data models for resolved selections, playbook metadata and
execution outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum

PLAYBOOK_EXTENSION = ".yaml"

# ordinal -> file name
PlaybookMap = dict[int, str]

# ordinal -> (file name, environment overrides)
EnvSelection = dict[int, tuple[str, dict[str, str]]]


class ExecutionStatus(str, Enum):
    """Lifecycle of a single playbook execution"""

    PENDING = "pending"
    SPAWNED = "spawned"
    STREAMING = "streaming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PlaybookMetadata:
    """Metadata extracted from the first play of a playbook"""

    name: str
    templated_vars: list[str] = field(default_factory=list)


@dataclass
class ExecutionOutcome:
    """Result of running one playbook through the external engine"""

    ordinal: int
    file_name: str
    status: ExecutionStatus = ExecutionStatus.PENDING
    return_code: int | None = None

    @property
    def success(self) -> bool:
        return self.status == ExecutionStatus.SUCCEEDED
