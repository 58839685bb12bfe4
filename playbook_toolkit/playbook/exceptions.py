"""
Playbook exceptions

Provides a consistent exception structure for playbook lookup, parsing and
execution errors with clear error messages, recovery hints, and context
information.
"""

from pathlib import Path
from typing import Any


class PlaybookError(Exception):
    """
    Base exception for playbook errors

    Attributes:
        message: Error message
        recovery_hint: Optional hint for recovery
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        recovery_hint: str = "",
        context: dict[str, Any] | None = None,
    ):
        self.recovery_hint = recovery_hint
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.recovery_hint:
            msg += f"\n💡 Recovery: {self.recovery_hint}"
        return msg


class DirectoryNotFoundError(PlaybookError):
    """Playbook directory does not exist or cannot be listed"""

    def __init__(self, directory: Path | str, reason: str = ""):
        self.directory = str(directory)
        message = f"Playbook directory cannot be read: {directory}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            recovery_hint="Pass --playbook-dir or set PLAYBOOK_DIR to an existing directory",
            context={"directory": self.directory},
        )


class OrdinalNotFoundError(PlaybookError):
    """No playbook is indexed at the requested ordinal"""

    def __init__(self, ordinal: int, directory: Path | str = ""):
        self.ordinal = ordinal
        super().__init__(
            f"No playbook with index {ordinal}",
            recovery_hint="Run 'list' to see the available indices",
            context={"ordinal": ordinal, "directory": str(directory)},
        )


class NameNotFoundError(PlaybookError):
    """No playbook file with the requested name"""

    def __init__(self, name: str, directory: Path | str = ""):
        self.name = name
        super().__init__(
            f"No playbook named '{name}'",
            recovery_hint="Use the full file name including the .yaml extension",
            context={"name": name, "directory": str(directory)},
        )


class MalformedEnvAssignmentError(PlaybookError):
    """An environment override segment is not of the form KEY=VALUE"""

    def __init__(self, assignment: str, source: str = ""):
        self.assignment = assignment
        self.source = source

        location = f" in '{source}'" if source else ""
        super().__init__(
            f"Malformed environment assignment '{assignment}'{location}",
            recovery_hint="Environment variables must be in the format KEY=VALUE",
            context={"assignment": assignment, "source": source},
        )


class InvalidSelectionError(PlaybookError):
    """A selection token is well-formed but cannot be honoured"""

    def __init__(self, token: str, message: str):
        self.token = token
        super().__init__(
            f"Invalid selection '{token}': {message}",
            context={"token": token},
        )


class FileNotReadableError(PlaybookError):
    """Playbook file does not exist or cannot be read"""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = str(path)
        message = f"File {path} does not exist or is not readable"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            recovery_hint="Check the file exists and its permissions",
            context={"path": self.path},
        )


class NotParsableError(PlaybookError):
    """
    Playbook file is not valid YAML or not a sequence of plays

    Attributes:
        path: Path to the playbook file
        line_number: Optional line number where the YAML error occurred
    """

    def __init__(self, path: Path | str, message: str, line_number: int | None = None):
        self.path = str(path)
        self.line_number = line_number

        location = f"File {path}"
        if line_number:
            location += f" (line {line_number})"

        super().__init__(
            f"{location} is not parsable: {message}",
            recovery_hint="Check indentation (use spaces, not tabs) and that the file is a list of plays",
            context={"path": self.path, "line_number": line_number},
        )


class MissingNameFieldError(PlaybookError):
    """The first play has no string 'name' field"""

    def __init__(self, path: Path | str):
        self.path = str(path)
        super().__init__(
            f"File {path} has no 'name' field in its first play",
            recovery_hint="Add a 'name: <description>' entry to the first play",
            context={"path": self.path},
        )


class ExecutionLaunchError(PlaybookError):
    """
    The external engine could not be started at all

    Attributes:
        command: The argument vector that failed to launch
        original_error: The underlying OSError
    """

    def __init__(self, command: list[str], original_error: Exception | None = None):
        self.command = command
        self.original_error = original_error

        message = f"Failed to execute command '{command[0] if command else ''}'"
        if original_error:
            message += f": {original_error}"

        super().__init__(
            message,
            recovery_hint="Check that ansible-playbook is installed and on PATH, or set PLAYBOOK_COMMAND",
            context={
                "command": command,
                "original_error": str(original_error) if original_error else None,
            },
        )
