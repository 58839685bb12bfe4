"""
Report formatting for the list, describe and run commands

Each formatter returns a plain string; printing is left to the caller.
"""

from pathlib import Path

from playbook_toolkit.playbook.loader import PlaybookLoader
from playbook_toolkit.playbook.models import ExecutionOutcome, PlaybookMap

DESCRIBE_RULE = "==========================="


def format_list(playbooks: PlaybookMap, playbook_dir: Path, verbose: bool = False) -> str:
    """
    List playbooks as "<ordinal>: <file>"

    With verbose, append the declared name of each playbook.

    Raises:
        PlaybookError: If a playbook cannot be parsed (verbose only)
    """
    results = ""
    for ordinal in sorted(playbooks):
        file_name = playbooks[ordinal]
        if verbose:
            name = PlaybookLoader.declared_name(playbook_dir / file_name)
            results += f"{ordinal}: {file_name} - {name}\n"
        else:
            results += f"{ordinal}: {file_name}\n"
    return results


def format_describe(playbooks: PlaybookMap, playbook_dir: Path, verbose: bool = False) -> str:
    """
    Describe selected playbooks

    Summary form is "<ordinal>: <file> - <name>" followed by
    " Envs: <vars>" when the first play references templated variables.
    With verbose, the full file contents are shown instead.

    Raises:
        PlaybookError: If a playbook cannot be read or parsed
    """
    results = ""
    for ordinal in sorted(playbooks):
        file_name = playbooks[ordinal]
        book_path = playbook_dir / file_name
        if verbose:
            contents = PlaybookLoader.read_contents(book_path)
            results += f"{ordinal}: {file_name}\n{DESCRIBE_RULE}\n{contents}"
            if not contents.endswith("\n"):
                results += "\n"
        else:
            metadata = PlaybookLoader.load_metadata(book_path)
            results += f"{ordinal}: {file_name} - {metadata.name}"
            if metadata.templated_vars:
                results += f" Envs: {', '.join(metadata.templated_vars)}"
            results += "\n"
    return results


def format_run_results(outcomes: dict[int, ExecutionOutcome]) -> str:
    """Render outcomes as "<ordinal>: <file> - Success|Failed" lines"""
    results = ""
    for ordinal in sorted(outcomes):
        outcome = outcomes[ordinal]
        status = "Success" if outcome.success else "Failed"
        results += f"{ordinal}: {outcome.file_name} - {status}\n"
    return results
