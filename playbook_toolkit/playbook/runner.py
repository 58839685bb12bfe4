"""
Playbook runner - execute playbooks through the external engine

Runs ansible-playbook (or a configured replacement) once per selected
playbook, one at a time. Quiet mode only observes the exit code; verbose
mode streams the child's stdout and stderr as lines arrive.

Sample command that will be run:
    ansible-playbook -i inventory.yaml playbooks/install_ior.yaml -e VERSION=2.1
"""

import logging
import queue
import shlex
import subprocess
import threading
from collections.abc import Callable
from pathlib import Path
from typing import IO

from playbook_toolkit.playbook.exceptions import ExecutionLaunchError
from playbook_toolkit.playbook.models import (
    EnvSelection,
    ExecutionOutcome,
    ExecutionStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "ansible-playbook"


def _print_line(line: str) -> None:
    print(line, flush=True)


class PlaybookRunner:
    """
    Run selected playbooks sequentially

    Example:
        runner = PlaybookRunner(Path("playbooks"), Path("inventory.yaml"))
        outcomes = runner.run_all({0: ("deploy.yaml", {"ENV": "prod"})})
    """

    def __init__(
        self,
        playbook_dir: Path | str,
        inventory: Path | str,
        command: str | list[str] = DEFAULT_COMMAND,
        output: Callable[[str], None] | None = None,
    ):
        """
        Args:
            playbook_dir: Directory holding the playbook files
            inventory: Inventory path passed to the engine with -i
            command: Engine executable, optionally with leading arguments
            output: Receives each line of child output in verbose mode
                    (default: print to stdout)
        """
        self.playbook_dir = Path(playbook_dir)
        self.inventory = Path(inventory)
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.command:
            raise ValueError("Engine command is empty")
        self.output = output or _print_line

    def build_command(self, file_name: str, env: dict[str, str]) -> list[str]:
        """
        Build the engine argument vector for one playbook

        Each override becomes a single "-e KEY=VALUE" argument. Values are
        passed verbatim without escaping.
        """
        args = [*self.command, "-i", str(self.inventory), str(self.playbook_dir / file_name)]
        for key, value in env.items():
            args.append(f"-e {key}={value}")
        return args

    def run_all(self, selection: EnvSelection, verbose: bool = False) -> dict[int, ExecutionOutcome]:
        """
        Run every selected playbook in ascending ordinal order

        Args:
            selection: ordinal -> (file name, environment overrides)
            verbose: Stream engine output instead of discarding it

        Returns:
            ordinal -> ExecutionOutcome, in the order the playbooks ran

        Raises:
            ExecutionLaunchError: If the engine cannot be started. A non-zero
                exit status is recorded as a failed outcome instead.
        """
        outcomes: dict[int, ExecutionOutcome] = {}
        for ordinal in sorted(selection):
            file_name, env = selection[ordinal]
            outcome = ExecutionOutcome(ordinal=ordinal, file_name=file_name)
            args = self.build_command(file_name, env)

            if verbose:
                outcome.return_code = self._run_verbose(args, outcome)
            else:
                outcome.return_code = self._run_quiet(args, outcome)

            outcome.status = (
                ExecutionStatus.SUCCEEDED if outcome.return_code == 0 else ExecutionStatus.FAILED
            )
            logger.info(f"{file_name} finished with exit code {outcome.return_code}")
            outcomes[ordinal] = outcome
        return outcomes

    def _run_quiet(self, args: list[str], outcome: ExecutionOutcome) -> int:
        logger.info(f"Running: {' '.join(args)}")
        try:
            process = subprocess.Popen(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise ExecutionLaunchError(args, e) from e

        outcome.status = ExecutionStatus.SPAWNED
        return process.wait()

    def _run_verbose(self, args: list[str], outcome: ExecutionOutcome) -> int:
        logger.info(f"Running (verbose): {' '.join(args)}")
        try:
            process = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise ExecutionLaunchError(args, e) from e

        outcome.status = ExecutionStatus.SPAWNED
        lines: queue.Queue[str | None] = queue.Queue()

        def read_lines(pipe: IO[str]) -> None:
            """Forward lines from one pipe; None marks end of stream."""
            try:
                for line in pipe:
                    lines.put(line.rstrip("\r\n"))
            finally:
                pipe.close()
                lines.put(None)

        readers = [
            threading.Thread(target=read_lines, args=(pipe,), daemon=True)
            for pipe in (process.stdout, process.stderr)
        ]
        for reader in readers:
            reader.start()

        outcome.status = ExecutionStatus.STREAMING
        open_streams = len(readers)
        try:
            while open_streams:
                line = lines.get()
                if line is None:
                    open_streams -= 1
                    continue
                self.output(line)
        except BaseException as e:
            # The engine must not outlive a failed output sink or an interrupt
            logger.warning(f"Stopping {args[0]} after output error: {e!r}")
            process.kill()
            process.wait()
            for reader in readers:
                reader.join(timeout=5)
            raise

        for reader in readers:
            reader.join()
        return process.wait()
