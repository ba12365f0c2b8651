"""Run external programs for the install steps"""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

# Reported when the program could not be started at all
EXIT_NOT_STARTED = 127


@dataclass(frozen=True)
class StepResult:
    """Exit status of a program and its first output line"""

    exit_status: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class CommandRunner(Protocol):
    def run(
        self,
        program: str,
        args: Sequence[str] = (),
        capture: bool = False,
        env: Optional[Dict[str, str]] = None,
    ) -> StepResult:
        ...


class SubprocessRunner:
    """Run a program to completion, echoing its output to the console.

    stdout is streamed line by line; stderr goes straight to the terminal.
    With ``capture`` set, the first stdout line is returned in the result.
    There is no timeout: a program that hangs blocks the caller.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def run(
        self,
        program: str,
        args: Sequence[str] = (),
        capture: bool = False,
        env: Optional[Dict[str, str]] = None,
    ) -> StepResult:
        cmd = [program, *args]
        logger.debug("Running: %s", " ".join(cmd))

        proc_env = None
        if env:
            proc_env = os.environ.copy()
            proc_env.update(env)

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                text=True,
                errors="replace",
                env=proc_env,
            )
        except OSError as e:
            logger.debug("Could not start %s: %s", program, e)
            self.console.print(f"[red]Failed to run {program}: {escape(str(e))}[/red]", soft_wrap=True)
            return StepResult(EXIT_NOT_STARTED)

        first_line = None
        try:
            with proc.stdout:
                for line in proc.stdout:
                    line = line.rstrip("\n")
                    if first_line is None:
                        first_line = line
                    self.console.print(line, markup=False, highlight=False, soft_wrap=True)
        finally:
            rc = proc.wait()

        if rc < 0:
            # Killed by a signal
            rc = 128 - rc

        logger.debug("%s exited with %d", program, rc)
        output = (first_line or "").strip() if capture else ""
        return StepResult(rc, output)
