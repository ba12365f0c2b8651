"""Install sequence that turns this machine into a Maya server.

Steps run strictly in order on one thread. The first step that reports a
non-zero status ends the run and its status becomes the run's exit code.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple

from rich.console import Console

from . import constants
from .context import InstallContext, derive_server_count
from .errors import FetchError, InstallError
from .executor import CommandRunner, SubprocessRunner
from .fetch import BootstrapFetcher

logger = logging.getLogger(__name__)


class InstallStage(str, Enum):
    PENDING = "pending"
    BOOTSTRAPPING = "bootstrapping"
    VERIFYING_LAYOUT = "verifying-layout"
    INSTALLING_SERVICE = "installing-service"
    DERIVING_COUNT = "deriving-count"
    RESOLVING_IDENTITY = "resolving-identity"
    CONFIGURING_ROLE = "configuring-role"
    STARTING = "starting"
    COMPLETED = "completed"
    FAILED = "failed"


class Step(NamedTuple):
    stage: InstallStage
    description: str
    command: str
    handler: Callable[[InstallContext], int]


class MayaInstaller:
    """Run the install steps against a single InstallContext"""

    def __init__(
        self,
        context: InstallContext,
        runner: Optional[CommandRunner] = None,
        fetcher: Optional[BootstrapFetcher] = None,
        console: Optional[Console] = None,
        work_dir: Optional[Path] = None,
    ):
        self.context = context
        self.console = console or Console()
        self.runner = runner or SubprocessRunner(self.console)
        self.fetcher = fetcher or BootstrapFetcher()
        self.work_dir = Path(work_dir) if work_dir else Path.cwd()

        self.state = InstallStage.PENDING
        self.transitions: List[InstallStage] = [self.state]

    @property
    def artifact(self) -> Path:
        return self.work_dir / constants.BOOTSTRAP_SCRIPT

    def steps(self) -> List[Step]:
        return [
            Step(
                InstallStage.BOOTSTRAPPING,
                "Bootstrapping",
                f"fetch {constants.BOOTSTRAP_SCRIPT_URL}; sh {constants.BOOTSTRAP_SCRIPT}",
                self._bootstrap,
            ),
            Step(
                InstallStage.VERIFYING_LAYOUT,
                "Verifying bootstrap",
                f"ls {constants.MAYA_SCRIPTS_PATH}",
                self._verify_bootstrap,
            ),
            Step(
                InstallStage.INSTALLING_SERVICE,
                "Installing consul",
                f"sh {constants.INSTALL_CONSUL_SCRIPT}",
                self._install_consul,
            ),
            Step(
                InstallStage.DERIVING_COUNT,
                "Computing server count",
                "-",
                self._set_server_count,
            ),
            Step(
                InstallStage.RESOLVING_IDENTITY,
                "Resolving self IP",
                f"sh {constants.GET_PRIVATE_IP_SCRIPT}",
                self._set_ip,
            ),
            Step(
                InstallStage.CONFIGURING_ROLE,
                "Setting consul as server",
                f"sh {constants.SET_CONSUL_AS_SERVER_SCRIPT}",
                self._set_consul_as_server,
            ),
            Step(
                InstallStage.STARTING,
                "Starting consul",
                f"sh {constants.START_CONSUL_SERVER_SCRIPT}",
                self._start_consul,
            ),
        ]

    def plan(self) -> List[Tuple[str, str, str]]:
        """Describe the steps without running any of them"""
        return [(step.stage.value, step.description, step.command) for step in self.steps()]

    def run(self) -> int:
        """Run every step in order; returns 0 or the first failing status."""
        if self.state is not InstallStage.PENDING:
            raise InstallError(f"Installer already ran (state: {self.state.value})")

        steps = self.steps()
        for index, step in enumerate(steps, start=1):
            self._enter(step.stage)
            self.console.print(f"\n[cyan]Step {index}/{len(steps)}:[/cyan] {step.description}...")

            rc = step.handler(self.context)
            if rc != 0:
                logger.debug("Step %s failed with %d", step.stage.value, rc)
                self._enter(InstallStage.FAILED)
                return rc

        self._enter(InstallStage.COMPLETED)
        self.console.print("\n[green]✓ Maya server installed[/green]")
        return 0

    def _enter(self, stage: InstallStage) -> None:
        logger.debug("Install stage: %s -> %s", self.state.value, stage.value)
        self.state = stage
        self.transitions.append(stage)

    def _fail(self, message: str) -> None:
        self.console.print(f"[red]Install failed: {message}[/red]", soft_wrap=True)

    def _remove_artifact(self) -> None:
        try:
            self.artifact.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", self.artifact, e)

    def _bootstrap(self, ctx: InstallContext) -> int:
        try:
            self.fetcher.fetch(constants.BOOTSTRAP_SCRIPT_URL, self.artifact)
        except FetchError as e:
            logger.debug("%s", e)
            self._fail(f"Failed to fetch file: {constants.BOOTSTRAP_SCRIPT_URL}")
            self._remove_artifact()
            return e.exit_code

        try:
            result = self.runner.run("sh", [str(self.artifact)])
        finally:
            self._remove_artifact()

        if not result.ok:
            self._fail("Error while bootstrapping")
        return result.exit_status

    def _verify_bootstrap(self, ctx: InstallContext) -> int:
        result = self.runner.run("ls", [constants.MAYA_SCRIPTS_PATH])
        if not result.ok:
            self._fail(f"Bootstrap failed: Missing path: {constants.MAYA_SCRIPTS_PATH}")
        return result.exit_status

    def _install_consul(self, ctx: InstallContext) -> int:
        result = self.runner.run("sh", [constants.INSTALL_CONSUL_SCRIPT])
        if not result.ok:
            self._fail("Error installing consul")
        return result.exit_status

    def _set_server_count(self, ctx: InstallContext) -> int:
        ctx.server_count = derive_server_count(ctx.peer_ips)
        logger.debug("Server count: %d", ctx.server_count)
        return 0

    def _set_ip(self, ctx: InstallContext) -> int:
        rc = 0
        if not ctx.self_ip.strip():
            result = self.runner.run("sh", [constants.GET_PRIVATE_IP_SCRIPT], capture=True)
            rc = result.exit_status
            if result.ok:
                ctx.self_ip = result.output
            else:
                self._fail("Error fetching local IP address")

        self.console.print(f"Self IP: {ctx.self_ip}", markup=False, highlight=False, soft_wrap=True)
        return rc

    def _set_consul_as_server(self, ctx: InstallContext) -> int:
        result = self.runner.run(
            "sh", [constants.SET_CONSUL_AS_SERVER_SCRIPT], env=ctx.downstream_env()
        )
        if not result.ok:
            self._fail("Error setting consul as server")
        return result.exit_status

    def _start_consul(self, ctx: InstallContext) -> int:
        result = self.runner.run(
            "sh", [constants.START_CONSUL_SERVER_SCRIPT], env=ctx.downstream_env()
        )
        if not result.ok:
            self._fail("Systemd failed: Error starting consul")
        return result.exit_status
