"""Installation orchestrator for Maya servers."""

from .context import InstallContext, derive_server_count, parse_member_ips
from .errors import FetchError, InstallError
from .executor import EXIT_NOT_STARTED, CommandRunner, StepResult, SubprocessRunner
from .fetch import BootstrapFetcher
from .orchestrator import InstallStage, MayaInstaller

__all__ = [
    "InstallContext",
    "derive_server_count",
    "parse_member_ips",
    "FetchError",
    "InstallError",
    "EXIT_NOT_STARTED",
    "CommandRunner",
    "StepResult",
    "SubprocessRunner",
    "BootstrapFetcher",
    "InstallStage",
    "MayaInstaller",
]
