"""Domain models for the setup wizard."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from tsinit.domain.protocols import CommandRunner


class Page(Enum):
    """Wizard screens, in the order they are shown."""

    NAME_ENTRY = "name_entry"
    DEPENDENCY_SELECTION = "dependency_selection"
    INSTALLING = "installing"
    AUDIT_PENDING = "audit_pending"
    COMPLETE = "complete"


@dataclass
class Dependency:
    """An installable npm package tracked through selection and install."""

    name: str
    selected: bool = True
    dev: bool = False  # installed with -D
    installing: bool = False
    installed: bool = False


@dataclass(frozen=True)
class VulnerabilityCounts:
    """Vulnerability counts by severity."""

    info: int = 0
    low: int = 0
    moderate: int = 0
    high: int = 0
    critical: int = 0
    total: int = 0


@dataclass(frozen=True)
class DependencyCounts:
    """Dependency counts by relationship."""

    prod: int = 0
    dev: int = 0
    optional: int = 0
    peer: int = 0
    peer_optional: int = 0
    total: int = 0


@dataclass(frozen=True)
class AuditReport:
    """Summary of an npm audit run."""

    vulnerabilities: VulnerabilityCounts = field(default_factory=VulnerabilityCounts)
    dependencies: DependencyCounts = field(default_factory=DependencyCounts)


@dataclass
class CommandResult:
    """Captured output of a finished command."""

    argv: list[str]
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        """Best available description of a failure."""
        detail = self.stderr.strip() or self.stdout.strip()
        message = f"Command '{' '.join(self.argv)}' exited with status {self.returncode}"
        if detail:
            message = f"{message}\n{detail}"
        return message


@dataclass
class WizardState:
    """Everything the wizard knows. Owned and mutated only by the event loop."""

    page: Page = Page.NAME_ENTRY
    project_name: str = ""
    project_path: Optional[Path] = None
    dependencies: list[Dependency] = field(default_factory=list)
    cursor: int = 0
    installed_count: int = 0
    elapsed: float = 0.0
    timer_running: bool = False
    spinner_index: int = 0
    audit_report: Optional[AuditReport] = None
    fatal_error: Optional[str] = None
    pending_task: Optional[str] = None
    cancelled: bool = False

    @property
    def finished(self) -> bool:
        """True once no further transitions can happen."""
        return self.cancelled or self.fatal_error is not None or self.page is Page.COMPLETE

    def installing_count(self) -> int:
        return sum(1 for dep in self.dependencies if dep.installing)


@dataclass
class Context:
    """Read-only snapshot of the state handed to a task."""

    project_name: str
    runner: "CommandRunner"
    project_path: Optional[Path] = None
    dependencies: list[Dependency] = field(default_factory=list)
    index: Optional[int] = None


def seed_dependencies() -> list[Dependency]:
    """Built-in dependency choices, all pre-selected."""
    return [
        Dependency(name="typescript", dev=True),
        Dependency(name="react"),
        Dependency(name="kysely"),
        Dependency(name="esbuild", dev=True),
        Dependency(name="tailwindcss", dev=True),
        Dependency(name="nodemon", dev=True),
        Dependency(name="dotenv", dev=True),
    ]
