"""Events consumed by the wizard state machine and commands it emits.

Every input the wizard reacts to (a key press, a timer tick, a finished
background task) is one of the event classes below. Handling an event yields
zero or more commands that tell the application what to do next.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tsinit.domain.models import AuditReport, Dependency


@dataclass(frozen=True)
class Keystroke:
    """A key press. ``character`` is set for printable keys."""

    key: str
    character: Optional[str] = None


@dataclass(frozen=True)
class ProjectCreated:
    project_path: Path


@dataclass(frozen=True)
class DependenciesExpanded:
    dependencies: tuple[Dependency, ...]


@dataclass(frozen=True)
class InstallStep:
    """Ask the state machine to start the next pending install."""


@dataclass(frozen=True)
class DependencyInstalled:
    index: int


@dataclass(frozen=True)
class AuditReady:
    report: AuditReport


@dataclass(frozen=True)
class TaskFailed:
    message: str
    source: Optional[str] = None


@dataclass(frozen=True)
class Tick:
    """Periodic timer tick carrying the seconds since the previous one."""

    seconds: float


Event = Union[
    Keystroke,
    ProjectCreated,
    DependenciesExpanded,
    InstallStep,
    DependencyInstalled,
    AuditReady,
    TaskFailed,
    Tick,
]


@dataclass(frozen=True)
class RunTask:
    """Run a registered background task."""

    name: str
    index: Optional[int] = None


@dataclass(frozen=True)
class Emit:
    """Queue an event behind whatever is already pending."""

    event: Event


@dataclass(frozen=True)
class Quit:
    exit_code: int = 0


Command = Union[RunTask, Emit, Quit]
