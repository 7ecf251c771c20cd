"""Background wizard tasks."""

from typing import Dict, List, Optional

from tsinit.domain.protocols import Task

_TASKS: Dict[str, Task] = {}


def register(task: Task) -> None:
    """Register a task by name."""
    _TASKS[task.name] = task


def get_task(name: str) -> Optional[Task]:
    """Retrieve a task by name."""
    return _TASKS.get(name)


def all_tasks() -> List[Task]:
    """Get all registered tasks."""
    return list(_TASKS.values())


# Import all task modules to trigger auto-registration
from tsinit.services.tasks import (  # noqa: E402, F401
    expand_dependencies,
    install_dependency,
    run_audit,
    setup_project,
)
