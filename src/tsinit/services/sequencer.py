"""One-at-a-time install queue over the dependency list."""

from typing import Optional

from tsinit.domain.models import Dependency


def next_candidate(dependencies: list[Dependency]) -> Optional[int]:
    """Index of the first selected dependency that is neither installed nor installing."""
    for index, dep in enumerate(dependencies):
        if dep.selected and not dep.installed and not dep.installing:
            return index
    return None


def begin_install(dependencies: list[Dependency], index: int) -> None:
    """Mark the entry at index as in flight."""
    if any(dep.installing for dep in dependencies):
        raise RuntimeError("An install is already in progress")
    dependencies[index].installing = True


def complete_install(dependencies: list[Dependency], index: int) -> bool:
    """
    Mark the in-flight entry at index as installed.

    Returns:
        False if the entry was not in flight (stale or duplicate event)
    """
    dep = dependencies[index]
    if not dep.installing:
        return False
    dep.installing = False
    dep.installed = True
    return True
