"""Wizard state machine.

``update`` applies one event to the wizard state and returns the commands the
application should carry out next. It is the only code that mutates
``WizardState``.
"""

import logging
from typing import Callable

from tsinit.domain.events import (
    AuditReady,
    Command,
    DependenciesExpanded,
    DependencyInstalled,
    Emit,
    Event,
    InstallStep,
    Keystroke,
    ProjectCreated,
    Quit,
    RunTask,
    TaskFailed,
    Tick,
)
from tsinit.domain.models import Page, WizardState, seed_dependencies
from tsinit.services.sequencer import begin_install, complete_install, next_candidate

logger = logging.getLogger(__name__)

CANCEL_KEYS = frozenset({"escape", "ctrl+c", "ctrl+d"})
CONFIRM_KEY = "enter"
TOGGLE_KEYS = frozenset({"space", "left", "right"})
ERASE_KEY = "backspace"

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


def initial_state() -> WizardState:
    """Fresh state on the name entry page with the built-in dependencies."""
    return WizardState(dependencies=seed_dependencies())


def update(state: WizardState, event: Event) -> list[Command]:
    """Apply event to state in place and return follow-up commands."""
    if isinstance(event, Keystroke) and event.key in CANCEL_KEYS:
        state.cancelled = True
        return [Quit(0)]

    if state.finished:
        return []

    handler = _HANDLERS.get(type(event))
    if handler is None:
        logger.warning("Ignoring unknown event %r", event)
        return []
    return handler(state, event)


def _on_keystroke(state: WizardState, event: Keystroke) -> list[Command]:
    if state.pending_task is not None:
        return []

    if state.page is Page.NAME_ENTRY:
        return _name_entry_key(state, event)
    if state.page is Page.DEPENDENCY_SELECTION:
        return _selection_key(state, event)
    return []


def _name_entry_key(state: WizardState, event: Keystroke) -> list[Command]:
    if event.key == CONFIRM_KEY:
        return _run(state, "setup_project")
    if event.key == ERASE_KEY:
        state.project_name = state.project_name[:-1]
    elif event.character and event.character.isprintable():
        state.project_name += event.character
    return []


def _selection_key(state: WizardState, event: Keystroke) -> list[Command]:
    if event.key == CONFIRM_KEY:
        state.page = Page.INSTALLING
        return _run(state, "expand_dependencies")
    if not state.dependencies:
        return []

    if event.key in TOGGLE_KEYS:
        dep = state.dependencies[state.cursor]
        dep.selected = not dep.selected
    elif event.key == "up":
        state.cursor = max(0, state.cursor - 1)
    elif event.key == "down":
        state.cursor = min(len(state.dependencies) - 1, state.cursor + 1)
    return []


def _on_project_created(state: WizardState, event: ProjectCreated) -> list[Command]:
    if not _finish(state, "setup_project"):
        return []
    state.project_path = event.project_path
    state.page = Page.DEPENDENCY_SELECTION
    return []


def _on_dependencies_expanded(state: WizardState, event: DependenciesExpanded) -> list[Command]:
    if not _finish(state, "expand_dependencies"):
        return []
    known = {dep.name for dep in state.dependencies}
    for dep in event.dependencies:
        if dep.name in known:
            logger.debug("Skipping duplicate dependency %s", dep.name)
            continue
        known.add(dep.name)
        state.dependencies.append(dep)
    state.timer_running = True
    return [Emit(InstallStep())]


def _on_install_step(state: WizardState, event: InstallStep) -> list[Command]:
    if state.page is not Page.INSTALLING or state.pending_task is not None:
        return []

    index = next_candidate(state.dependencies)
    if index is None:
        state.page = Page.AUDIT_PENDING
        return _run(state, "run_audit")

    begin_install(state.dependencies, index)
    return _run(state, "install_dependency", index)


def _on_dependency_installed(state: WizardState, event: DependencyInstalled) -> list[Command]:
    if not _finish(state, "install_dependency"):
        return []
    if complete_install(state.dependencies, event.index):
        state.installed_count += 1
    return [Emit(InstallStep())]


def _on_audit_ready(state: WizardState, event: AuditReady) -> list[Command]:
    if not _finish(state, "run_audit"):
        return []
    state.audit_report = event.report
    state.timer_running = False
    state.page = Page.COMPLETE
    return [Quit(0)]


def _on_task_failed(state: WizardState, event: TaskFailed) -> list[Command]:
    state.pending_task = None
    state.timer_running = False
    state.fatal_error = event.message
    return [Quit(1)]


def _on_tick(state: WizardState, event: Tick) -> list[Command]:
    state.spinner_index = (state.spinner_index + 1) % len(SPINNER_FRAMES)
    if state.timer_running:
        state.elapsed += max(0.0, event.seconds)
    return []


def _run(state: WizardState, name: str, index: int | None = None) -> list[Command]:
    state.pending_task = name
    return [RunTask(name, index)]


def _finish(state: WizardState, name: str) -> bool:
    """Clear the pending task if it is name. False means the event is stale."""
    if state.pending_task != name:
        logger.warning("Ignoring completion of %s while %s is pending", name, state.pending_task)
        return False
    state.pending_task = None
    return True


_HANDLERS: dict[type, Callable[[WizardState, Event], list[Command]]] = {
    Keystroke: _on_keystroke,
    ProjectCreated: _on_project_created,
    DependenciesExpanded: _on_dependencies_expanded,
    InstallStep: _on_install_step,
    DependencyInstalled: _on_dependency_installed,
    AuditReady: _on_audit_ready,
    TaskFailed: _on_task_failed,
    Tick: _on_tick,
}
