"""Render wizard state to styled text."""

from rich.text import Text

from tsinit.domain.models import Page, WizardState
from tsinit.domain.severity import classify
from tsinit.services.wizard import SPINNER_FRAMES

BLUE = "#0ea5e9"
GRAY = "#737373"
GREEN = "#22c55e"
RED = "#ef4444"

CHECK = "✓"
CROSS = "✗"
QUESTION = "?"
POINTER = "❯"

NAME_PLACEHOLDER = "project-name"
FOOTER = "? Press ESC or Ctrl+C to exit."


def format_elapsed(seconds: float) -> str:
    """Format a duration as ``2.345s`` or ``1m2.345s``."""
    seconds = max(0.0, seconds)
    minutes, secs = divmod(seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m{secs:.3f}s"
    return f"{secs:.3f}s"


def render(state: WizardState) -> Text:
    """
    Build the full view for the current state.

    The view is rebuilt from scratch on every call; a fatal error replaces
    everything else.
    """
    if state.fatal_error is not None:
        return render_error(state.fatal_error)

    text = Text()
    if state.page is Page.NAME_ENTRY:
        _name_entry(text, state)
    elif state.page is Page.DEPENDENCY_SELECTION:
        _dependency_selection(text, state)
    elif state.page is Page.INSTALLING:
        _installing(text, state)
    elif state.page is Page.AUDIT_PENDING:
        _audit_pending(text, state)
    elif state.page is Page.COMPLETE:
        _complete(text, state)

    if state.page is not Page.COMPLETE:
        text.append("\n ")
        text.append(FOOTER, style=GRAY)
        text.append(" \n")
    return text


def render_error(message: str) -> Text:
    text = Text()
    text.append(" ")
    text.append(CROSS, style=RED)
    text.append(" ")
    text.append("There was an error", style=f"bold {RED}")
    text.append(f"\n{message}\n")
    return text


def _check_line(text: Text, message: str) -> None:
    text.append(" ")
    text.append(CHECK, style=GREEN)
    text.append(f" {message}\n")


def _spinner_line(text: Text, state: WizardState, message: str) -> None:
    text.append(" ")
    text.append(SPINNER_FRAMES[state.spinner_index % len(SPINNER_FRAMES)], style=BLUE)
    text.append(f" {message}\n")


def _project_line(text: Text, state: WizardState) -> None:
    _check_line(text, f"Project name: {state.project_name}")


def _name_entry(text: Text, state: WizardState) -> None:
    text.append(" ")
    text.append(QUESTION, style=BLUE)
    text.append(" Enter a name for your project: ")
    if state.project_name:
        text.append(state.project_name)
    else:
        text.append(NAME_PLACEHOLDER, style=GRAY)
    text.append("\n")


def _dependency_selection(text: Text, state: WizardState) -> None:
    _project_line(text, state)
    text.append(" ")
    text.append(QUESTION, style=BLUE)
    text.append(" Select dependencies to install:\n\n")

    for index, dep in enumerate(state.dependencies):
        marker = f" {POINTER} " if index == state.cursor else "   "
        text.append(marker)
        text.append("❪")
        if dep.selected:
            text.append(CHECK, style=GREEN)
        else:
            text.append(" ")
        text.append("❫ ")
        if dep.selected or index == state.cursor:
            text.append(dep.name)
        else:
            text.append(dep.name, style=GRAY)
        text.append("\n")


def _installing(text: Text, state: WizardState) -> None:
    _project_line(text, state)
    _check_line(text, "Installing dependencies... ")
    for dep in state.dependencies:
        if dep.installing:
            _spinner_line(text, state, f"Installing: {dep.name} ({format_elapsed(state.elapsed)})")


def _audit_pending(text: Text, state: WizardState) -> None:
    _project_line(text, state)
    _check_line(text, f"Installed {state.installed_count} dependencies.")
    _spinner_line(text, state, "Running npm audit.")


def _complete(text: Text, state: WizardState) -> None:
    _project_line(text, state)
    _check_line(text, f"Installed {state.installed_count} dependencies.")

    report = state.audit_report
    total = report.vulnerabilities.total if report else 0
    text.append(" ")
    text.append(CHECK, style=GREEN)
    text.append(" ")
    severity = classify(report) if report else None
    if severity is not None:
        text.append(f"Severity: {severity.label}", style=f"on {severity.color}")
        text.append(" ")
    if total > 0:
        text.append(f'Found {total} vulnerabilities. Run "npm audit" to fix.\n')
    else:
        text.append("Npm audit found no vulnerabilities\n")

    text.append(" ")
    text.append(CHECK, style=GREEN)
    text.append(" ")
    text.append("Success", style=f"bold {GREEN}")
    text.append(f" Project setup complete in {format_elapsed(state.elapsed)}\n")
