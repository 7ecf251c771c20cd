"""UI components for the TUI application."""

from tsinit.app.components.wizard_view import WizardView

__all__ = [
    "WizardView",
]
