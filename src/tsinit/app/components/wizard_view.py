"""Wizard view component wrapper."""

from textual.widgets import Static

from tsinit.domain.models import WizardState
from tsinit.services.rendering import render


class WizardView:
    """Wrapper for the Static widget that shows the rendered wizard state."""

    def __init__(self, widget: Static):
        """Initialize with a Static widget."""
        self.widget = widget
        # Last rendered text, kept for plain-text access
        self._text = ""

    def show(self, state: WizardState) -> None:
        """Replace the widget content with a fresh render of state."""
        rendered = render(state)
        self._text = rendered.plain
        self.widget.update(rendered)

    def get_text(self) -> str:
        """Return the currently displayed view as plain text."""
        return self._text
