"""Main Textual TUI application."""

import logging
import time

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from tsinit.adapters.command_runner import SubprocessRunner
from tsinit.app.components import WizardView
from tsinit.domain.events import Command, Emit, Event, Keystroke, Quit, RunTask, Tick
from tsinit.domain.models import Context, WizardState
from tsinit.domain.protocols import CommandRunner
from tsinit.services.pipeline import build_context, execute_task
from tsinit.services.settings import get_command_timeout
from tsinit.services.wizard import initial_state, update

logger = logging.getLogger(__name__)


class WizardMessage(Message):
    """Carries a wizard event through the Textual message queue."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


class WizardApp(App):
    """Project setup wizard TUI."""

    CSS = """
    Screen {
        height: auto;
    }

    #wizard-view {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Exit", show=False, priority=True),
        Binding("ctrl+c", "cancel", "Exit", show=False, priority=True),
        Binding("ctrl+d", "cancel", "Exit", show=False, priority=True),
    ]

    TICK_INTERVAL = 0.1

    def __init__(self, runner: CommandRunner | None = None, state: WizardState | None = None):
        """Initialize the app with an optional command runner and starting state."""
        super().__init__()
        self.runner = runner or SubprocessRunner(timeout=get_command_timeout())
        self.state = state or initial_state()
        self.components: dict[str, WizardView] = {}
        self._last_tick = time.monotonic()

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Static(id="wizard-view")

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.components["view"] = WizardView(self.query_one("#wizard-view", Static))
        self.components["view"].show(self.state)
        self._last_tick = time.monotonic()
        self.set_interval(self.TICK_INTERVAL, self._advance_clock)

    def _advance_clock(self) -> None:
        now = time.monotonic()
        seconds, self._last_tick = now - self._last_tick, now
        self.apply_event(Tick(seconds))

    def apply_event(self, event: Event) -> None:
        """Run event through the state machine, redraw, then carry out its commands."""
        commands = update(self.state, event)
        view = self.components.get("view")
        if view is not None and not self.state.cancelled:
            view.show(self.state)
        for command in commands:
            self._carry_out(command)

    def _carry_out(self, command: Command) -> None:
        if isinstance(command, RunTask):
            ctx = build_context(self.state, command, self.runner)
            self.run_worker(self._run_wizard_task(command.name, ctx), name=command.name, group="tasks")
        elif isinstance(command, Emit):
            self.post_message(WizardMessage(command.event))
        elif isinstance(command, Quit):
            logger.info("Exiting with status %s", command.exit_code)
            self.exit(return_code=command.exit_code)

    async def _run_wizard_task(self, name: str, ctx: Context) -> None:
        event = await execute_task(name, ctx)
        self.post_message(WizardMessage(event))

    def on_wizard_message(self, message: WizardMessage) -> None:
        """Handle events posted by tasks and by the state machine itself."""
        self.apply_event(message.event)

    def on_key(self, event: events.Key) -> None:
        """Forward key presses to the state machine."""
        character = event.character if event.is_printable else None
        self.apply_event(Keystroke(key=event.key, character=character))

    def action_cancel(self) -> None:
        """Exit immediately from any page."""
        self.apply_event(Keystroke(key="escape"))
