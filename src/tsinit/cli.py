"""CLI entry point."""

import argparse
import logging
import sys

from rich.console import Console

from tsinit.app.main import WizardApp
from tsinit.domain.models import Page, WizardState
from tsinit.services.rendering import render, render_error
from tsinit.services.settings import get_log_file, get_log_level


def configure_logging() -> None:
    """Log to TSINIT_LOG_FILE if set; the TUI owns the terminal otherwise."""
    root = logging.getLogger("tsinit")
    log_file = get_log_file()
    if log_file is None:
        root.addHandler(logging.NullHandler())
        return

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(get_log_level())


def report_outcome(state: WizardState, stdout: Console, stderr: Console) -> int:
    """
    Print what the wizard ended with and return the process exit code.

    A cancelled run prints nothing.
    """
    if state.cancelled:
        return 0
    if state.fatal_error is not None:
        stderr.print(render_error(state.fatal_error), end="")
        return 1
    if state.page is Page.COMPLETE:
        stdout.print(render(state), end="")
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tsinit",
        description="tsinit - interactive TypeScript project setup wizard",
    )
    parser.parse_args()

    configure_logging()

    app = WizardApp()
    app.run(inline=True)

    exit_code = report_outcome(app.state, Console(), Console(stderr=True))
    if app.return_code and not exit_code:
        exit_code = app.return_code
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
