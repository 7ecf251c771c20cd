"""Tests for the Textual application."""

import asyncio

import pytest

from tsinit.app.main import WizardApp
from tsinit.domain.models import Page


async def settle(app, pilot, timeout=10.0):
    """Wait until background tasks have finished and their events are applied."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        await app.workers.wait_for_complete()
        await pilot.pause()
        if app.state.pending_task is None or app.state.finished:
            return
    raise AssertionError(f"Timed out waiting for {app.state.pending_task}")


@pytest.mark.asyncio
async def test_name_entry_creates_project(workdir, fake_runner):
    app = WizardApp(runner=fake_runner)

    async with app.run_test() as pilot:
        await pilot.press("d", "e", "m", "o")
        assert "Enter a name for your project: demo" in app.components["view"].get_text()

        await pilot.press("enter")
        await settle(app, pilot)

        assert app.state.page is Page.DEPENDENCY_SELECTION
        assert (workdir / "demo" / "package.json").exists()
        assert "Select dependencies to install" in app.components["view"].get_text()

        await pilot.press("escape")

    assert app.state.cancelled
    assert app.return_code == 0


@pytest.mark.asyncio
async def test_selection_keys_update_view(workdir, fake_runner):
    app = WizardApp(runner=fake_runner)

    async with app.run_test() as pilot:
        await pilot.press("d", "e", "m", "o", "enter")
        await settle(app, pilot)

        await pilot.press("down", "space")

        assert app.state.cursor == 1
        assert app.state.dependencies[1].selected is False
        assert " ❯ ❪ ❫ react" in app.components["view"].get_text()

        await pilot.press("ctrl+c")

    assert app.return_code == 0


@pytest.mark.asyncio
async def test_full_run_exits_after_audit(workdir, fake_runner):
    app = WizardApp(runner=fake_runner)

    async with app.run_test() as pilot:
        await pilot.press("d", "e", "m", "o", "enter")
        await settle(app, pilot)
        await pilot.press("enter")
        for _ in range(50):
            await settle(app, pilot)
            if app.state.finished:
                break

    assert app.state.page is Page.COMPLETE
    assert app.state.installed_count == 13
    assert app.return_code == 0
    assert "Project setup complete" in app.components["view"].get_text()


@pytest.mark.asyncio
async def test_fatal_error_exits_with_status_one(workdir, fake_runner):
    (workdir / "demo").mkdir()
    app = WizardApp(runner=fake_runner)

    async with app.run_test() as pilot:
        await pilot.press("d", "e", "m", "o", "enter")
        await settle(app, pilot)

    assert app.state.fatal_error is not None
    assert app.return_code == 1
    assert app.components["view"].get_text().startswith(" ✗ There was an error")
