"""Run a single wizard task and turn its outcome into an event."""

import asyncio
import copy
import logging
import threading
import time
from typing import Any, Callable

from tsinit.adapters.command_runner import CommandError
from tsinit.domain.events import Event, RunTask, TaskFailed
from tsinit.domain.exceptions import WizardFatalError
from tsinit.domain.models import Context, WizardState
from tsinit.domain.protocols import CommandRunner
from tsinit.services.tasks import get_task

logger = logging.getLogger(__name__)


def build_context(state: WizardState, command: RunTask, runner: CommandRunner) -> Context:
    """Snapshot the parts of state a task may read."""
    return Context(
        project_name=state.project_name,
        runner=runner,
        project_path=state.project_path,
        dependencies=copy.deepcopy(state.dependencies),
        index=command.index,
    )


def run_in_daemon_thread(func: Callable[[Context], Event], ctx: Context, name: str) -> asyncio.Future:
    """
    Run func(ctx) on a daemon thread and return a future for its result.

    Unlike the default executor, a daemon thread does not keep the
    interpreter alive, so quitting never waits for a running npm command.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _resolve(setter: Callable, value: Any) -> None:
        if not future.done():
            setter(value)

    def _target() -> None:
        try:
            result = func(ctx)
        except BaseException as e:  # handed to the awaiting coroutine
            outcome, value = future.set_exception, e
        else:
            outcome, value = future.set_result, result
        try:
            loop.call_soon_threadsafe(_resolve, outcome, value)
        except RuntimeError:
            # Event loop already closed: the app has exited
            logger.debug("Discarding result of %s after shutdown", name)

    threading.Thread(target=_target, name=f"tsinit-{name}", daemon=True).start()
    return future


async def execute_task(name: str, ctx: Context) -> Event:
    """
    Run the named task without blocking the event loop.

    Blocking tasks run on a daemon thread. Every failure comes back as a
    TaskFailed event instead of an exception.

    Args:
        name: Registered task name
        ctx: Snapshot of the wizard state

    Returns:
        The event produced by the task, or TaskFailed
    """
    task = get_task(name)
    if task is None:
        logger.error("Missing task in registry: %s", name)
        return TaskFailed(message=f"Missing task in registry: {name}", source="pipeline")

    task_start_time = time.perf_counter()
    try:
        status_msg = task.get_status_message(ctx)
        logger.info("%s started", status_msg)

        # Support both async and sync tasks
        if asyncio.iscoroutinefunction(task.run):
            event = await task.run(ctx)
        else:
            event = await run_in_daemon_thread(task.run, ctx, name=name)
    except WizardFatalError as e:
        task_duration = time.perf_counter() - task_start_time
        logger.error("%s failed after %.1f seconds: %s", name, task_duration, e.message)
        return TaskFailed(message=e.message, source=e.source or name)
    except (CommandError, OSError) as e:
        task_duration = time.perf_counter() - task_start_time
        logger.error("%s failed after %.1f seconds: %s", name, task_duration, e)
        return TaskFailed(message=str(e), source=name)
    except Exception as e:
        logger.exception("Unexpected error in %s", name)
        return TaskFailed(message=f"Unexpected error in {name}: {e}", source=name)

    task_duration = time.perf_counter() - task_start_time
    logger.info("%s completed successfully in %.1f seconds", status_msg, task_duration)
    return event
