"""
Sequential task runner for doctor checks.

Renders each check with a spinner while it runs and a status line once
it finishes:

    ✔ Checking memory availability
    ↓ Checking system compatibility [skipped: Disabled with --no-stack]
    ✖ Validating config
"""

import logging
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from core.errors import CliError, ListrError, ProcessError

logger = logging.getLogger(__name__)

PASSED = ('✔', 'success')
FAILED = ('✖', 'error')
SKIPPED = ('↓', 'skipped')
GROUP = ('❯', 'info')


class TaskHandle:
    """
    Handed to each running check as its second argument.

    Errors raised by a check reference its handle, which is how a
    failure is attributed to a check title.
    """

    def __init__(self, title: str):
        self.title = title
        self.skipped: Optional[str] = None

    def skip(self, reason: str = '') -> None:
        """Mark the running check as skipped instead of passed."""
        self.skipped = reason or 'skipped'

    def __repr__(self) -> str:
        return f"TaskHandle({self.title!r})"


class TaskList:
    """
    Runs checks one after another against a shared context.

    Args:
        tasks: CheckDescriptor-like objects (title, task, enabled, skip)
        console: Rich console to render to
        exit_on_error: Stop at the first failure and raise it. When False
            every check runs and a ListrError with all failures is raised
            at the end.

    Exceptions other than CliError are wrapped in a ProcessError
    attributed to the failing check.
    """

    def __init__(self, tasks: Sequence[Any], console: Console, exit_on_error: bool = True):
        self.tasks = list(tasks)
        self.console = console
        self.exit_on_error = exit_on_error

    def run(self, context) -> None:
        errors: List[CliError] = []
        self._run_level(self.tasks, context, errors, depth=0)
        if errors:
            raise ListrError(errors)

    def _run_level(self, tasks, context, errors, depth):
        for descriptor in tasks:
            if descriptor.enabled is not None and not descriptor.enabled(context):
                logger.debug(f"Check disabled: {descriptor.title}")
                continue

            handle = TaskHandle(descriptor.title)

            reason = descriptor.skip(context) if descriptor.skip is not None else False
            if reason:
                handle.skip(reason if isinstance(reason, str) else '')
                self._render(SKIPPED, handle, depth)
                continue

            try:
                with self.console.status(descriptor.title):
                    result = descriptor.task(context, handle)
            except CliError as error:
                if error.task is None:
                    error.task = handle
                self._fail(error, handle, depth, errors)
                continue
            except Exception as error:
                logger.exception(f"Check raised an unclassified error: {descriptor.title}")
                wrapped = ProcessError(error, task=handle)
                wrapped.__cause__ = error
                self._fail(wrapped, handle, depth, errors)
                continue

            if isinstance(result, (list, tuple)) and result:
                self._render(GROUP, handle, depth)
                self._run_level(result, context, errors, depth + 1)
            elif handle.skipped:
                self._render(SKIPPED, handle, depth)
            else:
                logger.debug(f"Check passed: {descriptor.title}")
                self._render(PASSED, handle, depth)

    def _fail(self, error: CliError, handle: TaskHandle, depth: int, errors: List[CliError]) -> None:
        logger.info(f"Check failed: {handle.title}: {error.message}")
        self._render(FAILED, handle, depth)
        if self.exit_on_error:
            raise error
        errors.append(error)

    def _render(self, state, handle: TaskHandle, depth: int) -> None:
        symbol, style = state
        line = Text('  ' * depth)
        line.append(symbol, style=style)
        line.append(f" {handle.title}")
        if state is SKIPPED and handle.skipped and handle.skipped != 'skipped':
            line.append(f" [skipped: {handle.skipped}]", style='dim')
        self.console.print(line)
