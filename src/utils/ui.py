"""
Console UI handle used by commands and checks.

Wraps the shared rich console with the three operations the doctor
engine needs: ``log`` for notices, ``listr`` to run checks, and
``error`` to report failures.
"""

import logging
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.text import Text

from core.errors import CliError, ConfigError, ListrError, PreconditionError, ProcessError

from .console import get_console
from .tasks import TaskList

logger = logging.getLogger(__name__)


class UI:
    """
    Terminal UI.

    Args:
        console: Rich console; defaults to the shared singleton
        verbose: Show debug information with every error
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or get_console()
        self.verbose = verbose

    def log(self, message: str, style: Optional[str] = None) -> None:
        """Print a notice. Markup in ``message`` is not interpreted."""
        self.console.print(Text(message, style=style or ''))

    def listr(self, tasks: Sequence[Any], context, exit_on_error: bool = True) -> None:
        """Run checks sequentially against ``context``."""
        TaskList(tasks, self.console, exit_on_error=exit_on_error).run(context)

    # === Error reporting ===

    def error(self, error: BaseException) -> None:
        """Render an error and write it to the debug log."""
        if isinstance(error, ListrError):
            self.console.print(Text('One or more errors occurred.', style='error'))
            for index, err in enumerate(error.errors, 1):
                self.console.print()
                self._render(err, index)
        else:
            self._render(error)

    def _render(self, error: BaseException, index: Optional[int] = None) -> None:
        if isinstance(error, ProcessError):
            self._render_process_error(error, index)
        elif isinstance(error, PreconditionError):
            logger.error(f"Precondition failed: {error.message}")
            self.console.print(Text(error.message, style='error'))
        elif isinstance(error, CliError):
            self._render_system_error(error, index)
        else:
            logger.error("An unexpected error occurred", exc_info=error)
            self.console.print(Text('An unexpected error occurred.', style='error'))
            self._field('Message', str(error) or type(error).__name__)
            self._debug_information()

    def _heading(self, error: CliError, index: Optional[int]) -> None:
        if error.task_title:
            prefix = f"{index}) " if index is not None else ''
            self.console.print(Text(f"{prefix}{error.task_title}", style='heading'))
            self.console.print()

    def _field(self, label: str, value: str) -> None:
        line = Text(f"{label}: ", style='warning')
        line.append(str(value))
        self.console.print(line)

    def _render_system_error(self, error: CliError, index: Optional[int]) -> None:
        logger.error(f"{error.task_title or 'Error'}: {error.message}")
        self._heading(error, index)
        self._field('Message', error.message)

        if isinstance(error, ConfigError):
            if error.environment:
                self._field('Environment', error.environment)
            for key, value in (error.config or {}).items():
                self._field('Configuration', f"{key} = {value!r}")

        if self.verbose and error.options.get('err') is not None:
            self._field('Cause', str(error.options['err']))

    def _render_process_error(self, error: ProcessError, index: Optional[int]) -> None:
        logger.error(
            f"{error.task_title or 'Process'}: {error.message} "
            f"(exit code {error.exit_code})\nstdout: {error.stdout}\nstderr: {error.stderr}"
        )
        self._heading(error, index)
        self.console.print(Text('An unexpected error occurred while running a command.', style='error'))
        self._field('Message', error.message)
        if error.exit_code is not None:
            self._field('Exit code', str(error.exit_code))
        for name, output in (('stdout', error.stdout), ('stderr', error.stderr)):
            if output:
                self.console.print(Text(f"\n{'-' * 15} {name} {'-' * 15}", style='dim'))
                self.console.print(Text(output.rstrip()))
        self._debug_information()

    def _debug_information(self) -> None:
        from __version__ import __version__
        from .system import get_system_info

        info = get_system_info()
        self.console.print(Text('\nDebug Information:', style='dim'))
        self.console.print(Text(
            f"    OS: {info['os']}, v{info['os_version']} ({info['arch']})\n"
            f"    Python: {info['python']}\n"
            f"    Sitekeeper: {__version__}",
            style='dim',
        ))
        self.console.print(Text('\nTry running with --debug and include the debug log in any report.',
                                style='dim'))
