"""
Sitekeeper error taxonomy.

Every failure that leaves a doctor check is one of:

- SystemCheckError: a known, diagnosable problem with a long-form,
  user-actionable message.
- ConfigError: a SystemCheckError raised when an environment's
  configuration file is missing, malformed or holds an invalid value.
- ProcessError: an unexpected failure of an external process. Keeps the
  original exception and its output for support purposes.

PreconditionError and ListrError sit outside the check boundary: the
first aborts a run before any check executes, the second bundles the
failures of a run that continued past them.
"""

import subprocess
from typing import Any, Dict, List, Optional


class CliError(Exception):
    """
    Base class for all errors Sitekeeper knows how to report.

    Attributes:
        message: Human-readable description
        task: Handle of the check that failed (has a ``title``), if any
        options: Structured detail for reporting
    """

    def __init__(self, message: str = "", task: Any = None, **options):
        super().__init__(message)
        self.message = message
        self.task = task
        self.options: Dict[str, Any] = options

    @property
    def task_title(self) -> Optional[str]:
        """Title of the check this error is attributed to."""
        return getattr(self.task, 'title', None)

    def __str__(self) -> str:
        return self.message


class SystemCheckError(CliError):
    """A known failure with an actionable remediation message."""


class ConfigError(SystemCheckError):
    """Configuration of an environment is missing or invalid."""

    def __init__(self, message: str = "", environment: str = None,
                 config: Dict[str, Any] = None, task: Any = None, **options):
        options['environment'] = environment
        if config is not None:
            options['config'] = config
        super().__init__(message, task=task, **options)

    @property
    def environment(self) -> Optional[str]:
        return self.options.get('environment')

    @property
    def config(self) -> Optional[Dict[str, Any]]:
        return self.options.get('config')


def _as_text(output) -> str:
    if output is None:
        return ''
    if isinstance(output, bytes):
        return output.decode('utf-8', errors='replace')
    return str(output)


class ProcessError(CliError):
    """
    Wraps an unexpected failure of an external process.

    Accepts subprocess.CalledProcessError, subprocess.TimeoutExpired,
    OSError or any other exception; command details are taken from the
    original where it has them.
    """

    def __init__(self, original: BaseException, task: Any = None):
        self.original = original
        self.cmd = getattr(original, 'cmd', None)
        self.exit_code = getattr(original, 'returncode', None)
        self.stdout = _as_text(getattr(original, 'stdout', None))
        self.stderr = _as_text(getattr(original, 'stderr', None))

        if isinstance(original, subprocess.TimeoutExpired):
            message = f"Command timed out after {original.timeout}s: {original.cmd}"
        elif isinstance(original, subprocess.CalledProcessError):
            message = f"Command failed: {original.cmd}"
        else:
            message = str(original) or type(original).__name__

        super().__init__(
            message,
            task=task,
            cmd=self.cmd,
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
        )


class PreconditionError(CliError):
    """Raised before any check runs when the run cannot start at all."""


class ListrError(CliError):
    """
    Raised by the task runner after it kept going past failures.

    The first error in ``errors`` determines the outcome of the run.
    """

    def __init__(self, errors: List[CliError]):
        self.errors = list(errors)
        count = len(self.errors)
        noun = "check" if count == 1 else "checks"
        super().__init__(f"{count} {noun} failed")

    @property
    def first(self) -> CliError:
        return self.errors[0]
