"""
Classification of failures at a check's subprocess boundary.

Checks that shell out wrap the call in ``classify_failures`` so that
whatever the process does, the failure leaving the check is a
SystemCheckError (known problem) or a ProcessError (anything else).
"""

import re
from contextlib import contextmanager
from typing import Any, Optional, Sequence

from core.errors import CliError, ProcessError, SystemCheckError

PERMISSION_DENIED = re.compile(r'permission denied', re.IGNORECASE)


def _stderr_of(error: BaseException) -> str:
    stderr = getattr(error, 'stderr', None)
    if isinstance(stderr, bytes):
        return stderr.decode('utf-8', errors='replace')
    return stderr or ''


def classify_process_failure(error: BaseException, task: Any = None,
                             denied_message: Optional[str] = None) -> CliError:
    """
    Map a raw failure to the error taxonomy.

    Args:
        error: What the process call raised
        task: Handle of the check the failure belongs to
        denied_message: Message to use when the process was refused
            access; without it a permission problem is a ProcessError

    Returns:
        ``error`` itself if it is already a SystemCheckError, a
        SystemCheckError for permission problems, else a ProcessError.
    """
    if isinstance(error, SystemCheckError):
        return error

    if denied_message and PERMISSION_DENIED.search(_stderr_of(error)):
        return SystemCheckError(denied_message, task=task, err=error)

    return ProcessError(error, task=task)


@contextmanager
def classify_failures(task: Any = None, denied_message: Optional[str] = None):
    """Apply classify_process_failure to anything raised in the block."""
    try:
        yield
    except SystemCheckError:
        raise
    except Exception as error:
        raise classify_process_failure(error, task, denied_message) from error


def describe_offenders(items: Sequence[str], problem: str, remediation: str) -> str:
    """
    Compose the long-form message for a list of offending items.

    One item reads "a directory or file", more read "some directories or
    files". Each item gets its own "- " line, the remediation comes last.
    """
    wording = 'some directories or files' if len(items) > 1 else 'a directory or file'
    lines = [f"Your installation folder contains {wording} {problem}:"]
    lines.extend(f"- {item}" for item in items)
    lines.append(remediation)
    return '\n'.join(lines)
