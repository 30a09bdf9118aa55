"""Builds the RunContext shared by all checks of one invocation."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .models import DOCTOR_COMMAND, RunContext


def is_doctor_invocation(argv: Dict[str, Any]) -> bool:
    """True if the first positional token is the doctor command."""
    args = argv.get('args') or []
    return bool(args) and args[0] == DOCTOR_COMMAND


def build_context(argv: Dict[str, Any], system, ui, instance=None,
                  cwd: Union[str, Path, None] = None) -> RunContext:
    """
    Merge invocation arguments and collaborators into a RunContext.

    Args:
        argv: Invocation arguments (kept as-is on the context)
        system: System registry
        ui: UI handle
        instance: Installation resolved by the instance gate, if any
        cwd: Working directory; defaults to the process cwd
    """
    return RunContext(
        argv=argv,
        system=system,
        ui=ui,
        instance=instance,
        local=bool(argv.get('local', False)),
        is_doctor_command=is_doctor_invocation(argv),
        cwd=Path(cwd) if cwd is not None else Path.cwd(),
    )
