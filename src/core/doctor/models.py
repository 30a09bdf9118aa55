"""
Doctor data models.

CheckDescriptor is the static description of one diagnostic check and
RunContext is the state shared by every check during one invocation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Union


# === Categories ===

INSTALL = "install"
START = "start"
UPDATE = "update"

CATEGORIES = (INSTALL, START, UPDATE)

DOCTOR_COMMAND = "doctor"


# === Core types ===

@dataclass(frozen=True)
class CheckDescriptor:
    """
    One registered diagnostic check.

    Attributes:
        title: Human-readable name shown while the check runs
        task: Callable taking (context, task_handle). Returns None on
            success or a list of CheckDescriptor to run as sub-checks.
            Failures are raised as CliError subclasses.
        category: Category tags; empty means the check only runs when no
            category filter is requested
        enabled: Optional predicate; a disabled check is left out of the run
        skip: Optional predicate; a truthy result skips the check, a
            string result doubles as the skip reason
    """
    title: str
    task: Callable[..., Optional[List['CheckDescriptor']]]
    category: FrozenSet[str] = frozenset()
    enabled: Optional[Callable[['RunContext'], bool]] = None
    skip: Optional[Callable[['RunContext'], Union[bool, str]]] = None

    def __post_init__(self):
        # Accept any iterable of tags, store an immutable set
        if not isinstance(self.category, frozenset):
            object.__setattr__(self, 'category', frozenset(self.category or ()))

    def matches(self, categories: Iterable[str]) -> bool:
        """True if any of ``categories`` is one of this check's tags."""
        return bool(self.category.intersection(categories))


@dataclass
class RunContext:
    """
    Shared state for one doctor run.

    Checks read from the context; only the instance gate decides
    ``instance``, and it does so before the context is built.

    Attributes:
        argv: Invocation arguments, passed through untouched
        system: System registry
        ui: UI handle
        instance: Resolved installation, None when the gate skipped it
        local: True for local/development installations
        is_doctor_command: True for a standalone `doctor` run, False when
            the checks are embedded in another command
        cwd: Directory the run operates on
    """
    argv: Dict[str, Any]
    system: Any
    ui: Any
    instance: Any = None
    local: bool = False
    is_doctor_command: bool = False
    cwd: Path = field(default_factory=Path.cwd)
