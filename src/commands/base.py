"""
Base classes for the commands layer.

CommandResult provides a consistent return type across all commands.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from enum import Enum


class ResultStatus(Enum):
    """Command execution status."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass
class CommandResult:
    """
    Unified result type for all commands.

    Attributes:
        success: Whether the command succeeded
        status: Detailed status enum
        message: Human-readable message
        data: Command-specific result data
        error: The exception behind a failed result, if any
    """
    success: bool
    status: ResultStatus = ResultStatus.SUCCESS
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, message: str = "Success", data: Dict[str, Any] = None) -> 'CommandResult':
        """Create a successful result."""
        return cls(
            success=True,
            status=ResultStatus.SUCCESS,
            message=message,
            data=data or {},
        )

    @classmethod
    def fail(cls, message: str, error: BaseException = None, data: Dict[str, Any] = None) -> 'CommandResult':
        """Create a failed result."""
        return cls(
            success=False,
            status=ResultStatus.ERROR,
            message=message,
            error=error,
            data=data or {},
        )

    @classmethod
    def warn(cls, message: str, data: Dict[str, Any] = None) -> 'CommandResult':
        """Create a warning result (partial success)."""
        return cls(
            success=True,
            status=ResultStatus.WARNING,
            message=message,
            data=data or {}
        )
