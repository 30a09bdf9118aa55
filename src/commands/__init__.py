"""
Sitekeeper Commands Layer

Unified command interface for the CLI and for scripts.
All UI-independent operations go here.

Usage:
    from commands import doctor

    result = doctor.run(categories=['start'])
    if not result:
        print(result.message)
"""

from . import doctor
from .base import CommandResult, ResultStatus

__all__ = [
    'doctor',
    'CommandResult',
    'ResultStatus',
]
