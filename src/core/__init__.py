"""
Sitekeeper Core Module

This module contains:
- The error taxonomy shared by every command
- System registry and installation handles
- Installation config loading and advanced option validation
- The doctor check engine (core.doctor)
"""

from .errors import (
    CliError,
    SystemCheckError,
    ConfigError,
    ProcessError,
    PreconditionError,
    ListrError,
)
from .system import System
from .instance import Instance, check_valid_install

__all__ = [
    'CliError',
    'SystemCheckError',
    'ConfigError',
    'ProcessError',
    'PreconditionError',
    'ListrError',
    'System',
    'Instance',
    'check_valid_install',
]
