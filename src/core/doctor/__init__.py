"""
Doctor: diagnostic checks for a managed installation.

Usage:
    from core.doctor import DoctorEngine

    engine = DoctorEngine(ui, system)
    engine.run({'args': ['doctor'], 'categories': ['start']})
"""

from .models import (
    CATEGORIES,
    INSTALL,
    START,
    UPDATE,
    CheckDescriptor,
    RunContext,
)
from .filters import filter_checks
from .context import build_context, is_doctor_invocation
from .gate import resolve_instance, should_resolve_instance
from .classifier import classify_failures, classify_process_failure, describe_offenders
from .engine import DoctorEngine, NO_CHECKS_MESSAGE

__all__ = [
    'DoctorEngine',
    'NO_CHECKS_MESSAGE',
    'CheckDescriptor',
    'RunContext',
    'CATEGORIES',
    'INSTALL',
    'START',
    'UPDATE',
    'filter_checks',
    'build_context',
    'is_doctor_invocation',
    'resolve_instance',
    'should_resolve_instance',
    'classify_failures',
    'classify_process_failure',
    'describe_offenders',
]
