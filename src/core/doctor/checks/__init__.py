"""
Registered doctor checks.

CHECKS order is the execution order.
"""

from . import install_folder, logged_in_user, permissions, resources, system_stack, validate_config

CHECKS = [
    system_stack.check,
    install_folder.check,
    logged_in_user.check,
    resources.memory_check,
    resources.free_space_check,
    validate_config.check,
    permissions.check,
]

__all__ = ['CHECKS']
