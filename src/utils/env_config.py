"""Environment configuration loader and validator"""

import os
from pathlib import Path
from typing import Dict, Optional, Any

from dotenv import dotenv_values
from rich.table import Table

from utils.console import console
from utils.paths import SiteKeeperPaths

# Default configuration values
DEFAULTS = {
    # Installation defaults
    'SITEKEEPER_ENVIRONMENT': 'production',
    'SITEKEEPER_SERVICE_USER': 'sitekeeper',

    # Logging
    'LOG_LEVEL': 'INFO',
    'SITEKEEPER_LOG_PATH': str(SiteKeeperPaths.get_log_file()),

    # Doctor checks
    'SITEKEEPER_CHECK_TIMEOUT': '60',
    'SITEKEEPER_MIN_MEMORY_MB': '150',
    'SITEKEEPER_MIN_FREE_SPACE_MB': '1024',

    # Debug settings
    'DEBUG_MODE': 'false',
}

VALID_ENVIRONMENTS = ('production', 'development')


def find_env_file() -> Optional[Path]:
    """Find the .env file in standard locations"""
    # Check locations in order of priority
    search_paths = [
        Path.cwd() / '.env',
        SiteKeeperPaths.get_config_dir() / '.env',
        Path(__file__).parent.parent.parent / '.env',
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


def load_env_file(env_path: Optional[Path] = None) -> Dict[str, str]:
    """Load environment variables from .env file

    Values already present in the process environment win over the file.

    Args:
        env_path: Optional path to .env file. If None, auto-discovers.

    Returns:
        Dictionary of variables taken from the file
    """
    loaded_vars = {}

    if env_path is None:
        env_path = find_env_file()

    if env_path is None or not env_path.exists():
        return loaded_vars

    try:
        values = dotenv_values(env_path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[warning]Warning: Could not load .env file: {e}[/warning]")
        return loaded_vars

    for key, value in values.items():
        if value is None or key in os.environ:
            continue
        os.environ[key] = value
        loaded_vars[key] = value

    return loaded_vars


def get_config(key: str, default: Optional[str] = None) -> str:
    """Get configuration value from environment or defaults

    Priority:
    1. Environment variable
    2. Provided default
    3. Built-in default
    """
    return os.environ.get(key, default or DEFAULTS.get(key, ''))


def get_config_bool(key: str, default: bool = False) -> bool:
    """Get boolean configuration value"""
    value = get_config(key, str(default).lower())
    return value.lower() in ('true', 'yes', '1', 'on')


def get_config_int(key: str, default: int = 0) -> int:
    """Get integer configuration value"""
    try:
        return int(get_config(key, str(default)))
    except ValueError:
        return default


def validate_config() -> Dict[str, Any]:
    """Validate current configuration and return status

    Returns:
        Dictionary with validation results
    """
    results = {
        'valid': True,
        'warnings': [],
        'errors': [],
        'config': {}
    }

    environment = get_config('SITEKEEPER_ENVIRONMENT').lower()
    if environment not in VALID_ENVIRONMENTS:
        results['errors'].append(f"Invalid SITEKEEPER_ENVIRONMENT: {environment}")
        results['valid'] = False
    results['config']['environment'] = environment

    log_level = get_config('LOG_LEVEL').upper()
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if log_level not in valid_levels:
        results['errors'].append(f"Invalid LOG_LEVEL: {log_level}")
        results['valid'] = False
    results['config']['log_level'] = log_level

    for key in ('SITEKEEPER_CHECK_TIMEOUT', 'SITEKEEPER_MIN_MEMORY_MB', 'SITEKEEPER_MIN_FREE_SPACE_MB'):
        raw = get_config(key)
        if not raw.isdigit():
            results['warnings'].append(f"{key} is not a whole number, using {DEFAULTS[key]}")
        results['config'][key.lower()] = get_config_int(key, int(DEFAULTS[key]))

    log_path = Path(get_config('SITEKEEPER_LOG_PATH'))
    if not log_path.parent.exists():
        results['warnings'].append(f"Log directory does not exist yet: {log_path.parent}")
    results['config']['log_path'] = str(log_path)

    results['config']['debug_mode'] = get_config_bool('DEBUG_MODE')

    return results


def show_config_summary():
    """Display current configuration summary"""
    table = Table(title="Current Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="yellow")

    env_file = find_env_file()

    for key in sorted(DEFAULTS.keys()):
        env_value = os.environ.get(key)
        default_value = DEFAULTS[key]

        if env_value is not None:
            value = env_value
            source = ".env" if env_file else "env var"
        else:
            value = default_value
            source = "default"

        table.add_row(key, value, source)

    console.print(table)

    if env_file:
        console.print(f"\n[dim]Loaded from: {env_file}[/dim]")
    else:
        console.print("\n[dim]No .env file found, using defaults[/dim]")


def initialize_config():
    """Initialize configuration by loading .env file

    Call this at application startup
    """
    env_file = find_env_file()
    loaded = load_env_file(env_file)

    if loaded:
        from utils.logging_config import get_logger
        get_logger(__name__).debug(f"Loaded {len(loaded)} settings from {env_file}")

    return validate_config()
