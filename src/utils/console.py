"""
Sitekeeper Console Manager

Provides a singleton Rich Console instance for consistent output formatting
across the application.

Usage:
    from utils.console import console
    console.print("[success]Done[/success]")

Or for explicit access:
    from utils.console import get_console
    c = get_console()
"""

from rich.console import Console
from rich.theme import Theme
from typing import Optional
import threading

# Thread-safe singleton
_console: Optional[Console] = None
_lock = threading.Lock()

SITEKEEPER_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red bold",
    "heading": "bold magenta",
    "skipped": "dim yellow",
    "command": "green",
    "dim": "dim white",
})


def get_console(force_terminal: bool = None,
                no_color: bool = None,
                width: int = None) -> Console:
    """
    Get the singleton Console instance.

    Args:
        force_terminal: Force terminal mode (for testing)
        no_color: Disable color output
        width: Override console width

    Returns:
        The shared Console instance
    """
    global _console

    if _console is None:
        with _lock:
            # Double-check locking
            if _console is None:
                _console = Console(
                    theme=SITEKEEPER_THEME,
                    force_terminal=force_terminal,
                    no_color=no_color,
                    width=width,
                    highlight=False,
                    markup=True,
                )

    return _console


# Default console instance for direct import
console = get_console()
