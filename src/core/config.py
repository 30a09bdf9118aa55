"""Loader for an installation's per-environment JSON configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

_MISSING = object()


class SiteConfig:
    """
    A parsed config.<environment>.json file.

    Values are addressed with dotted keys, e.g. ``server.port``.
    """

    def __init__(self, path: Union[str, Path], values: Dict[str, Any] = None):
        self.path = Path(path)
        self.values: Dict[str, Any] = values if values is not None else {}

    @classmethod
    def exists(cls, path: Union[str, Path]) -> Optional['SiteConfig']:
        """Load the file at ``path``.

        Returns None when the file is missing, unreadable, not valid JSON,
        or does not hold a JSON object.
        """
        path = Path(path)
        try:
            with open(path, 'r') as f:
                values = json.load(f)
        except FileNotFoundError:
            logger.debug(f"Config file not found: {path}")
            return None
        except (OSError, ValueError) as e:
            logger.debug(f"Could not parse config file {path}: {e}")
            return None

        if not isinstance(values, dict):
            logger.debug(f"Config file {path} does not hold an object")
            return None

        return cls(path, values)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key path."""
        value = self._lookup(key)
        return default if value is _MISSING else value

    def _lookup(self, key: str):
        node = self.values
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node
