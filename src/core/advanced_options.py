"""
Advanced configuration options of a managed installation.

ADVANCED_OPTIONS maps option name to its AdvancedOption, in the order
options are validated. Each validator returns True when the value is
acceptable, or a message explaining what is wrong with it.
"""

import ipaddress
import socket
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from urllib.parse import urlparse

ValidateResult = Union[bool, str]


@dataclass
class AdvancedOption:
    """
    One configurable option.

    Attributes:
        name: Option name as used on the command line
        config_path: Dotted key of the value in config.<env>.json
        description: Short help text
        validate: Validator, or None if the option is not validated
    """
    name: str
    config_path: str
    description: str
    validate: Optional[Callable[[Any], ValidateResult]] = None


def validate_url(value: Any) -> ValidateResult:
    """Accept absolute http(s) URLs with a host."""
    if not isinstance(value, str):
        return 'Invalid URL. Your URL should be a string.'
    parsed = urlparse(value)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return 'Invalid URL. Your URL should include a protocol, E.g. http://my-site.com'
    return True


def _port_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        port = int(value)
    except (TypeError, ValueError):
        return None
    if str(port) != str(value).strip():
        return None
    return port if 0 < port < 65536 else None


def port_available(port: int, host: str = '127.0.0.1') -> bool:
    """Check whether nothing is listening on host:port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, port))
        return True
    except OSError:
        return False
    finally:
        sock.close()


def validate_port(value: Any) -> ValidateResult:
    port = _port_number(value)
    if port is None:
        return 'Port must be an integer between 1 and 65535.'
    if not port_available(port):
        return f'Port {port} is in use. Stop whatever is listening on it or choose another port.'
    return True


def validate_db_port(value: Any) -> ValidateResult:
    if _port_number(value) is None:
        return 'Database port must be an integer between 1 and 65535.'
    return True


def validate_ip(value: Any) -> ValidateResult:
    try:
        ipaddress.ip_address(str(value))
    except ValueError:
        return f"'{value}' is not a valid IP address."
    return True


def _one_of(label: str, choices: tuple) -> Callable[[Any], ValidateResult]:
    def validate(value: Any) -> ValidateResult:
        if value in choices:
            return True
        return f"Invalid {label} '{value}'. Valid values are: {', '.join(choices)}."
    return validate


def validate_log_transports(value: Any) -> ValidateResult:
    allowed = ('stdout', 'file')
    if not isinstance(value, list) or not value:
        return 'Log transports must be a list containing stdout and/or file.'
    invalid = [item for item in value if item not in allowed]
    if invalid:
        return f"Invalid log transport(s): {', '.join(map(str, invalid))}. Valid values are: stdout, file."
    return True


ADVANCED_OPTIONS = OrderedDict((option.name, option) for option in (
    AdvancedOption('url', 'url', 'Site domain (URL the site is served from)', validate_url),
    AdvancedOption('admin_url', 'admin.url', 'Separate admin URL', validate_url),
    AdvancedOption('port', 'server.port', 'Port the server listens on', validate_port),
    AdvancedOption('ip', 'server.host', 'IP address the server binds to', validate_ip),
    AdvancedOption('process', 'process', 'Process manager (systemd or local)',
                   _one_of('process manager', ('systemd', 'local'))),
    AdvancedOption('db', 'database.client', 'Database client',
                   _one_of('database client', ('mysql', 'sqlite3'))),
    AdvancedOption('dbhost', 'database.connection.host', 'Database host'),
    AdvancedOption('dbport', 'database.connection.port', 'Database port', validate_db_port),
    AdvancedOption('mail', 'mail.transport', 'Mail transport'),
    AdvancedOption('log', 'logging.transports', 'Log transports', validate_log_transports),
))
