"""Process identity lookup.

The configuration records who is logging: the executable (script) name,
the host name and the user name. Lookups go through an `IdentitySource`
so tests and embedding applications can supply their own values.
"""

import getpass
import logging
import os
import socket
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# When set, the user name is rendered as DOMAIN\user
ENV_USER_DOMAIN = "USERDOMAIN"


class IdentitySource(Protocol):
    """Anything that can answer the three identity questions."""

    def exe_name(self) -> str: ...

    def hostname(self) -> str: ...

    def username(self) -> str: ...


class EnvironmentIdentity:
    """Identity taken from the running interpreter and OS."""

    def exe_name(self) -> str:
        candidate = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
        name = Path(candidate).name
        if not name:
            raise LookupError("executable name is empty")
        return name

    def hostname(self) -> str:
        return socket.gethostname()

    def username(self) -> str:
        user = getpass.getuser()
        domain = os.getenv(ENV_USER_DOMAIN)
        if domain:
            return f"{domain}\\{user}"
        return user


@dataclass(frozen=True)
class Identity:
    """Resolved identity fields, each either a real value or "Unknown"."""

    exe_name: str = UNKNOWN
    system_name: str = UNKNOWN
    user_name: str = UNKNOWN


def _lookup(field_name: str, fn: Callable[[], str]) -> str:
    try:
        value = fn()
    except Exception as e:
        logger.debug(f"Identity lookup for {field_name} failed: {e}")
        return UNKNOWN
    if not value:
        return UNKNOWN
    return str(value)


def resolve_identity(source: IdentitySource | None = None) -> Identity:
    """Resolve every identity field, falling back to "Unknown" per field.

    Args:
        source: Identity provider (default: EnvironmentIdentity)

    Returns:
        Identity with all three fields populated. Never raises.
    """
    source = source or EnvironmentIdentity()
    return Identity(
        exe_name=_lookup("exe_name", source.exe_name),
        system_name=_lookup("system_name", source.hostname),
        user_name=_lookup("user_name", source.username),
    )
