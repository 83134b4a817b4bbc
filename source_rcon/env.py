"""Connection settings from the environment and an optional .env file."""

import os
from pathlib import Path

from .client import RCONClient

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 27015


def load_env(path: Path | str = ".env") -> dict[str, str]:
    """Load KEY=VALUE lines into os.environ without overriding existing vars.

    Returns the pairs that were applied. A missing file is not an error.
    """
    env_file = Path(path)
    applied: dict[str, str] = {}
    if not env_file.exists():
        return applied
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, val = line.partition("=")
            key, val = key.strip(), val.strip()
            if val and key not in os.environ:
                os.environ[key] = val
                applied[key] = val
    return applied


def client_from_env(prefix: str = "RCON_", timeout: float | None = None) -> RCONClient:
    """Build an unconnected client from {prefix}HOST, {prefix}PORT and {prefix}PASSWORD."""
    host = os.environ.get(f"{prefix}HOST", DEFAULT_HOST)
    port_val = os.environ.get(f"{prefix}PORT", str(DEFAULT_PORT))
    try:
        port = int(port_val)
    except ValueError:
        raise ValueError(f"{prefix}PORT must be an integer, got {port_val!r}") from None
    password = os.environ.get(f"{prefix}PASSWORD") or None
    return RCONClient(host, port, password, timeout=timeout)
