"""Shared ``.env`` loader for engine defaults.

Lets every MCP host pick up the same scene defaults (fps, canvas size,
transition policy) from ``~/.config/scene-motion-mcp/.env`` without
repeating them in each host's server block.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path.home() / ".config" / "scene-motion-mcp" / ".env"

_QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _should_inject(key: str, current: str | None) -> bool:
    """Return True when *current* leaves *key* effectively unset.

    MCP hosts pass through blank values and unresolved references to the
    variable itself (``$SCENE_DEFAULT_FPS``, ``${SCENE_DEFAULT_FPS}``,
    ``${SCENE_DEFAULT_FPS:-30}``); all of these count as unset.
    """
    if current is None:
        return True
    value = _unquote(current.strip()).strip()
    if not value:
        return True
    if value in (f"${key}", f"${{{key}}}"):
        return True
    return value.startswith(f"${{{key}:-") and value.endswith("}")


def parse_dotenv(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` pairs from *path*.

    Accepts an optional ``export`` prefix, quoted values, blank lines and
    ``#`` comments. Values are taken literally (no ``$VAR`` expansion).
    A missing file yields an empty dict.
    """
    if not path.is_file():
        return {}

    entries: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        entries[key] = _unquote(value.strip())
    return entries


def load_dotenv(path: Path | None = None) -> dict[str, str]:
    """Inject variables from *path* into ``os.environ`` where unset.

    Args:
        path: ``.env`` file to read. Defaults to :data:`DEFAULT_ENV_PATH`.

    Returns:
        The variables that were actually injected.
    """
    entries = parse_dotenv(path or DEFAULT_ENV_PATH)
    injected = {
        key: value
        for key, value in entries.items()
        if _should_inject(key, os.environ.get(key))
    }
    os.environ.update(injected)
    return injected
