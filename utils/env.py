"""Environment access backed by an optional ``.env`` file.

Values from the process environment win over the ``.env`` file unless
``TRAMPLAR_FORCE_ENV_OVERRIDE`` is set to ``true``.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

_dotenv_values: dict[str, Optional[str]] = {}
_loaded = False


def _force_override() -> bool:
    value = os.environ.get("TRAMPLAR_FORCE_ENV_OVERRIDE", "")
    if not value:
        value = _dotenv_values.get("TRAMPLAR_FORCE_ENV_OVERRIDE") or ""
    return value.strip().lower() == "true"


def reload_env(env_path: Optional[Path] = None) -> None:
    """(Re)read the ``.env`` file into the module cache."""
    global _dotenv_values, _loaded

    path = env_path or _ENV_PATH
    if path.exists():
        _dotenv_values = dict(dotenv_values(path))
        logger.debug(f"Loaded {len(_dotenv_values)} values from {path}")
    else:
        _dotenv_values = {}
    _loaded = True


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return ``key`` from the process environment or the ``.env`` file."""
    if not _loaded:
        reload_env()

    if _force_override() and _dotenv_values.get(key) is not None:
        return _dotenv_values[key]

    value = os.environ.get(key)
    if value is not None:
        return value

    value = _dotenv_values.get(key)
    if value is not None:
        return value
    return default


def get_env_int(key: str, default: int) -> int:
    """Return ``key`` parsed as an integer, ``default`` when unset."""
    raw = get_env(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
