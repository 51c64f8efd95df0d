"""Shared configuration for the table field, read once from the environment.

Values come from ``.env`` at the project root (via python-dotenv) or the
process environment.  Every setting can also be overridden per call through
the keyword arguments of ``normalize`` and ``render_table``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ('1', 'true', 'yes', 'on' are true)."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


# Emit heading/cell text without HTML escaping (content authors are trusted)
TRUSTED_HTML = env_flag("TABLEMAKER_TRUSTED_HTML", False)

# Raise MalformedRow when a row has more cells than there are columns
STRICT_ROWS = env_flag("TABLEMAKER_STRICT_ROWS", True)

# IANA zone applied to naive date/time cell values
TIMEZONE = os.getenv("TABLEMAKER_TIMEZONE", "UTC")
