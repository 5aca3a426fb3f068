"""Configuration defaults, environment overrides and .env loading.

WHY: Output style (indentation, CSV quoting, XML pretty-printing) and
service limits should be adjustable per deployment without code
changes. Keeping them as plain module-level values makes them easy to
find and to override in tests.

HOW: python-dotenv loads the .env file on import. Each setting is read
from an environment variable with a documented default. Numeric values
are validated on import so a typo fails loudly instead of silently
falling back.

RULES:
- All variables are prefixed DATA_CONVERTER_
- JSON_INDENT of 0 means compact JSON output
- CSV_QUOTING is "always" (every field quoted) or "minimal"
- XML_INDENT unset means compact XML output
- Invalid values raise ValueError naming the variable
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

CSV_QUOTING_MODES = ("always", "minimal")


def _int_setting(name: str, default: Optional[int]) -> Optional[int]:
    """Read a non-negative integer environment variable.

    RULES:
    - Missing or empty → default
    - Anything that is not a non-negative integer → ValueError
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            "{} must be a non-negative integer, got '{}'.".format(name, raw)
        ) from None
    if value < 0:
        raise ValueError(
            "{} must be a non-negative integer, got '{}'.".format(name, raw)
        )
    return value


def _choice_setting(name: str, default: str, choices: tuple) -> str:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw not in choices:
        raise ValueError(
            "{} must be one of {}, got '{}'.".format(name, ", ".join(choices), raw)
        )
    return raw


# ---------------------------------------------------------------------------
# Output style defaults
# ---------------------------------------------------------------------------

DEFAULT_JSON_INDENT = _int_setting("DATA_CONVERTER_JSON_INDENT", 2)
DEFAULT_YAML_INDENT = _int_setting("DATA_CONVERTER_YAML_INDENT", 2)
DEFAULT_CSV_QUOTING = _choice_setting("DATA_CONVERTER_CSV_QUOTING", "always", CSV_QUOTING_MODES)
DEFAULT_XML_INDENT = _int_setting("DATA_CONVERTER_XML_INDENT", None)

# ---------------------------------------------------------------------------
# Service settings
# ---------------------------------------------------------------------------

MAX_INPUT_CHARS = _int_setting("DATA_CONVERTER_MAX_INPUT_CHARS", 5_000_000)
"""Largest request text the HTTP API accepts (characters)."""

LOG_LEVEL = os.getenv("DATA_CONVERTER_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
API_HOST = os.getenv("DATA_CONVERTER_HOST", "0.0.0.0")
API_PORT = _int_setting("DATA_CONVERTER_PORT", 8000)
