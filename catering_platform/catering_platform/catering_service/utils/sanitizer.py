"""
Input sanitization for request payloads.

The single-value sanitizers (``sanitize_email``, ``sanitize_phone`` ...) are
used by the pydantic request schemas. ``sanitize`` walks an arbitrary mapping
and applies the per-type rules to every leaf; ``sanitize_json`` is the lighter
variant for free-form JSON blobs.

All string sanitizers are idempotent: running one over its own output
returns the output unchanged.
"""
import html
import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional

from email_validator import validate_email, EmailNotValidError

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_PHONE_STRIP = re.compile(r"[^\d+]")
_PHONE_VALID = re.compile(r"^\+?\d{7,15}$")
_DIGITS = re.compile(r"^\+?\d+$")

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def _encode(value: str) -> str:
    # Unescape first so already-encoded input is not double-encoded
    return html.escape(html.unescape(value), quote=True)


def sanitize_string(value: str) -> str:
    """Trim, drop control characters and HTML-encode. Empty strings are returned as-is."""
    cleaned = _CONTROL_CHARS.sub("", html.unescape(value)).strip()
    return html.escape(cleaned, quote=True)


def sanitize_text(value: str) -> str:
    """HTML-encode free text (addresses, descriptions) without stripping any characters."""
    return html.escape(html.unescape(value).strip(), quote=True)


def sanitize_id(value: Any) -> Optional[int]:
    """Return ``value`` as a positive integer, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    if isinstance(value, str):
        stripped = value.strip()
        if not _DIGITS.match(stripped):
            return None
        number = int(stripped)
        return number if number > 0 else None
    return None


def sanitize_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def sanitize_bool(value: Any) -> Optional[bool]:
    """Permissive boolean parse; unrecognised values give None."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if value in (0, 1):
            return bool(value)
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    return None


def sanitize_email(value: Optional[str]) -> Optional[str]:
    if not value or not isinstance(value, str):
        return None
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return result.normalized


def sanitize_phone(value: Optional[str]) -> Optional[str]:
    """Keep only digits and '+', then require 7 to 15 digits with an optional leading '+'."""
    if not value or not isinstance(value, str):
        return None
    cleaned = _PHONE_STRIP.sub("", value)
    if not _PHONE_VALID.match(cleaned):
        return None
    return cleaned


def sanitize_date(value: Optional[str], fmt: str = "%Y-%m-%d") -> Optional[str]:
    """Return ``value`` if it parses with ``fmt`` and formats back to the same string."""
    if not value or not isinstance(value, str):
        return None
    candidate = value.strip()
    try:
        parsed = datetime.strptime(candidate, fmt)
    except ValueError:
        return None
    if parsed.strftime(fmt) != candidate:
        return None
    return candidate


def _encode_only(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: _encode_only(item) for key, item in data.items()}
    if isinstance(data, list):
        return [_encode_only(item) for item in data]
    if isinstance(data, str):
        return _encode(data)
    return data


def sanitize_json(raw: Any) -> Any:
    """
    Decode a JSON blob and HTML-encode its strings, keeping structure and types.

    Returns None when ``raw`` is not valid JSON.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (TypeError, ValueError):
            return None
    return _encode_only(raw)


def sanitize_value(value: Any, field: str = "") -> Any:
    # bool before int: bool is a subclass of int
    if value is None:
        return None
    if isinstance(value, bool):
        return sanitize_bool(value)
    if isinstance(value, int):
        return sanitize_id(value)
    if isinstance(value, float):
        return sanitize_float(value)
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return sanitize(value)
    if isinstance(value, (list, tuple)):
        return [sanitize_value(item, field) for item in value]

    logger.warning(
        "Unsupported value type %s for field '%s' replaced with null",
        type(value).__name__, field
    )
    return None


def sanitize(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize every value of ``record``, recursing into nested mappings and lists.

    Strings are trimmed and HTML-encoded, integers must be positive, floats
    numeric, booleans parse permissively. Any other type becomes None.
    """
    return {key: sanitize_value(value, str(key)) for key, value in record.items()}
