"""
Logging setup and sensitive-data redaction for the catering service.
"""
import logging
import os
import sys
from typing import Any, Dict, Optional

from ..exceptions import (
    DomainError,
    DatabaseError,
    ExternalServiceError,
    ResourceNotFoundError,
    BusinessRuleError,
    ValidationError,
)

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = (
    "password",
    "token",
    "secret",
    "api_key",
    "private_key",
    "credit_card",
    "card_number",
    "cvv",
    "ssn",
    "social_security",
    "pin",
    "authorization",
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure root logging with stdout and, when possible, a file handler.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "catering.log")))
        except (OSError, PermissionError) as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True
    )


def is_sensitive_key(key: Any) -> bool:
    lowered = str(key).lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_KEYS)


def redact(data: Any) -> Any:
    """
    Return a copy of ``data`` with the values of sensitive keys replaced.

    Keys match case-insensitively by substring, so ``new_password`` and
    ``X-Api_Key`` are both caught. Nested dicts and lists are walked.
    """
    if isinstance(data, dict):
        return {
            key: REDACTED if is_sensitive_key(key) else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


def severity_for(exc: BaseException) -> int:
    if isinstance(exc, (DatabaseError, ExternalServiceError)):
        return logging.CRITICAL
    if isinstance(exc, (BusinessRuleError, ValidationError)):
        return logging.WARNING
    if isinstance(exc, ResourceNotFoundError):
        return logging.INFO
    return logging.ERROR


def log_error(logger: logging.Logger, exc: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
    """Log ``exc`` at a level chosen by its kind, with redacted context."""
    level = severity_for(exc)
    details = dict(context or {})
    if isinstance(exc, DomainError):
        details["error_code"] = exc.error_code
        details["error_context"] = exc.context

    logger.log(
        level,
        "%s: %s context=%s",
        exc.__class__.__name__, exc, redact(details),
        exc_info=level >= logging.ERROR and not isinstance(exc, DomainError)
    )
