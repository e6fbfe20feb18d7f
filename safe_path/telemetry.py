"""
================================================================================
safe_path/telemetry.py - Decision Events for the Join and Parent Guards
================================================================================

PURPOSE:
    Emits one structured log record per guard decision so that services
    handling untrusted paths can audit what was accepted and rejected.
    Records go through the stdlib ``logging`` module under the
    ``safe_path.telemetry`` logger; nothing is written anywhere unless the
    host application attaches a handler.

SECURITY:
    - Paths are untrusted input: ANSI escapes and control characters are
      stripped and every path is truncated before it reaches a record
    - Only known fields are kept (ALLOWED_EVENT_FIELDS)

EVENT SCHEMA (v1.0 - FROZEN):
    {
        "event_version": "1.0",
        "ts": "ISO8601 timestamp",
        "event_type": "decision",
        "level": "debug|info|warn|error",
        "message": "human-readable message (truncated to 500 chars)",
        "operation": "join|parent",
        "status": "ok|escape|noop",
        "base": "base directory (truncated)",
        "candidate": "joined path or parent (truncated)",
        "prefix": "first escaping prefix, if any (truncated)"
    }

================================================================================
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

EVENT_VERSION = "1.0"

ALLOWED_EVENT_FIELDS = {
    "event_version",
    "ts",
    "event_type",
    "level",
    "message",
    "operation",
    "status",
    "base",
    "candidate",
    "prefix",
}

PATH_FIELDS = ("base", "candidate", "prefix")

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# ANSI escape sequence pattern for stripping
ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

# Remaining C0 control characters (newlines would forge log lines)
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

MAX_MESSAGE_LENGTH = 500
MAX_PATH_LENGTH = 100


def truncate_string(text: str, max_length: int) -> str:
    """Truncate string to max length."""
    if not isinstance(text, str):
        text = str(text)
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


def strip_control(text: str) -> str:
    """Remove ANSI sequences first, then any leftover control characters."""
    text = ANSI_ESCAPE.sub("", text)
    return CONTROL_CHARS.sub("?", text)


def sanitize_for_log(value: Any, max_length: int = MAX_MESSAGE_LENGTH) -> Any:
    """
    Sanitize value for logging.

    HOW IT WORKS:
        - Strips ANSI escapes and control characters
        - Truncates long strings
        - Converts paths and other objects to strings
    """
    if isinstance(value, (bool, int, float, type(None))):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="backslashreplace")
    elif not isinstance(value, str):
        value = str(value)
    return truncate_string(strip_control(value), max_length)


def emit_event(
    event_type: str,
    message: str,
    level: str = "info",
    max_path_length: int = MAX_PATH_LENGTH,
    **fields: Any,
) -> Optional[Dict[str, Any]]:
    """
    Emit a telemetry event as a log record.

    HOW IT WORKS:
        1. Builds the event with the schema version and timestamp
        2. Drops None values and unknown fields
        3. Sanitizes message and path fields
        4. Logs through ``logger`` with the event attached as ``extra``

    RETURNS:
        The sanitized event, or None when the level is disabled.
    """
    log_level = LEVELS.get(level, logging.INFO)
    if not logger.isEnabledFor(log_level):
        return None

    event = {
        "event_version": EVENT_VERSION,
        "ts": datetime.now(timezone.utc).isoformat(),
        "event_type": event_type,
        "level": level,
        "message": message,
    }
    event.update(fields)

    # Remove None values
    event = {k: v for k, v in event.items() if v is not None}

    # Enforce schema: only allow known fields
    event = {k: v for k, v in event.items() if k in ALLOWED_EVENT_FIELDS}

    event["message"] = sanitize_for_log(event["message"], MAX_MESSAGE_LENGTH)
    for key in PATH_FIELDS:
        if key in event:
            event[key] = sanitize_for_log(event[key], max_path_length)

    logger.log(log_level, "%s", event["message"], extra={"safe_path_event": event})
    return event


def emit_decision(result, config) -> Optional[Dict[str, Any]]:
    """Emit the event for one ``SafePathResult``."""
    if not config.emit_events:
        return None

    if result.success:
        level = "debug"
        message = f"{result.operation} accepted"
    else:
        level = "info"
        message = f"{result.operation} rejected: {result.reason}"

    return emit_event(
        "decision",
        message,
        level=level,
        max_path_length=config.max_path_length,
        operation=result.operation,
        status=result.status.value,
        base=result.base,
        candidate=result.candidate,
        prefix=result.offending_prefix,
    )
