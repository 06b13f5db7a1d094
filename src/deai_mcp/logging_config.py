"""File-only logging for deai-mcp.

The MCP server talks to its host over stdin/stdout, so nothing may be
written to stdout.  All records go to a per-process session file instead.

Security properties:
- Log file created with 0600 (owner read/write only)
- Log directory created with 0700 (owner access only)
- Default level: INFO (debug detail requires --verbose or DEAI_VERBOSE=1)
- The API key is NEVER logged (scrubbed by filter)
"""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path

from deai_mcp.config import API_KEY_ENV, API_KEY_HEADER

# "X-API-Key: abc" / "x-api-key=abc" / "'X-API-Key': 'abc'"
_HEADER_PATTERN = re.compile(
    rf"({re.escape(API_KEY_HEADER)}['\"]?\s*[:=]\s*['\"]?)[^\s'\",}}]+",
    re.IGNORECASE,
)

_MAX_SESSION_LOGS = 100

_LOG_SUFFIX = "-deai-mcp.log"

_session_stamp: str | None = None


def get_session_stamp() -> str:
    """Return the session timestamp (YYYYMMDD-HHMMSS), generated once."""
    global _session_stamp
    if _session_stamp is None:
        _session_stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return _session_stamp


def _reset_session_stamp() -> None:
    """Reset the cached session stamp (for tests only)."""
    global _session_stamp
    _session_stamp = None


class _ApiKeyScrubFilter(logging.Filter):
    """Safety net: redact the API key wherever it appears in a log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Scrub the key from the formatted message and allow the record."""
        message = record.getMessage()
        scrubbed = _HEADER_PATTERN.sub(r"\1[KEY-REDACTED]", message)
        api_key = os.environ.get(API_KEY_ENV, "").strip()
        if api_key:
            scrubbed = scrubbed.replace(api_key, "[KEY-REDACTED]")
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


def _cleanup_session_logs(log_dir: Path) -> None:
    """Delete oldest session logs beyond _MAX_SESSION_LOGS."""
    files = sorted(log_dir.glob(f"*{_LOG_SUFFIX}"))
    for old in files[:-_MAX_SESSION_LOGS]:
        old.unlink()


def _get_log_dir(base_dir: str | Path | None = None) -> Path:
    """Return (and create) the ``.logs/sessions/`` directory."""
    root = Path(base_dir) if base_dir else Path(
        os.environ.get("DEAI_ROOT", ".")
    )
    log_dir = root / ".logs" / "sessions"
    log_dir.mkdir(parents=True, exist_ok=True)
    os.chmod(log_dir, 0o700)
    os.chmod(log_dir.parent, 0o700)
    return log_dir


def _make_file_handler(log_path: Path) -> logging.StreamHandler:
    """Create a file handler with 0600 perms, key scrubbing, and formatter."""
    fd = os.open(log_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
    fh = logging.StreamHandler(os.fdopen(fd, "w"))
    if os.environ.get("DEAI_VERBOSE", "").strip() in ("1", "true", "yes"):
        fh.setLevel(logging.DEBUG)
    else:
        fh.setLevel(logging.INFO)
    fh.setFormatter(
        logging.Formatter("%(asctime)s %(threadName)s %(levelname)s %(message)s")
    )
    fh.addFilter(_ApiKeyScrubFilter())
    return fh


def _session_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, "_deai_session", False):
            return handler
    return None


def get_logger() -> logging.Logger:
    """Return the deai_mcp logger (file-only, no StreamHandler).

    Handlers attached by others (e.g. a test harness capturing logs) do
    not count; the session file handler is added once per session.
    """
    logger = logging.getLogger("deai_mcp")
    if _session_handler(logger) is not None:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_dir = _get_log_dir()
    log_path = log_dir / f"{get_session_stamp()}{_LOG_SUFFIX}"
    handler = _make_file_handler(log_path)
    handler._deai_session = True
    logger.addHandler(handler)

    _cleanup_session_logs(log_dir)

    return logger


def set_debug(enabled: bool) -> None:
    """Switch the session file handler between DEBUG and INFO level."""
    handler = _session_handler(get_logger())
    handler.setLevel(logging.DEBUG if enabled else logging.INFO)
