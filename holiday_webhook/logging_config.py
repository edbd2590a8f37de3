"""Process logging: one format for terminal and optional file output, with `extra` fields appended as JSON."""
import json
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_STANDARD_LOG_RECORD_KEYS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName", "levelname", "levelno",
        "lineno", "module", "msecs", "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "message", "thread", "threadName", "taskName",
        "asctime", "getMessage",
    )
)


def _format_extra(record: logging.LogRecord) -> str:
    extra = {k: getattr(record, k) for k in record.__dict__ if k not in _STANDARD_LOG_RECORD_KEYS}
    if not extra:
        return ""
    try:
        return " | " + json.dumps(extra, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return " | " + str(extra)


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        suffix = _format_extra(record)
        return base + suffix if suffix else base


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging once.

    Args:
        level: Root log level name
        log_file: Optional path of a file that receives the same records
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = ExtraFormatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level.upper())
