from __future__ import annotations
import json
import logging
import sys

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_data)


class _CliHandler(logging.StreamHandler):
    pass


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Send logs to stderr; stdout is reserved for command output."""
    root = logging.getLogger()
    # Only replace our own handler so repeated calls don't stack up output.
    for handler in root.handlers[:]:
        if isinstance(handler, _CliHandler):
            root.removeHandler(handler)

    handler = _CliHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
