"""App-level logging policy: console output plus a JSON-lines run log."""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from salvo.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging", "setup_logging"]

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}

_listener: QueueListener | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "WARNING"
    console_format: str = "text"  # text|json
    file_path: str | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; the run log file is written off-thread."""
    shutdown_logging()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.WARNING))

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter() if config.console_format == "json" else logging.Formatter(TEXT_FORMAT))
    if not config.file_path:
        root.addHandler(console)
        return

    file_handler = _run_log_handler(Path(config.file_path))
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _start_listener(QueueListener(records, console, file_handler, respect_handler_level=True))


def shutdown_logging() -> None:
    """Drain and stop the background listener, if running."""
    global _listener

    if _listener is not None:
        _listener.stop()
        _listener = None


def build_logging_config() -> LoggingConfig:
    """Build logging configuration from environment."""
    return LoggingConfig(
        level_name=os.getenv("SALVO_LOG_LEVEL", os.getenv("LOG_LEVEL", "WARNING")).upper(),
        console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        file_path=_resolve_run_log_file_path(),
    )


def setup_logging() -> None:
    """Configure application logging."""
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _start_listener(listener: QueueListener) -> None:
    global _listener

    _listener = listener
    _listener.start()


def _run_log_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(JsonFormatter())
    return handler


def _resolve_run_log_file_path() -> str:
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(resolve_logs_dir() / f"salvo_run_{stamp}.jsonl")
