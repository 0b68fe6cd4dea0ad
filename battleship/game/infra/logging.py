"""Application logging policy."""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from battleship.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging", "setup_logging"]

_QUEUE_LISTENER: QueueListener | None = None

_STANDARD_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "WARNING"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_KEYS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional queued file streaming."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    level = getattr(logging, config.level_name.upper(), logging.WARNING)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the queued file listener, if any."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def build_logging_config() -> LoggingConfig:
    """Resolve logging configuration from environment."""
    level_name = os.getenv("BATTLESHIP_LOG_LEVEL", os.getenv("LOG_LEVEL", "WARNING")).upper()
    console_format = os.getenv("LOG_FORMAT", "text").lower()
    file_path = None
    if os.getenv("BATTLESHIP_LOG_FILE", "1").strip() != "0":
        file_path = _resolve_run_log_file_path()
    return LoggingConfig(
        level_name=level_name,
        console_format=console_format,
        file_path=file_path,
        file_format="json",
    )


def setup_logging() -> None:
    """Configure application logging from environment."""
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _resolve_run_log_file_path() -> str:
    configured = os.getenv("BATTLESHIP_LOG_DIR", "").strip()
    base_dir = Path(configured) if configured else resolve_logs_dir()
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"battleship_run_{stamp}.jsonl")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
