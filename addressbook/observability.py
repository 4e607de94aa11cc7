"""
Address Book Observability

Structured logging for the registry and debug sessions.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                    Application Code                      │
    │        logger.debug("Registered address", label=x)       │
    └───────────────────────┬─────────────────────────────────┘
                            │
    ┌───────────────────────▼─────────────────────────────────┐
    │                      BookLogger                          │
    │     component name, run id, structured context          │
    └───────────────────────┬─────────────────────────────────┘
                            │
    ┌───────────────────────▼─────────────────────────────────┐
    │                  StructuredHandler                       │
    │              JSON lines │ plain text lines               │
    └─────────────────────────────────────────────────────────┘

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
import traceback
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

# Identifies the test run a log line belongs to
run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default=""
)


class LogLevel(Enum):
    """Log severity levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class LogEvent:
    """Structured log event."""
    timestamp: str
    level: str
    logger: str
    message: str
    run_id: str = ""
    component: str = ""
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping empty fields."""
        return {k: v for k, v in asdict(self).items() if v not in (None, "", {})}

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def to_text(self) -> str:
        ctx = " ".join(f"{k}={v}" for k, v in sorted(self.context.items()))
        line = f"{self.timestamp} {self.level.upper():<8} {self.logger}: {self.message}"
        if ctx:
            line = f"{line} {ctx}"
        if self.exception:
            line = f"{line}\n{self.exception}"
        return line


class StructuredHandler(logging.Handler):
    """Logging handler that outputs structured JSON or text lines."""

    def __init__(self, stream: Any = None, fmt: str = "json"):
        super().__init__()
        # None means whatever sys.stderr is at emit time
        self.stream = stream
        self.fmt = fmt

    def emit(self, record: logging.LogRecord) -> None:
        try:
            event = LogEvent(
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                level=record.levelname.lower(),
                logger=record.name,
                message=record.getMessage(),
                run_id=run_id_var.get(),
                component=getattr(record, "component", ""),
                context=getattr(record, "context", {}),
            )

            if record.exc_info:
                event.exception = "".join(traceback.format_exception(*record.exc_info))

            line = event.to_json() if self.fmt == "json" else event.to_text()
            stream = self.stream or sys.stderr
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def resolve_level(value: Any) -> LogLevel:
    """Map a configured level name to LogLevel; unknown names mean INFO."""
    try:
        return LogLevel(str(value).strip().lower())
    except ValueError:
        return LogLevel.INFO


class BookLogger:
    """
    Structured logger for address book components.

    Every event carries the component name and the current run id.
    """

    def __init__(
        self,
        component: str,
        level: Optional[LogLevel] = None,
        fmt: Optional[str] = None,
    ):
        from addressbook.config import get_config

        obs = get_config().observability
        level = level or resolve_level(obs.log_level.get())
        fmt = fmt or obs.log_format.get()

        self.component = component
        self._logger = logging.getLogger(f"addressbook.{component}")
        self._logger.setLevel(getattr(logging, level.value.upper()))

        # Add structured handler if not already added
        if not any(isinstance(h, StructuredHandler) for h in self._logger.handlers):
            self._logger.addHandler(StructuredHandler(fmt=fmt))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **context: Any,
    ) -> None:
        extra = {
            "component": self.component,
            "context": context,
        }
        self._logger.log(level, message, extra=extra, exc_info=exc_info)

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **context)

    def error(self, message: str, exc_info: bool = False, **context: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, exc_info=exc_info, **context)


def generate_run_id() -> str:
    """Generate a new test-run ID."""
    return f"run-{uuid.uuid4().hex[:12]}"


def set_run_id(run_id: str) -> contextvars.Token:
    """Set the run ID for the current context."""
    return run_id_var.set(run_id)


def get_run_id() -> str:
    """Get the current run ID, creating one on first use."""
    rid = run_id_var.get()
    if not rid:
        rid = generate_run_id()
        run_id_var.set(rid)
    return rid


def get_logger(component: str) -> BookLogger:
    """Get a logger for an address book component."""
    return BookLogger(component)
