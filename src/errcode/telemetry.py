"""
Structured logging for errcode.

Registration events are logged at DEBUG. Applications can use
``ErrcodeLogger.error_code`` to record an ErrorCode with its code, HTTP status
and operation as structured fields.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import time
from enum import Enum
from typing import Any, ClassVar


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)

    @classmethod
    def from_env(cls, default: LogLevel | None = None) -> LogLevel:
        """Read ERRCODE_LOG_LEVEL, falling back to *default* (WARNING)."""
        raw = os.getenv("ERRCODE_LOG_LEVEL", "").strip().upper()
        try:
            return cls(raw)
        except ValueError:
            return default or cls.WARNING


class SensitiveDataMasker:
    """Masks credentials that leak into error messages."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        (r"(Bearer\s+)([^\s]+)", r"\1***REDACTED***"),
        (r"(api[_-]?key[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
        (r"(password[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
    ]

    SENSITIVE_KEYS: ClassVar[tuple[str, ...]] = ("key", "token", "secret", "password", "auth")

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r)
            for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask sensitive data in text."""
        result = text
        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive values in a dictionary, recursing into nested dicts."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if any(s in key.lower() for s in self.SENSITIVE_KEYS):
                result[key] = "***REDACTED***"
            elif isinstance(value, str):
                result[key] = self.mask(value)
            elif isinstance(value, dict):
                result[key] = self.mask_dict(value)
            else:
                result[key] = value
        return result


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__()
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }
        if hasattr(record, "extra_fields"):
            log_data.update(self._masker.mask_dict(record.extra_fields))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        original_msg = record.msg
        record.msg = self._masker.mask(str(record.msg))
        result = super().format(record)
        record.msg = original_msg

        extra = getattr(record, "extra_fields", None)
        if extra:
            masked = self._masker.mask_dict(extra)
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in masked.items())
        return result


class ErrcodeLogger:
    """Logger with structured keyword fields.

    Example:
        >>> logger = ErrcodeLogger.get_logger("errcode.code")
        >>> logger.debug("Code registered", code="state.blocked")
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.from_env()
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel | None = None,
        format: str | None = None,
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure every errcode logger.

        Args:
            level: Log level (default: ERRCODE_LOG_LEVEL or WARNING)
            format: 'json' or 'text' (default: ERRCODE_LOG_FORMAT or 'text')
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        cls._level = level or LogLevel.from_env()
        format = format or os.getenv("ERRCODE_LOG_FORMAT", "text")

        formatter: logging.Formatter
        if format == "json":
            formatter = JsonFormatter(masker=masker)
        else:
            formatter = TextFormatter(masker=masker)

        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        cls._handler.setLevel(cls._level.to_logging_level())

        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(cls._level.to_logging_level())

    @classmethod
    def get_logger(cls, name: str) -> ErrcodeLogger:
        """Get or create a logger."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(cls._level.to_logging_level())
            if cls._handler:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
            elif not logger.handlers:
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(TextFormatter())
                logger.addHandler(handler)
            logger.propagate = False
            cls._loggers[name] = logger
        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def error_code(self, msg: str, err: Any, **kwargs: Any) -> None:
        """Log an ErrorCode at ERROR with its code, status and operation.

        Values that do not carry a code are logged with their message only.
        """
        from errcode.error_code import code_of
        from errcode.operation import operation_of

        fields: dict[str, Any] = {"error": str(err)}
        code = code_of(err)
        if code is not None:
            fields["code"] = code.code_str
            fields["http_status"] = code.http_code()
        if operation := operation_of(err):
            fields["operation"] = operation
        fields.update(kwargs)
        self._log(logging.ERROR, msg, **fields)


def get_logger(name: str) -> ErrcodeLogger:
    """Get a logger instance."""
    return ErrcodeLogger.get_logger(name)
