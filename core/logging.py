"""Evidence Manager - Logging
Structured loguru logging. Mutations of officers, cases and evidences are
additionally written to a dedicated audit trail (audit.jsonl).
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger as loguru_logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def _is_audit(record) -> bool:
    return record["extra"].get("audit", False)


class EvidenceManagerLogger:
    """Keyword-context logger shared by the API and the use cases."""

    def __init__(
        self,
        name: str = "evidence-manager",
        log_dir: str | None = None,
        log_level: str = "INFO",
        json_format: bool = True,
        enable_console: bool = True,
        enable_file: bool = False,
    ):
        self.name = name
        self.log_dir = Path(log_dir or "./logs")
        self.log_level = log_level.upper()
        self.json_format = json_format

        loguru_logger.remove()

        if enable_console:
            loguru_logger.add(sys.stderr, level=self.log_level, format=CONSOLE_FORMAT, colorize=True)

        if enable_file:
            self._add_file_sinks()

        self._logger = loguru_logger.bind(service=self.name)

    def _add_file_sinks(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

        loguru_logger.add(
            self.log_dir / "evidence-manager.log",
            rotation="100 MB",
            retention="30 days",
            compression="gz",
            level=self.log_level,
            format=FILE_FORMAT,
        )
        loguru_logger.add(
            self.log_dir / "errors.log",
            rotation="50 MB",
            retention="90 days",
            compression="gz",
            level="ERROR",
            format=FILE_FORMAT + "\n{exception}",
        )

        # Audit trail is never rotated away
        loguru_logger.add(
            self.log_dir / "audit.jsonl",
            level="INFO",
            filter=_is_audit,
            serialize=True,
        )

        if self.json_format:
            loguru_logger.add(
                self.log_dir / "evidence-manager.jsonl",
                rotation="100 MB",
                retention="30 days",
                compression="gz",
                level=self.log_level,
                serialize=True,
            )

    def _log(
        self,
        level: str,
        message: str,
        context: dict[str, Any] | None = None,
        exc_info: bool = False,
        audit: bool = False,
    ):
        log = self._logger.bind(audit=audit, **(context or {}))
        if context:
            message = f"{message} | {json.dumps(context, default=str)}"
        log.opt(depth=2, exception=exc_info or None).log(level, message)

    def debug(self, message: str, **context):
        self._log("DEBUG", message, context)

    def info(self, message: str, **context):
        self._log("INFO", message, context)

    def warning(self, message: str, **context):
        self._log("WARNING", message, context)

    def error(self, message: str, exc_info: bool = False, **context):
        """Log an error, with the active traceback when exc_info is set."""
        self._log("ERROR", message, context, exc_info=exc_info)

    def audit(self, action: str, resource_type: str, resource_id: str, **context):
        """Record a mutation (create/update/delete) in the audit trail."""
        entry = {
            "action": action,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "at": datetime.utcnow().isoformat(),
            **context,
        }
        self._log("INFO", f"AUDIT: {action} on {resource_type}/{resource_id}", entry, audit=True)


_logger: EvidenceManagerLogger | None = None


def get_logger() -> EvidenceManagerLogger:
    """Get or create the process-wide logger (console only)."""
    global _logger
    if _logger is None:
        _logger = EvidenceManagerLogger()
    return _logger


def configure_logging(
    log_dir: str | None = None,
    log_level: str = "INFO",
    json_format: bool = True,
) -> EvidenceManagerLogger:
    """Replace the process-wide logger with one that also writes files."""
    global _logger
    _logger = EvidenceManagerLogger(
        log_dir=log_dir,
        log_level=log_level,
        json_format=json_format,
        enable_file=True,
    )
    return _logger
