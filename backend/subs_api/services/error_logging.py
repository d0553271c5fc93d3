"""
Error Logging Service

Logging setup and error recording for the API:
- Console logging plus rotating log files (when LOG_DIR is writable)
- Unexpected errors stored in the error_logs table for querying
- Full context captured (request, operation, traceback)
- Sensitive values sanitised before they are written anywhere

Usage:
    from subs_api.services.error_logging import error_logger

    try:
        # some code
    except Exception as e:
        error_id = error_logger.log_error(e, request=request)
"""

import logging
import traceback
import json
import sys
from datetime import datetime, timezone
from typing import Optional, Any, Callable, Dict
from uuid import UUID
from pathlib import Path
from logging.handlers import RotatingFileHandler

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from subs_api.models.error_log import ErrorLog


LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Logger for the error recording itself
logger = logging.getLogger("error_logging")

# Sensitive fields to sanitize
SENSITIVE_FIELDS = {'password', 'token', 'authorization', 'api_key', 'secret', 'credential', 'dsn'}


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> bool:
    """
    Configure root logging: console output plus rotating files.

    File handlers are only attached when log_dir can be created and written
    to; otherwise logging stays console-only.

    Args:
        level: Root log level name
        log_dir: Directory for errors.log and app_detailed.log

    Returns:
        True when file logging is enabled
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(getattr(h, "_subs_api", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler._subs_api = True
        root_logger.addHandler(console_handler)

    if not log_dir:
        return False

    logs_path = Path(log_dir)
    try:
        logs_path.mkdir(parents=True, exist_ok=True)
        # Test if we can write to the directory
        test_file = logs_path / ".write_test"
        test_file.touch()
        test_file.unlink()
    except (PermissionError, OSError) as e:
        logger.warning(f"Cannot write to logs directory {logs_path}: {e}. File logging disabled.")
        return False

    if any(getattr(h, "_subs_api_file", False) for h in root_logger.handlers):
        return True

    # Errors only
    file_handler = RotatingFileHandler(
        logs_path / "errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.ERROR)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    # Everything
    detailed_handler = RotatingFileHandler(
        logs_path / "app_detailed.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding='utf-8'
    )
    detailed_handler.setLevel(logging.DEBUG)
    detailed_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT, datefmt=DATE_FORMAT))

    for handler in (file_handler, detailed_handler):
        handler._subs_api_file = True
        root_logger.addHandler(handler)

    return True


def sanitize_data(data: Any, depth: int = 0) -> Any:
    """
    Sanitize sensitive data from dictionaries and lists.
    Replaces sensitive field values with '[REDACTED]'.
    """
    if depth > 10:  # Prevent infinite recursion
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = sanitize_data(value, depth + 1)
        return sanitized
    elif isinstance(data, (list, tuple)):
        return [sanitize_data(item, depth + 1) for item in data]
    return data


def truncate_string(s: str, max_length: int = 10000) -> str:
    """Truncate string to max length."""
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


class ErrorLogger:
    """
    Error logging service that writes to the log and, once configured,
    to the error_logs table.
    """

    def __init__(self):
        self.db_session_factory: Optional[Callable[[], Session]] = None

    def set_db_session_factory(self, factory: Optional[Callable[[], Session]]):
        """Set (or clear, with None) the session factory for DB logging."""
        self.db_session_factory = factory

    def log_error(
        self,
        error: BaseException,
        request: Optional[Any] = None,
        severity: str = "error",
        context: Optional[Dict] = None,
        save_to_db: bool = True
    ) -> Optional[UUID]:
        """
        Log an error with full context.

        Args:
            error: The exception that occurred
            request: FastAPI Request object (optional)
            severity: warning, error, critical
            context: Additional context data
            save_to_db: Whether to save to database

        Returns:
            UUID of the error log entry if saved to DB, None otherwise
        """
        timestamp = datetime.now(timezone.utc)
        error_type = type(error).__name__
        error_message = str(error)
        operation = getattr(error, "operation", None)

        # Traceback of the error itself, including chained causes
        stack_trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        module = function = line_number = None
        tb_info = traceback.extract_tb(error.__traceback__) if error.__traceback__ else None
        if tb_info:
            last_frame = tb_info[-1]
            module = last_frame.filename
            function = last_frame.name
            line_number = str(last_frame.lineno)

        request_method = request_path = request_query = client_ip = None
        if request is not None:
            try:
                request_method = request.method
                request_path = str(request.url.path)
                request_query = str(request.url.query) if request.url.query else None
                client_ip = request.client.host if request.client else None
            except AttributeError as req_err:
                logger.debug(f"Failed to extract request info: {req_err}")

        sanitized_context = sanitize_data(context) if context else None

        log_message = f"{error_type}: {error_message} | Path: {request_path or 'N/A'}"
        if operation:
            log_message += f" | Operation: {operation}"
        if sanitized_context:
            log_message += f" | Context: {json.dumps(sanitized_context, default=str)}"

        level = {
            "critical": logging.CRITICAL,
            "error": logging.ERROR,
            "warning": logging.WARNING,
        }.get(severity, logging.INFO)
        logger.log(level, log_message)
        logger.debug(stack_trace)

        error_log_id = None
        if save_to_db and self.db_session_factory:
            try:
                db = self.db_session_factory()
                try:
                    error_log = ErrorLog(
                        timestamp=timestamp,
                        error_type=error_type,
                        severity=severity,
                        operation=operation,
                        module=module,
                        function=function,
                        line_number=line_number,
                        request_method=request_method,
                        request_path=request_path,
                        request_query=request_query,
                        client_ip=client_ip,
                        message=truncate_string(error_message, 1000),
                        stack_trace=truncate_string(stack_trace, 20000),
                        context_data=sanitized_context,
                    )
                    db.add(error_log)
                    db.commit()
                    error_log_id = error_log.id
                    logger.debug(f"Error logged to DB with ID: {error_log_id}")
                finally:
                    db.close()
            except SQLAlchemyError as db_err:
                # The store may be the thing that is failing; the log line above already went out.
                logger.error(f"Failed to save error to database: {db_err}")

        return error_log_id


# Singleton instance
error_logger = ErrorLogger()


def configure_error_logging(db_session_factory: Optional[Callable[[], Session]]):
    """
    Configure the error logging system with database support.
    Call this during app startup.
    """
    error_logger.set_db_session_factory(db_session_factory)
    logger.info("Error logging system configured")
