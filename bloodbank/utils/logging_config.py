import logging
import sys
import os
import traceback
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pythonjsonlogger import jsonlogger
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from contextvars import ContextVar

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)

SERVICE_NAME = "bloodbank-api"


class ContextualJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that includes request context and service information"""

    def __init__(self, *args, environment: str = "development", **kwargs):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["environment"] = self.environment
        log_record["service"] = SERVICE_NAME

        if request_id.get():
            log_record["request_id"] = request_id.get()
        if user_id.get():
            log_record["user_id"] = user_id.get()

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        if hasattr(record, "extra_fields"):
            log_record.update(record.extra_fields)


_configured = False


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
    log_to_file: bool = False,
    log_dir: str = "logs",
) -> logging.Logger:
    """
    Configure the root logger once per process.

    Console output is always enabled. File handlers (one per entry in ``LOG_FILES``)
    are added when ``log_to_file`` is set.
    Calling this again after the first configuration only adjusts the level.
    """
    global _configured

    root_logger = logging.getLogger()
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if _configured:
        return root_logger

    formatter = ContextualJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s",
        environment=environment,
    )

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        _setup_file_handlers(formatter, log_dir)

    # Reduce sqlalchemy noise outside production debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    # Access logs come from LoggingMiddleware
    logging.getLogger("uvicorn.access").handlers.clear()

    _configured = True
    return root_logger


# file name -> (logger name, minimum level, days kept); None is the root logger
LOG_FILES = {
    "app.log": (None, logging.INFO, None),
    "error.log": (None, logging.ERROR, 30),
    "security.log": ("security", logging.INFO, 90),
    "audit.log": ("audit", logging.INFO, 90),
    "access.log": ("access", logging.INFO, 30),
}


def _setup_file_handlers(formatter: logging.Formatter, log_dir: str) -> None:
    """Set up file-based logging handlers"""
    os.makedirs(log_dir, exist_ok=True)

    for file_name, (logger_name, level, days_kept) in LOG_FILES.items():
        path = os.path.join(log_dir, file_name)
        if days_kept is None:
            handler = RotatingFileHandler(path, maxBytes=10_000_000, backupCount=10)
        else:
            handler = TimedRotatingFileHandler(
                path, when="midnight", interval=1, backupCount=days_kept
            )
        handler.setFormatter(formatter)
        handler.setLevel(level)

        target = logging.getLogger(logger_name)
        target.addHandler(handler)
        if logger_name is not None:
            target.setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance. Use __name__ as the name parameter."""
    return logging.getLogger(name)


HIGH_SEVERITY_EVENTS = ("failed_login_attempt", "write_without_token")


def log_security_event(
    event_type: str,
    user_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
):
    """Log security-related events"""
    security_logger = logging.getLogger("security")

    log_data = {
        "event_type": event_type,
        "ip_address": ip_address,
        "user_agent": user_agent,
        "severity": "high" if event_type in HIGH_SEVERITY_EVENTS else "medium",
    }

    if user_id:
        log_data["target_user_id"] = user_id

    if details:
        log_data.update(details)

    security_logger.info(
        f"Security event: {event_type}", extra={"extra_fields": log_data}
    )


def log_audit_event(
    action: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    old_values: Optional[dict[str, Any]] = None,
    new_values: Optional[dict[str, Any]] = None,
    user_id: Optional[str] = None,
) -> None:
    """Log audit events"""
    audit_logger = logging.getLogger("audit")
    log_data = {
        "action": action,
        "resource_type": resource_type,
        "resource_id": resource_id,
        "old_values": old_values,
        "new_values": new_values,
        "user_id": user_id,
    }
    audit_logger.info(
        f"Audit event: {action} {resource_type}", extra={"extra_fields": log_data}
    )


def log_performance_metric(
    operation: str,
    duration_seconds: float,
    additional_metrics: Optional[Dict[str, Any]] = None,
):
    """Log performance metrics"""
    perf_logger = logging.getLogger("performance")

    log_data = {
        "operation": operation,
        "duration_seconds": round(duration_seconds, 4),
        "performance_category": "slow" if duration_seconds > 1.0 else "normal",
    }

    if additional_metrics:
        log_data.update(additional_metrics)

    perf_logger.info(
        f"Performance metric: {operation}", extra={"extra_fields": log_data}
    )


def log_api_access(
    method: str,
    path: str,
    status_code: int,
    response_time: float,
    user_id: Optional[str] = None,
    ip_address: Optional[str] = None,
):
    """Log API access"""
    access_logger = logging.getLogger("access")

    log_data = {
        "http_method": method,
        "path": path,
        "status_code": status_code,
        "response_time_seconds": round(response_time, 4),
        "ip_address": ip_address,
    }

    if user_id:
        log_data["user_id"] = user_id

    access_logger.info(
        f"{method} {path} - {status_code}", extra={"extra_fields": log_data}
    )


class LogContext:
    """Context manager for setting request context"""

    def __init__(self, req_id: str = None, usr_id: str = None):
        self.request_id = req_id
        self.user_id = usr_id
        self.tokens = []

    def __enter__(self):
        if self.request_id:
            self.tokens.append(request_id.set(self.request_id))
        if self.user_id:
            self.tokens.append(user_id.set(self.user_id))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for token in reversed(self.tokens):
            token.var.reset(token)
