"""
Logging Configuration and Utilities

Structured logging for the API: standard-library loggers rendered as JSON
by python-json-logger, plus structlog for security events. Request and user
identifiers travel through context variables so every record emitted while
serving a request carries them.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

from app.config.settings import Settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

SERVICE_NAME = 'campus-grievance-api'

SENSITIVE_KEYS = (
    'password', 'token', 'secret', 'credentials',
    'authorization', 'cookie',
)


class RequestContextProcessor:
    """Add request context to structlog event dicts"""

    def __init__(self, environment: str = 'development'):
        self.environment = environment

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = SERVICE_NAME
        event_dict['environment'] = self.environment

        return event_dict


class SecurityLogProcessor:
    """Mark security events and mask sensitive values"""

    def __call__(self, logger, method_name, event_dict):
        if any(keyword in str(event_dict.get('event', '')).lower()
               for keyword in ['auth', 'login', 'permission', 'rate_limit', 'register']):
            event_dict['security_event'] = True

        redact(event_dict)
        return event_dict


def redact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Mask sensitive keys in place, recursing into nested dicts."""
    for key in list(values.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            values[key] = '[REDACTED]'
        elif isinstance(values[key], dict):
            redact(values[key])
    return values


class RequestContextFilter(logging.Filter):
    """Copy the request context variables onto stdlib log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'request_id'):
            record.request_id = request_id.get()
        if not hasattr(record, 'user_id'):
            record.user_id = user_id.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = SERVICE_NAME

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        redact(log_record)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging(settings: Settings):
        """Configure structlog to hand rendered events to the stdlib loggers"""

        processors = [
            structlog.stdlib.filter_by_level,
            RequestContextProcessor(settings.ENVIRONMENT),
            SecurityLogProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if settings.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging(settings: Settings):
        """Configure standard Python logging"""

        level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.addFilter(RequestContextFilter())

        if settings.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s %(request_id)s %(user_id)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
            )

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        LoggingConfig._configure_library_loggers(settings)

    @staticmethod
    def _configure_library_loggers(settings: Settings):
        """Configure logging for external libraries"""

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if settings.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("redis").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerAdapter:
    """Thin wrapper giving module loggers a uniform call surface"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the application root logger)

    Returns:
        Logger adapter wrapping the stdlib logger
    """
    return LoggerAdapter(logging.getLogger(name or 'app'))


def get_event_logger(name: Optional[str] = None):
    """Get a structlog logger for security and audit-adjacent events."""
    return structlog.get_logger(name or 'app.security')


def setup_logging(settings: Settings) -> None:
    """Initialize logging configuration"""
    LoggingConfig.configure_structured_logging(settings)
    LoggingConfig.configure_standard_logging(settings)

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
    })


__all__ = [
    'get_logger',
    'get_event_logger',
    'setup_logging',
    'redact',
    'LoggerAdapter',
    'LoggingConfig',
    'CustomJsonFormatter',
    'request_id',
    'user_id',
]
