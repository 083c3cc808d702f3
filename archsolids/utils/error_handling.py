"""
Error handling for archsolids.
Provides the library exceptions and structured error reports that are logged
before a failure is handed back to the caller unchanged.
"""

import functools
import json
import logging
import time
import traceback
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class ArchSolidsError(Exception):
    """Base class for errors raised by archsolids itself."""


class ArchGeometryError(ArchSolidsError, ValueError):
    """Raised when arch parameters describe an unsupported construction."""


class TrimFamilyNotFoundError(ArchSolidsError, KeyError):
    """Raised when a trim family id is not registered with the provider."""


class ConfigError(ArchSolidsError, ValueError):
    """Raised for malformed pipeline configuration."""


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    INPUT_VALIDATION = "input_validation"
    GEOMETRY_PROCESSING = "geometry_processing"
    TRIM_FAMILY = "trim_family"
    CONFIGURATION = "configuration"
    EXPORT_ERROR = "export_error"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    request_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class ErrorReport:
    """Structured error report."""
    error_id: str
    timestamp: float
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    exception_type: str
    traceback: str
    context: ErrorContext
    resolution_suggestions: List[str] = field(default_factory=list)


class ErrorHandler:
    """Builds structured error reports and logs them."""

    def __init__(self, log: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            log: Logger used for reports, defaults to this module's logger
        """
        self.log = log or logger

    def handle_error(self,
                     exception: Exception,
                     context: ErrorContext,
                     severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                     category: ErrorCategory = ErrorCategory.UNKNOWN,
                     resolution_suggestions: Optional[List[str]] = None) -> ErrorReport:
        """
        Handle an error and generate a structured report.

        Args:
            exception: The exception that occurred
            context: Error context
            severity: Error severity
            category: Error category
            resolution_suggestions: Suggested resolutions

        Returns:
            Error report
        """
        error_report = ErrorReport(
            error_id=str(uuid.uuid4()),
            timestamp=time.time(),
            severity=severity,
            category=category,
            message=str(exception),
            exception_type=type(exception).__name__,
            traceback=''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )),
            context=context,
            resolution_suggestions=resolution_suggestions or []
        )

        self._log_error(error_report)
        return error_report

    def _log_error(self, error_report: ErrorReport):
        """Log error report at a level matching its severity."""
        log_message = (
            f"Error ID: {error_report.error_id}\n"
            f"Severity: {error_report.severity.value}\n"
            f"Category: {error_report.category.value}\n"
            f"Operation: {error_report.context.operation}\n"
            f"Exception: {error_report.exception_type}: {error_report.message}\n"
            f"Context: {json.dumps(asdict(error_report.context), default=str)}\n"
            f"Resolution Suggestions: {error_report.resolution_suggestions}"
        )

        if error_report.severity == ErrorSeverity.CRITICAL:
            self.log.critical(log_message)
        elif error_report.severity == ErrorSeverity.HIGH:
            self.log.error(log_message)
        elif error_report.severity == ErrorSeverity.MEDIUM:
            self.log.warning(log_message)
        else:
            self.log.info(log_message)

        self.log.debug(error_report.traceback)


def error_handler(severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                  category: ErrorCategory = ErrorCategory.UNKNOWN,
                  resolution_suggestions: Optional[List[str]] = None):
    """
    Decorator that reports a failure and re-raises it unchanged.

    Args:
        severity: Error severity
        category: Error category
        resolution_suggestions: Suggested resolutions
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                context = ErrorContext(
                    operation=func.__qualname__,
                    metadata={'args': repr(args), 'kwargs': repr(kwargs)}
                )
                global_error_handler.handle_error(
                    e, context, severity, category, resolution_suggestions
                )
                raise
        return wrapper
    return decorator


global_error_handler = ErrorHandler()


def handle_error(exception: Exception,
                 operation: str,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 category: ErrorCategory = ErrorCategory.UNKNOWN) -> ErrorReport:
    """Handle an error with default context."""
    context = ErrorContext(operation=operation)
    return global_error_handler.handle_error(exception, context, severity, category)
