"""
Utilities module for archsolids.
Contains logging setup and error handling helpers.
"""

from .logger import setup_logger, log_config
from .error_handling import (
    ArchSolidsError,
    ArchGeometryError,
    TrimFamilyNotFoundError,
    ConfigError,
    ErrorSeverity,
    ErrorCategory,
    ErrorContext,
    ErrorReport,
    ErrorHandler,
    error_handler,
    handle_error
)

__all__ = [
    'setup_logger',
    'log_config',
    'ArchSolidsError',
    'ArchGeometryError',
    'TrimFamilyNotFoundError',
    'ConfigError',
    'ErrorSeverity',
    'ErrorCategory',
    'ErrorContext',
    'ErrorReport',
    'ErrorHandler',
    'error_handler',
    'handle_error'
]
