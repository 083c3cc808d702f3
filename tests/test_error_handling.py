import logging

import pytest

from archsolids.utils.error_handling import (
    ArchGeometryError,
    ArchSolidsError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    TrimFamilyNotFoundError,
    error_handler,
    handle_error,
)


def test_library_errors_share_a_base():
    for error_type in (ArchGeometryError, TrimFamilyNotFoundError, ConfigError):
        assert issubclass(error_type, ArchSolidsError)

    assert issubclass(ArchGeometryError, ValueError)
    assert issubclass(TrimFamilyNotFoundError, KeyError)


def test_error_handler_reraises_the_original_exception(caplog):
    original = ArchGeometryError("too wide")

    @error_handler(category=ErrorCategory.GEOMETRY_PROCESSING)
    def build():
        raise original

    with caplog.at_level(logging.WARNING, logger='archsolids.utils.error_handling'):
        with pytest.raises(ArchGeometryError) as excinfo:
            build()

    assert excinfo.value is original
    assert 'geometry_processing' in caplog.text
    assert 'too wide' in caplog.text


def test_error_handler_passes_results_through():
    @error_handler()
    def build(value):
        return value * 2

    assert build(21) == 42
    assert build.__name__ == 'build'


def test_report_fields():
    handler = ErrorHandler(logging.getLogger('test.errors'))
    try:
        raise ValueError("bad span")
    except ValueError as e:
        report = handler.handle_error(
            e,
            ErrorContext(operation='shed_roof'),
            ErrorSeverity.HIGH,
            ErrorCategory.INPUT_VALIDATION,
            ['check roofSpanSize']
        )

    assert report.exception_type == 'ValueError'
    assert report.message == 'bad span'
    assert report.severity is ErrorSeverity.HIGH
    assert report.category is ErrorCategory.INPUT_VALIDATION
    assert report.context.operation == 'shed_roof'
    assert report.resolution_suggestions == ['check roofSpanSize']
    assert 'ValueError' in report.traceback


def test_handle_error_logs_by_severity(caplog):
    with caplog.at_level(logging.INFO, logger='archsolids.utils.error_handling'):
        handle_error(RuntimeError("export failed"), 'export', ErrorSeverity.CRITICAL)

    assert caplog.records[-1].levelno == logging.CRITICAL
