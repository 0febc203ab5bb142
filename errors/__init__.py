"""
Errors Module

오류 분류 및 처리 시스템
"""

from errors.errors import (
    ErrorType,
    Severity,
    ErrorInfo,
    ErrorRegistry,
    DataSaverError,
    ConfigurationError,
    MalformedBatchError,
    DatasetSinkError,
    TransposeError,
    classify_error,
    get_error_registry,
    handle_error,
    EXCEPTION_MAPPING,
)

__all__ = [
    "ErrorType",
    "Severity",
    "ErrorInfo",
    "ErrorRegistry",
    "DataSaverError",
    "ConfigurationError",
    "MalformedBatchError",
    "DatasetSinkError",
    "TransposeError",
    "classify_error",
    "get_error_registry",
    "handle_error",
    "EXCEPTION_MAPPING",
]
