"""
오류 분류 및 처리 테스트
"""

import pytest

from errors import (
    ConfigurationError,
    DatasetSinkError,
    ErrorType,
    MalformedBatchError,
    Severity,
    TransposeError,
    classify_error,
    get_error_registry,
    handle_error,
)


@pytest.fixture(autouse=True)
def clean_registry():
    get_error_registry().clear()
    yield
    get_error_registry().clear()


@pytest.mark.parametrize("exception,error_type,severity", [
    (ConfigurationError("zero extent"), ErrorType.CONFIG_INVALID, Severity.CRITICAL),
    (MalformedBatchError("empty batch"), ErrorType.BATCH_MALFORMED, Severity.CRITICAL),
    (DatasetSinkError("read-only"), ErrorType.SINK_UNAVAILABLE, Severity.CRITICAL),
    (TransposeError("width"), ErrorType.TRANSPOSE_FAILED, Severity.ERROR),
    (FileNotFoundError("missing"), ErrorType.STORAGE_NOT_FOUND, Severity.ERROR),
    (ZeroDivisionError("division by zero"), ErrorType.CONFIG_INVALID, Severity.CRITICAL),
    (RuntimeError("other"), ErrorType.UNKNOWN, Severity.ERROR),
])
def test_classify_error(exception, error_type, severity):
    info = classify_error(exception, include_traceback=False)
    assert info.error_type == error_type
    assert info.severity == severity
    assert info.message == str(exception)


def test_domain_errors_keep_builtin_bases():
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(DatasetSinkError, OSError)


def test_handle_error_reraises_and_records():
    with pytest.raises(TransposeError):
        handle_error(TransposeError("bad width"), context={"dataset": "x.csv"})

    summary = get_error_registry().summary()
    assert summary["total_errors"] == 1
    assert summary["by_type"] == {"transpose_failed": 1}


def test_handle_error_without_reraise():
    info = handle_error(MalformedBatchError("empty"), reraise=False)
    assert info.error_id
    assert info.to_dict()["error_type"] == "batch_malformed"
    assert get_error_registry().summary()["critical_count"] == 1


def test_error_timestamp_is_utc_aware():
    info = classify_error(TransposeError("width"), include_traceback=False)
    assert info.timestamp.tzinfo is not None
    assert info.timestamp.utcoffset().total_seconds() == 0
    assert info.to_dict()["timestamp"].endswith("+00:00")


def test_registry_summary_groups_by_type():
    handle_error(ConfigurationError("flip"), reraise=False)
    handle_error(ConfigurationError("size"), reraise=False)
    handle_error(TransposeError("width"), reraise=False)

    summary = get_error_registry().summary()
    assert summary == {
        "total_errors": 3,
        "by_type": {"config_invalid": 2, "transpose_failed": 1},
        "critical_count": 2,
    }
