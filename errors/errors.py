"""
Error Classification and Handling

오류 분류 및 처리 시스템

데이터 세이버의 모든 오류는 치명적(fatal)입니다. 재시도 로직은 없으며,
여기서는 오류를 분류하고 기록한 뒤 운영자에게 다시 전달합니다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type
import traceback
import hashlib

from core.logging_config import setup_logger

logger = setup_logger(__name__)


class ErrorType(str, Enum):
    """오류 유형 분류"""
    # 설정 관련 (시작 시점)
    CONFIG_INVALID = "config_invalid"

    # 입력 관련
    BATCH_MALFORMED = "batch_malformed"
    INPUT_PARSING = "input_parsing"

    # 스토리지 관련
    SINK_UNAVAILABLE = "sink_unavailable"
    STORAGE_NOT_FOUND = "storage_not_found"
    STORAGE_PERMISSION = "storage_permission"
    STORAGE_IO = "storage_io"

    # 후처리 (transpose)
    TRANSPOSE_FAILED = "transpose_failed"

    # 알 수 없음
    UNKNOWN = "unknown"


class Severity(str, Enum):
    """오류 심각도"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class DataSaverError(Exception):
    """데이터 세이버 기본 예외"""
    error_type: ErrorType = ErrorType.UNKNOWN


class ConfigurationError(DataSaverError, ValueError):
    """잘못된 설정 (0 크기 영역, 범위 밖 flip 등)"""
    error_type = ErrorType.CONFIG_INVALID


class MalformedBatchError(DataSaverError, ValueError):
    """입력 계약 위반 (빈 관측 배치, 필드 누락 등)"""
    error_type = ErrorType.BATCH_MALFORMED


class DatasetSinkError(DataSaverError, OSError):
    """데이터셋 파일을 열거나 쓸 수 없음"""
    error_type = ErrorType.SINK_UNAVAILABLE


class TransposeError(DataSaverError, ValueError):
    """완료된 데이터셋의 transpose 실패 (행 폭 불일치 등)"""
    error_type = ErrorType.TRANSPOSE_FAILED


@dataclass
class ErrorInfo:
    """오류 정보"""
    error_type: ErrorType
    severity: Severity
    message: str
    original_exception: Optional[Exception] = None
    traceback: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error_id: Optional[str] = None

    def __post_init__(self):
        if self.error_id is None:
            self.error_id = self._generate_error_id()

    def _generate_error_id(self) -> str:
        """고유 에러 ID 생성"""
        content = f"{self.error_type.value}:{self.message}:{self.timestamp.isoformat()}"
        return hashlib.md5(content.encode()).hexdigest()[:12]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_id": self.error_id,
            "error_type": self.error_type.value,
            "severity": self.severity.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "traceback": self.traceback,
        }


# 예외 유형별 분류 매핑 (구체적인 타입이 먼저)
EXCEPTION_MAPPING: Dict[Type[Exception], Dict[str, Any]] = {
    ConfigurationError: {
        "error_type": ErrorType.CONFIG_INVALID,
        "severity": Severity.CRITICAL,
    },
    MalformedBatchError: {
        "error_type": ErrorType.BATCH_MALFORMED,
        "severity": Severity.CRITICAL,
    },
    DatasetSinkError: {
        "error_type": ErrorType.SINK_UNAVAILABLE,
        "severity": Severity.CRITICAL,
    },
    TransposeError: {
        "error_type": ErrorType.TRANSPOSE_FAILED,
        "severity": Severity.ERROR,
    },

    # 데이터 예외
    ValueError: {
        "error_type": ErrorType.INPUT_PARSING,
        "severity": Severity.ERROR,
    },
    KeyError: {
        "error_type": ErrorType.INPUT_PARSING,
        "severity": Severity.ERROR,
    },
    ZeroDivisionError: {
        "error_type": ErrorType.CONFIG_INVALID,
        "severity": Severity.CRITICAL,
    },

    # 파일/스토리지 예외
    FileNotFoundError: {
        "error_type": ErrorType.STORAGE_NOT_FOUND,
        "severity": Severity.ERROR,
    },
    PermissionError: {
        "error_type": ErrorType.STORAGE_PERMISSION,
        "severity": Severity.CRITICAL,
    },
    OSError: {
        "error_type": ErrorType.STORAGE_IO,
        "severity": Severity.CRITICAL,
    },
}


def classify_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    include_traceback: bool = True,
) -> ErrorInfo:
    """
    예외를 분류하여 ErrorInfo 반환

    Args:
        exception: 분류할 예외
        context: 추가 컨텍스트 정보
        include_traceback: 트레이스백 포함 여부

    Returns:
        ErrorInfo: 분류된 오류 정보
    """
    context = context or {}
    exc_type = type(exception)

    # 정확한 타입 매핑 확인
    if exc_type in EXCEPTION_MAPPING:
        mapping = EXCEPTION_MAPPING[exc_type]
    else:
        # 상위 클래스 확인 (매핑 순서대로)
        mapping = None
        for base_type, base_mapping in EXCEPTION_MAPPING.items():
            if isinstance(exception, base_type):
                mapping = base_mapping
                break

        if mapping is None:
            mapping = {
                "error_type": ErrorType.UNKNOWN,
                "severity": Severity.ERROR,
            }

    tb = None
    if include_traceback:
        tb = traceback.format_exc()

    return ErrorInfo(
        error_type=mapping["error_type"],
        severity=mapping["severity"],
        message=str(exception),
        original_exception=exception,
        traceback=tb,
        context=context,
    )


class ErrorRegistry:
    """실행 중 handle_error로 보고된 오류 기록 (실행 종료 시 요약용)"""

    def __init__(self):
        self._errors: List[ErrorInfo] = []

    def record(self, error: ErrorInfo):
        self._errors.append(error)

    def clear(self):
        self._errors.clear()

    def summary(self) -> Dict[str, Any]:
        """오류 요약"""
        by_type: Dict[str, int] = {}
        for error in self._errors:
            by_type[error.error_type.value] = by_type.get(error.error_type.value, 0) + 1
        return {
            "total_errors": len(self._errors),
            "by_type": by_type,
            "critical_count": sum(1 for e in self._errors if e.severity == Severity.CRITICAL),
        }


# 전역 오류 레지스트리
_error_registry: Optional[ErrorRegistry] = None


def get_error_registry() -> ErrorRegistry:
    """오류 레지스트리 싱글톤 반환"""
    global _error_registry
    if _error_registry is None:
        _error_registry = ErrorRegistry()
    return _error_registry


def handle_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    reraise: bool = True,
) -> ErrorInfo:
    """
    오류 처리 헬퍼 함수

    Args:
        exception: 처리할 예외
        context: 추가 컨텍스트
        reraise: 예외 재발생 여부

    Returns:
        ErrorInfo: 분류된 오류 정보
    """
    error_info = classify_error(exception, context)

    registry = get_error_registry()
    registry.record(error_info)

    log_method = getattr(logger, error_info.severity.value, logger.error)
    log_method(
        f"[{error_info.error_id}] {error_info.error_type.value}: {error_info.message}"
    )

    if reraise:
        raise exception

    return error_info
