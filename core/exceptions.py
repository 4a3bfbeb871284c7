"""
core/exceptions.py - 통합 예외 계층 구조

inventory 전체에서 사용되는 예외 클래스들을 정의합니다.
discovery 코어가 발생시키는 예외는 실패한 작업에 대한 고정된 설명을 담고,
상위(upstream) 예외를 cause로 체이닝합니다.

예외 계층 구조:
    InventoryError (베이스)
    ├── DiscoveryError (리소스 discovery)
    │   ├── ListingError
    │   ├── DependencyError
    │   ├── UnsupportedResourceTypeError
    │   └── DiscoveryCancelledError
    ├── ConfigError (설정 관련)
    └── ValidationError (입력 검증)

Usage:
    from core.exceptions import ListingError

    try:
        items = client.list_networks(ctx, "")
    except GoogleAPICallError as e:
        raise ListingError(resource_type, "networks", cause=e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class InventoryError(Exception):
    """inventory 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# discovery 예외
# =============================================================================


class DiscoveryError(InventoryError):
    """리소스 discovery 실패"""

    def __init__(
        self,
        message: str,
        resource_type: Optional[Any] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.resource_type = resource_type
        if resource_type is not None:
            self.details["resource_type"] = str(resource_type)


class ListingError(DiscoveryError):
    """upstream listing 호출 실패

    클라이언트가 발생시킨 예외를 실패한 listing 이름과 함께 감쌉니다.
    """

    def __init__(
        self,
        resource_type: Any,
        label: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"unable to list {label}", resource_type=resource_type, cause=cause)
        self.label = label
        self.error_code = _error_code(cause)
        self.details.update({"listing": label, "error_code": self.error_code})


class DependencyError(DiscoveryError):
    """2단계 discovery의 1단계 실패

    이 예외가 발생하면 2단계는 시도하지 않습니다.
    """

    def __init__(
        self,
        resource_type: Any,
        dependency: Any,
        label: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"unable to resolve {label}", resource_type=resource_type, cause=cause)
        self.dependency = dependency
        self.details["dependency"] = str(dependency)


class UnsupportedResourceTypeError(DiscoveryError):
    """전략이 바인딩되지 않은 타입으로 discover() 호출"""

    def __init__(self, resource_type: Any):
        super().__init__(f"unsupported resource type: {resource_type}", resource_type=resource_type)


class DiscoveryCancelledError(DiscoveryError):
    """실행 컨텍스트가 취소되었거나 제한 시간 초과"""

    def __init__(self, reason: str = "cancelled", resource_type: Optional[Any] = None):
        super().__init__(f"discovery {reason}", resource_type=resource_type)
        self.reason = reason


# =============================================================================
# 설정 예외
# =============================================================================


class ConfigError(InventoryError):
    """설정 오류"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"configuration error [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(InventoryError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"validation error [{field}]: expected '{expected}', got '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def _error_code(error: Optional[BaseException]) -> Optional[int]:
    # google.api_core.exceptions.GoogleAPICallError는 HTTP 상태를 .code로 노출
    code = getattr(error, "code", None)
    if isinstance(code, int):
        return code
    return None


def _root_code(error: Exception) -> Optional[int]:
    if isinstance(error, ListingError):
        return error.error_code
    if isinstance(error, InventoryError) and error.cause is not None:
        return _root_code(error.cause) if isinstance(error.cause, Exception) else None
    return _error_code(error)


def is_access_denied(error: Exception) -> bool:
    """권한 거부 오류인지 확인 (HTTP 401/403)

    Args:
        error: 확인할 예외

    Returns:
        권한 부족으로 upstream 호출이 거부되었으면 True
    """
    return _root_code(error) in (401, 403)


def is_not_found(error: Exception) -> bool:
    """리소스/API가 없는 오류인지 확인 (HTTP 404)"""
    return _root_code(error) == 404


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷

    Args:
        error: 예외

    Returns:
        사용자 친화적 메시지
    """
    if is_access_denied(error):
        return f"{error} (permission denied, check the IAM roles of the credentials)"
    return str(error)
