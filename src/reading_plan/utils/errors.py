"""Custom exception classes for the Reading Plan service."""

from typing import Any, Dict, Optional


class ReadingPlanException(Exception):
    """Base exception for all Reading Plan errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "status_code": self.status_code,
                "details": self.details,
            }
        }


class InvalidTargetError(ReadingPlanException):
    """Exception raised when the requested day count is not a positive integer."""

    def __init__(
        self,
        message: str = "유효한 통독 일수를 입력하세요.",
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if value is not None:
            error_details["value"] = repr(value)
        super().__init__(
            message=message,
            status_code=400,
            code="INVALID_TARGET",
            details=error_details,
        )


class EmptyInputError(ReadingPlanException):
    """Exception raised when there are no units to partition."""

    def __init__(
        self,
        message: str = "No units available to partition",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="EMPTY_INPUT",
            details=details,
        )


class PartitionUnavailableError(ReadingPlanException):
    """Exception raised when the search finishes without recording any plan."""

    def __init__(
        self,
        message: str = "성경 통독 데이터를 분할할 수 없습니다.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="PARTITION_UNAVAILABLE",
            details=details,
        )


class UnitSourceError(ReadingPlanException):
    """Exception raised when units cannot be read from the database."""

    def __init__(
        self,
        message: str = "데이터베이스 조회 중 오류가 발생했습니다.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="UNIT_SOURCE_ERROR",
            details=details,
        )


class ExportError(ReadingPlanException):
    """Exception raised when the schedule file cannot be written."""

    def __init__(
        self,
        message: str = "CSV 작성 중 오류가 발생했습니다.",
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if path:
            error_details["path"] = path
        super().__init__(
            message=message,
            status_code=500,
            code="EXPORT_ERROR",
            details=error_details,
        )


class ConfigurationError(ReadingPlanException):
    """Exception raised for invalid service configuration."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="CONFIGURATION_ERROR",
            details=details,
        )
