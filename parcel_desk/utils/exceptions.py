"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the package lifecycle
error taxonomy. Services and repositories raise these directly and FastAPI
renders them, so no status code is chosen at the call site.

Usage:
    from parcel_desk.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Package not found")
    raise ConflictError("Package already checked in")
"""

from fastapi import HTTPException, status


class InvalidInputError(HTTPException):
    """422 Unprocessable Entity 예외 — 필수 항목 누락 시 사용.

    422 exception raised when a required field is missing or blank, or when
    neither room_number nor guest_phone is supplied at check-in.
    The offending field names are carried in ``fields`` and in the response detail.

    Args:
        fields: 문제가 된 필드 이름 목록 (Names of the offending fields)
        message: 오류 메시지 (Error message)
    """

    def __init__(self, fields: list[str], message: str = "Invalid input") -> None:
        self.fields: list[str] = list(fields)
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": message, "fields": self.fields},
        )


class ConflictError(HTTPException):
    """409 Conflict 예외 — 이미 접수된 운송장 번호일 때 사용.

    409 Conflict exception.
    Raised when a tracking number is already checked in, either by the
    existence pre-check or by the store's uniqueness constraint.

    Args:
        detail: 오류 메시지 (Error message, default: "Package already checked in")
    """

    def __init__(self, detail: str = "Package already checked in") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 운송장 번호를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a check-out or lookup references an unknown tracking number.

    Args:
        detail: 오류 메시지 (Error message, default: "Package not found")
    """

    def __init__(self, detail: str = "Package not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreError(HTTPException):
    """500 Internal Server Error 예외 — 저장소 오류 시 사용.

    500 exception wrapping any underlying store failure (connectivity,
    unclassified constraint violation). The original message is attached
    for diagnostics. Never retried at this layer.

    Args:
        detail: 원본 오류 메시지 (Underlying store error message)
    """

    def __init__(self, detail: str = "Store error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
