from __future__ import annotations

from fastapi import HTTPException, status

from peerscore.errors import (
    AlreadyExists,
    DivisionByZero,
    LedgerError,
    NarrowingOverflow,
    NotMinted,
    NotOwner,
    OutOfRange,
)

_STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    OutOfRange: 422,
    NotMinted: status.HTTP_404_NOT_FOUND,
    NotOwner: status.HTTP_403_FORBIDDEN,
    AlreadyExists: status.HTTP_409_CONFLICT,
    DivisionByZero: status.HTTP_409_CONFLICT,
    NarrowingOverflow: 422,
}


def to_http_error(exc: LedgerError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(exc).__name__, "message": str(exc)},
    )
