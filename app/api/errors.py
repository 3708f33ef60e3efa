from __future__ import annotations

from fastapi import HTTPException

from app.domain.exceptions import DomainError


def to_http_exception(exc: DomainError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=str(exc) or "Request failed.")
