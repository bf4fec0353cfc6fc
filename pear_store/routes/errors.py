"""Translation of store errors into HTTP errors"""

from fastapi import HTTPException

from ..core.errors import NotFoundError, OrderInProgressError, StoreError, ValidationError


def http_error(exc: StoreError) -> HTTPException:
    """Map a store error to the matching HTTP status"""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, OrderInProgressError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
