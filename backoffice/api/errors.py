# backoffice/api/errors.py
from fastapi import HTTPException

from backoffice.domain.errors import (
    ForbiddenError,
    InsufficientStockError,
    InvalidRequestError,
    InvalidStatusError,
    NotFoundError,
    OrderError,
    ProductUnavailableError,
    StoreFailure,
)
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


def http_error(e: OrderError) -> HTTPException:
    """Mapowanie bledow domenowych na kody HTTP."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))

    if isinstance(e, ForbiddenError):
        return HTTPException(status_code=403, detail=str(e))

    if isinstance(e, (InvalidRequestError, ProductUnavailableError, InsufficientStockError, InvalidStatusError)):
        return HTTPException(status_code=400, detail=str(e))

    if isinstance(e, StoreFailure):
        logger.error(f"Store failure (retryable={e.retryable}): {e.cause}")
        headers = {"Retry-After": "1"} if e.retryable else None
        return HTTPException(status_code=500, detail="Internal server error", headers=headers)

    logger.error(f"Unmapped domain error: {e!r}")
    return HTTPException(status_code=500, detail="Internal server error")
