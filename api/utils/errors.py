# api/utils/errors.py
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Optional, Dict, Any
import logging
import traceback

logger = logging.getLogger("wall_openings.api")

class APIError(Exception):
    """
    Request-level failure with an HTTP status and a machine-readable code.

    Raised from endpoints and turned into a JSON error body by
    ``api_error_handler``. Per-duct and per-crossing problems are not
    APIErrors; they are reported in the plan response instead.
    """
    def __init__(
        self,
        status_code: int,
        detail: str,
        internal_code: str,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.internal_code = internal_code
        self.extra = extra or {}
        super().__init__(detail)

    def to_response_body(self) -> Dict[str, Any]:
        body = {"detail": self.detail, "code": self.internal_code}
        if self.extra:
            body["extra"] = self.extra
        return body

class InvalidPlanConfigError(APIError):
    """Configuration overrides in a plan request were rejected."""
    def __init__(self, detail: str, overrides: Dict[str, Any]):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid configuration: {detail}",
            internal_code="invalid_config",
            extra={"keys": sorted(overrides)},
        )

async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render an APIError as ``{"detail": ..., "code": ...}``."""
    logger.warning(f"{request.method} {request.url.path} failed ({exc.internal_code}): {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

def handle_exception(e: Exception, resource_type: str = "resource") -> HTTPException:
    """
    Convert an unexpected exception to a 500 HTTPException.

    Args:
        e: The exception to handle
        resource_type: What was being processed (for context)

    Returns:
        HTTPException with an internal_server_error body
    """
    logger.error(f"Unhandled exception: {str(e)}\n{traceback.format_exc()}")

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "detail": f"An unexpected error occurred: {str(e)}",
            "code": "internal_server_error",
            "resource_type": resource_type,
        }
    )
