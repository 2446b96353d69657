"""
Global error handling middleware.

Every failure leaves the API as a JSON body of the form
``{"error": <category>, "detail": <message>}``.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from app.infrastructure.field_data_client import FieldDataAPIError
from app.infrastructure.plot_repository import RecordNotFoundError


logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Translates exceptions escaping the routers into error responses.

    - RecordNotFoundError -> 404
    - FieldDataAPIError   -> the status reported by the field-data API
    - ValueError          -> 400
    - anything else       -> 500, logged with traceback
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Process the request and handle any exceptions.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response object
        """
        context = {"path": request.url.path, "method": request.method}

        try:
            return await call_next(request)

        except RecordNotFoundError as e:
            logger.info(f"Record not found: {e}", extra=context)
            return _error_response(status.HTTP_404_NOT_FOUND, "Not found", str(e))

        except FieldDataAPIError as e:
            logger.error(
                f"Field-data API error: {e}",
                extra={**context, "status_code": e.status_code},
            )
            return _error_response(e.status_code, "Field-data API error", e.message)

        except ValueError as e:
            logger.warning(f"Invalid analysis input: {e}", extra=context)
            return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", str(e))

        except Exception as e:
            logger.exception(f"Unhandled exception: {e}", extra=context)
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                "An unexpected error occurred",
            )
