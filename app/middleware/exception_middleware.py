from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from app.core.result import Result

logger = structlog.get_logger()

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ExceptionSafetyNetMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for exceptions that escaped a route without being turned
    into a Result. Logs once with the traceback and answers with a generic 500
    envelope that carries no exception detail.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "An unexpected exception has occurred",
                path=request.url.path,
                method=request.method,
            )
            return JSONResponse(
                status_code=500,
                content=Result.failure(UNEXPECTED_ERROR_MESSAGE, 500).to_dict(),
            )
