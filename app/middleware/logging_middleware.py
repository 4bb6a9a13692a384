import time
import json
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import structlog
from uuid import uuid4

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def _body_fields(body: bytes, content_type: str) -> dict:
    """Flatten a JSON request body into short, log-friendly fields."""
    if "application/json" not in content_type:
        return {"body_size": len(body)}
    try:
        body_data = json.loads(body.decode())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {"body_size": len(body)}

    if not isinstance(body_data, dict):
        return {"body": str(body_data)[:200]}

    fields = {}
    for key, value in body_data.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            fields[f"body_{key}"] = value if not isinstance(value, str) else value[:100]
        else:
            fields[f"body_{key}"] = str(value)[:100]
    return fields


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        start_time = time.time()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        log_data = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", "")[:100],
        }

        if request.query_params:
            log_data["query_params"] = dict(request.query_params)

        if request.method in ["POST", "PUT", "PATCH"]:
            body = await request.body()
            if body:
                log_data.update(_body_fields(body, request.headers.get("content-type", "")))

        logger.info("API Request Started", **log_data)

        request.state.request_id = request_id
        request.state.start_time = start_time

        response = await call_next(request)

        process_time = time.time() - start_time
        response_log_data = {
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

        if response.status_code >= 400:
            logger.warning("API Request Completed with Error", **response_log_data)
        elif response.status_code >= 300:
            logger.info("API Request Redirected", **response_log_data)
        else:
            logger.info("API Request Completed Successfully", **response_log_data)

        response.headers[REQUEST_ID_HEADER] = request_id
        structlog.contextvars.clear_contextvars()
        return response
