from typing import Any, Optional, Type

import httpx
from pydantic import TypeAdapter

from app.core.result import Result

EMPTY_RESPONSE_MESSAGE = "Empty response from downstream service"

_FAILURE_MESSAGES = {
    httpx.codes.UNAUTHORIZED: "Unauthorized access to downstream service",
    httpx.codes.FORBIDDEN: "Forbidden access to downstream service",
    httpx.codes.BAD_REQUEST: "Bad request to downstream service",
}


def _resource_name(target: Any) -> str:
    return getattr(target, "__name__", None) or "Resource"


def map_downstream_response(
    response: httpx.Response,
    target: Type[Any],
    resource_name: Optional[str] = None,
) -> Result[Any]:
    """
    Translate a downstream response into a Result.

    2xx bodies are validated against ``target``; an empty body or a JSON null
    is reported as a 204 failure. Bodies that are not JSON or do not match
    ``target`` raise, since they are not a classified outcome.
    """
    status_code = response.status_code

    if response.is_success:
        if not response.content.strip():
            return Result.failure(EMPTY_RESPONSE_MESSAGE, 204)
        payload = response.json()
        if payload is None:
            return Result.failure(EMPTY_RESPONSE_MESSAGE, 204)
        return Result.success(TypeAdapter(target).validate_python(payload))

    if status_code == httpx.codes.NOT_FOUND:
        return Result.not_found(resource_name or _resource_name(target))

    message = _FAILURE_MESSAGES.get(status_code)
    if message is not None:
        return Result.failure(message, status_code)

    return Result.failure(f"Downstream service error: {status_code}", status_code)
