from http import HTTPStatus
from typing import Any, Dict, List, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core.result import Result

PROBLEM_MEDIA_TYPE = "application/problem+json"
VALIDATION_TITLE = "One or more validation errors occurred."

# Sent on the wire when a failure's own status cannot carry a body (1xx, 204, 205, 304)
BODYLESS_FALLBACK_STATUS = 502


class ProblemResponse(JSONResponse):
    media_type = PROBLEM_MEDIA_TYPE


def _can_carry_body(status_code: int) -> bool:
    return status_code >= 200 and status_code not in (204, 205, 304)


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def problem_response(
    status_code: int,
    detail: str,
    *,
    instance: Optional[str] = None,
    title: Optional[str] = None,
    errors: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> ProblemResponse:
    """
    Render a problem payload. The envelope fields (isSuccess, error, statusCode)
    are mirrored so clients can read every response the same way.

    ``statusCode`` always carries the failure's own status. When that status
    cannot carry a body the response goes out as 502 instead.
    """
    transport_status = status_code if _can_carry_body(status_code) else BODYLESS_FALLBACK_STATUS
    content: Dict[str, Any] = {
        "type": "about:blank",
        "title": title or _reason_phrase(transport_status),
        "status": transport_status,
        "detail": detail,
    }
    if instance:
        content["instance"] = instance
    if errors:
        content["errors"] = errors
    content.update(
        isSuccess=False,
        error=detail,
        statusCode=status_code,
    )
    return ProblemResponse(status_code=transport_status, content=content, headers=headers)


def result_response(
    result: Result[Any],
    *,
    success_status: int = 200,
    location: Optional[str] = None,
    instance: Optional[str] = None,
) -> JSONResponse:
    """Map a Result to the response returned by a boundary handler."""
    if not result.succeeded:
        return problem_response(result.status_code, result.error_message, instance=instance)

    headers = {"Location": location} if location else None
    return JSONResponse(
        status_code=success_status,
        content=jsonable_encoder(result.to_dict()),
        headers=headers,
    )
