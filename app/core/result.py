from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class Result(Generic[T]):
    """
    Outcome of a service operation: either a Success carrying an optional value,
    or a Failure carrying an error message and an HTTP-style status code.

    Results are returned, never raised. Both variants are frozen.
    """

    __slots__ = ()

    succeeded: ClassVar[bool]
    value: Optional[T]
    error_message: str
    status_code: int

    @property
    def is_success(self) -> bool:
        return self.succeeded

    @property
    def error(self) -> str:
        return self.error_message

    def __bool__(self) -> bool:
        return self.succeeded

    @staticmethod
    def success(value: Optional[T] = None) -> "Success[T]":
        return Success(value)

    @staticmethod
    def failure(message: str, status_code: int = 400) -> "Failure":
        return Failure(message, status_code)

    @staticmethod
    def not_found(resource_name: str = "Resource") -> "Failure":
        return Failure(f"{resource_name} not found", 404)

    @staticmethod
    def unauthorized(message: str = "Unauthorized") -> "Failure":
        return Failure(message, 401)

    @staticmethod
    def forbidden(message: str = "Forbidden") -> "Failure":
        return Failure(message, 403)

    @staticmethod
    def coerce(obj: Any) -> "Result[Any]":
        """Wrap a raw value as a success; pass an existing Result through untouched."""
        if isinstance(obj, Result):
            return obj
        return Success(obj)

    def to_dict(self) -> Dict[str, Any]:
        envelope: Dict[str, Any] = {
            "isSuccess": self.succeeded,
            "error": self.error_message,
            "statusCode": self.status_code,
        }
        if self.value is not None:
            envelope["value"] = self.value
        return envelope


@dataclass(frozen=True)
class Success(Result[T]):
    succeeded: ClassVar[bool] = True

    value: Optional[T] = None
    error_message: str = field(default="", init=False)
    status_code: int = field(default=200, init=False)


@dataclass(frozen=True)
class Failure(Result[Any]):
    succeeded: ClassVar[bool] = False

    error_message: str
    status_code: int = 400
    value: None = field(default=None, init=False)

    def __post_init__(self):
        if not isinstance(self.error_message, str) or not self.error_message:
            raise ValueError("Failure requires a non-empty error message")
        if isinstance(self.status_code, bool) or not isinstance(self.status_code, int):
            raise ValueError(f"Invalid status code: {self.status_code!r}")
        if not 100 <= self.status_code <= 599:
            raise ValueError(f"Invalid status code: {self.status_code}")
