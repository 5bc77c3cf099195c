"""Result value objects — tagged success/failure outcome of a fallible operation."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field
from typing_extensions import TypeAliasType

T = TypeVar("T")


class Success(BaseModel, Generic[T], frozen=True):
    """A successful outcome carrying its data."""

    ok: Literal[True] = True
    data: T


class Failure(BaseModel, frozen=True):
    """A failed outcome carrying an error code and a human-readable message."""

    ok: Literal[False] = False
    code: str = Field(min_length=1)
    message: str
    details: dict[str, Any] | None = None


Result = TypeAliasType("Result", Success[T] | Failure, type_params=(T,))


def success(data: T) -> Success[T]:
    return Success(data=data)


def failure(code: str, message: str, details: dict[str, Any] | None = None) -> Failure:
    return Failure(code=code, message=message, details=details)
