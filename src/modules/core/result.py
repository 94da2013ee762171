"""Explicit success/failure values shared by the store and service layers.

A repository or service method that can miss returns ``Ok(value)`` or
``Err(kind, message)`` instead of raising, so a missing row travels back to
the API layer as an ordinary return value.  Only the API layer turns an
``Err`` into an HTTP response (see ``modules.core.exceptions``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    BAD_PARAMETER = "bad_parameter"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def not_found(message: str) -> Err:
    return Err(ErrorKind.NOT_FOUND, message)
