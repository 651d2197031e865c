"""Tagged result type for expected, non-exceptional failures such as bad input."""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class FieldError:
    """A validation problem attached to a single input field."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
