"""
Tagged success/failure results returned across the adapter boundary
"""
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

from lexicache.core.exceptions import I18nError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    success: Literal[True] = True


@dataclass(frozen=True)
class Failure:
    error: I18nError
    success: Literal[False] = False

    @property
    def code(self) -> str:
        return self.error.code.value


Result = Union[Success[T], Failure]
