"""
Success/Failure outcomes.

Aggregate methods and use cases hand back a Result for conditions a caller
is expected to handle: bad input, a curator without permission, a missing
collection. Exceptions stay reserved for broken infrastructure.

Example:
    added = collection.add_card(card_id, curator_id)
    if added.is_failure:
        return Failure(to_application_error(added.unwrap_error()))
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    is_success = True
    is_failure = False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> NoReturn:
        raise ValueError(f"Success({self.value!r}) carries no error")


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    is_success = False
    is_failure = True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Failure({self.error!r}) carries no value")

    def unwrap_error(self) -> E:
        return self.error


Result = Success[T] | Failure[E]
