"""Curator identifier value object."""

import re
from dataclasses import dataclass
from typing import Self

from ..exceptions import ValidationError
from ..result import Failure, Result, Success
from ..value_object import ValueObject

_DID_PATTERN = re.compile(r"^did:(plc:[^\s]+|web:[^\s]+)$")


@dataclass(frozen=True)
class CuratorId(ValueObject):
    """
    Canonical curator identifier.

    Curators are identified by their DID, either ``did:plc:<id>`` or
    ``did:web:<domain>``. Surrounding whitespace is stripped.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("CuratorId cannot be empty", field="curator_id")
        trimmed = self.value.strip()
        if not _DID_PATTERN.match(trimmed):
            raise ValidationError("Invalid CuratorId format", field="curator_id", value=trimmed)
        object.__setattr__(self, "value", trimmed)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def create(cls, value: str) -> Result[Self, ValidationError]:
        try:
            return Success(cls(value))
        except ValidationError as e:
            return Failure(e)
