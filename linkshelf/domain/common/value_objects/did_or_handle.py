"""Handle and DID-or-handle identifiers accepted from callers."""

import re
from dataclasses import dataclass
from typing import Self

from ..exceptions import ValidationError
from ..result import Failure, Result, Success
from ..value_object import ValueObject
from .curator_id import CuratorId

MAX_HANDLE_LENGTH = 253
_LABEL_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")


@dataclass(frozen=True)
class Handle(ValueObject):
    """Human-facing domain-shaped curator handle, e.g. ``alice.example.com``."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Handle cannot be empty", field="handle")
        normalized = self.value.strip().lower().removeprefix("@")
        if not self._is_valid_domain(normalized):
            raise ValidationError("Handle must be a valid domain", field="handle", value=normalized)
        object.__setattr__(self, "value", normalized)

    @staticmethod
    def _is_valid_domain(domain: str) -> bool:
        if len(domain) > MAX_HANDLE_LENGTH or "." not in domain:
            return False
        return all(_LABEL_PATTERN.match(label) for label in domain.split("."))

    def __str__(self) -> str:
        return self.value

    @classmethod
    def create(cls, value: str) -> Result[Self, ValidationError]:
        try:
            return Success(cls(value))
        except ValidationError as e:
            return Failure(e)


@dataclass(frozen=True)
class DIDOrHandle(ValueObject):
    """
    An identifier that is either a curator DID or a handle.

    Query use cases accept either form from callers; the identity
    resolution service turns it into a canonical CuratorId.
    """

    did: CuratorId | None = None
    handle: Handle | None = None

    def __post_init__(self) -> None:
        if (self.did is None) == (self.handle is None):
            raise ValidationError("Exactly one of did or handle must be set")

    @property
    def is_did(self) -> bool:
        return self.did is not None

    @property
    def is_handle(self) -> bool:
        return self.handle is not None

    @property
    def value(self) -> str:
        return str(self.did if self.did is not None else self.handle)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def create(cls, value: str) -> Result[Self, ValidationError]:
        """Parse a value starting with ``did:`` as a DID, anything else as a handle."""
        if not isinstance(value, str) or not value.strip():
            return Failure(ValidationError("Identifier cannot be empty", field="identifier"))
        trimmed = value.strip()
        try:
            if trimmed.startswith("did:"):
                return Success(cls(did=CuratorId(trimmed)))
            return Success(cls(handle=Handle(trimmed)))
        except ValidationError as e:
            return Failure(e)
