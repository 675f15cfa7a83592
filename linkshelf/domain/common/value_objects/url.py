"""URL value object."""

from dataclasses import dataclass
from typing import Self
from urllib.parse import urlsplit, urlunsplit

from ..exceptions import ValidationError
from ..result import Failure, Result, Success
from ..value_object import ValueObject

ALLOWED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class URL(ValueObject):
    """
    Validated absolute http(s) URL.

    A bare origin is normalized with a trailing slash, so
    ``https://example.com`` and ``https://example.com/`` are the same value.
    Paths, queries and fragments are kept as given.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("URL cannot be empty", field="url")
        object.__setattr__(self, "value", self._normalize(self.value.strip()))

    @staticmethod
    def _normalize(raw: str) -> str:
        try:
            parts = urlsplit(raw)
            # Accessing port validates it
            _ = parts.port
        except ValueError as e:
            raise ValidationError("Invalid URL format", field="url", value=raw) from e

        if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.hostname:
            raise ValidationError("Invalid URL format", field="url", value=raw)
        if any(ch.isspace() for ch in raw):
            raise ValidationError("Invalid URL format", field="url", value=raw)

        if parts.path == "" and not parts.query and not parts.fragment:
            return urlunsplit((parts.scheme, parts.netloc, "/", "", ""))
        return raw

    @property
    def domain(self) -> str:
        """Host name portion of the URL."""
        return urlsplit(self.value).hostname or ""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def create(cls, value: str) -> Result[Self, ValidationError]:
        try:
            return Success(cls(value))
        except ValidationError as e:
            return Failure(e)
