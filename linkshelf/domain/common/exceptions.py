"""
Domain errors.

Value object constructors raise these. Aggregate methods return them in a
Failure for anything a caller is expected to handle.
"""

from typing import Any


class DomainError(Exception):
    """Base class for domain errors; ``details`` holds structured context."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = {key: value for key, value in details.items() if value is not None}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ValidationError(DomainError):
    """A value or aggregate field failed validation, e.g. a malformed DID."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, field=field, value=value)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} {entity_id} not found", entity_type=entity_type, entity_id=entity_id
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """A curation rule forbids the change, e.g. linking a card twice by hand."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Rule '{rule}' does not allow this change", rule=rule)
        self.rule = rule


class InvariantViolationError(DomainError):
    """Internal consistency of an aggregate is broken, e.g. a stale counter."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        super().__init__(
            f"{aggregate} would break invariant: {invariant}",
            aggregate=aggregate,
            invariant=invariant,
        )
        self.aggregate = aggregate
        self.invariant = invariant


class AuthorizationError(DomainError):
    """The acting curator may not perform the operation."""

    def __init__(self, message: str = "Curator is not allowed to do this") -> None:
        super().__init__(message)
