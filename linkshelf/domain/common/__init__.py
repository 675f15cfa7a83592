"""Building blocks shared by the card and collection aggregates."""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)
from .result import Failure, Result, Success
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "AuthorizationError",
    "BusinessRuleViolationError",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "Failure",
    "InvariantViolationError",
    "Result",
    "Success",
    "ValidationError",
    "ValueObject",
]
