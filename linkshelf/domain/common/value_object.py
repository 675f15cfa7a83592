"""Value objects."""


class ValueObject:
    """
    Marker base for immutable values compared by their attributes.

    Subclasses are ``@dataclass(frozen=True)`` so equality and hashing come
    from their fields, and they validate in ``__post_init__`` by raising
    ValidationError. A DID, a normalized URL and a published record
    reference are all values: equal content means the same value.
    """
