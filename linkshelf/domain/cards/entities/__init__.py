from .card import Card
from .collection import Collection

__all__ = ["Card", "Collection"]
