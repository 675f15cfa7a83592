from .card_factory import CardFactory

__all__ = ["CardFactory"]
