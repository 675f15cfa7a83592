from enum import StrEnum


class CardType(StrEnum):
    """Kind of saved content a card holds."""

    URL = "URL"
    NOTE = "NOTE"
    HIGHLIGHT = "HIGHLIGHT"
