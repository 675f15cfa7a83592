"""Use cases of the cards module, grouped into library, collection and query operations."""
