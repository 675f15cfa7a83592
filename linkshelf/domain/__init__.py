"""
Domain layer.

Card and collection aggregates, their value objects and domain services.
It has no dependencies on persistence or external services.
"""
