"""
Infrastructure layer.

SQLAlchemy persistence for the cards module: models are mapped to and from
aggregates here, and the read side queries storage rows directly.
"""
