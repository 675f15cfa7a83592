"""
Application layer.

Use cases orchestrate the card and collection aggregates, the query
repositories and the external collaborators (identity resolution,
profiles, publishing, metadata).
"""
