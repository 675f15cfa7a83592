"""Cards application module: use cases, read models and ports."""
