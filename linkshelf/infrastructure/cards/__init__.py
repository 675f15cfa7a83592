"""Cards infrastructure: repositories, query services and mappers."""
