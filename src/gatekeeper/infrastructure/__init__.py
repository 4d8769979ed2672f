"""Infrastructure layer - Adapters for configuration, storage and logging."""
