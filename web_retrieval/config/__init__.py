"""Configuration: settings store, retrieval config and logging."""
