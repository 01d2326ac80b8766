"""Web search providers."""
