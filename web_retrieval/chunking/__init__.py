"""Text chunking."""
