"""Web search retrieval pipeline for locally hosted language models."""

__version__ = "1.0.0"
