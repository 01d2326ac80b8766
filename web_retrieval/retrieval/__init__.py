"""Retrieval pipeline: selection, ranking and orchestration."""
