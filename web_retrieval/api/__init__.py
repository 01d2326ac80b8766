"""HTTP API exposing the retrieval pipeline."""
