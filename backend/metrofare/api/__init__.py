"""HTTP API for the metro fare service."""
