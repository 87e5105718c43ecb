"""Effect discovery, risk classification and per-file analysis."""
