"""Core substrate: configuration, logging, sources and diagnostics."""
