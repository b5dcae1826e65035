"""Adapters for I/O: capture, enrichment, reports, sandbox and storage."""
