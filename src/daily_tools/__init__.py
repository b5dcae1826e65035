"""Daily tool updates: extract, enrich, score and build tools from a daily digest."""

__version__ = "1.0.0"
