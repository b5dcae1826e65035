"""Enrichment adapters for tool metadata."""

from daily_tools.adapters.enrichment.github_client import GitHubClient
from daily_tools.adapters.enrichment.npm_client import NpmClient

__all__ = ["GitHubClient", "NpmClient"]
