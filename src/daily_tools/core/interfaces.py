"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from daily_tools.core.entities import DailyReport, GitHubData, NpmData, ToolResearch


class EnrichmentError(Exception):
    """Raised when a metadata lookup fails."""


class PipelineError(Exception):
    """Base error for pipeline stage preconditions."""


class StageInputMissing(PipelineError):
    """An earlier stage has not produced this stage's input yet."""

    def __init__(self, message: str, run_first: str) -> None:
        super().__init__(message)
        self.run_first = run_first


class ToolNotFound(PipelineError):
    """No tool matched the requested name."""


class ContentCapture(ABC):
    """Interface for obtaining raw digest text."""

    @abstractmethod
    async def capture(self) -> str:
        """Return the captured digest text."""
        pass


class GitHubFetcher(ABC):
    """Interface for repository metadata lookups."""

    @abstractmethod
    async def fetch(self, repo_url: str) -> GitHubData:
        """Fetch metadata for a repository URL."""
        pass


class NpmFetcher(ABC):
    """Interface for npm package lookups."""

    @abstractmethod
    async def fetch(self, package_name: str) -> NpmData:
        """Fetch metadata for a package."""
        pass


class ReportGenerator(ABC):
    """Interface for rendering reports."""

    @abstractmethod
    def render_research(self, research: ToolResearch) -> str:
        """Render research notes for one tool."""
        pass

    @abstractmethod
    def generate(self, report: DailyReport) -> str:
        """Render the daily report."""
        pass
