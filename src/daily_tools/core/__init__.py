"""Core domain layer."""

from daily_tools.core.entities import (
    DEFAULT_SCORING_CONFIG,
    DailyReport,
    DailyUpdate,
    ExtractionResult,
    GitHubData,
    NewsItem,
    NpmData,
    Recommendation,
    ScoringConfig,
    SourcesSearched,
    Tool,
    ToolCategory,
    ToolResearch,
    ToolScore,
    WebSource,
)
from daily_tools.core.extractor import extract, extract_news, extract_tools, slugify
from daily_tools.core.interfaces import (
    ContentCapture,
    EnrichmentError,
    PipelineError,
    StageInputMissing,
    ToolNotFound,
    GitHubFetcher,
    NpmFetcher,
    ReportGenerator,
)
from daily_tools.core.scorer import rank_scores, recommend, score_tool, score_tools
from daily_tools.core.targets import find_github_url, find_npm_package

__all__ = [
    "Tool",
    "ToolCategory",
    "NewsItem",
    "SourcesSearched",
    "GitHubData",
    "NpmData",
    "WebSource",
    "ToolResearch",
    "ToolScore",
    "Recommendation",
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    "ExtractionResult",
    "DailyUpdate",
    "DailyReport",
    "extract",
    "extract_tools",
    "extract_news",
    "slugify",
    "score_tool",
    "score_tools",
    "rank_scores",
    "recommend",
    "find_github_url",
    "find_npm_package",
    "ContentCapture",
    "EnrichmentError",
    "PipelineError",
    "StageInputMissing",
    "ToolNotFound",
    "GitHubFetcher",
    "NpmFetcher",
    "ReportGenerator",
]
