"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO8601 timestamp, returning None when it can't be read.

    Naive timestamps are assumed to be UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _timestamp(value: Optional[str]) -> datetime:
    return parse_timestamp(value) or utc_now()


class ToolCategory(str, Enum):
    """Category assigned to an extracted tool."""

    CLAUDE_PLUGIN = "claude-plugin"
    CLAUDE_SKILL = "claude-skill"
    NPM_PACKAGE = "npm-package"
    CLI_TOOL = "cli-tool"
    LIBRARY = "library"
    FRAMEWORK = "framework"
    OTHER = "other"


class Recommendation(str, Enum):
    """Verdict derived from the total score."""

    BUILD = "BUILD"
    WATCH = "WATCH"
    SKIP = "SKIP"


@dataclass(frozen=True)
class Tool:
    """One tool entry detected in a digest."""

    name: str
    slug: str
    description: str
    category: ToolCategory
    install_command: Optional[str] = None
    github_url: Optional[str] = None
    source: Optional[str] = None
    extracted_at: datetime = field(default_factory=utc_now, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Name cannot be empty")
        if not self.slug:
            raise ValueError("Slug cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
        }
        if self.install_command is not None:
            data["installCommand"] = self.install_command
        if self.github_url is not None:
            data["githubUrl"] = self.github_url
        if self.source is not None:
            data["source"] = self.source
        data["category"] = self.category.value
        data["extractedAt"] = self.extracted_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tool":
        try:
            category = ToolCategory(data.get("category", "other"))
        except ValueError:
            category = ToolCategory.OTHER
        return cls(
            name=data["name"],
            slug=data["slug"],
            description=data.get("description", ""),
            category=category,
            install_command=data.get("installCommand"),
            github_url=data.get("githubUrl"),
            source=data.get("source"),
            extracted_at=_timestamp(data.get("extractedAt")),
        )


@dataclass(frozen=True)
class NewsItem:
    """Headline pulled from the key news section."""

    headline: str
    summary: str
    source: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {"headline": self.headline, "summary": self.summary}
        if self.source is not None:
            data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NewsItem":
        return cls(
            headline=data.get("headline", ""),
            summary=data.get("summary", ""),
            source=data.get("source"),
        )


@dataclass(frozen=True)
class SourcesSearched:
    """How many sources the digest author reports having searched."""

    x_posts: int = 0
    web_pages: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"xPosts": self.x_posts, "webPages": self.web_pages}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourcesSearched":
        return cls(x_posts=int(data.get("xPosts", 0)), web_pages=int(data.get("webPages", 0)))


@dataclass(frozen=True)
class GitHubData:
    """Repository metadata from the GitHub API."""

    repo_url: str
    stars: int
    forks: int
    open_issues: int
    last_commit_date: str
    created_at: str
    language: str
    has_tests: bool
    has_ci: bool
    license: Optional[str] = None
    readme: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "repoUrl": self.repo_url,
            "stars": self.stars,
            "forks": self.forks,
            "openIssues": self.open_issues,
            "lastCommitDate": self.last_commit_date,
            "createdAt": self.created_at,
            "language": self.language,
            "hasTests": self.has_tests,
            "hasCI": self.has_ci,
        }
        if self.license is not None:
            data["license"] = self.license
        if self.readme is not None:
            data["readme"] = self.readme
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GitHubData":
        return cls(
            repo_url=data.get("repoUrl", ""),
            stars=int(data.get("stars", 0)),
            forks=int(data.get("forks", 0)),
            open_issues=int(data.get("openIssues", 0)),
            last_commit_date=data.get("lastCommitDate", ""),
            created_at=data.get("createdAt", ""),
            language=data.get("language", "Unknown"),
            has_tests=bool(data.get("hasTests", False)),
            has_ci=bool(data.get("hasCI", False)),
            license=data.get("license"),
            readme=data.get("readme"),
        )


@dataclass(frozen=True)
class NpmData:
    """Package metadata from the npm registry."""

    package_name: str
    weekly_downloads: int
    version: str
    last_published: str
    dependencies: int = 0
    dev_dependencies: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "packageName": self.package_name,
            "weeklyDownloads": self.weekly_downloads,
            "version": self.version,
            "lastPublished": self.last_published,
            "dependencies": self.dependencies,
            "devDependencies": self.dev_dependencies,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NpmData":
        return cls(
            package_name=data.get("packageName", ""),
            weekly_downloads=int(data.get("weeklyDownloads", 0)),
            version=data.get("version", "unknown"),
            last_published=data.get("lastPublished", "unknown"),
            dependencies=int(data.get("dependencies", 0)),
            dev_dependencies=int(data.get("devDependencies", 0)),
        )


@dataclass(frozen=True)
class WebSource:
    url: str
    title: str
    snippet: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "title": self.title, "snippet": self.snippet}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebSource":
        return cls(url=data.get("url", ""), title=data.get("title", ""), snippet=data.get("snippet", ""))


@dataclass(frozen=True)
class ToolResearch:
    """A tool plus whatever enrichment could be gathered for it."""

    tool: Tool
    github: Optional[GitHubData] = None
    npm: Optional[NpmData] = None
    web_sources: tuple[WebSource, ...] = ()
    researched_at: datetime = field(default_factory=utc_now, compare=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tool": self.tool.to_dict()}
        if self.github is not None:
            data["github"] = self.github.to_dict()
        if self.npm is not None:
            data["npm"] = self.npm.to_dict()
        data["webSources"] = [source.to_dict() for source in self.web_sources]
        data["researchedAt"] = self.researched_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolResearch":
        github = data.get("github")
        npm = data.get("npm")
        return cls(
            tool=Tool.from_dict(data["tool"]),
            github=GitHubData.from_dict(github) if github else None,
            npm=NpmData.from_dict(npm) if npm else None,
            web_sources=tuple(WebSource.from_dict(s) for s in data.get("webSources", [])),
            researched_at=_timestamp(data.get("researchedAt")),
        )


@dataclass(frozen=True)
class ScoringConfig:
    """Dimension weights and recommendation thresholds."""

    usefulness_weight: float = 0.30
    quality_weight: float = 0.30
    innovation_weight: float = 0.20
    momentum_weight: float = 0.20
    build_threshold: int = 70
    watch_threshold: int = 40

    def __post_init__(self) -> None:
        weights = (
            self.usefulness_weight,
            self.quality_weight,
            self.innovation_weight,
            self.momentum_weight,
        )
        if any(w < 0 or w > 1 for w in weights):
            raise ValueError("Weights must be between 0 and 1")
        if abs(sum(weights) - 1.0) > 1e-6:
            raise ValueError(f"Weights must sum to 1.0, got {sum(weights):.4f}")
        if not 0 <= self.watch_threshold <= self.build_threshold <= 100:
            raise ValueError("Thresholds must satisfy 0 <= watch <= build <= 100")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoringConfig":
        """Build from the ``{"weights": {...}, "thresholds": {...}}`` shape."""
        defaults = cls()
        weights = data.get("weights") or {}
        thresholds = data.get("thresholds") or {}
        return cls(
            usefulness_weight=float(weights.get("usefulness", defaults.usefulness_weight)),
            quality_weight=float(weights.get("quality", defaults.quality_weight)),
            innovation_weight=float(weights.get("innovation", defaults.innovation_weight)),
            momentum_weight=float(weights.get("momentum", defaults.momentum_weight)),
            build_threshold=int(thresholds.get("build", defaults.build_threshold)),
            watch_threshold=int(thresholds.get("watch", defaults.watch_threshold)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "weights": {
                "usefulness": self.usefulness_weight,
                "quality": self.quality_weight,
                "innovation": self.innovation_weight,
                "momentum": self.momentum_weight,
            },
            "thresholds": {
                "build": self.build_threshold,
                "watch": self.watch_threshold,
            },
        }


DEFAULT_SCORING_CONFIG = ScoringConfig()


@dataclass(frozen=True)
class ToolScore:
    """Scoring outcome for one researched tool."""

    research: ToolResearch
    usefulness_score: int
    quality_score: int
    innovation_score: int
    momentum_score: int
    total_score: int
    recommendation: Recommendation
    notes: tuple[str, ...]
    scored_at: datetime = field(default_factory=utc_now, compare=False)

    @property
    def tool(self) -> Tool:
        return self.research.tool

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool.to_dict(),
            "research": self.research.to_dict(),
            "usefulnessScore": self.usefulness_score,
            "qualityScore": self.quality_score,
            "innovationScore": self.innovation_score,
            "momentumScore": self.momentum_score,
            "totalScore": self.total_score,
            "recommendation": self.recommendation.value,
            "notes": list(self.notes),
            "scoredAt": self.scored_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolScore":
        research = data.get("research") or {"tool": data["tool"]}
        return cls(
            research=ToolResearch.from_dict(research),
            usefulness_score=int(data["usefulnessScore"]),
            quality_score=int(data["qualityScore"]),
            innovation_score=int(data["innovationScore"]),
            momentum_score=int(data["momentumScore"]),
            total_score=int(data["totalScore"]),
            recommendation=Recommendation(data["recommendation"]),
            notes=tuple(data.get("notes", [])),
            scored_at=_timestamp(data.get("scoredAt")),
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Everything pulled out of one digest."""

    tools: tuple[Tool, ...] = ()
    news: tuple[NewsItem, ...] = ()
    sources_searched: SourcesSearched = field(default_factory=SourcesSearched)


@dataclass
class DailyUpdate:
    """Parsed digest for one day, as persisted between stages."""

    date: str
    raw_content: str
    tools: list[Tool]
    news: list[NewsItem]
    sources_searched: SourcesSearched
    captured_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "rawContent": self.raw_content,
            "news": [item.to_dict() for item in self.news],
            "tools": [tool.to_dict() for tool in self.tools],
            "sourcesSearched": self.sources_searched.to_dict(),
            "capturedAt": self.captured_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyUpdate":
        return cls(
            date=data["date"],
            raw_content=data.get("rawContent", ""),
            tools=[Tool.from_dict(t) for t in data.get("tools", [])],
            news=[NewsItem.from_dict(n) for n in data.get("news", [])],
            sources_searched=SourcesSearched.from_dict(data.get("sourcesSearched") or {}),
            captured_at=_timestamp(data.get("capturedAt")),
        )


@dataclass
class DailyReport:
    """Summary of one day's scoring run."""

    date: str
    tools_evaluated: int
    build: list[str]
    watch: list[str]
    skip: list[str]
    top_tools: list[ToolScore]
    built_today: list[str]
    generated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "toolsEvaluated": self.tools_evaluated,
            "recommendations": {
                "build": list(self.build),
                "watch": list(self.watch),
                "skip": list(self.skip),
            },
            "topTools": [score.to_dict() for score in self.top_tools],
            "builtToday": list(self.built_today),
            "generatedAt": self.generated_at.isoformat(),
        }
