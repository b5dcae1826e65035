"""Tests for tool scoring."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from daily_tools.core import (
    DEFAULT_SCORING_CONFIG,
    GitHubData,
    NpmData,
    Recommendation,
    ScoringConfig,
    Tool,
    ToolCategory,
    ToolResearch,
    rank_scores,
    recommend,
    score_tool,
    score_tools,
    slugify,
)

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_tool(
    name: str = "Widget",
    description: str = "Does things",
    category: ToolCategory = ToolCategory.OTHER,
    install_command: Optional[str] = None,
) -> Tool:
    return Tool(
        name=name,
        slug=slugify(name),
        description=description,
        category=category,
        install_command=install_command,
    )


def make_github(
    stars: int = 0,
    days_since_commit: float = 365,
    has_tests: bool = False,
    has_ci: bool = False,
    license: Optional[str] = None,
) -> GitHubData:
    return GitHubData(
        repo_url="https://github.com/acme/widget",
        stars=stars,
        forks=0,
        open_issues=0,
        last_commit_date=(NOW - timedelta(days=days_since_commit)).isoformat(),
        created_at="2024-01-01T00:00:00Z",
        language="TypeScript",
        has_tests=has_tests,
        has_ci=has_ci,
        license=license,
    )


def make_npm(downloads: int = 0, days_since_publish: float = 365) -> NpmData:
    return NpmData(
        package_name="widget",
        weekly_downloads=downloads,
        version="1.0.0",
        last_published=(NOW - timedelta(days=days_since_publish)).isoformat(),
    )


def memory_plugin(description: str) -> Tool:
    return make_tool(
        name="Memory Keeper",
        description=description,
        category=ToolCategory.CLAUDE_PLUGIN,
        install_command="npm i memory-keeper",
    )


def test_plugin_without_enrichment() -> None:
    """A Claude plugin with an install command but no lookups."""
    research = ToolResearch(tool=memory_plugin("A Claude Code plugin for persistent memory"))

    score = score_tool(research, DEFAULT_SCORING_CONFIG, NOW)

    assert score.usefulness_score == 90
    assert score.quality_score == 30
    assert score.innovation_score == 50
    assert score.momentum_score == 40
    assert score.total_score == 54
    assert score.recommendation == Recommendation.WATCH
    assert score.notes == (
        "Claude-related tool (+20)",
        "Claude plugin/skill (+15)",
        "Has install command (+5)",
    )


def test_baseline_tool() -> None:
    score = score_tool(ToolResearch(tool=make_tool()), DEFAULT_SCORING_CONFIG, NOW)

    assert (score.usefulness_score, score.quality_score) == (50, 30)
    assert (score.innovation_score, score.momentum_score) == (50, 40)
    assert score.total_score == 42
    assert score.notes == ()


def test_cli_tool_bonus() -> None:
    tool = make_tool(name="Ripgrep Pro", description="Fast search", category=ToolCategory.CLI_TOOL)

    score = score_tool(ToolResearch(tool=tool), DEFAULT_SCORING_CONFIG, NOW)

    assert score.usefulness_score == 60
    assert "CLI tool (+10)" in score.notes


@pytest.mark.parametrize(
    "stars, expected",
    [(1500, 55), (500, 45), (50, 35), (10, 30), (0, 30)],
)
def test_star_tiers(stars: int, expected: int) -> None:
    research = ToolResearch(tool=make_tool(), github=make_github(stars=stars))

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW).quality_score == expected


def test_stars_monotonic() -> None:
    """More stars never lowers the quality score."""
    previous = -1
    for stars in [50, 100, 101, 500, 1000, 1001, 1500]:
        research = ToolResearch(tool=make_tool(), github=make_github(stars=stars))
        quality = score_tool(research, DEFAULT_SCORING_CONFIG, NOW).quality_score
        assert quality >= previous
        previous = quality


@pytest.mark.parametrize(
    "downloads, expected",
    [(20000, 45), (5000, 40), (1000, 30)],
)
def test_download_tiers(downloads: int, expected: int) -> None:
    research = ToolResearch(tool=make_tool(), npm=make_npm(downloads=downloads))

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW).quality_score == expected


def test_full_quality() -> None:
    research = ToolResearch(
        tool=make_tool(),
        github=make_github(stars=2000, has_tests=True, has_ci=True, license="MIT"),
        npm=make_npm(downloads=20000),
    )
    score = score_tool(research, DEFAULT_SCORING_CONFIG, NOW)

    assert score.quality_score == 90
    assert "High stars: 2000 (+25)" in score.notes
    assert "Has license (+5)" in score.notes


@pytest.mark.parametrize(
    "description, expected",
    [
        ("A novel and unique approach", 65),
        ("An LLM agent framework", 60),
        ("The first AI agent", 75),
        ("Does things", 50),
    ],
)
def test_innovation(description: str, expected: int) -> None:
    research = ToolResearch(tool=make_tool(description=description))

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW).innovation_score == expected


def test_innovative_term_counted_once() -> None:
    research = ToolResearch(tool=make_tool(description="A novel and unique approach"))
    notes = score_tool(research, DEFAULT_SCORING_CONFIG, NOW).notes

    assert notes == ('Innovative term: "novel" (+15)',)


@pytest.mark.parametrize(
    "days, expected",
    [(3, 70), (15, 60), (60, 50), (120, 40)],
)
def test_commit_recency_tiers(days: float, expected: int) -> None:
    research = ToolResearch(tool=make_tool(), github=make_github(days_since_commit=days))

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW).momentum_score == expected


def test_naive_reference_time_is_utc() -> None:
    github = GitHubData(
        repo_url="https://github.com/acme/widget",
        stars=0,
        forks=0,
        open_issues=0,
        last_commit_date="2026-01-01T00:00:00Z",
        created_at="2024-01-01T00:00:00Z",
        language="TypeScript",
        has_tests=False,
        has_ci=False,
    )
    research = ToolResearch(tool=make_tool(), github=github)

    assert score_tool(research, DEFAULT_SCORING_CONFIG, datetime(2026, 1, 3)).momentum_score == 70


def test_recent_npm_publish() -> None:
    recent = ToolResearch(tool=make_tool(), npm=make_npm(days_since_publish=10))
    stale = ToolResearch(tool=make_tool(), npm=make_npm(days_since_publish=45))

    assert score_tool(recent, DEFAULT_SCORING_CONFIG, NOW).momentum_score == 55
    assert score_tool(stale, DEFAULT_SCORING_CONFIG, NOW).momentum_score == 40


def test_unparseable_dates_withhold_bonus() -> None:
    """Bad timestamps are treated as unknown, not as errors."""
    github = GitHubData(
        repo_url="https://github.com/acme/widget",
        stars=0,
        forks=0,
        open_issues=0,
        last_commit_date="",
        created_at="",
        language="Unknown",
        has_tests=False,
        has_ci=False,
    )
    npm = NpmData(package_name="widget", weekly_downloads=0, version="1.0.0", last_published="unknown")

    score = score_tool(ToolResearch(tool=make_tool(), github=github, npm=npm), DEFAULT_SCORING_CONFIG, NOW)

    assert score.momentum_score == 40


def test_scores_within_range() -> None:
    researches = [
        ToolResearch(tool=make_tool()),
        ToolResearch(tool=memory_plugin("The first novel AI agent plugin for Claude Code")),
        ToolResearch(
            tool=memory_plugin("The first novel AI agent plugin for Claude Code"),
            github=make_github(stars=99999, days_since_commit=0, has_tests=True, has_ci=True, license="MIT"),
            npm=make_npm(downloads=10**7, days_since_publish=0),
        ),
    ]

    for score in score_tools(researches, DEFAULT_SCORING_CONFIG, NOW):
        for value in (
            score.usefulness_score,
            score.quality_score,
            score.innovation_score,
            score.momentum_score,
            score.total_score,
        ):
            assert 0 <= value <= 100


def test_total_at_build_threshold() -> None:
    """A weighted total of exactly 70 is BUILD."""
    research = ToolResearch(
        tool=memory_plugin("An AI memory plugin for Claude Code"),
        github=make_github(stars=1500, days_since_commit=45, has_tests=True, has_ci=True),
    )
    score = score_tool(research, DEFAULT_SCORING_CONFIG, NOW)

    assert (score.usefulness_score, score.quality_score) == (90, 70)
    assert (score.innovation_score, score.momentum_score) == (60, 50)
    assert score.total_score == 70
    assert score.recommendation == Recommendation.BUILD


def test_total_just_below_build_threshold() -> None:
    """A weighted total of 69 is WATCH."""
    research = ToolResearch(
        tool=memory_plugin("A novel memory plugin for Claude Code"),
        github=make_github(stars=1500, days_since_commit=200, has_tests=True, has_ci=True),
    )
    score = score_tool(research, DEFAULT_SCORING_CONFIG, NOW)

    assert (score.innovation_score, score.momentum_score) == (65, 40)
    assert score.total_score == 69
    assert score.recommendation == Recommendation.WATCH


@pytest.mark.parametrize(
    "total, expected",
    [
        (100, Recommendation.BUILD),
        (70, Recommendation.BUILD),
        (69, Recommendation.WATCH),
        (40, Recommendation.WATCH),
        (39, Recommendation.SKIP),
        (0, Recommendation.SKIP),
    ],
)
def test_recommendation_thresholds(total: int, expected: Recommendation) -> None:
    assert recommend(total, DEFAULT_SCORING_CONFIG) == expected


def test_custom_thresholds() -> None:
    """Stricter thresholds turn the baseline tool into a SKIP."""
    strict = ScoringConfig(build_threshold=90, watch_threshold=60)
    research = ToolResearch(tool=make_tool())

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW).recommendation == Recommendation.WATCH
    assert score_tool(research, strict, NOW).recommendation == Recommendation.SKIP


def test_custom_weights() -> None:
    usefulness_only = ScoringConfig(
        usefulness_weight=1.0,
        quality_weight=0.0,
        innovation_weight=0.0,
        momentum_weight=0.0,
    )
    tool = make_tool(category=ToolCategory.CLI_TOOL)

    assert score_tool(ToolResearch(tool=tool), usefulness_only, NOW).total_score == 60


def test_ranking_is_stable() -> None:
    """Ties keep input order; higher totals come first."""
    researches = [
        ToolResearch(tool=make_tool(name="Alpha")),
        ToolResearch(tool=make_tool(name="Beta")),
        ToolResearch(tool=memory_plugin("A Claude Code plugin for persistent memory")),
        ToolResearch(tool=make_tool(name="Gamma")),
    ]

    ranked = score_tools(researches, DEFAULT_SCORING_CONFIG, NOW)

    assert [s.tool.name for s in ranked] == ["Memory Keeper", "Alpha", "Beta", "Gamma"]
    assert [s.tool.name for s in rank_scores(reversed(ranked))] == [
        "Memory Keeper", "Gamma", "Beta", "Alpha",
    ]


def test_scoring_is_deterministic() -> None:
    research = ToolResearch(
        tool=memory_plugin("An AI memory plugin for Claude Code"),
        github=make_github(stars=300, days_since_commit=10),
    )

    assert score_tool(research, DEFAULT_SCORING_CONFIG, NOW) == score_tool(
        research, DEFAULT_SCORING_CONFIG, NOW
    )
