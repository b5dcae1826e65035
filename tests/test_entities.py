"""Tests for core entities."""

from datetime import datetime, timezone

import pytest

from daily_tools.core import (
    DailyUpdate,
    GitHubData,
    NewsItem,
    Recommendation,
    ScoringConfig,
    SourcesSearched,
    Tool,
    ToolCategory,
    ToolResearch,
    ToolScore,
)
from daily_tools.core.entities import parse_timestamp


def make_tool(**overrides) -> Tool:
    fields = {
        "name": "claude-mem",
        "slug": "claude-mem",
        "description": "Persistent memory for Claude Code",
        "category": ToolCategory.CLAUDE_PLUGIN,
        "install_command": "npm install -g claude-mem",
        "extracted_at": datetime(2026, 1, 10, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Tool(**fields)


def test_tool_creation() -> None:
    """Test creating a valid tool."""
    tool = make_tool()

    assert tool.name == "claude-mem"
    assert tool.category == ToolCategory.CLAUDE_PLUGIN
    assert tool.github_url is None


def test_tool_validation() -> None:
    """Test tool validation."""
    with pytest.raises(ValueError, match="Name cannot be empty"):
        make_tool(name="")

    with pytest.raises(ValueError, match="Slug cannot be empty"):
        make_tool(slug="")


def test_tool_equality_ignores_extraction_time() -> None:
    assert make_tool() == make_tool(extracted_at=datetime(2020, 1, 1, tzinfo=timezone.utc))
    assert make_tool() != make_tool(description="Something else")


def test_tool_to_dict_uses_camel_case() -> None:
    data = make_tool().to_dict()

    assert data["installCommand"] == "npm install -g claude-mem"
    assert data["category"] == "claude-plugin"
    assert data["extractedAt"] == "2026-01-10T00:00:00+00:00"
    # Unset optional fields are omitted
    assert "githubUrl" not in data
    assert "source" not in data


def test_tool_from_dict_unknown_category() -> None:
    tool = Tool.from_dict({"name": "X", "slug": "x", "category": "gadget"})

    assert tool.category == ToolCategory.OTHER
    assert tool.description == ""


def test_tool_score_round_trip() -> None:
    """Test that a stored score loads back equal."""
    research = ToolResearch(
        tool=make_tool(),
        github=GitHubData(
            repo_url="https://github.com/thedotmack/claude-mem",
            stars=1200,
            forks=40,
            open_issues=3,
            last_commit_date="2026-01-09T10:00:00Z",
            created_at="2025-06-01T00:00:00Z",
            language="TypeScript",
            has_tests=True,
            has_ci=True,
            license="MIT",
        ),
    )
    score = ToolScore(
        research=research,
        usefulness_score=90,
        quality_score=75,
        innovation_score=50,
        momentum_score=70,
        total_score=73,
        recommendation=Recommendation.BUILD,
        notes=("Claude-related tool (+20)",),
    )

    data = score.to_dict()

    assert data["tool"]["slug"] == "claude-mem"
    assert data["research"]["github"]["hasCI"] is True
    assert data["recommendation"] == "BUILD"
    assert ToolScore.from_dict(data) == score


def test_daily_update_round_trip() -> None:
    update = DailyUpdate(
        date="2026-01-10",
        raw_content="### claude-mem",
        tools=[make_tool()],
        news=[NewsItem(headline="Claude 5", summary="Claude 5: out now", source="@AnthropicAI")],
        sources_searched=SourcesSearched(x_posts=10, web_pages=2),
    )

    assert DailyUpdate.from_dict(update.to_dict()) == update


def test_scoring_config_defaults() -> None:
    config = ScoringConfig()

    assert config.usefulness_weight + config.quality_weight == pytest.approx(0.6)
    assert (config.build_threshold, config.watch_threshold) == (70, 40)


def test_scoring_config_validation() -> None:
    with pytest.raises(ValueError, match="Weights must sum to 1.0"):
        ScoringConfig(usefulness_weight=0.5)

    with pytest.raises(ValueError, match="between 0 and 1"):
        ScoringConfig(usefulness_weight=1.5, quality_weight=-0.5, innovation_weight=0.0, momentum_weight=0.0)

    with pytest.raises(ValueError, match="Thresholds"):
        ScoringConfig(build_threshold=30, watch_threshold=40)


def test_scoring_config_from_dict() -> None:
    config = ScoringConfig.from_dict({
        "weights": {"usefulness": 0.4, "quality": 0.2},
        "thresholds": {"build": 80},
    })

    assert config.usefulness_weight == 0.4
    assert config.quality_weight == 0.2
    assert config.innovation_weight == 0.2
    assert config.build_threshold == 80
    assert config.watch_threshold == 40
    assert ScoringConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026-01-10T12:00:00Z", datetime(2026, 1, 10, 12, tzinfo=timezone.utc)),
        ("2026-01-10T12:00:00", datetime(2026, 1, 10, 12, tzinfo=timezone.utc)),
        ("unknown", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_timestamp(value, expected) -> None:
    assert parse_timestamp(value) == expected
