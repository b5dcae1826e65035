"""Score researched tools and derive a BUILD/WATCH/SKIP recommendation."""

import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from daily_tools.core.entities import (
    Recommendation,
    ScoringConfig,
    ToolCategory,
    ToolResearch,
    ToolScore,
    parse_timestamp,
    utc_now,
)

USEFULNESS_BASE = 50
QUALITY_BASE = 30
INNOVATION_BASE = 50
MOMENTUM_BASE = 40

CLAUDE_TERMS = ("claude", "anthropic")
AI_TERMS = ("ai", "llm", "agent")
INNOVATIVE_TERMS = (
    "novel",
    "first",
    "unique",
    "new approach",
    "revolutionary",
    "breakthrough",
)

# Only one category bonus applies; first matching entry wins.
CATEGORY_BONUSES: tuple[tuple[frozenset[ToolCategory], int, str], ...] = (
    (frozenset({ToolCategory.CLAUDE_PLUGIN, ToolCategory.CLAUDE_SKILL}), 15, "Claude plugin/skill"),
    (frozenset({ToolCategory.CLI_TOOL}), 10, "CLI tool"),
)

# Tiers are (exclusive lower bound, bonus, label), highest first.
STAR_TIERS = (
    (1000, 25, "High stars"),
    (100, 15, "Good stars"),
    (10, 5, "Some stars"),
)
DOWNLOAD_TIERS = (
    (10000, 15, "High npm downloads"),
    (1000, 10, "Good npm downloads"),
)
# (exclusive upper bound in days, bonus, label)
COMMIT_RECENCY_TIERS = (
    (7, 30, "Very recent activity (<7 days)"),
    (30, 20, "Recent activity (<30 days)"),
    (90, 10, "Some activity (<90 days)"),
)
PUBLISH_RECENCY_DAYS = 30
PUBLISH_RECENCY_BONUS = 15


def clamp(score: int) -> int:
    return min(100, max(0, score))


def _contains_any(text: str, terms: Iterable[str]) -> Optional[str]:
    return next((term for term in terms if term in text), None)


def _days_since(timestamp: Optional[str], now: datetime) -> Optional[float]:
    moment = parse_timestamp(timestamp)
    if moment is None:
        return None
    return (now - moment).total_seconds() / 86400


def usefulness_score(research: ToolResearch, notes: list[str]) -> int:
    tool = research.tool
    score = USEFULNESS_BASE
    text = f"{tool.name} {tool.description} {tool.category.value}".lower()

    if _contains_any(text, CLAUDE_TERMS):
        score += 20
        notes.append("Claude-related tool (+20)")

    for categories, bonus, label in CATEGORY_BONUSES:
        if tool.category in categories:
            score += bonus
            notes.append(f"{label} (+{bonus})")
            break

    if tool.install_command:
        score += 5
        notes.append("Has install command (+5)")

    return clamp(score)


def quality_score(research: ToolResearch, notes: list[str]) -> int:
    score = QUALITY_BASE
    github, npm = research.github, research.npm

    if github:
        for floor, bonus, label in STAR_TIERS:
            if github.stars > floor:
                score += bonus
                notes.append(f"{label}: {github.stars} (+{bonus})")
                break

        if github.has_tests:
            score += 10
            notes.append("Has tests (+10)")
        if github.has_ci:
            score += 5
            notes.append("Has CI (+5)")
        if github.license:
            score += 5
            notes.append("Has license (+5)")

    if npm:
        for floor, bonus, label in DOWNLOAD_TIERS:
            if npm.weekly_downloads > floor:
                score += bonus
                notes.append(f"{label} (+{bonus})")
                break

    return clamp(score)


def innovation_score(research: ToolResearch, notes: list[str]) -> int:
    score = INNOVATION_BASE
    text = f"{research.tool.name} {research.tool.description}".lower()

    term = _contains_any(text, INNOVATIVE_TERMS)
    if term:
        score += 15
        notes.append(f'Innovative term: "{term}" (+15)')

    if _contains_any(text, AI_TERMS):
        score += 10
        notes.append("AI/LLM related (+10)")

    return clamp(score)


def momentum_score(research: ToolResearch, notes: list[str], now: datetime) -> int:
    score = MOMENTUM_BASE
    github, npm = research.github, research.npm

    if github:
        days = _days_since(github.last_commit_date, now)
        if days is not None:
            for ceiling, bonus, label in COMMIT_RECENCY_TIERS:
                if days < ceiling:
                    score += bonus
                    notes.append(f"{label} (+{bonus})")
                    break

    if npm:
        days = _days_since(npm.last_published, now)
        if days is not None and days < PUBLISH_RECENCY_DAYS:
            score += PUBLISH_RECENCY_BONUS
            notes.append(f"Recently published (+{PUBLISH_RECENCY_BONUS})")

    return clamp(score)


def weighted_total(
    usefulness: int,
    quality: int,
    innovation: int,
    momentum: int,
    config: ScoringConfig,
) -> int:
    total = (
        usefulness * config.usefulness_weight
        + quality * config.quality_weight
        + innovation * config.innovation_weight
        + momentum * config.momentum_weight
    )
    # Half-up rounding, not Python's round-half-even
    return clamp(int(math.floor(total + 0.5)))


def recommend(total_score: int, config: ScoringConfig) -> Recommendation:
    if total_score >= config.build_threshold:
        return Recommendation.BUILD
    if total_score >= config.watch_threshold:
        return Recommendation.WATCH
    return Recommendation.SKIP


def score_tool(
    research: ToolResearch,
    config: ScoringConfig,
    now: Optional[datetime] = None,
) -> ToolScore:
    """Score one tool.

    Args:
        research: Tool plus optional GitHub/npm enrichment
        config: Weights and thresholds
        now: Reference time for recency bonuses (defaults to current UTC time)
    """
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    notes: list[str] = []

    usefulness = usefulness_score(research, notes)
    quality = quality_score(research, notes)
    innovation = innovation_score(research, notes)
    momentum = momentum_score(research, notes, now)
    total = weighted_total(usefulness, quality, innovation, momentum, config)

    return ToolScore(
        research=research,
        usefulness_score=usefulness,
        quality_score=quality,
        innovation_score=innovation,
        momentum_score=momentum,
        total_score=total,
        recommendation=recommend(total, config),
        notes=tuple(notes),
        scored_at=now,
    )


def rank_scores(scores: Iterable[ToolScore]) -> list[ToolScore]:
    """Sort by descending total score; ties keep their input order."""
    return sorted(scores, key=lambda s: s.total_score, reverse=True)


def score_tools(
    researches: Iterable[ToolResearch],
    config: ScoringConfig,
    now: Optional[datetime] = None,
) -> list[ToolScore]:
    now = now or utc_now()
    return rank_scores(score_tool(research, config, now) for research in researches)
