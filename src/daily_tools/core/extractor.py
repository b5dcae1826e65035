"""Extract tool and news records from a daily digest.

Two tool conventions are recognized, checked in this order:

1. ``### Name`` headings, optionally followed by `` - subtitle``.
2. ``- **Name**: description`` bullets, unless ``Name`` is one of the
   metadata fields that appear inside a tool's own block.

Lines between two boundaries form the tool's block. Metadata
(installation, GitHub URL, application, source) is read from the whole
block once the tool is finished.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from daily_tools.core.entities import (
    ExtractionResult,
    NewsItem,
    SourcesSearched,
    Tool,
    ToolCategory,
    utc_now,
)

MAX_DESCRIPTION_LENGTH = 500
MIN_NEWS_LENGTH = 20

METADATA_FIELDS = frozenset({
    "installation",
    "github",
    "application",
    "source",
    "npm",
    "usage",
    "docs",
    "license",
})

# First match wins
CATEGORY_RULES: tuple[tuple[ToolCategory, tuple[str, ...]], ...] = (
    (ToolCategory.CLAUDE_PLUGIN, ("plugin", "claude code")),
    (ToolCategory.CLAUDE_SKILL, ("skill",)),
    (ToolCategory.CLI_TOOL, ("cli", "command")),
    (ToolCategory.FRAMEWORK, ("framework",)),
    (ToolCategory.NPM_PACKAGE, ("npm", "package")),
)

H3_PATTERN = re.compile(r"^###\s+(.+?)(?:\s+[-–—]\s+(.+))?$")
BULLET_PATTERN = re.compile(r"^[•\-*][\s•\-*]*\*\*([^*]+)\*\*[:\s]+(.+)$")
DESCRIPTION_SKIP_PREFIXES = ("-", "*", "#")


def _field_pattern(label: str, value: str) -> re.Pattern[str]:
    # Accepts "**Label:** value" and "**Label**: value"
    return re.compile(rf"\*\*{label}:?\*\*:?\s*{value}", re.IGNORECASE)


INSTALL_PATTERN = _field_pattern("Installation", r"`?([^`\n]+)`?")
GITHUB_PATTERN = _field_pattern("GitHub", r"<?(https?://[^\s>)]+)")
APPLICATION_PATTERN = _field_pattern("Application", r"([^\n]+)")
SOURCE_PATTERN = _field_pattern("Source", r"(@\w+)")

NEWS_SECTION_PATTERN = re.compile(
    r"^[ \t#*]*(?:\d+\.\s*)?Key\s+News\b.*?(?=^[ \t#*]*\d+\.\s|\Z)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
NEWS_BULLET_PATTERN = re.compile(r"^[•\-*]\s+(.+)$")
HANDLE_PATTERN = re.compile(r"@\w+")

X_POSTS_PATTERN = re.compile(r"(\d+)\s*X\s*posts?", re.IGNORECASE)
WEB_PAGES_PATTERN = re.compile(r"(\d+)\s*web\s*pages?", re.IGNORECASE)


@dataclass(frozen=True)
class Idle:
    """No tool block is open."""


@dataclass(frozen=True)
class AccumulatingTool:
    """A tool block is open and collecting lines."""

    name: str
    description: Optional[str] = None
    block: tuple[str, ...] = ()

    def add_line(self, line: str) -> "AccumulatingTool":
        description = self.description
        trimmed = line.strip()
        if (
            not description
            and trimmed
            and not trimmed.startswith(DESCRIPTION_SKIP_PREFIXES)
        ):
            description = trimmed
        return AccumulatingTool(self.name, description, self.block + (line,))


ScanState = Union[Idle, AccumulatingTool]


def slugify(name: str) -> str:
    """Lowercase, hyphen-separated identifier for a tool name."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")
    return slug or "unknown"


def detect_category(name: str, description: str) -> ToolCategory:
    text = f"{name} {description}".lower()
    for category, triggers in CATEGORY_RULES:
        if any(trigger in text for trigger in triggers):
            return category
    return ToolCategory.OTHER


def is_metadata_field(name: str) -> bool:
    return name.strip().lower().rstrip(":").strip() in METADATA_FIELDS


def match_boundary(line: str) -> Optional[AccumulatingTool]:
    """Return a fresh tool block if ``line`` starts a new tool."""
    trimmed = line.strip()

    h3_match = H3_PATTERN.match(trimmed)
    if h3_match:
        subtitle = h3_match.group(2)
        return AccumulatingTool(
            name=h3_match.group(1).strip(),
            description=subtitle.strip() if subtitle else None,
        )

    bullet_match = BULLET_PATTERN.match(trimmed)
    if bullet_match and not is_metadata_field(bullet_match.group(1)):
        name = bullet_match.group(1).strip().rstrip(":").strip()
        if name:
            return AccumulatingTool(name=name, description=bullet_match.group(2).strip())

    return None


def advance(state: ScanState, line: str) -> tuple[ScanState, Optional[AccumulatingTool]]:
    """Feed one line to the scanner.

    Returns the next state and, when ``line`` closed a block, the block
    that was closed.
    """
    opened = match_boundary(line)
    if opened is not None:
        closed = state if isinstance(state, AccumulatingTool) else None
        return opened, closed

    if isinstance(state, AccumulatingTool):
        return state.add_line(line), None

    return state, None


def _first_group(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def finalize_tool(block: AccumulatingTool, extracted_at: datetime) -> Tool:
    """Build a Tool from a closed block."""
    raw = "\n".join(block.block)

    description = block.description
    if not description:
        description = _first_group(APPLICATION_PATTERN, raw)
    description = description or ""

    return Tool(
        name=block.name,
        slug=slugify(block.name),
        description=description[:MAX_DESCRIPTION_LENGTH],
        category=detect_category(block.name, description),
        install_command=_first_group(INSTALL_PATTERN, raw),
        github_url=_first_group(GITHUB_PATTERN, raw),
        source=_first_group(SOURCE_PATTERN, raw),
        extracted_at=extracted_at,
    )


def extract_tools(text: str, extracted_at: Optional[datetime] = None) -> list[Tool]:
    """Extract tool entries from digest markdown."""
    extracted_at = extracted_at or utc_now()
    tools: list[Tool] = []
    state: ScanState = Idle()

    for line in (text or "").splitlines():
        state, closed = advance(state, line)
        if closed is not None:
            tools.append(finalize_tool(closed, extracted_at))

    if isinstance(state, AccumulatingTool):
        tools.append(finalize_tool(state, extracted_at))

    return tools


def extract_news(text: str) -> list[NewsItem]:
    """Pull bullets out of the "Key News" section."""
    section = NEWS_SECTION_PATTERN.search(text or "")
    if not section:
        return []

    news: list[NewsItem] = []
    for line in section.group(0).splitlines():
        bullet = NEWS_BULLET_PATTERN.match(line.strip())
        if not bullet:
            continue

        summary = bullet.group(1).replace("**", "").strip()
        if len(summary) <= MIN_NEWS_LENGTH:
            continue

        headline = summary.split(":", 1)[0].strip() or summary[:50]
        handle = HANDLE_PATTERN.search(summary)
        news.append(NewsItem(
            headline=headline,
            summary=summary,
            source=handle.group(0) if handle else None,
        ))

    return news


def extract_sources_searched(text: str) -> SourcesSearched:
    x_match = X_POSTS_PATTERN.search(text or "")
    web_match = WEB_PAGES_PATTERN.search(text or "")
    return SourcesSearched(
        x_posts=int(x_match.group(1)) if x_match else 0,
        web_pages=int(web_match.group(1)) if web_match else 0,
    )


def extract(text: str, extracted_at: Optional[datetime] = None) -> ExtractionResult:
    """Extract tools, news and source counts from a digest."""
    return ExtractionResult(
        tools=tuple(extract_tools(text, extracted_at)),
        news=tuple(extract_news(text)),
        sources_searched=extract_sources_searched(text),
    )
