"""Tests for the file-based data store."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from daily_tools.adapters.storage import DataStore, validate_date
from daily_tools.core import (
    DEFAULT_SCORING_CONFIG,
    DailyUpdate,
    SourcesSearched,
    StageInputMissing,
    Tool,
    ToolCategory,
    ToolResearch,
    score_tools,
)


def make_tool(name: str, slug: str) -> Tool:
    return Tool(name=name, slug=slug, description="Does things", category=ToolCategory.OTHER)


def test_store_creates_structure() -> None:
    """Test that the stage directories are created."""
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir) / "data")

        for subdir in ("updates", "tools", "scores", "reports"):
            assert (Path(tmpdir) / "data" / subdir).is_dir()
        assert store.list_research_slugs() == []


def test_raw_update_round_trip() -> None:
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))

        path = store.save_raw_update("2026-01-10", "### Aider\n")

        assert path.name == "2026-01-10.md"
        assert store.load_raw_update("2026-01-10") == "### Aider\n"


def test_missing_stage_input_names_previous_stage() -> None:
    """Test that a missing input tells the user which stage to run."""
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))

        with pytest.raises(StageInputMissing) as raw_error:
            store.load_raw_update("2026-01-10")
        assert raw_error.value.run_first == "capture"

        with pytest.raises(StageInputMissing) as parsed_error:
            store.load_daily_update("2026-01-10")
        assert parsed_error.value.run_first == "parse"

        with pytest.raises(StageInputMissing) as scores_error:
            store.load_scores("2026-01-10")
        assert scores_error.value.run_first == "score"


@pytest.mark.parametrize("value", ["2026-1-10", "../../etc/passwd", "", "today"])
def test_invalid_dates_rejected(value: str) -> None:
    with pytest.raises(ValueError, match="Invalid date format"):
        validate_date(value)


def test_daily_update_round_trip() -> None:
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))
        update = DailyUpdate(
            date="2026-01-10",
            raw_content="### Aider",
            tools=[make_tool("Aider", "aider")],
            news=[],
            sources_searched=SourcesSearched(x_posts=3),
        )

        store.save_daily_update(update)

        assert store.load_daily_update("2026-01-10") == update


def test_research_lookup() -> None:
    """Test research persistence and lookup by slug."""
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))
        for name, slug in [("Claude Mem", "claude-mem"), ("Aider", "aider")]:
            store.save_research(ToolResearch(tool=make_tool(name, slug)), f"# {name}")

        assert store.list_research_slugs() == ["aider", "claude-mem"]
        assert (store.tools_dir / "aider.md").read_text(encoding="utf-8") == "# Aider"

        # Exact slug, then substring
        assert store.find_research("aider").tool.name == "Aider"
        assert store.find_research("MEM").tool.slug == "claude-mem"
        assert store.find_research("missing") is None
        assert store.load_research("missing") is None


def test_scores_round_trip() -> None:
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))
        scores = score_tools(
            [ToolResearch(tool=make_tool("Aider", "aider"))],
            DEFAULT_SCORING_CONFIG,
        )

        store.save_scores("2026-01-10", scores)

        assert store.load_scores("2026-01-10") == scores


def test_save_report() -> None:
    with TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir))

        path = store.save_report("2026-01-10", "# Report")

        assert path == store.reports_dir / "2026-01-10-report.md"
        assert path.read_text(encoding="utf-8") == "# Report"
