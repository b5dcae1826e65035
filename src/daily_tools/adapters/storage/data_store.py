"""File-based storage for pipeline stage outputs."""

import json
import re
from pathlib import Path
from typing import Any, Optional

from daily_tools.core import DailyUpdate, StageInputMissing, ToolResearch, ToolScore

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_date(value: str) -> str:
    """Reject anything that isn't YYYY-MM-DD (dates end up in file names)."""
    if not DATE_PATTERN.match(value or ""):
        raise ValueError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)")
    return value


class DataStore:
    """Persist stage outputs under a data directory.

    Layout::

        updates/<date>.md         raw captured digest
        updates/<date>.json       parsed DailyUpdate
        tools/<slug>.json|.md     research per tool
        scores/<date>.json        ranked scores
        reports/<date>-report.md  daily report
    """

    SUBDIRS = ("updates", "tools", "scores", "reports")

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._ensure_structure()

    def _ensure_structure(self) -> None:
        """Create directory structure for stage outputs."""
        for subdir in self.SUBDIRS:
            (self.data_dir / subdir).mkdir(parents=True, exist_ok=True)

    @property
    def updates_dir(self) -> Path:
        return self.data_dir / "updates"

    @property
    def tools_dir(self) -> Path:
        return self.data_dir / "tools"

    @property
    def scores_dir(self) -> Path:
        return self.data_dir / "scores"

    @property
    def reports_dir(self) -> Path:
        return self.data_dir / "reports"

    # Raw capture

    def save_raw_update(self, date: str, content: str) -> Path:
        path = self.updates_dir / f"{validate_date(date)}.md"
        path.write_text(content, encoding="utf-8")
        return path

    def load_raw_update(self, date: str) -> str:
        path = self.updates_dir / f"{validate_date(date)}.md"
        if not path.exists():
            raise StageInputMissing(f"No update found for {date}", run_first="capture")
        return path.read_text(encoding="utf-8")

    # Parsed update

    def save_daily_update(self, update: DailyUpdate) -> Path:
        path = self.updates_dir / f"{validate_date(update.date)}.json"
        self._write_json(path, update.to_dict())
        return path

    def load_daily_update(self, date: str) -> DailyUpdate:
        path = self.updates_dir / f"{validate_date(date)}.json"
        if not path.exists():
            raise StageInputMissing(f"No parsed update found for {date}", run_first="parse")
        return DailyUpdate.from_dict(self._read_json(path))

    # Research

    def save_research(self, research: ToolResearch, markdown: str) -> Path:
        json_path = self.tools_dir / f"{research.tool.slug}.json"
        self._write_json(json_path, research.to_dict())
        (self.tools_dir / f"{research.tool.slug}.md").write_text(markdown, encoding="utf-8")
        return json_path

    def load_research(self, slug: str) -> Optional[ToolResearch]:
        path = self.tools_dir / f"{slug}.json"
        if not path.exists():
            return None
        return ToolResearch.from_dict(self._read_json(path))

    def list_research_slugs(self) -> list[str]:
        return sorted(path.stem for path in self.tools_dir.glob("*.json"))

    def find_research(self, query: str) -> Optional[ToolResearch]:
        """Find research by exact slug, else by case-insensitive slug substring."""
        slugs = self.list_research_slugs()
        if query in slugs:
            return self.load_research(query)

        needle = query.lower()
        for slug in slugs:
            if needle in slug:
                return self.load_research(slug)
        return None

    # Scores

    def save_scores(self, date: str, scores: list[ToolScore]) -> Path:
        path = self.scores_dir / f"{validate_date(date)}.json"
        self._write_json(path, [score.to_dict() for score in scores])
        return path

    def load_scores(self, date: str) -> list[ToolScore]:
        path = self.scores_dir / f"{validate_date(date)}.json"
        if not path.exists():
            raise StageInputMissing(f"No scores found for {date}", run_first="score")
        return [ToolScore.from_dict(data) for data in self._read_json(path)]

    # Reports

    def save_report(self, date: str, markdown: str) -> Path:
        path = self.reports_dir / f"{validate_date(date)}-report.md"
        path.write_text(markdown, encoding="utf-8")
        return path

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _read_json(self, path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))
