"""Markdown report generator."""

from daily_tools.core import DailyReport, ReportGenerator, ToolResearch, ToolScore

RECOMMENDATION_EMOJI = {"BUILD": "🚀", "WATCH": "👀", "SKIP": "⏭️"}


class MarkdownReportGenerator(ReportGenerator):
    """Render research notes and daily reports as markdown."""

    def render_research(self, research: ToolResearch) -> str:
        """Render research notes for a single tool."""
        tool, github, npm = research.tool, research.github, research.npm

        lines = [
            f"# {tool.name}",
            "",
            f"> {tool.description}",
            "",
            "## Overview",
            "",
            f"- **Category:** {tool.category.value}",
            f"- **Source:** {tool.source or 'Unknown'}",
        ]
        if tool.install_command:
            lines.append(f"- **Install:** `{tool.install_command}`")
        lines.extend([f"- **Researched:** {research.researched_at.isoformat()}", ""])

        if github:
            lines.extend(self._table("GitHub Stats", [
                ("Stars", f"{github.stars:,}"),
                ("Forks", f"{github.forks:,}"),
                ("Open Issues", str(github.open_issues)),
                ("Last Commit", github.last_commit_date),
                ("Language", github.language),
                ("License", github.license or "None"),
                ("Has Tests", "Yes" if github.has_tests else "No"),
                ("Has CI", "Yes" if github.has_ci else "No"),
            ]))

        if npm:
            lines.extend(self._table("npm Stats", [
                ("Package", npm.package_name),
                ("Version", npm.version),
                ("Weekly Downloads", f"{npm.weekly_downloads:,}"),
                ("Last Published", npm.last_published),
                ("Dependencies", str(npm.dependencies)),
            ]))

        return "\n".join(lines)

    def generate(self, report: DailyReport) -> str:
        """Render the daily report."""
        lines = [
            f"# Daily Tool Report: {report.date}",
            "",
            f"Tools evaluated: {report.tools_evaluated}",
            "",
        ]

        if not report.tools_evaluated:
            lines.append("No tools were scored for this date.")
            return "\n".join(lines)

        lines.extend([
            "## Summary",
            "",
            f"- 🚀 BUILD: {len(report.build)}",
            f"- 👀 WATCH: {len(report.watch)}",
            f"- ⏭️ SKIP: {len(report.skip)}",
            "",
        ])

        for title, names in (
            ("🚀 Build", report.build),
            ("👀 Watch", report.watch),
            ("⏭️ Skip", report.skip),
        ):
            if names:
                lines.extend([f"## {title}", ""])
                lines.extend(f"- {name}" for name in names)
                lines.append("")

        if report.top_tools:
            lines.extend([
                "## Top Tools",
                "",
                "| # | Tool | Total | Usefulness | Quality | Innovation | Momentum | Verdict |",
                "|---|------|-------|------------|---------|------------|----------|---------|",
            ])
            for rank, score in enumerate(report.top_tools, 1):
                lines.append(
                    f"| {rank} | {score.tool.name} | {score.total_score} "
                    f"| {score.usefulness_score} | {score.quality_score} "
                    f"| {score.innovation_score} | {score.momentum_score} "
                    f"| {score.recommendation.value} |"
                )
            lines.append("")

            for score in report.top_tools:
                lines.extend(self._format_score(score))

        if report.built_today:
            lines.extend(["## Built Today", ""])
            lines.extend(f"- {slug}" for slug in report.built_today)
            lines.append("")

        lines.append(f"*Generated {report.generated_at.isoformat()}*")
        return "\n".join(lines)

    def _format_score(self, score: ToolScore) -> list[str]:
        """Format the detail block of one scored tool."""
        tool = score.tool
        emoji = RECOMMENDATION_EMOJI[score.recommendation.value]
        lines = [
            f"### {emoji} {tool.name} ({score.total_score}/100)",
            "",
            tool.description,
            "",
        ]

        meta_parts = [f"category: {tool.category.value}"]
        if tool.install_command:
            meta_parts.append(f"install: `{tool.install_command}`")
        if tool.github_url:
            meta_parts.append(f"github: {tool.github_url}")
        lines.extend([f"*{' | '.join(meta_parts)}*", ""])

        if score.notes:
            lines.extend(["**Scoring notes:**", ""])
            lines.extend(f"- {note}" for note in score.notes)
            lines.append("")

        lines.extend(["---", ""])
        return lines

    def _table(self, title: str, rows: list[tuple[str, str]]) -> list[str]:
        lines = [f"## {title}", "", "| Metric | Value |", "|--------|-------|"]
        lines.extend(f"| {metric} | {value} |" for metric, value in rows)
        lines.append("")
        return lines
