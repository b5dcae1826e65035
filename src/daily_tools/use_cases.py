"""Business logic use cases."""

import asyncio
from collections import Counter
from pathlib import Path
from typing import Optional

from daily_tools.adapters.sandbox import BuildResult, SandboxBuilder
from daily_tools.adapters.storage import DataStore, validate_date
from daily_tools.core import (
    DEFAULT_SCORING_CONFIG,
    ContentCapture,
    DailyReport,
    DailyUpdate,
    EnrichmentError,
    GitHubFetcher,
    NpmFetcher,
    Recommendation,
    ReportGenerator,
    ScoringConfig,
    StageInputMissing,
    Tool,
    ToolNotFound,
    ToolResearch,
    ToolScore,
    extract,
    find_github_url,
    find_npm_package,
    score_tools,
)

RECOMMENDATION_EMOJI = {
    Recommendation.BUILD: "🚀",
    Recommendation.WATCH: "👀",
    Recommendation.SKIP: "⏭️",
}


def banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


class CollectionService:
    """Capture a digest, extract its tools and enrich them."""

    def __init__(
        self,
        store: DataStore,
        github: GitHubFetcher,
        npm: NpmFetcher,
        report_generator: ReportGenerator,
        request_delay: float = 1.0,
    ) -> None:
        self.store = store
        self.github = github
        self.npm = npm
        self.report_generator = report_generator
        self.request_delay = request_delay

    async def capture(self, date: str, capture: ContentCapture) -> Optional[Path]:
        """Capture raw digest text and save it for ``date``.

        Returns:
            Path of the saved digest, or None when nothing was captured
        """
        validate_date(date)
        banner("📥 STAGE 1: CAPTURE")

        content = await capture.capture()
        if not content or not content.strip():
            print("❌ No content captured")
            return None

        path = self.store.save_raw_update(date, content)
        print(f"✓ Captured update for {date}")
        print(f"  └─ Saved to: {path}")
        print(f"  └─ Size: {len(content)} characters")
        return path

    def parse(self, date: str) -> DailyUpdate:
        """Extract tools and news from the captured digest."""
        banner("📝 STAGE 2: PARSE")

        content = self.store.load_raw_update(date)
        result = extract(content)

        update = DailyUpdate(
            date=date,
            raw_content=content,
            tools=list(result.tools),
            news=list(result.news),
            sources_searched=result.sources_searched,
        )
        path = self.store.save_daily_update(update)

        print(f"✓ Parsed {len(update.tools)} tools from {date}")
        print(f"  └─ News items: {len(update.news)}")
        print(f"  └─ Saved to: {path}")

        if update.tools:
            print("\nTools found:")
            for i, tool in enumerate(update.tools, 1):
                print(f"  {i}. {tool.name} [{tool.category.value}]")
                if tool.description:
                    print(f"     └─ {tool.description[:60]}")

        return update

    async def research(self, date: str, tool_query: Optional[str] = None) -> list[ToolResearch]:
        """Enrich every parsed tool (or just the one matching ``tool_query``)."""
        update = self.store.load_daily_update(date)
        tools = update.tools

        if tool_query:
            tools = select_tools(tools, tool_query)
            if not tools:
                raise ToolNotFound(f"Tool '{tool_query}' not found")

        banner("🔍 STAGE 3: RESEARCH")
        print(f"Researching {len(tools)} tools sequentially...")

        results: list[ToolResearch] = []
        for i, tool in enumerate(tools, 1):
            if i > 1 and self.request_delay:
                await asyncio.sleep(self.request_delay)

            print(f"\n  [{i}/{len(tools)}] {tool.name}")
            try:
                research = await self.research_tool(tool)
                self.store.save_research(research, self.report_generator.render_research(research))
            except Exception as e:
                print(f"  └─ ⚠️  Research failed: {e}")
                continue
            results.append(research)

            if research.github:
                print(f"  └─ ⭐ {research.github.stars} stars, {research.github.forks} forks")
            if research.npm:
                print(f"  └─ 📦 {research.npm.weekly_downloads:,} weekly downloads")

        print(f"\n✓ Research complete for {len(results)} tools")
        return results

    async def research_tool(self, tool: Tool) -> ToolResearch:
        """Gather GitHub and npm data for one tool; lookups may fail independently."""
        github_data = None
        npm_data = None

        github_url = find_github_url(tool)
        if github_url:
            try:
                github_data = await self.github.fetch(github_url)
            except EnrichmentError as e:
                print(f"  └─ ⚠️  No GitHub data: {e}")

        package = find_npm_package(tool)
        if package:
            try:
                npm_data = await self.npm.fetch(package)
            except EnrichmentError as e:
                print(f"  └─ ⚠️  No npm data: {e}")

        return ToolResearch(tool=tool, github=github_data, npm=npm_data)


class ReportService:
    """Score researched tools, write reports and build recommended tools."""

    def __init__(
        self,
        store: DataStore,
        report_generator: ReportGenerator,
        scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        sandbox: Optional[SandboxBuilder] = None,
        top_n: int = 5,
    ) -> None:
        self.store = store
        self.report_generator = report_generator
        self.scoring_config = scoring_config
        self.sandbox = sandbox
        self.top_n = top_n

    def score(self, date: str) -> list[ToolScore]:
        """Score the tools parsed for ``date`` and save them ranked."""
        update = self.store.load_daily_update(date)
        banner("📊 STAGE 4: SCORE")

        researches = []
        for tool in update.tools:
            research = self.store.load_research(tool.slug)
            if research is None:
                print(f"  ⚠️  {tool.name}: no research found, scoring without enrichment")
                research = ToolResearch(tool=tool)
            researches.append(research)

        scores = score_tools(researches, self.scoring_config)
        path = self.store.save_scores(date, scores)

        for score in scores:
            emoji = RECOMMENDATION_EMOJI[score.recommendation]
            print(f"  {emoji} {score.tool.name}: {score.total_score}/100 {score.recommendation.value}")

        counts = Counter(score.recommendation for score in scores)
        print(
            f"\n✓ BUILD: {counts[Recommendation.BUILD]}"
            f" | WATCH: {counts[Recommendation.WATCH]}"
            f" | SKIP: {counts[Recommendation.SKIP]}"
        )
        print(f"  └─ Saved to: {path}")
        return scores

    def build_report(self, date: str, scores: list[ToolScore]) -> DailyReport:
        def names(recommendation: Recommendation) -> list[str]:
            return [s.tool.name for s in scores if s.recommendation == recommendation]

        return DailyReport(
            date=date,
            tools_evaluated=len(scores),
            build=names(Recommendation.BUILD),
            watch=names(Recommendation.WATCH),
            skip=names(Recommendation.SKIP),
            top_tools=scores[:self.top_n],
            built_today=self.sandbox.built_on(date) if self.sandbox else [],
        )

    def report(self, date: str) -> Path:
        """Render and save the daily report for ``date``."""
        scores = self.store.load_scores(date)
        banner("📋 STAGE 5: REPORT")

        report = self.build_report(date, scores)
        path = self.store.save_report(date, self.report_generator.generate(report))

        print(f"✓ Report saved: {path}")
        if report.build:
            print(f"  └─ 🚀 Recommended to build: {', '.join(report.build)}")
        return path

    async def build(self, tool_query: str) -> BuildResult:
        """Install a researched tool into the sandbox."""
        if self.sandbox is None:
            raise ValueError("No sandbox configured")

        research = self.store.find_research(tool_query)
        if research is None:
            slugs = self.store.list_research_slugs()
            if not slugs:
                raise StageInputMissing("No researched tools found", run_first="research")
            raise ToolNotFound(f"Tool '{tool_query}' not found (available: {', '.join(slugs)})")

        print(f"✓ Found: {research.tool.name}")
        result = await self.sandbox.build(research)
        print(f"\n✅ Build {result.status.value}")
        print(f"  └─ Sandbox: {result.sandbox_dir}")
        print(f"  └─ Report: {result.report_path}")
        return result


async def run_daily(
    collection: CollectionService,
    reporting: ReportService,
    date: str,
    capture: ContentCapture,
) -> Optional[Path]:
    """Run capture, parse, research, score and report for ``date``.

    Returns:
        Path of the daily report, or None when nothing was captured
    """
    if await collection.capture(date, capture) is None:
        return None
    collection.parse(date)
    await collection.research(date)
    reporting.score(date)
    return reporting.report(date)


def select_tools(tools: list[Tool], query: str) -> list[Tool]:
    """Tools whose slug equals ``query`` or whose name contains it."""
    needle = query.lower()
    return [t for t in tools if t.slug == query or needle in t.name.lower()]
