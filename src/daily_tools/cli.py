"""CLI entry point for daily tools."""

import asyncio
from pathlib import Path
from typing import Callable, Optional, TypeVar

import httpx
import typer

from daily_tools.adapters.capture import FileCapture, PageCapture, StdinCapture
from daily_tools.adapters.enrichment import GitHubClient, NpmClient
from daily_tools.adapters.report import MarkdownReportGenerator
from daily_tools.adapters.sandbox import SandboxBuilder
from daily_tools.adapters.storage import DataStore
from daily_tools.config import Settings, get_settings
from daily_tools.core import ContentCapture, PipelineError, StageInputMissing
from daily_tools.core.entities import utc_now
from daily_tools.use_cases import CollectionService, ReportService, run_daily

T = TypeVar("T")

cli = typer.Typer(
    help="Daily Tool Updates - capture, research, score and build tools from a daily digest.",
    no_args_is_help=True,
)

DateOption = typer.Option(None, "--date", "-d", help="Digest date (YYYY-MM-DD), defaults to today in UTC")
ConfigOption = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config")
FileOption = typer.Option(None, "--file", "-f", help="Read the digest from a file (md, txt or html)")
UrlOption = typer.Option(None, "--url", help="Fetch the digest from a URL")


def app() -> None:
    """CLI entry point."""
    cli()


def _today(value: Optional[str]) -> str:
    return value or utc_now().date().isoformat()


def _print_header(settings: Settings) -> None:
    print("\n" + "=" * 70)
    print("🧰  DAILY TOOL UPDATES")
    print("=" * 70)
    if settings.github_token:
        print("  ✓ GITHUB_TOKEN - authenticated GitHub lookups")
    else:
        print("  ⚠️  GITHUB_TOKEN - not set (limited rate limit)")


def _services(config_path: Path) -> tuple[Settings, CollectionService, ReportService]:
    settings = get_settings(config_path)
    _print_header(settings)

    store = DataStore(settings.data_dir)
    generator = MarkdownReportGenerator()

    collection = CollectionService(
        store=store,
        github=GitHubClient(token=settings.github_token, timeout=settings.http.timeout),
        npm=NpmClient(timeout=settings.http.timeout),
        report_generator=generator,
        request_delay=settings.http.request_delay,
    )
    reporting = ReportService(
        store=store,
        report_generator=generator,
        scoring_config=settings.scoring,
        sandbox=SandboxBuilder(settings.sandbox_dir),
        top_n=settings.report.top_n,
    )
    return settings, collection, reporting


def _capture_source(file: Optional[Path], url: Optional[str], timeout: float) -> ContentCapture:
    if file and url:
        raise ValueError("Use either --file or --url, not both")
    if file:
        return FileCapture(file)
    if url:
        return PageCapture(url, timeout=timeout)
    print("📋 Paste the digest, then press Ctrl-D:")
    return StdinCapture()


def _run(stage: Callable[[], T]) -> T:
    """Run a stage, turning expected pipeline errors into exit code 1."""
    try:
        return stage()
    except StageInputMissing as e:
        print(f"❌ {e}")
        print(f"  └─ Run 'dtu {e.run_first}' first")
        raise typer.Exit(code=1)
    except (PipelineError, ValueError, OSError, httpx.HTTPError) as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)


@cli.command()
def capture(
    file: Optional[Path] = FileOption,
    url: Optional[str] = UrlOption,
    date: Optional[str] = DateOption,
    config: Path = ConfigOption,
) -> None:
    """Capture a digest from a file, URL or pasted text."""
    settings, collection, _ = _services(config)
    saved = _run(lambda: asyncio.run(
        collection.capture(_today(date), _capture_source(file, url, settings.http.timeout))
    ))
    if saved is None:
        raise typer.Exit(code=1)


@cli.command()
def parse(date: Optional[str] = DateOption, config: Path = ConfigOption) -> None:
    """Extract tools and news from the captured digest."""
    _, collection, _ = _services(config)
    _run(lambda: collection.parse(_today(date)))


@cli.command()
def research(
    date: Optional[str] = DateOption,
    tool: Optional[str] = typer.Option(None, "--tool", "-t", help="Research a specific tool only"),
    config: Path = ConfigOption,
) -> None:
    """Look up GitHub and npm data for parsed tools."""
    _, collection, _ = _services(config)
    _run(lambda: asyncio.run(collection.research(_today(date), tool)))


@cli.command()
def score(date: Optional[str] = DateOption, config: Path = ConfigOption) -> None:
    """Score researched tools."""
    _, _, reporting = _services(config)
    _run(lambda: reporting.score(_today(date)))


@cli.command()
def report(date: Optional[str] = DateOption, config: Path = ConfigOption) -> None:
    """Generate the daily markdown report."""
    _, _, reporting = _services(config)
    _run(lambda: reporting.report(_today(date)))


@cli.command()
def daily(
    file: Optional[Path] = FileOption,
    url: Optional[str] = UrlOption,
    config: Path = ConfigOption,
) -> None:
    """Run the full pipeline: capture, parse, research, score, report."""
    settings, collection, reporting = _services(config)
    report_path = _run(lambda: asyncio.run(run_daily(
        collection,
        reporting,
        _today(None),
        _capture_source(file, url, settings.http.timeout),
    )))
    if report_path is None:
        raise typer.Exit(code=1)

    print("\n" + "=" * 70)
    print("✅ DAILY PIPELINE COMPLETE")
    print("=" * 70)
    print(f"📄 Report: {report_path}")
    print(f"🗂️  Researched tools on file: {len(collection.store.list_research_slugs())}")
    print("Run 'dtu build <tool>' to build a recommended tool\n")


@cli.command()
def build(
    tool: str = typer.Argument(..., help="Tool slug or part of its name"),
    config: Path = ConfigOption,
) -> None:
    """Install a researched tool in the sandbox."""
    _, _, reporting = _services(config)
    _run(lambda: asyncio.run(reporting.build(tool)))


if __name__ == "__main__":
    app()
