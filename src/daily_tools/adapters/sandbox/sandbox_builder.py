"""Install recommended tools into an isolated sandbox directory."""

import asyncio
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from daily_tools.core import ToolResearch
from daily_tools.core.entities import utc_now

SAFE_INSTALL_PATTERNS = (
    re.compile(r"^npm\s+i(nstall)?\s+(-g\s+)?[\w@\-/.]+$", re.IGNORECASE),
    re.compile(r"^bun\s+(add|install)\s+(-g\s+)?[\w@\-/.]+$", re.IGNORECASE),
    re.compile(r"^yarn\s+add\s+(-g\s+)?[\w@\-/.]+$", re.IGNORECASE),
    re.compile(r"^pip\s+install\s+[\w\-.]+$", re.IGNORECASE),
    re.compile(r"^docker\s+pull\s+[\w\-./:]+$", re.IGNORECASE),
    re.compile(r"^git\s+clone\s+https?://[\w\-./]+$", re.IGNORECASE),
)
BUILT_AT_PATTERN = re.compile(r"\*\*Built at:\*\*\s*(\S+)")
CLONE_DIR = "repo"


def is_safe_install_command(command: str) -> bool:
    """Check a command against the whitelist of plain install commands."""
    command = (command or "").strip()
    return any(pattern.match(command) for pattern in SAFE_INSTALL_PATTERNS)


class BuildStatus(str, Enum):
    INSTALLED = "installed"
    CLONED = "cloned"
    FAILED = "failed"
    NEEDS_CONFIRMATION = "needs_confirmation"
    NO_INSTALL_METHOD = "no_install_method"


@dataclass
class BuildResult:
    """Outcome of a sandbox build."""

    slug: str
    status: BuildStatus
    sandbox_dir: Path
    report_path: Path
    detail: str = ""


class SandboxBuilder:
    """Run a tool's install command (or clone its repo) inside ``sandbox/<slug>``."""

    def __init__(self, sandbox_root: Path) -> None:
        self.sandbox_root = sandbox_root

    async def build(self, research: ToolResearch) -> BuildResult:
        tool = research.tool
        sandbox_dir = self.sandbox_root / tool.slug
        sandbox_dir.mkdir(parents=True, exist_ok=True)

        print(f"\n📦 Building in sandbox: {sandbox_dir}")

        if tool.install_command:
            status, detail = await self._install(tool.install_command, sandbox_dir)
        elif research.github:
            status, detail = await self._clone(research.github.repo_url, sandbox_dir)
        else:
            status, detail = BuildStatus.NO_INSTALL_METHOD, "No install command or GitHub repository"
            print("  ⚠️  No install method available, install manually from the source")

        report_path = sandbox_dir / "BUILD_REPORT.md"
        report_path.write_text(self._build_report(research, sandbox_dir, status), encoding="utf-8")

        return BuildResult(
            slug=tool.slug,
            status=status,
            sandbox_dir=sandbox_dir,
            report_path=report_path,
            detail=detail,
        )

    def built_on(self, date: str) -> list[str]:
        """Slugs whose build report is dated ``date`` (YYYY-MM-DD)."""
        if not self.sandbox_root.exists():
            return []

        built = []
        for report_path in sorted(self.sandbox_root.glob("*/BUILD_REPORT.md")):
            match = BUILT_AT_PATTERN.search(report_path.read_text(encoding="utf-8"))
            if match and match.group(1).startswith(date):
                built.append(report_path.parent.name)
        return built

    async def _install(self, command: str, sandbox_dir: Path) -> tuple[BuildStatus, str]:
        if not is_safe_install_command(command):
            print(f"  ⚠️  Install command requires confirmation: {command}")
            print(f"  └─ Run manually in: {sandbox_dir}")
            return BuildStatus.NEEDS_CONFIRMATION, command

        print(f"  └─ Installing: {command}")
        exit_code, output = await self._run(command.split(), sandbox_dir)
        if exit_code == 0:
            print("  ✓ Installed successfully")
            return BuildStatus.INSTALLED, output

        print(f"  ❌ Install failed (exit code {exit_code})")
        return BuildStatus.FAILED, output

    async def _clone(self, repo_url: str, sandbox_dir: Path) -> tuple[BuildStatus, str]:
        # git clone needs an empty target, and BUILD_REPORT.md lives in sandbox_dir
        repo_dir = sandbox_dir / CLONE_DIR
        if (repo_dir / ".git").exists():
            print(f"  └─ Already cloned: {repo_dir}")
            output = ""
        else:
            print(f"  └─ Cloning {repo_url}")
            exit_code, output = await self._run(
                ["git", "clone", "--depth", "1", repo_url, CLONE_DIR], sandbox_dir
            )
            if exit_code != 0:
                print("  ❌ Clone failed")
                return BuildStatus.FAILED, output
            print("  ✓ Cloned successfully")

        if (repo_dir / "package.json").exists():
            dep_code, dep_output = await self._run(["bun", "install"], repo_dir)
            if dep_code == 0:
                print("  ✓ Dependencies installed")
            else:
                print(f"  ⚠️  Dependency install failed (exit code {dep_code})")
                output = f"{output}\n{dep_output}".strip()
        else:
            print("  └─ No package.json found")

        return BuildStatus.CLONED, output

    async def _run(self, argv: list[str], cwd: Path) -> tuple[int, str]:
        """Run a command without a shell, returning (exit code, stderr)."""
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            return 127, str(e)

        _, stderr = await process.communicate()
        return process.returncode or 0, stderr.decode("utf-8", errors="replace")

    def _build_report(self, research: ToolResearch, sandbox_dir: Path, status: BuildStatus) -> str:
        tool = research.tool
        repo_url: Optional[str] = research.github.repo_url if research.github else None
        return "\n".join([
            f"# Build Report: {tool.name}",
            "",
            "## Tool Info",
            f"- **Name:** {tool.name}",
            f"- **Category:** {tool.category.value}",
            f"- **Source:** {tool.source or 'Unknown'}",
            "",
            "## Installation",
            f"- **Command:** {tool.install_command or 'N/A'}",
            f"- **GitHub:** {repo_url or 'N/A'}",
            f"- **Sandbox:** {sandbox_dir}",
            "",
            "## Build Status",
            f"- **Built at:** {utc_now().isoformat()}",
            f"- **Status:** {status.value}",
            "",
            "## Next Steps",
            "1. Check the sandbox directory for the installed tool",
            "2. Run any tests or examples",
            "3. Integrate into your project if useful",
            "",
        ])
