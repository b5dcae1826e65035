"""GitHub API client for repository metadata."""

import re
from typing import Optional

import httpx

from daily_tools.core import EnrichmentError, GitHubData, GitHubFetcher

REPO_PATTERN = re.compile(r"github\.com/([^/]+/[^/\s]+)", re.IGNORECASE)
CI_MARKERS = {".circleci", ".travis.yml", "azure-pipelines.yml"}


def parse_repo(repo_url: str) -> tuple[str, str]:
    """Split a GitHub URL into (owner, repo)."""
    match = REPO_PATTERN.search(repo_url)
    if not match:
        raise EnrichmentError(f"Invalid GitHub URL: {repo_url}")

    owner_repo = re.sub(r"[#?].*$", "", match.group(1))
    owner_repo = re.sub(r"\.git$", "", owner_repo)
    owner, _, repo = owner_repo.partition("/")

    if not owner or not repo:
        raise EnrichmentError(f"Could not parse owner/repo from: {repo_url}")

    return owner, repo


def detect_tests(file_names: list[str]) -> bool:
    return any(
        "test" in name or "spec" in name or name == "__tests__"
        for name in file_names
    )


class GitHubClient(GitHubFetcher):
    """Fetch repository stats from the GitHub REST API."""

    def __init__(self, token: Optional[str] = None, timeout: float = 30.0) -> None:
        self.token = token
        self.timeout = timeout
        self.api_base = "https://api.github.com"

    async def fetch(self, repo_url: str) -> GitHubData:
        """Fetch repository data for a GitHub URL."""
        owner, repo = parse_repo(repo_url)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            headers = self._get_headers()

            try:
                response = await client.get(
                    f"{self.api_base}/repos/{owner}/{repo}", headers=headers
                )
            except httpx.HTTPError as e:
                raise EnrichmentError(f"GitHub request failed: {e}") from e

            if response.status_code == 404:
                raise EnrichmentError(f"Repository not found: {owner}/{repo}")
            if response.status_code == 403:
                raise EnrichmentError("GitHub API rate limit exceeded. Set GITHUB_TOKEN env var.")
            if response.status_code != 200:
                raise EnrichmentError(f"GitHub API error: {response.status_code}")

            repo_data = response.json()
            has_tests, has_ci = await self._inspect_contents(client, headers, owner, repo)

        license_info = repo_data.get("license") or {}

        return GitHubData(
            repo_url=f"https://github.com/{owner}/{repo}",
            stars=repo_data.get("stargazers_count") or 0,
            forks=repo_data.get("forks_count") or 0,
            open_issues=repo_data.get("open_issues_count") or 0,
            last_commit_date=repo_data.get("pushed_at") or repo_data.get("updated_at") or "",
            created_at=repo_data.get("created_at") or "",
            language=repo_data.get("language") or "Unknown",
            license=license_info.get("spdx_id") or None,
            has_tests=has_tests,
            has_ci=has_ci,
            readme=repo_data.get("description") or None,
        )

    async def _inspect_contents(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        owner: str,
        repo: str,
    ) -> tuple[bool, bool]:
        """Look at the repository root for test and CI markers."""
        try:
            response = await client.get(
                f"{self.api_base}/repos/{owner}/{repo}/contents", headers=headers
            )
            if response.status_code != 200:
                return False, False

            file_names = [entry["name"].lower() for entry in response.json()]
            has_tests = detect_tests(file_names)
            has_ci = any(name in CI_MARKERS for name in file_names)

            # .github only counts when it holds workflows
            if ".github" in file_names and not has_ci:
                workflows = await client.get(
                    f"{self.api_base}/repos/{owner}/{repo}/contents/.github/workflows",
                    headers=headers,
                )
                has_ci = workflows.status_code == 200

            return has_tests, has_ci
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            print(f"  └─ ⚠️  Could not inspect {owner}/{repo} contents: {e}")
            return False, False

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "daily-tools",
        }

        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        return headers
