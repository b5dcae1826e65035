"""npm registry client for package metadata."""

from urllib.parse import quote

import httpx

from daily_tools.core import EnrichmentError, NpmData, NpmFetcher


class NpmClient(NpmFetcher):
    """Fetch package info and download counts from npm."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout
        self.registry_url = "https://registry.npmjs.org"
        self.api_url = "https://api.npmjs.org"

    async def fetch(self, package_name: str) -> NpmData:
        """Fetch metadata for the latest published version of a package."""
        encoded = quote(package_name.strip(), safe="@")

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(f"{self.registry_url}/{encoded}")
            except httpx.HTTPError as e:
                raise EnrichmentError(f"npm request failed: {e}") from e

            if response.status_code == 404:
                raise EnrichmentError(f"Package not found: {package_name}")
            if response.status_code != 200:
                raise EnrichmentError(f"npm registry error: {response.status_code}")

            package_data = response.json()
            weekly_downloads = await self._weekly_downloads(client, encoded)

        latest = (package_data.get("dist-tags") or {}).get("latest", "unknown")
        version_data = (package_data.get("versions") or {}).get(latest) or {}
        times = package_data.get("time") or {}

        return NpmData(
            package_name=package_name,
            weekly_downloads=weekly_downloads,
            version=latest,
            last_published=times.get(latest) or times.get("modified") or "unknown",
            dependencies=len(version_data.get("dependencies") or {}),
            dev_dependencies=len(version_data.get("devDependencies") or {}),
        )

    async def _weekly_downloads(self, client: httpx.AsyncClient, encoded: str) -> int:
        try:
            response = await client.get(f"{self.api_url}/downloads/point/last-week/{encoded}")
            if response.status_code == 200:
                return int(response.json().get("downloads") or 0)
        except (httpx.HTTPError, ValueError) as e:
            print(f"  └─ ⚠️  Could not read download counts: {e}")
        return 0
