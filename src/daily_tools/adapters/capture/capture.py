"""Capture adapters that supply raw digest text."""

import sys
from pathlib import Path
from typing import Optional, TextIO

import httpx
from bs4 import BeautifulSoup

from daily_tools.core import ContentCapture

HTML_SUFFIXES = {".html", ".htm"}
BLOCK_TAGS = ["p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "br", "tr", "pre", "section"]
MARKDOWN_PREFIXES = {"h1": "# ", "h2": "## ", "h3": "### ", "h4": "#### ", "li": "- "}


def html_to_text(html: str) -> str:
    """Reduce an HTML page to markdown-ish text the extractor understands.

    Headings become ``#`` lines, list items ``-`` bullets, bold text
    ``**bold**`` and inline code backticks. Prefers the page's main
    content container when there is one.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    content = soup.find("main") or soup.find("article") or soup.body or soup

    for tag in content.find_all(list(MARKDOWN_PREFIXES)):
        tag.insert(0, MARKDOWN_PREFIXES[tag.name])
    for tag in content.find_all(["strong", "b"]):
        tag.insert(0, "**")
        tag.append("**")
    for tag in content.find_all("code"):
        if tag.parent is None or tag.parent.name != "pre":
            tag.insert(0, "`")
            tag.append("`")
    for tag in content.find_all(BLOCK_TAGS):
        tag.insert_after("\n")

    lines = (line.strip() for line in content.get_text().splitlines())
    return "\n".join(line for line in lines if line)


class FileCapture(ContentCapture):
    """Read a digest saved to disk (markdown, text or HTML)."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def capture(self) -> str:
        content = self.path.read_text(encoding="utf-8")
        if self.path.suffix.lower() in HTML_SUFFIXES:
            return html_to_text(content)
        return content


class PageCapture(ContentCapture):
    """Fetch a publicly reachable digest page."""

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    async def capture(self) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.url)
            response.raise_for_status()

        if "html" in response.headers.get("content-type", ""):
            return html_to_text(response.text)
        return response.text


class StdinCapture(ContentCapture):
    """Read pasted text until EOF."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    async def capture(self) -> str:
        stream = self.stream or sys.stdin
        return stream.read()
