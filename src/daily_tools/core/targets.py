"""Locate enrichment lookup targets (GitHub repo, npm package) for a tool."""

import re
from typing import Optional

from daily_tools.core.entities import Tool

GITHUB_REF_PATTERN = re.compile(r"github\.com/([^/\s]+/[^/\s]+)", re.IGNORECASE)
NPM_INSTALL_PATTERN = re.compile(r"npm\s+i(?:nstall)?\s+(?:-g\s+)?(\S+)", re.IGNORECASE)
BUN_ADD_PATTERN = re.compile(r"bun\s+add\s+(\S+)", re.IGNORECASE)


def find_github_url(tool: Tool) -> Optional[str]:
    """Return the repository URL to look up, if the tool mentions one."""
    if tool.github_url and "github.com/" in tool.github_url:
        return tool.github_url

    text = f"{tool.description} {tool.install_command or ''} {tool.source or ''}"
    match = GITHUB_REF_PATTERN.search(text)
    if match:
        owner_repo = re.split(r"[#?]", match.group(1))[0]
        owner_repo = re.sub(r"[^\w\-/.]", "", owner_repo)
        owner_repo = re.sub(r"\.git$", "", owner_repo).rstrip(".")
        return f"https://github.com/{owner_repo}"

    return None


def find_npm_package(tool: Tool) -> Optional[str]:
    """Return the npm package named by an install command, if any."""
    text = f"{tool.install_command or ''} {tool.description}"

    for pattern in (NPM_INSTALL_PATTERN, BUN_ADD_PATTERN):
        match = pattern.search(text)
        if match:
            package = match.group(1).strip("'\"`")
            if package:
                return package

    return None
