"""Sandbox build adapters."""

from daily_tools.adapters.sandbox.sandbox_builder import (
    BuildResult,
    BuildStatus,
    SandboxBuilder,
    is_safe_install_command,
)

__all__ = ["BuildResult", "BuildStatus", "SandboxBuilder", "is_safe_install_command"]
