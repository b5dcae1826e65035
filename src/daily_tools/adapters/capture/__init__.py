"""Capture adapters."""

from daily_tools.adapters.capture.capture import FileCapture, PageCapture, StdinCapture, html_to_text

__all__ = ["FileCapture", "PageCapture", "StdinCapture", "html_to_text"]
