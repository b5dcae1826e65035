"""Report adapters."""

from daily_tools.adapters.report.markdown_report import MarkdownReportGenerator

__all__ = ["MarkdownReportGenerator"]
