"""Console output for multalert."""

from .report_printer import ReportPrinter

__all__ = ["ReportPrinter"]
