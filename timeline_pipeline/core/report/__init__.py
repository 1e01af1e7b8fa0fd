"""
Monthly timeline report module
"""

from .report_window import EmptyDatasetError, ReportWindow
from .timeline_builder import ReportExportError, TimelineTableBuilder

__all__ = ["EmptyDatasetError", "ReportExportError", "ReportWindow", "TimelineTableBuilder"]
