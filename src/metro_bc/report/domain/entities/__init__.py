from .crowd_level import CrowdLevel, LEVEL_PRECEDENCE
from .report import Report
from .report_filter import ReportFilter, ReportSort

__all__ = ["CrowdLevel", "LEVEL_PRECEDENCE", "Report", "ReportFilter", "ReportSort"]
