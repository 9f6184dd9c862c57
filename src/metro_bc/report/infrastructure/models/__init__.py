from .crowd_report_model import CrowdReportModel

__all__ = ["CrowdReportModel"]
