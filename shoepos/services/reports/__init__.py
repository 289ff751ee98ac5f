# shoepos/services/reports/__init__.py
from .report_service import ReportService

__all__ = ["ReportService"]
