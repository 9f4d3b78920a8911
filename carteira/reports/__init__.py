"""Report generators."""

from carteira.reports.pdf import TaxReportPdfExporter
from carteira.reports.rebalance_report import RebalanceReportGenerator
from carteira.reports.tax_report import TaxReportGenerator

__all__ = [
    "RebalanceReportGenerator",
    "TaxReportGenerator",
    "TaxReportPdfExporter",
]
