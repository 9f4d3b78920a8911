"""Monthly capital-gains report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from carteira.models.enums import MonthlyTaxStatus
from carteira.models.reports import TaxReport
from carteira.reports.formatting import format_brl, format_pct

TEMPLATE_DIR = Path(__file__).parent / "templates"

STATUS_LABELS = {
    MonthlyTaxStatus.EXEMPT: "Isento",
    MonthlyTaxStatus.TAX_DUE: "IR Devido",
    MonthlyTaxStatus.NO_TAX: "Sem IR",
    MonthlyTaxStatus.NO_ACTIVITY: "Sem movimentação",
}


def build_environment() -> Environment:
    env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), keep_trailing_newline=True)
    env.filters["brl"] = format_brl
    env.filters["pct"] = format_pct
    env.filters["status_label"] = lambda status: STATUS_LABELS[status]
    return env


class TaxReportGenerator:
    """Renders the yearly report with one line per month."""

    def __init__(self) -> None:
        self.env = build_environment()

    def render(self, report: TaxReport) -> str:
        template = self.env.get_template("tax_report.txt")
        return template.render(report=report)
