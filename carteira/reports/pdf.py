"""PDF export of the monthly tax report."""

import logging
from pathlib import Path

from fpdf import FPDF

from carteira.models.reports import TaxReport
from carteira.reports.formatting import format_brl
from carteira.reports.tax_report import STATUS_LABELS

logger = logging.getLogger(__name__)

COLUMNS: list[tuple[str, int]] = [
    ("Mês", 42),
    ("Vendas", 30),
    ("Lucro", 28),
    ("Prejuízo", 28),
    ("IR Devido", 28),
    ("Situação", 34),
]


class TaxReportPdfExporter:
    """Writes a TaxReport as a one-page A4 table."""

    def build(self, report: TaxReport) -> FPDF:
        pdf = FPDF(format="A4")
        pdf.add_page()
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(0, 10, f"Relatório de IR - {report.year}", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", size=10)
        pdf.cell(0, 6, f"Total de IR: {format_brl(report.total_tax_due)}", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 6, f"Lucros totais: {format_brl(report.total_profit)}", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 6, f"Prejuízos totais: {format_brl(report.total_loss)}", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 6, f"Resultado líquido: {format_brl(report.net_result)}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

        pdf.set_font("Helvetica", "B", 9)
        for title, width in COLUMNS:
            pdf.cell(width, 7, title, border=1)
        pdf.ln()

        pdf.set_font("Helvetica", size=9)
        for month in report.months:
            values = [
                month.label,
                format_brl(month.total_sales),
                format_brl(month.total_profit),
                format_brl(month.total_loss),
                format_brl(month.tax_due),
                STATUS_LABELS[month.status],
            ]
            for (_, width), value in zip(COLUMNS, values):
                pdf.cell(width, 6, value, border=1)
            pdf.ln()

        pdf.ln(4)
        pdf.set_font("Helvetica", "I", 8)
        pdf.multi_cell(
            0, 5,
            "Este cálculo é uma estimativa. Vendas de ações abaixo de R$ 20.000 por mês "
            "são isentas de IR. Consulte um contador para declaração oficial.",
        )
        return pdf

    def export(self, report: TaxReport, output: Path) -> Path:
        output.parent.mkdir(parents=True, exist_ok=True)
        self.build(report).output(str(output))
        logger.info("Tax report for %d written to %s", report.year, output)
        return output
