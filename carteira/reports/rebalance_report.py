"""Rebalance plan report generator."""

from carteira.models.reports import PortfolioSummary, RebalancePlan
from carteira.reports.tax_report import build_environment


class RebalanceReportGenerator:
    """Renders a contribution plan as a plain-text table."""

    def __init__(self) -> None:
        self.env = build_environment()

    def render(self, plan: RebalancePlan) -> str:
        template = self.env.get_template("rebalance.txt")
        return template.render(plan=plan)

    def render_summary(self, summary: PortfolioSummary) -> str:
        template = self.env.get_template("portfolio_summary.txt")
        return template.render(summary=summary)
