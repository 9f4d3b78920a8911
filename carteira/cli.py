"""Typer CLI interface for Carteira."""

from pathlib import Path

import typer

from carteira.config import Settings
from carteira.exceptions import CarteiraError
from carteira.logging_utils import configure_logging

app = typer.Typer(
    name="carteira",
    help="Carteira: rebalanceamento de aportes e apuração mensal de IR.",
)

UPDATE_PRICES_HELP = "Refresh current prices through the price cache before computing"
DB_HELP = "Path to the SQLite price cache"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Carteira: rebalanceamento de aportes e apuração mensal de IR."""
    settings = Settings.load()
    configure_logging(settings.log_level, verbose=verbose)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(file_path: Path):
    """Parse an input file, printing skipped rows as warnings."""
    from carteira.ingestion import get_adapter

    adapter = get_adapter(file_path)
    result = adapter.parse(file_path)
    for message in result.errors + adapter.validate(result):
        typer.echo(f"Warning: {message}", err=True)
    return result


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def _open_price_cache(settings: Settings, db: Path | None, ttl_minutes: int | None = None):
    """Build a brapi-backed PriceCache over the SQLite store. Returns (cache, conn)."""
    from datetime import timedelta

    from carteira.db import PriceCacheRepository, create_schema
    from carteira.prices import BrapiQuoteProvider, PriceCache

    db_path = db or settings.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db_path)
    cache = PriceCache(
        store=PriceCacheRepository(conn),
        provider=BrapiQuoteProvider(base_url=settings.brapi_url, token=settings.brapi_token),
        ttl=timedelta(minutes=ttl_minutes) if ttl_minutes else settings.price_ttl,
    )
    return cache, conn


def _with_current_prices(positions, settings: Settings, db: Path | None):
    """Positions with current_price refreshed from the cache.

    When the upstream fails, prices still fresh in the cache are applied and
    the remaining positions keep the prices from the file.
    """
    from carteira.exceptions import PriceFetchError
    from carteira.prices import apply_prices

    if not positions:
        return positions
    cache, conn = _open_price_cache(settings, db)
    try:
        results = cache.get_prices([p.ticker for p in positions])
    except PriceFetchError as e:
        typer.echo(f"Warning: {e}", err=True)
        results = e.cached_results
    finally:
        conn.close()
    return apply_prices(positions, results)


@app.command()
def rebalance(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Positions file (.json or .csv)"),
    amount: str = typer.Option(..., "--amount", "-a", help="Contribution to allocate, e.g. 1000 or 1.000,00"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    update_prices: bool = typer.Option(False, "--update-prices", help=UPDATE_PRICES_HELP),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
) -> None:
    """Suggest how to split a new contribution across underweight assets."""
    from carteira.engines.rebalance import RebalanceCalculator
    from carteira.ingestion.base import parse_decimal
    from carteira.reports import RebalanceReportGenerator

    try:
        contribution = parse_decimal(amount)
    except ValueError:
        contribution = None
    if contribution is None or not contribution.is_finite():
        typer.echo(f"Error: Invalid amount '{amount}'", err=True)
        raise typer.Exit(1)

    try:
        positions = _load(file).positions
        if update_prices:
            positions = _with_current_prices(positions, ctx.obj or Settings.load(), db)
        plan = RebalanceCalculator().compute_plan(positions, contribution)
    except CarteiraError as e:
        _fail(e)

    if as_json:
        typer.echo(plan.model_dump_json(indent=2))
    else:
        typer.echo(RebalanceReportGenerator().render(plan))


@app.command()
def tax(
    file: Path = typer.Argument(..., help="Operations file (.json or .csv)"),
    year: int = typer.Option(..., "--year", "-y", help="Calendar year to report"),
    pdf: Path | None = typer.Option(None, "--pdf", help="Also export the report as PDF"),
    as_json: bool = typer.Option(False, "--json", help="Print the monthly records as JSON"),
) -> None:
    """Monthly realised gains and estimated tax for a year of operations."""
    from carteira.engines.tax_lots import TaxLotEngine
    from carteira.reports import TaxReportGenerator, TaxReportPdfExporter

    try:
        result = _load(file)
        report = TaxLotEngine().build_report(result.operations, year)
    except CarteiraError as e:
        _fail(e)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        typer.echo(TaxReportGenerator().render(report))

    if pdf is not None:
        TaxReportPdfExporter().export(report, pdf)
        typer.echo(f"PDF written to {pdf}", err=True)


@app.command()
def summary(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Positions file (.json or .csv)"),
    update_prices: bool = typer.Option(False, "--update-prices", help=UPDATE_PRICES_HELP),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
) -> None:
    """Portfolio totals, profit and allocation by asset class."""
    from carteira.engines.portfolio import PortfolioAnalyzer
    from carteira.reports import RebalanceReportGenerator

    try:
        positions = _load(file).positions
        if update_prices:
            positions = _with_current_prices(positions, ctx.obj or Settings.load(), db)
    except CarteiraError as e:
        _fail(e)
    typer.echo(RebalanceReportGenerator().render_summary(PortfolioAnalyzer().summarize(positions)))


@app.command()
def prices(
    ctx: typer.Context,
    tickers: list[str] = typer.Argument(..., help="Tickers to quote, e.g. PETR4 VALE3"),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
    ttl: int | None = typer.Option(None, "--ttl", help="Cache freshness in minutes"),
) -> None:
    """Current prices, served from the local cache while fresh."""
    from rich.console import Console
    from rich.table import Table

    from carteira.exceptions import PriceFetchError
    from carteira.reports.formatting import format_brl

    cache, conn = _open_price_cache(ctx.obj or Settings.load(), db, ttl)
    try:
        results = cache.get_prices(tickers)
    except PriceFetchError as e:
        for r in e.cached_results:
            typer.echo(f"{r.ticker}: {r.price} {r.currency} (cache)", err=True)
        _fail(e)
    finally:
        conn.close()

    table = Table(title="Cotações")
    table.add_column("Ativo")
    table.add_column("Preço", justify="right")
    table.add_column("Moeda")
    table.add_column("Origem")
    for r in results:
        price = format_brl(r.price) if r.currency == "BRL" else f"{r.price} {r.currency}"
        table.add_row(r.ticker, price, r.currency, "cache" if r.cached else "brapi")
    Console().print(table)


if __name__ == "__main__":
    app()
