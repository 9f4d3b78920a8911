"""Custom exceptions for Carteira."""


class CarteiraError(Exception):
    """Base exception for portfolio computation errors."""


class InvalidInputError(CarteiraError):
    """Raised when calculator input fails a precondition."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid input '{field}': {message}")


class InvalidOperationError(CarteiraError):
    """Raised when a buy/sell operation record is malformed."""

    def __init__(self, operation_ref: str, message: str):
        self.operation_ref = operation_ref
        super().__init__(f"Invalid operation {operation_ref}: {message}")


class PriceFetchError(CarteiraError):
    """Raised when the upstream quote batch fails.

    Prices that were still fresh in the cache before the upstream call are
    kept on ``cached_results`` so callers can show them anyway.
    """

    def __init__(self, tickers: list[str], message: str, cached_results: list | None = None):
        self.tickers = tickers
        self.cached_results = cached_results or []
        super().__init__(f"Price fetch failed for {', '.join(tickers)}: {message}")


class ImportFileError(CarteiraError):
    """Raised when an input file cannot be read or recognised."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Import error from {source}: {message}")
