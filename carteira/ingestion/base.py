"""Base adapter interface and shared record parsing for data ingestion."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from carteira.models.enums import OperationType
from carteira.models.portfolio import AssetPosition, Operation

# Accepted column names, Portuguese first (as exported by the web app)
POSITION_FIELDS: dict[str, tuple[str, ...]] = {
    "ticker": ("ticker", "ativo", "codigo"),
    "asset_class": ("classe", "asset_class", "class"),
    "quantity": ("quantidade", "quantity", "qtd"),
    "average_price": ("preco_medio", "average_price", "pm"),
    "current_price": ("cotacao_atual", "current_price", "cotacao"),
    "target_percentage": ("percentual_ideal", "target_percentage", "meta"),
    "sector": ("setor", "sector"),
    "broker": ("corretora", "broker"),
    "name": ("nome", "name"),
}

OPERATION_FIELDS: dict[str, tuple[str, ...]] = {
    "asset_id": ("asset_id", "ativo", "ticker"),
    "operation_type": ("tipo", "operation_type", "type"),
    "quantity": ("quantidade", "quantity", "qtd"),
    "price": ("preco", "price", "preco_unitario"),
    "operation_date": ("data", "operation_date", "date"),
    "id": ("id",),
    "fees": ("taxas", "fees"),
    "notes": ("observacoes", "notes"),
}

_OPERATION_TYPES = {
    "buy": OperationType.BUY,
    "compra": OperationType.BUY,
    "c": OperationType.BUY,
    "sell": OperationType.SELL,
    "venda": OperationType.SELL,
    "v": OperationType.SELL,
}

DEFAULT_ASSET_CLASS = "Ação"


@dataclass
class LoadResult:
    """Bundles the output from an adapter's parse method."""

    source: str
    positions: list[AssetPosition] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.positions) + len(self.operations)

    @property
    def skipped_count(self) -> int:
        return len(self.errors)


class BaseAdapter(ABC):
    """Abstract base class for all ingestion adapters."""

    @abstractmethod
    def parse(self, file_path: Path) -> LoadResult:
        """Parse a file and return a LoadResult with typed models."""
        ...

    def validate(self, data: LoadResult) -> list[str]:
        """Cross-record checks. Returns a list of validation error messages."""
        errors: list[str] = []
        seen: set[str] = set()
        for position in data.positions:
            if position.ticker in seen:
                errors.append(f"Duplicate position for {position.ticker}")
            seen.add(position.ticker)

        total_target = sum(
            (p.target_percentage for p in data.positions if p.target_percentage),
            Decimal("0"),
        )
        if total_target > 100:
            errors.append(f"Target percentages add up to {total_target}%, above 100%")
        return errors


# --- Record parsing ---


def parse_decimal(value: object) -> Decimal | None:
    """Parse numbers written either as ``1234.56`` or pt-BR ``1.234,56``."""
    if value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value))
    text = str(value).strip().replace("R$", "").replace(" ", "")
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}") from None


def parse_date(value: object) -> date:
    """Parse ISO (``2025-03-10``) or Brazilian (``10/03/2025``) dates."""
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"not a date: {value!r}")


def _pick(record: dict, aliases: tuple[str, ...]) -> object:
    lowered = {str(k).strip().lower(): v for k, v in record.items()}
    for alias in aliases:
        value = lowered.get(alias)
        if value not in (None, ""):
            return value
    return None


def is_operation_record(record: dict) -> bool:
    return _pick(record, OPERATION_FIELDS["operation_type"]) is not None


def position_from_record(record: dict) -> AssetPosition:
    """Build an AssetPosition, upper-casing the ticker.

    Raises:
        ValueError: On a missing ticker, non-positive quantity or bad numbers.
    """
    ticker = str(_pick(record, POSITION_FIELDS["ticker"]) or "").strip().upper()
    quantity = parse_decimal(_pick(record, POSITION_FIELDS["quantity"])) or Decimal("0")
    if not ticker or quantity <= 0:
        raise ValueError("invalid ticker or zero quantity")

    return AssetPosition(
        ticker=ticker,
        asset_class=str(_pick(record, POSITION_FIELDS["asset_class"]) or DEFAULT_ASSET_CLASS),
        quantity=quantity,
        average_price=parse_decimal(_pick(record, POSITION_FIELDS["average_price"])) or Decimal("0"),
        current_price=parse_decimal(_pick(record, POSITION_FIELDS["current_price"])),
        target_percentage=parse_decimal(_pick(record, POSITION_FIELDS["target_percentage"])),
        sector=_optional_str(_pick(record, POSITION_FIELDS["sector"])),
        broker=_optional_str(_pick(record, POSITION_FIELDS["broker"])),
        name=_optional_str(_pick(record, POSITION_FIELDS["name"])),
    )


def operation_from_record(record: dict) -> Operation:
    """Build an Operation. Quantity and price positivity is left to the tax engine.

    Raises:
        ValueError: On unknown operation types or unparseable fields.
    """
    asset_id = str(_pick(record, OPERATION_FIELDS["asset_id"]) or "").strip()
    if not asset_id:
        raise ValueError("missing asset")

    raw_type = str(_pick(record, OPERATION_FIELDS["operation_type"]) or "").strip().lower()
    if raw_type not in _OPERATION_TYPES:
        raise ValueError(f"unknown operation type: {raw_type!r}")

    quantity = parse_decimal(_pick(record, OPERATION_FIELDS["quantity"]))
    price = parse_decimal(_pick(record, OPERATION_FIELDS["price"]))
    if quantity is None or price is None:
        raise ValueError("quantity and price are required")

    return Operation(
        asset_id=asset_id.upper(),
        ticker=asset_id.upper(),
        operation_type=_OPERATION_TYPES[raw_type],
        quantity=quantity,
        price=price,
        operation_date=parse_date(_pick(record, OPERATION_FIELDS["operation_date"])),
        id=_optional_str(_pick(record, OPERATION_FIELDS["id"])),
        fees=parse_decimal(_pick(record, OPERATION_FIELDS["fees"])) or Decimal("0"),
        notes=_optional_str(_pick(record, OPERATION_FIELDS["notes"])),
    )


def _optional_str(value: object) -> str | None:
    return str(value).strip() if value not in (None, "") else None
