"""Symbol context, lot record, and lot set models."""

from datetime import date
from decimal import Decimal
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from gainslots.models.enums import AnomalyKind, DisclosureState


class SymbolKey(NamedTuple):
    account: str | None
    symbol: str
    occurrence: int = 0

    def label(self) -> str:
        text = self.symbol if self.account is None else f"{self.account}:{self.symbol}"
        if self.occurrence:
            text += f"#{self.occurrence + 1}"
        return text


class ParseAnomaly(BaseModel):
    """A recoverable irregularity noticed while walking the line stream."""

    model_config = ConfigDict(frozen=True)

    kind: AnomalyKind
    line_index: int
    message: str


class SymbolContext(BaseModel):
    """A confirmed symbol header and everything the tracker learned about it."""

    model_config = ConfigDict(frozen=True)

    account: str | None = None
    symbol: str
    name: str
    header_index: int
    name_index: int
    occurrence: int = 0
    summary_quantity: Decimal | None = None
    summary_cost_basis: Decimal | None = None
    summary_proceeds: Decimal | None = None
    disclosure: DisclosureState
    marker_index: int | None = None
    detail_index: int | None = None

    @property
    def key(self) -> SymbolKey:
        return SymbolKey(self.account, self.symbol, self.occurrence)


class LotRecord(BaseModel):
    """One closed lot, rebuilt from a 3- or 4-line group."""

    model_config = ConfigDict(frozen=True)

    acquisition_date: date | None = None
    disposal_date: date | None = None
    event: str = "Sell"
    cost_basis_method: str = ""
    quantity: Decimal
    cost_basis: Decimal | None = None
    proceeds: Decimal | None = None
    short_term_gain: Decimal | None = None
    long_term_gain: Decimal | None = None
    total_gain: Decimal | None = None
    wash_sale_disallowed: Decimal | None = None
    start_index: int
    end_index: int

    @property
    def width(self) -> int:
        return self.end_index - self.start_index + 1


class LotBlock(BaseModel):
    """A run of consecutive lot records handed from extractor to assembler."""

    model_config = ConfigDict(frozen=True)

    records: tuple[LotRecord, ...] = ()
    start_index: int
    end_index: int
    marker_index: int | None = None
    anomalies: tuple[ParseAnomaly, ...] = ()

    @property
    def quantity(self) -> Decimal:
        return sum((r.quantity for r in self.records), Decimal("0"))


class SymbolLotSet(BaseModel):
    """The lots attributed to one symbol occurrence."""

    model_config = ConfigDict(frozen=True)

    context: SymbolContext
    lots: tuple[LotRecord, ...] = ()

    @property
    def aggregate_quantity(self) -> Decimal:
        return sum((lot.quantity for lot in self.lots), Decimal("0"))

    @property
    def aggregate_proceeds(self) -> Decimal | None:
        values = [lot.proceeds for lot in self.lots if lot.proceeds is not None]
        if not values:
            return None
        return sum(values, Decimal("0"))

    @property
    def aggregate_cost_basis(self) -> Decimal | None:
        values = [lot.cost_basis for lot in self.lots if lot.cost_basis is not None]
        if not values:
            return None
        return sum(values, Decimal("0"))
