"""Parser tuning knobs."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ParserConfig(BaseModel):
    """Lookahead windows and reconciliation tolerance shared by every stage.

    The defaults were measured against Vanguard "Realized Gains/Losses"
    statements; printed subtotals carry four decimal places, so the quantity
    tolerance sits one place below that.
    """

    model_config = ConfigDict(frozen=True)

    name_lookahead: int = Field(default=4, ge=1)
    min_name_length: int = Field(default=5, ge=0)
    marker_window: int = Field(default=30, ge=1)
    quantity_tolerance: Decimal = Field(default=Decimal("0.0001"), ge=0)
