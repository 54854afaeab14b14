"""Shared helpers for the line-stream parsing stages."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from gainslots.models.config import ParserConfig

NOT_APPLICABLE = {"—", "–", "-", "--", "N/A", ""}


class BaseLineParser:
    """Base class for stages that read values out of classified lines."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def _parse_decimal(self, value: str | None) -> Decimal | None:
        """Parse a currency or summary value, handling $, commas, signs, parens."""
        if value is None or value.strip() in NOT_APPLICABLE:
            return None
        cleaned = value.strip().replace("$", "").replace(",", "")
        # Negative values in parentheses: (1234.56) -> -1234.56
        if cleaned.startswith("(") and cleaned.endswith(")"):
            cleaned = "-" + cleaned[1:-1]
        if cleaned.startswith("+"):
            cleaned = cleaned[1:]
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None

    def _parse_quantity(self, value: str) -> Decimal | None:
        """Parse a share quantity. Quantities are never comma-grouped."""
        try:
            return Decimal(value)
        except InvalidOperation:
            return None

    def _parse_date(self, value: str | None) -> date | None:
        """Parse M/D/YYYY or MM/DD/YYYY."""
        if not value or not value.strip():
            return None
        try:
            return datetime.strptime(value.strip(), "%m/%d/%Y").date()
        except ValueError:
            return None
