"""Validation report models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from gainslots.models.enums import ValidationStatus
from gainslots.models.lots import ParseAnomaly, SymbolKey


class SymbolDiff(BaseModel):
    key: SymbolKey
    status: ValidationStatus
    expected: Decimal | None
    actual: Decimal
    difference: Decimal | None
    lot_count: int = 0
    proceeds_difference: Decimal | None = None


class ValidationReport(BaseModel):
    """Per-parse reconciliation of lot quantities against printed subtotals."""

    total_symbols: int = 0
    matched_count: int = 0
    mismatched_count: int = 0
    missing_count: int = 0
    unverified_count: int = 0
    matched_keys: list[SymbolKey] = Field(default_factory=list)
    diffs: list[SymbolDiff] = Field(default_factory=list)
    anomalies: list[ParseAnomaly] = Field(default_factory=list)

    @property
    def has_discrepancies(self) -> bool:
        """True if any symbol failed to reconcile or lacks lot detail."""
        return self.mismatched_count > 0 or self.missing_count > 0

    def status_of(self, key: SymbolKey) -> ValidationStatus:
        """Status of a validated symbol. Raises KeyError for keys never validated."""
        for diff in self.diffs:
            if diff.key == key:
                return diff.status
        if key in self.matched_keys:
            return ValidationStatus.MATCHED
        raise KeyError(key)
