"""Validator: reconciles extracted lot quantities with printed subtotals."""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from gainslots.models.enums import DisclosureState, ValidationStatus
from gainslots.models.lots import ParseAnomaly, SymbolKey, SymbolLotSet
from gainslots.models.reports import SymbolDiff, ValidationReport

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = Decimal("0.0001")


class LotValidator:
    """Classifies every symbol as matched, mismatched, missing or unverified."""

    def __init__(self, tolerance: Decimal = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance

    def validate(
        self,
        lot_sets: Mapping[SymbolKey, SymbolLotSet],
        anomalies: Iterable[ParseAnomaly] = (),
    ) -> ValidationReport:
        report = ValidationReport(
            total_symbols=len(lot_sets), anomalies=list(anomalies),
        )
        for key, lot_set in lot_sets.items():
            diff = self.check(key, lot_set)
            if diff.status == ValidationStatus.MATCHED:
                report.matched_count += 1
                report.matched_keys.append(key)
                continue
            if diff.status == ValidationStatus.MISMATCHED:
                report.mismatched_count += 1
            elif diff.status == ValidationStatus.MISSING:
                report.missing_count += 1
            else:
                report.unverified_count += 1
            logger.warning(
                "%s %s: printed %s, reconstructed %s (%d lot(s))",
                key.label(), diff.status.value, diff.expected, diff.actual, diff.lot_count,
            )
            report.diffs.append(diff)
        return report

    def check(self, key: SymbolKey, lot_set: SymbolLotSet) -> SymbolDiff:
        """Classify a single lot set."""
        context = lot_set.context
        expected = context.summary_quantity
        actual = lot_set.aggregate_quantity
        difference = expected - actual if expected is not None else None

        proceeds_difference = None
        summed_proceeds = lot_set.aggregate_proceeds
        if context.summary_proceeds is not None and summed_proceeds is not None:
            proceeds_difference = context.summary_proceeds - summed_proceeds

        if not lot_set.lots and context.disclosure in (
            DisclosureState.COLLAPSED, DisclosureState.ABSENT,
        ):
            status = ValidationStatus.MISSING
        elif expected is None:
            status = ValidationStatus.UNVERIFIED
        elif abs(expected - actual) <= self.tolerance:
            status = ValidationStatus.MATCHED
        elif actual == 0 and expected > 0:
            status = ValidationStatus.MISSING
        else:
            status = ValidationStatus.MISMATCHED

        return SymbolDiff(
            key=key,
            status=status,
            expected=expected,
            actual=actual,
            difference=difference,
            lot_count=len(lot_set.lots),
            proceeds_difference=proceeds_difference,
        )
