"""Realized gains/losses statement parser: the five-stage pipeline facade."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from gainslots.engines.assembler import SectionAssembler
from gainslots.engines.validator import LotValidator
from gainslots.exceptions import UnrecognizedFormatError
from gainslots.models.config import ParserConfig
from gainslots.models.enums import LineTag
from gainslots.models.lines import ClassifiedLine
from gainslots.models.lots import (
    LotBlock,
    LotRecord,
    SymbolContext,
    SymbolKey,
    SymbolLotSet,
)
from gainslots.models.reports import ValidationReport
from gainslots.parsing.classifier import classify_lines, is_expanded_marker
from gainslots.parsing.extractor import LotBlockExtractor
from gainslots.parsing.tracker import SymbolTracker, TrackerResult

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Bundles the output of one parse."""

    lot_sets: dict[SymbolKey, SymbolLotSet]
    report: ValidationReport
    accounts: list[str] = field(default_factory=list)
    contexts: list[SymbolContext] = field(default_factory=list)
    blocks: list[LotBlock] = field(default_factory=list)

    def lots(self) -> list[tuple[SymbolKey, LotRecord]]:
        """Every reconstructed lot with its symbol key, in statement order."""
        return [
            (key, lot)
            for key, lot_set in self.lot_sets.items()
            for lot in lot_set.lots
        ]

    @property
    def lot_count(self) -> int:
        return sum(len(s.lots) for s in self.lot_sets.values())


class RealizedGainsParser:
    """Reconstructs per-symbol tax lots from flattened statement text.

    Steps:
    1. Classify every line
    2. Track accounts, confirmed symbol headers, printed subtotals and markers
    3. Extract a lot block after each "Hide lot details" marker and at each
       directly-inline detail start
    4. Attribute blocks to symbols
    5. Reconcile lot quantities against the printed subtotals
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.tracker = SymbolTracker(self.config)
        self.extractor = LotBlockExtractor(self.config)
        self.assembler = SectionAssembler(self.config)
        self.validator = LotValidator(self.config.quantity_tolerance)

    def parse_text(self, text: str) -> ParseResult:
        return self.parse(text.splitlines())

    def parse(self, lines: Sequence[str]) -> ParseResult:
        """Parse an ordered sequence of statement lines.

        Raises:
            UnrecognizedFormatError: the input is empty or carries no account
                or symbol header at all.
        """
        if not lines:
            raise UnrecognizedFormatError(0)

        classified = classify_lines(lines)
        tracked = self.tracker.scan(classified)
        if not tracked.contexts and not tracked.accounts:
            raise UnrecognizedFormatError(len(lines))

        blocks = self._extract_blocks(classified, tracked)
        assembly = self.assembler.assemble(tracked.contexts, blocks, tracked.marker_owners)

        anomalies = list(tracked.anomalies)
        for block in blocks:
            anomalies.extend(block.anomalies)
        anomalies.extend(assembly.anomalies)
        anomalies.sort(key=lambda a: a.line_index)

        report = self.validator.validate(assembly.lot_sets, anomalies)
        result = ParseResult(
            lot_sets=assembly.lot_sets,
            report=report,
            accounts=tracked.accounts,
            contexts=tracked.contexts,
            blocks=blocks,
        )
        logger.info(
            "Parsed %d line(s): %d symbol(s), %d lot(s), %d matched, %d mismatched, %d missing",
            len(lines), report.total_symbols, result.lot_count,
            report.matched_count, report.mismatched_count, report.missing_count,
        )
        return result

    def _extract_blocks(
        self, lines: Sequence[ClassifiedLine], tracked: TrackerResult,
    ) -> list[LotBlock]:
        starts: dict[int, int | None] = {}
        for line in lines:
            if line.tag == LineTag.DISCLOSURE_MARKER and is_expanded_marker(line.text):
                starts[line.index + 1] = line.index
        for context in tracked.contexts:
            if context.marker_index is None and context.detail_index is not None:
                starts.setdefault(context.detail_index, None)

        return [
            self.extractor.extract_block(lines, start, marker_index=marker)
            for start, marker in sorted(starts.items())
        ]
