"""Account and symbol tracking over classified statement lines.

The tracker walks the stream once. A SYMBOL_CANDIDATE only becomes a
SymbolContext when a name-shaped line follows within a short window; the
forward peeks used to confirm a header and to find its disclosure marker never
move the scan position, so a header sitting inside another header's peek
window (interleaved columns) is still discovered on its own turn.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from decimal import Decimal

from gainslots.models.enums import AnomalyKind, DisclosureState, LineTag, ParserState
from gainslots.models.lines import ClassifiedLine
from gainslots.models.lots import ParseAnomaly, SymbolContext, SymbolKey
from gainslots.parsing.base import BaseLineParser
from gainslots.parsing.classifier import (
    account_number,
    is_expanded_marker,
    is_summary_line,
    is_table_header,
)
from gainslots.parsing.states import advance

logger = logging.getLogger(__name__)

_NOT_A_NAME = frozenset({
    LineTag.DISCLOSURE_MARKER,
    LineTag.ACCOUNT_HEADER,
    LineTag.SECTION_BOUNDARY,
    LineTag.WASH_SALE_ADJUSTMENT,
})


@dataclass(frozen=True)
class ScanState:
    """Accumulator threaded through the scan; replaced, never mutated."""

    state: ParserState = ParserState.SCANNING_FOR_SYMBOL
    account: str | None = None
    accounts: tuple[str, ...] = ()
    contexts: tuple[SymbolContext, ...] = ()
    anomalies: tuple[ParseAnomaly, ...] = ()

    def moved_to(self, target: ParserState, **changes) -> "ScanState":
        return replace(self, state=advance(self.state, target), **changes)


@dataclass
class TrackerResult:
    """Everything the tracker learned in one pass."""

    contexts: list[SymbolContext] = field(default_factory=list)
    accounts: list[str] = field(default_factory=list)
    marker_owners: dict[int, SymbolKey] = field(default_factory=dict)
    anomalies: list[ParseAnomaly] = field(default_factory=list)


class SymbolTracker(BaseLineParser):
    """Finds confirmed symbol headers, their printed subtotals and markers."""

    def scan(self, lines: Sequence[ClassifiedLine]) -> TrackerResult:
        scan = ScanState()
        for line in lines:
            scan = self._step(scan, line, lines)

        marker_owners: dict[int, SymbolKey] = {}
        for context in scan.contexts:
            if context.marker_index is not None:
                marker_owners.setdefault(context.marker_index, context.key)

        return TrackerResult(
            contexts=list(scan.contexts),
            accounts=list(scan.accounts),
            marker_owners=marker_owners,
            anomalies=list(scan.anomalies),
        )

    def is_symbol_header(self, lines: Sequence[ClassifiedLine], index: int) -> bool:
        """True if the line at ``index`` is a candidate with a name following it."""
        return (
            lines[index].tag == LineTag.SYMBOL_CANDIDATE
            and self._find_name_line(lines, index) is not None
        )

    def _step(
        self, scan: ScanState, line: ClassifiedLine, lines: Sequence[ClassifiedLine],
    ) -> ScanState:
        if line.tag == LineTag.ACCOUNT_HEADER:
            account = account_number(line.text)
            accounts = scan.accounts
            if account not in accounts:
                accounts = accounts + (account,)
            return replace(scan, account=account, accounts=accounts)

        if line.tag != LineTag.SYMBOL_CANDIDATE:
            return scan

        scan = scan.moved_to(ParserState.CONFIRMING_SYMBOL)
        name_line = self._find_name_line(lines, line.index)
        if name_line is None:
            logger.debug("Line %d: %r is not a symbol header", line.index, line.stripped)
            anomaly = ParseAnomaly(
                kind=AnomalyKind.FALSE_SYMBOL,
                line_index=line.index,
                message=f"symbol-shaped line {line.stripped!r} has no security name",
            )
            return scan.moved_to(
                ParserState.SCANNING_FOR_SYMBOL, anomalies=scan.anomalies + (anomaly,),
            )

        scan = scan.moved_to(ParserState.AWAITING_MARKER_OR_NEXT_SYMBOL)
        context = self._build_context(scan, line, name_line, lines)
        logger.debug(
            "Line %d: symbol %s (%s), summary=%s, disclosure=%s, marker=%s",
            line.index, context.symbol, context.name, context.summary_quantity,
            context.disclosure.value, context.marker_index,
        )
        return scan.moved_to(
            ParserState.SCANNING_FOR_SYMBOL, contexts=scan.contexts + (context,),
        )

    def _find_name_line(
        self, lines: Sequence[ClassifiedLine], index: int,
    ) -> ClassifiedLine | None:
        end = min(index + 1 + self.config.name_lookahead, len(lines))
        for candidate in lines[index + 1:end]:
            # A date row inside the window means we are looking at lot data.
            if candidate.tag == LineTag.DATE_LOT_START:
                return None
            if self._is_name_shaped(candidate):
                return candidate
        return None

    def _is_name_shaped(self, line: ClassifiedLine) -> bool:
        text = line.stripped
        if not text or text[0].isdigit():
            return False
        if len(text) <= self.config.min_name_length:
            return False
        if not any(ch.isalpha() for ch in text):
            return False
        if line.tag in _NOT_A_NAME or is_table_header(text):
            return False
        return True

    def _build_context(
        self,
        scan: ScanState,
        header: ClassifiedLine,
        name_line: ClassifiedLine,
        lines: Sequence[ClassifiedLine],
    ) -> SymbolContext:
        symbol = header.stripped
        quantity = cost_basis = proceeds = None
        peek_from = name_line.index + 1

        summary = self._next_non_blank(lines, peek_from)
        if summary is not None and is_summary_line(summary.text):
            quantity, cost_basis, proceeds = self._parse_summary(summary.text)
            peek_from = summary.index + 1

        disclosure, marker_index, detail_index = self._peek_disclosure(
            lines, header.index, peek_from,
        )
        occurrence = sum(
            1 for c in scan.contexts if c.account == scan.account and c.symbol == symbol
        )
        return SymbolContext(
            account=scan.account,
            symbol=symbol,
            name=name_line.stripped,
            header_index=header.index,
            name_index=name_line.index,
            occurrence=occurrence,
            summary_quantity=quantity,
            summary_cost_basis=cost_basis,
            summary_proceeds=proceeds,
            disclosure=disclosure,
            marker_index=marker_index,
            detail_index=detail_index,
        )

    def _next_non_blank(
        self, lines: Sequence[ClassifiedLine], start: int,
    ) -> ClassifiedLine | None:
        for line in lines[start:]:
            if line.stripped:
                return line
        return None

    def _parse_summary(
        self, text: str,
    ) -> tuple[Decimal | None, Decimal | None, Decimal | None]:
        """Split ``60.0000 $25,967.06 $28,983.84 ...`` into quantity, cost, proceeds."""
        tokens = text.split()
        quantity = self._parse_decimal(tokens[0])
        cost_basis = self._parse_decimal(tokens[1]) if len(tokens) > 1 else None
        proceeds = self._parse_decimal(tokens[2]) if len(tokens) > 2 else None
        return quantity, cost_basis, proceeds

    def _peek_disclosure(
        self, lines: Sequence[ClassifiedLine], header_index: int, start: int,
    ) -> tuple[DisclosureState, int | None, int | None]:
        """Look forward for the first marker, header, inline lot row or boundary.

        Returns (disclosure state, marker index, detail start index).
        """
        limit = min(header_index + self.config.marker_window, len(lines))
        for k in range(start, limit):
            line = lines[k]
            if line.tag == LineTag.DISCLOSURE_MARKER:
                if is_expanded_marker(line.text):
                    return DisclosureState.EXPANDED, k, k + 1
                return DisclosureState.COLLAPSED, k, None
            if line.tag == LineTag.SYMBOL_CANDIDATE and self.is_symbol_header(lines, k):
                return DisclosureState.PENDING, None, None
            if line.tag == LineTag.DATE_LOT_START:
                return DisclosureState.EXPANDED, None, k
            if line.tag in (LineTag.ACCOUNT_HEADER, LineTag.SECTION_BOUNDARY):
                return DisclosureState.ABSENT, None, None
        return DisclosureState.ABSENT, None, None
