"""Lot block extraction.

A lot record is a fixed-shape group of physical lines:

    01/08/2025 08/15/2023 Sell First in,        <- dates, event, method start
    first out (FIFO)                            <- method continuation
    3.0000 $1,063.95 $1,351.64 — $287.69 $287.69 <- quantity, cost, proceeds, gains

When the cost basis method wraps once more the amounts move to a fourth line.
Wash-sale adjustment lines (``+$12.34``) may follow a record; they annotate
that record and never occupy a record slot.
"""

import logging
import re
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from gainslots.models.enums import AnomalyKind, LineTag, ParserState
from gainslots.models.lines import ClassifiedLine
from gainslots.models.lots import LotBlock, LotRecord, ParseAnomaly
from gainslots.parsing.base import BaseLineParser
from gainslots.parsing.classifier import (
    QUANTITY_LINE_PATTERN,
    is_preamble_notice,
    is_quantity_line,
    is_table_header,
)
from gainslots.parsing.states import advance

logger = logging.getLogger(__name__)

MIN_RECORD_WIDTH = 3
MAX_RECORD_WIDTH = 4

# Lines that end a resync scan without being skipped.
RESYNC_STOPS = frozenset({
    LineTag.DATE_LOT_START,
    LineTag.DISCLOSURE_MARKER,
    LineTag.ACCOUNT_HEADER,
    LineTag.SECTION_BOUNDARY,
    LineTag.SYMBOL_CANDIDATE,
})

FIRST_LINE_PATTERN = re.compile(
    r"^(\d{1,2}/\d{1,2}/\d{4})(?:\s+(\d{1,2}/\d{1,2}/\d{4}))?\s*(.*)$"
)
EVENT_PATTERN = re.compile(
    r"^(Sell|Redemption|Exchange|Transfer|Buy)\b\s*(.*)$", re.IGNORECASE
)


class LotBlockExtractor(BaseLineParser):
    """Consumes consecutive lot records starting at a given offset."""

    def extract_block(
        self,
        lines: Sequence[ClassifiedLine],
        start_index: int,
        marker_index: int | None = None,
    ) -> LotBlock:
        """Extract records from ``start_index`` until a stop condition fires.

        Stop conditions, checked in order at each position: a disclosure
        marker; any line that is neither a lot start nor a wash-sale
        adjustment (noise, table header, divider, section boundary, the next
        symbol). A record whose quantity is on neither its third nor fourth
        line, or whose span runs into the next lot start, is logged and
        skipped; extraction resumes at the next lot start unless a marker,
        account header, section boundary or symbol line comes first.
        """
        total = len(lines)
        state = ParserState.EXTRACTING_LOT_BLOCK
        records: list[LotRecord] = []
        anomalies: list[ParseAnomaly] = []
        last_disposal: date | None = None

        i = self._skip_preamble(lines, start_index)
        while i < total:
            line = lines[i]

            if line.tag == LineTag.DISCLOSURE_MARKER:
                break

            if line.tag == LineTag.WASH_SALE_ADJUSTMENT:
                if records:
                    records[-1] = self._attach_wash_sale(records[-1], line)
                else:
                    logger.warning(
                        "Line %d: wash-sale adjustment %r has no preceding lot record",
                        i, line.stripped,
                    )
                    anomalies.append(ParseAnomaly(
                        kind=AnomalyKind.UNMATCHED_WASH_SALE,
                        line_index=i,
                        message=f"wash-sale adjustment {line.stripped!r} before any lot record",
                    ))
                i += 1
                continue

            if line.tag != LineTag.DATE_LOT_START:
                break

            if i + MIN_RECORD_WIDTH > total:
                logger.warning("Line %d: lot record truncated by end of input", i)
                anomalies.append(ParseAnomaly(
                    kind=AnomalyKind.TRUNCATED_RECORD,
                    line_index=i,
                    message="lot record truncated by end of input",
                ))
                break

            # Markers outrank record-shape heuristics.
            if any(
                other.tag == LineTag.DISCLOSURE_MARKER
                for other in lines[i + 1:i + MIN_RECORD_WIDTH]
            ):
                break

            width = self._record_width(lines, i)
            if width is None:
                state = advance(state, ParserState.RESYNCING)
                resume = self._resync_index(lines, i)
                logger.warning(
                    "Line %d: skipping malformed lot record, resyncing at line %d", i, resume,
                )
                anomalies.append(ParseAnomaly(
                    kind=AnomalyKind.MALFORMED_RECORD,
                    line_index=i,
                    message=f"no quantity line before the next record, resumed at line {resume}",
                ))
                i = resume
                continue

            state = advance(state, ParserState.EXTRACTING_LOT_BLOCK)
            record = self._build_record(lines[i:i + width], last_disposal)
            last_disposal = record.disposal_date
            records.append(record)
            i += width

        advance(state, ParserState.SCANNING_FOR_SYMBOL)
        return LotBlock(
            records=tuple(records),
            start_index=start_index,
            end_index=max(i - 1, start_index),
            marker_index=marker_index,
            anomalies=tuple(anomalies),
        )

    def _skip_preamble(self, lines: Sequence[ClassifiedLine], start: int) -> int:
        """Skip notices and column headers printed above the first lot row."""
        i = start
        while i < len(lines):
            line = lines[i]
            if line.tag != LineTag.NOISE:
                break
            text = line.stripped
            if text and not is_preamble_notice(text) and not is_table_header(text):
                break
            i += 1
        return i

    def _record_width(self, lines: Sequence[ClassifiedLine], start: int) -> int | None:
        """Width of the record at ``start``, or None if it is malformed.

        Continuation lines are never lot starts or markers; a date row inside
        the span means the record was cut short.
        """
        for width in (MIN_RECORD_WIDTH, MAX_RECORD_WIDTH):
            end = start + width - 1
            if end >= len(lines):
                return None
            if any(
                line.tag in (LineTag.DATE_LOT_START, LineTag.DISCLOSURE_MARKER)
                for line in lines[start + 1:end + 1]
            ):
                return None
            if is_quantity_line(lines[end].text):
                return width
        return None

    def _resync_index(self, lines: Sequence[ClassifiedLine], start: int) -> int:
        """Index of the first line after ``start`` where extraction can resume."""
        for k in range(start + 1, len(lines)):
            if lines[k].tag in RESYNC_STOPS:
                return k
        return len(lines)

    def _build_record(
        self, group: Sequence[ClassifiedLine], last_disposal: date | None,
    ) -> LotRecord:
        # Always matches: the classifier only tags DATE_LOT_START on a leading date.
        first = FIRST_LINE_PATTERN.match(group[0].stripped)
        if first.group(2):
            disposal = self._parse_date(first.group(1))
            acquisition = self._parse_date(first.group(2))
        else:
            # A lone date is the acquisition date; the sale date is shared
            # with the record above it.
            disposal = last_disposal
            acquisition = self._parse_date(first.group(1))

        event = "Sell"
        method_head = first.group(3).strip()
        event_match = EVENT_PATTERN.match(method_head)
        if event_match:
            event = event_match.group(1).capitalize()
            method_head = event_match.group(2)
        method_parts = [method_head] + [line.stripped for line in group[1:-1]]
        cost_basis_method = " ".join(part for part in method_parts if part)

        amounts_text = group[-1].stripped
        quantity_match = QUANTITY_LINE_PATTERN.match(amounts_text)
        quantity = self._parse_quantity(quantity_match.group(1))
        tokens = amounts_text.split()[1:]
        cost_basis = self._parse_decimal(tokens[0]) if len(tokens) > 0 else None
        proceeds = self._parse_decimal(tokens[1]) if len(tokens) > 1 else None

        gains = tokens[2:]
        short_term = long_term = total_gain = None
        if len(gains) >= 3:
            short_term = self._parse_decimal(gains[0])
            long_term = self._parse_decimal(gains[1])
            total_gain = self._parse_decimal(gains[2])
        elif gains:
            total_gain = self._parse_decimal(gains[-1])

        return LotRecord(
            acquisition_date=acquisition,
            disposal_date=disposal,
            event=event,
            cost_basis_method=cost_basis_method,
            quantity=quantity,
            cost_basis=cost_basis,
            proceeds=proceeds,
            short_term_gain=short_term,
            long_term_gain=long_term,
            total_gain=total_gain,
            start_index=group[0].index,
            end_index=group[-1].index,
        )

    def _attach_wash_sale(self, record: LotRecord, line: ClassifiedLine) -> LotRecord:
        amount = self._parse_decimal(line.stripped.split()[0])
        if amount is None:
            return record
        current = record.wash_sale_disallowed or Decimal("0")
        return record.model_copy(update={"wash_sale_disallowed": current + amount})
