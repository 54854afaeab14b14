"""End-to-end tests for the realized gains statement parser."""

from datetime import date
from decimal import Decimal

import pytest

from gainslots.exceptions import UnrecognizedFormatError
from gainslots.models.enums import AnomalyKind, ValidationStatus
from gainslots.models.lots import SymbolKey
from gainslots.parsing.statement import RealizedGainsParser

ACCOUNT = "68411173"


class TestRealizedGainsParser:
    def setup_method(self):
        self.parser = RealizedGainsParser()

    def test_single_expanded_symbol_matches(self, brk_b_lines):
        result = self.parser.parse(brk_b_lines)
        key = SymbolKey(ACCOUNT, "BRK B")
        assert list(result.lot_sets) == [key]
        lot_set = result.lot_sets[key]
        assert len(lot_set.lots) == 14
        assert lot_set.aggregate_quantity == Decimal("60.0000")
        assert result.report.status_of(key) == ValidationStatus.MATCHED
        assert result.report.matched_count == 1
        assert result.report.diffs == []
        assert not result.report.has_discrepancies

    def test_interleaved_blocks_follow_their_markers(self, interleaved_lines):
        result = self.parser.parse(interleaved_lines)
        dia = result.lot_sets[SymbolKey(ACCOUNT, "DIA")]
        qqq = result.lot_sets[SymbolKey(ACCOUNT, "QQQ")]
        assert [lot.quantity for lot in qqq.lots] == [Decimal("7.0000")]
        assert [lot.quantity for lot in dia.lots] == [Decimal("5.0000")]
        assert dia.lots[0].acquisition_date == date(2023, 4, 20)
        assert result.report.matched_count == 2

    def test_collapsed_symbol_is_missing(self, collapsed_lines):
        result = self.parser.parse(collapsed_lines)
        report = result.report
        assert report.missing_count == 1
        diff = report.diffs[0]
        assert diff.key == SymbolKey(ACCOUNT, "TSLA")
        assert diff.status == ValidationStatus.MISSING
        assert diff.expected == Decimal("12.0000")
        assert diff.actual == Decimal("0")
        assert diff.difference == Decimal("12.0000")
        assert report.has_discrepancies

    def test_mixed_statement(self, statement_lines):
        result = self.parser.parse(statement_lines)
        assert result.accounts == [ACCOUNT]
        assert result.lot_count == 3
        report = result.report
        assert (report.total_symbols, report.matched_count, report.missing_count) == (3, 2, 1)
        assert report.status_of(SymbolKey(ACCOUNT, "MSFT")) == ValidationStatus.MISSING

        aapl = result.lot_sets[SymbolKey(ACCOUNT, "AAPL")]
        assert [lot.quantity for lot in aapl.lots] == [Decimal("6.0000"), Decimal("4.0000")]
        assert aapl.lots[1].wash_sale_disallowed == Decimal("12.34")
        assert aapl.lots[1].disposal_date == date(2025, 1, 8)

    def test_inline_lots_without_marker(self, statement_lines):
        result = self.parser.parse(statement_lines)
        vti = result.lot_sets[SymbolKey(ACCOUNT, "VTI")]
        assert len(vti.lots) == 1
        assert vti.lots[0].start_index == 23
        assert vti.lots[0].short_term_gain == Decimal("90.00")

    def test_lots_in_statement_order(self, statement_lines):
        result = self.parser.parse(statement_lines)
        assert [key.symbol for key, _ in result.lots()] == ["AAPL", "AAPL", "VTI"]

    def test_parse_text(self, statement_lines):
        result = self.parser.parse_text("\n".join(statement_lines))
        assert result.lot_count == 3

    def test_parsing_is_idempotent(self, statement_lines):
        first = self.parser.parse(statement_lines)
        second = self.parser.parse(list(statement_lines))
        assert first.lot_sets == second.lot_sets
        assert first.report.model_dump() == second.report.model_dump()

    def test_quantity_is_conserved(self, statement_lines, interleaved_lines, brk_b_lines):
        for lines in (statement_lines, interleaved_lines, brk_b_lines):
            result = self.parser.parse(lines)
            extracted = sum((b.quantity for b in result.blocks), Decimal("0"))
            attributed = sum((s.aggregate_quantity for s in result.lot_sets.values()), Decimal("0"))
            assert extracted == attributed

    def test_matched_sets_sum_to_printed_quantity(self, statement_lines, interleaved_lines, brk_b_lines):
        tolerance = Decimal("0.0001")
        matched = 0
        for lines in (statement_lines, interleaved_lines, brk_b_lines):
            result = self.parser.parse(lines)
            for key, lot_set in result.lot_sets.items():
                if result.report.status_of(key) != ValidationStatus.MATCHED:
                    continue
                matched += 1
                total = sum((lot.quantity for lot in lot_set.lots), Decimal("0"))
                assert abs(total - lot_set.context.summary_quantity) <= tolerance
        assert matched > 0

    def test_anomalies_reported_in_line_order(self, make_record):
        lines = [
            "Brokerage Account - 68411173*",
            "AAPL",
            "APPLE INC",
            "3.0000 $30.00 $36.00",
            "Hide lot details",
            "01/08/2025 08/15/2023 Sell First in,",
            "first out (FIFO)",
            "amounts unavailable",
            *make_record("01/08/2025", "09/15/2023", "1.0000", "10.00", "12.00", "2.00"),
            "USD",
            "01/09/2025 Sell",
        ]
        result = self.parser.parse(lines)
        kinds = [a.kind for a in result.report.anomalies]
        assert kinds == [AnomalyKind.MALFORMED_RECORD, AnomalyKind.FALSE_SYMBOL]
        diff = result.report.diffs[0]
        assert diff.status == ValidationStatus.MISMATCHED
        assert diff.difference == Decimal("2.0000")

    def test_tolerance(self, make_record):
        lines = [
            "AAPL",
            "APPLE INC",
            "1.0000 $10.00 $12.00",
            "Hide lot details",
            *make_record("01/08/2025", "08/15/2023", "0.99995", "10.00", "12.00", "2.00"),
        ]
        result = self.parser.parse(lines)
        assert result.report.matched_count == 1

    @pytest.mark.parametrize("lines", [[], ["Nothing to see here", "just prose"]])
    def test_unrecognized_format(self, lines):
        with pytest.raises(UnrecognizedFormatError) as exc_info:
            self.parser.parse(lines)
        assert exc_info.value.line_count == len(lines)

    def test_account_without_symbols_is_not_an_error(self):
        result = self.parser.parse(["Brokerage Account - 68411173*", "No realized gains"])
        assert result.lot_sets == {}
        assert result.accounts == [ACCOUNT]
        assert result.report.total_symbols == 0

    def test_info_summary_logged(self, caplog, statement_lines):
        with caplog.at_level("INFO", logger="gainslots.parsing.statement"):
            self.parser.parse(statement_lines)
        assert "3 symbol(s), 3 lot(s), 2 matched" in caplog.text
