"""Lot ledger export: one row per reconstructed lot, as CSV or JSON."""

import csv
import io
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from gainslots.exceptions import ExportError
from gainslots.parsing.statement import ParseResult

CSV_COLUMNS = [
    "Account Number",
    "Symbol",
    "Investment Name",
    "Date Sold",
    "Date Acquired",
    "Event",
    "Cost Basis Method",
    "Quantity",
    "Total Cost",
    "Proceeds",
    "Short Term Gain/Loss",
    "Long Term Gain/Loss",
    "Total Gain/Loss",
    "Wash Sale Disallowed",
    "Source Lines",
]


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that serializes Decimal as string and dates as ISO."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def _fmt(value: Decimal | date | None) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class LedgerExporter:
    """Serializes a ParseResult's lots for downstream import."""

    def rows(self, result: ParseResult) -> list[list[str]]:
        rows: list[list[str]] = []
        for key, lot in result.lots():
            context = result.lot_sets[key].context
            rows.append([
                key.account or "",
                key.symbol,
                context.name,
                _fmt(lot.disposal_date),
                _fmt(lot.acquisition_date),
                lot.event,
                lot.cost_basis_method,
                _fmt(lot.quantity),
                _fmt(lot.cost_basis),
                _fmt(lot.proceeds),
                _fmt(lot.short_term_gain),
                _fmt(lot.long_term_gain),
                _fmt(lot.total_gain),
                _fmt(lot.wash_sale_disallowed),
                f"{lot.start_index}-{lot.end_index}",
            ])
        return rows

    def to_csv(self, result: ParseResult) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        writer.writerows(self.rows(result))
        return buffer.getvalue()

    def to_records(self, result: ParseResult) -> list[dict[str, Any]]:
        """Group lots under their symbol, with the reconciliation status."""
        records: list[dict[str, Any]] = []
        for key, lot_set in result.lot_sets.items():
            context = lot_set.context
            records.append({
                "account": key.account,
                "symbol": key.symbol,
                "occurrence": key.occurrence,
                "name": context.name,
                "disclosure": context.disclosure.value,
                "printed_quantity": context.summary_quantity,
                "reconstructed_quantity": lot_set.aggregate_quantity,
                "status": result.report.status_of(key).value,
                "lots": [
                    lot.model_dump(exclude={"start_index", "end_index"})
                    | {"source_lines": [lot.start_index, lot.end_index]}
                    for lot in lot_set.lots
                ],
            })
        return records

    def to_json(self, result: ParseResult) -> str:
        return json.dumps(self.to_records(result), indent=2, cls=_DecimalEncoder)

    def write_csv(self, result: ParseResult, destination: Path) -> Path:
        try:
            destination.write_text(self.to_csv(result), encoding="utf-8")
        except OSError as exc:
            raise ExportError(str(destination), str(exc)) from exc
        return destination

    def write_json(self, result: ParseResult, output_dir: Path, stem: str) -> Path:
        """Write ``<stem>_lots.json`` into ``output_dir``, never overwriting."""
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            out_path = output_dir / f"{stem}_lots.json"
            counter = 2
            while out_path.exists():
                out_path = output_dir / f"{stem}_lots_{counter}.json"
                counter += 1
            out_path.write_text(self.to_json(result), encoding="utf-8")
        except OSError as exc:
            raise ExportError(str(output_dir), str(exc)) from exc
        return out_path
