"""Validation report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from gainslots.parsing.statement import ParseResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ValidationReportGenerator:
    """Renders the per-symbol reconciliation of a parse as plain text."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def summary_rows(self, result: ParseResult) -> list[dict]:
        rows = []
        for key, lot_set in result.lot_sets.items():
            printed = lot_set.context.summary_quantity
            rows.append({
                "label": key.label(),
                "name": lot_set.context.name,
                "lots": len(lot_set.lots),
                "printed": "n/a" if printed is None else str(printed),
                "actual": str(lot_set.aggregate_quantity),
                "status": result.report.status_of(key).value,
            })
        return rows

    def render(self, result: ParseResult, show_anomalies: bool = True) -> str:
        template = self.env.get_template("validation.txt")
        return template.render(
            report=result.report,
            rows=self.summary_rows(result),
            accounts=result.accounts,
            lot_count=result.lot_count,
            show_anomalies=show_anomalies,
        )
