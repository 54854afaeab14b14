"""Typer CLI interface for gainslots."""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer

from gainslots.exceptions import LotParseError, UnrecognizedFormatError
from gainslots.models.config import ParserConfig
from gainslots.parsing.statement import ParseResult, RealizedGainsParser

SUPPORTED_EXTS = {".pdf", ".txt"}

app = typer.Typer(
    name="gainslots",
    help="gainslots — Rebuild tax lots from realized gains/losses statements.",
)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """gainslots — Rebuild tax lots from realized gains/losses statements."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_lines(file_path: Path) -> list[str]:
    """Read statement lines from a PDF or an already-extracted text file."""
    from gainslots.parsing.pdf_text import extract_lines, read_text_lines

    if not file_path.exists():
        typer.echo(f"Error: File not found: {file_path}", err=True)
        raise typer.Exit(1)
    ext = file_path.suffix.lower()
    if ext not in SUPPORTED_EXTS:
        typer.echo(
            f"Error: Unsupported file type '{ext}'. Expected a PDF (.pdf) or extracted text (.txt).",
            err=True,
        )
        raise typer.Exit(1)
    try:
        if ext == ".pdf":
            return extract_lines(file_path)
        return read_text_lines(file_path)
    except LotParseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _run_parser(file_path: Path, tolerance: float) -> ParseResult:
    try:
        quantity_tolerance = Decimal(str(tolerance))
    except InvalidOperation:
        typer.echo(f"Error: Invalid tolerance: {tolerance}", err=True)
        raise typer.Exit(1)
    if not quantity_tolerance.is_finite():
        typer.echo(f"Error: Invalid tolerance: {tolerance}", err=True)
        raise typer.Exit(1)
    if quantity_tolerance < 0:
        typer.echo("Error: Tolerance must not be negative", err=True)
        raise typer.Exit(1)

    lines = _load_lines(file_path)
    parser = RealizedGainsParser(ParserConfig(quantity_tolerance=quantity_tolerance))
    try:
        return parser.parse(lines)
    except UnrecognizedFormatError as exc:
        typer.echo(f"Error: {file_path.name}: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def parse(
    file: Path = typer.Argument(..., help="Realized gains/losses statement (.pdf or extracted .txt)"),
    tolerance: float = typer.Option(
        0.0001,
        "--tolerance",
        help="Allowed difference between printed and reconstructed share quantity",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the lot ledger as JSON"),
    csv_path: Path | None = typer.Option(None, "--csv", help="Write the lot ledger to this CSV file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Directory to write <name>_lots.json into",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 2 if any symbol is mismatched or missing",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser decisions"),
) -> None:
    """Parse a realized gains/losses statement and reconcile its lots.

    Every symbol's reconstructed lot quantities are checked against the
    subtotal printed on the statement. Mismatched or missing symbols are
    reported as warnings; use --strict to turn them into a failing exit code.
    """
    from gainslots.reports.ledger_export import LedgerExporter
    from gainslots.reports.validation_report import ValidationReportGenerator

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    result = _run_parser(file, tolerance)
    exporter = LedgerExporter()

    if json_output:
        typer.echo(exporter.to_json(result))
    else:
        typer.echo(ValidationReportGenerator().render(result))

    try:
        if csv_path is not None:
            exporter.write_csv(result, csv_path)
            typer.echo(f"Wrote {result.lot_count} lot(s) to {csv_path}", err=json_output)
        if output is not None:
            out_path = exporter.write_json(result, output, file.stem)
            typer.echo(f"Wrote {out_path}", err=json_output)
    except LotParseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    report = result.report
    if report.has_discrepancies:
        typer.echo(
            f"Warning: {report.mismatched_count} mismatched and {report.missing_count} "
            "missing symbol(s); review before importing.",
            err=True,
        )
        if strict:
            raise typer.Exit(2)


@app.command()
def lots(
    file: Path = typer.Argument(..., help="Realized gains/losses statement (.pdf or extracted .txt)"),
    symbol: str | None = typer.Option(None, "--symbol", "-s", help="Only show lots for this symbol"),
    tolerance: float = typer.Option(0.0001, "--tolerance", help="Quantity reconciliation tolerance"),
) -> None:
    """Show the reconstructed lots as a table."""
    from rich.console import Console
    from rich.table import Table

    result = _run_parser(file, tolerance)
    wanted = symbol.strip().upper() if symbol else None
    rows = [(key, lot) for key, lot in result.lots() if wanted is None or key.symbol == wanted]
    if not rows:
        typer.echo(f"No lots found{f' for {wanted}' if wanted else ''}.")
        raise typer.Exit(0)

    table = Table(title=f"Lots in {file.name}")
    table.add_column("Symbol")
    table.add_column("Sold")
    table.add_column("Acquired")
    table.add_column("Quantity", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Proceeds", justify="right")
    table.add_column("Gain/Loss", justify="right")
    table.add_column("Wash", justify="right")
    for key, lot in rows:
        table.add_row(
            key.label(),
            lot.disposal_date.isoformat() if lot.disposal_date else "",
            lot.acquisition_date.isoformat() if lot.acquisition_date else "",
            str(lot.quantity),
            f"{lot.cost_basis:,.2f}" if lot.cost_basis is not None else "",
            f"{lot.proceeds:,.2f}" if lot.proceeds is not None else "",
            f"{lot.total_gain:,.2f}" if lot.total_gain is not None else "",
            f"{lot.wash_sale_disallowed:,.2f}" if lot.wash_sale_disallowed is not None else "",
        )
    Console().print(table)


if __name__ == "__main__":
    app()
