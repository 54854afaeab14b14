"""Shared test fixtures for gainslots."""

from pathlib import Path

import pytest

NA = "—"


def _record(
    sold: str | None,
    acquired: str,
    quantity: str,
    cost: str,
    proceeds: str,
    gain: str,
    method: tuple[str, ...] = ("First in,", "first out (FIFO)"),
    na: str = NA,
) -> list[str]:
    """Lines of one lot record; ``sold=None`` prints only the acquired date."""
    dates = acquired if sold is None else f"{sold} {acquired}"
    return [
        f"{dates} Sell {method[0]}",
        *method[1:],
        f"{quantity} ${cost} ${proceeds} {na} ${gain} ${gain}",
    ]


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def statement_lines() -> list[str]:
    """One account, three symbols: expanded (with wash sale), collapsed, inline."""
    return [
        "Realized gains/losses",
        "Brokerage Account - 68411173*",
        "STOCKS, OPTIONS, AND ETFS",
        "AAPL",
        "APPLE INC",
        f"10.0000 $1,500.00 $2,250.00 {NA} $750.00 $750.00",
        "Hide lot details",
        "Wash sale loss disallowed amounts are shown below the lot they adjust.",
        *_record("01/08/2025", "08/15/2023", "6.0000", "900.00", "1,350.00", "450.00"),
        *_record(None, "11/02/2023", "4.0000", "600.00", "900.00", "300.00"),
        "+$12.34",
        "Total 10.0000 $1,500.00 $2,250.00",
        "MSFT",
        "MICROSOFT CORP",
        f"5.0000 $1,200.00 $2,000.00 {NA} $800.00 $800.00",
        "Show lot details",
        "VTI",
        "VANGUARD TOTAL STOCK MARKET ETF",
        f"3.0000 $600.00 $690.00 $90.00 {NA} $90.00",
        "02/14/2025 01/10/2025 Sell First in,",
        "first out (FIFO)",
        f"3.0000 $600.00 $690.00 $90.00 {NA} $90.00",
        "Total 18.0000 $3,300.00 $4,940.00",
    ]


@pytest.fixture
def brk_b_lines() -> list[str]:
    """A single expanded symbol with 14 lots summing to the printed 60 shares."""
    lines = [
        "Brokerage Account - 68411173*",
        "STOCKS, OPTIONS, AND ETFS",
        "BRK B",
        "BERKSHIRE HATHAWAY INC CL B",
        f"60.0000 $25,967.06 $28,983.84 {NA} $3,016.78 $3,016.78",
        "Hide lot details",
        "Date sold Date acquired Event Cost basis method Quantity Total cost Proceeds",
    ]
    for month in range(1, 14):
        lines += _record(
            "01/08/2025", f"{month % 12 + 1:02d}/15/2022", "4.0000", "1,731.12", "1,932.26", "201.14",
        )
    lines += _record("01/08/2025", "03/01/2023", "8.0000", "3,462.62", "3,864.46", "401.84")
    lines.append("Total 60.0000 $25,967.06 $28,983.84")
    return lines


@pytest.fixture
def interleaved_lines() -> list[str]:
    """Two headers printed before either marker; lot blocks follow in column order."""
    return [
        "Brokerage Account - 68411173*",
        "DIA",
        "SPDR DOW JONES INDUSTRIAL AVERAGE ETF",
        f"5.0000 $1,900.00 $2,100.00 {NA} $200.00 $200.00",
        "QQQ",
        "INVESCO QQQ TRUST SERIES 1",
        f"7.0000 $2,800.00 $3,150.00 {NA} $350.00 $350.00",
        "Hide lot details",
        *_record("12/02/2024", "03/15/2023", "7.0000", "2,800.00", "3,150.00", "350.00"),
        "Hide lot details",
        *_record("12/02/2024", "04/20/2023", "5.0000", "1,900.00", "2,100.00", "200.00"),
    ]


@pytest.fixture
def collapsed_lines() -> list[str]:
    return [
        "Brokerage Account - 68411173*",
        "TSLA",
        "TESLA INC",
        f"12.0000 $2,400.00 $3,000.00 {NA} $600.00 $600.00",
        "Show lot details",
    ]


@pytest.fixture
def statement_file(tmp_path: Path, statement_lines: list[str]) -> Path:
    path = tmp_path / "statement.txt"
    path.write_text("\n".join(statement_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def brk_b_file(tmp_path: Path, brk_b_lines: list[str]) -> Path:
    path = tmp_path / "brk_b.txt"
    path.write_text("\n".join(brk_b_lines) + "\n", encoding="utf-8")
    return path
