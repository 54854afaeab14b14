"""Shared test fixtures for PDF parsing tests."""

from pathlib import Path

import pytest
from fpdf import FPDF


def _create_pdf(lines: list[str], tmp_path: Path, filename: str = "test.pdf") -> Path:
    """Create a minimal PDF with one cell per line."""
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=10)
    for line in lines:
        pdf.cell(0, 5, line, new_x="LMARGIN", new_y="NEXT")
    out_path = tmp_path / filename
    pdf.output(str(out_path))
    return out_path


@pytest.fixture()
def statement_pdf(tmp_path: Path, statement_lines: list[str]) -> Path:
    """The shared statement rendered to PDF. Core fonts are latin-1, so the
    not-applicable dash is printed as a hyphen."""
    lines = [line.replace("—", "-") for line in statement_lines]
    return _create_pdf(lines, tmp_path, "realized_gains.pdf")


@pytest.fixture()
def blank_pdf(tmp_path: Path) -> Path:
    pdf = FPDF()
    pdf.add_page()
    out_path = tmp_path / "blank.pdf"
    pdf.output(str(out_path))
    return out_path
