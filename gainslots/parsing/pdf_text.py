"""PDF to line-sequence adapter built on pdfplumber."""

import logging
from pathlib import Path

import pdfplumber

from gainslots.exceptions import PDFParseError

logger = logging.getLogger(__name__)


def extract_lines(file_path: Path) -> list[str]:
    """Extract the text of every page, in order, as one list of lines."""
    lines: list[str] = []
    try:
        with pdfplumber.open(file_path) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                lines.extend(page_text.split("\n"))
            logger.info("Extracted %d line(s) from %d page(s) of %s",
                        len(lines), len(pdf.pages), file_path.name)
    except Exception as exc:  # pdfminer raises its own syntax errors
        raise PDFParseError(str(file_path), str(exc)) from exc

    if not any(line.strip() for line in lines):
        raise PDFParseError(str(file_path), "no extractable text (scanned PDF?)")
    return lines


def read_text_lines(file_path: Path) -> list[str]:
    """Read an already-extracted statement text file."""
    return file_path.read_text(encoding="utf-8").splitlines()
