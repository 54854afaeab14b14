"""Line classification for flattened realized-gains statement text.

Each line gets exactly one tag from a pure pattern test with no lookahead.
Lines that merely look like a ticker are still tagged SYMBOL_CANDIDATE here;
the tracker decides whether they head a real symbol section.
"""

import re
from collections.abc import Sequence

from gainslots.models.enums import LineTag
from gainslots.models.lines import ClassifiedLine

ACCOUNT_PATTERN = re.compile(r"\bAccount\b.*?(?<!\d)(\d{8})(?!\d)")
HIDE_MARKER = "Hide lot details"
SHOW_MARKER = "Show lot details"
SECTION_TITLES = frozenset({
    "STOCKS, OPTIONS, AND ETFS",
    "BROKERED CDS, BONDS",
    "MUTUAL FUNDS",
})
TOTAL_PATTERN = re.compile(r"^Total(?:\s*$|\s+[\d$(+\-]|\s+for\b)")
DATE_START_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}")
WASH_SALE_PATTERN = re.compile(r"^(?:[+\-]\$|[+\-]\d*\.\d)")
SYMBOL_PATTERN = re.compile(r"^[A-Z]{1,5}(?: [A-Z])?$")

QUANTITY_LINE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)\s+")
SUMMARY_LINE_PATTERN = re.compile(r"^(\d[\d,]*(?:\.\d+)?)\s+\$")
PAGE_DIVIDER_PATTERN = re.compile(r"^--\s*\d+\s+of\s+\d+\s*--$")
TABLE_HEADER_PHRASES = (
    "Date sold",
    "Date acquired",
    "Dateacquired",
    "Cost basis method",
    "Cost basismethod",
    "Total cost",
    "Short-term",
    "Long-term",
)
NOTICE_PHRASES = ("wash sale", "disallowed", "more information")


def classify(text: str) -> LineTag:
    """Tag a single line. First matching rule wins."""
    stripped = text.strip()
    if ACCOUNT_PATTERN.search(stripped):
        return LineTag.ACCOUNT_HEADER
    if HIDE_MARKER in text or SHOW_MARKER in text:
        return LineTag.DISCLOSURE_MARKER
    if stripped in SECTION_TITLES or TOTAL_PATTERN.match(stripped):
        return LineTag.SECTION_BOUNDARY
    if DATE_START_PATTERN.match(stripped):
        return LineTag.DATE_LOT_START
    if WASH_SALE_PATTERN.match(stripped):
        return LineTag.WASH_SALE_ADJUSTMENT
    if SYMBOL_PATTERN.match(stripped):
        return LineTag.SYMBOL_CANDIDATE
    return LineTag.NOISE


def classify_lines(lines: Sequence[str]) -> list[ClassifiedLine]:
    """Classify every line, keeping its offset in the sequence."""
    return [
        ClassifiedLine(index=i, text=text, tag=classify(text))
        for i, text in enumerate(lines)
    ]


def account_number(text: str) -> str | None:
    match = ACCOUNT_PATTERN.search(text.strip())
    return match.group(1) if match else None


def is_expanded_marker(text: str) -> bool:
    return HIDE_MARKER in text


def is_quantity_line(text: str) -> bool:
    """Amounts line of a lot record: a bare decimal followed by whitespace."""
    return QUANTITY_LINE_PATTERN.match(text.strip()) is not None


def is_summary_line(text: str) -> bool:
    return SUMMARY_LINE_PATTERN.match(text.strip()) is not None


def is_table_header(text: str) -> bool:
    stripped = text.strip()
    if PAGE_DIVIDER_PATTERN.match(stripped):
        return True
    return any(phrase in stripped for phrase in TABLE_HEADER_PHRASES)


def is_preamble_notice(text: str) -> bool:
    """Informational text printed between a marker and its first lot row."""
    lowered = text.lower()
    return any(phrase in lowered for phrase in NOTICE_PHRASES)
