"""Enumerations for gainslots."""

from enum import StrEnum


class LineTag(StrEnum):
    SYMBOL_CANDIDATE = "SYMBOL_CANDIDATE"
    DISCLOSURE_MARKER = "DISCLOSURE_MARKER"
    DATE_LOT_START = "DATE_LOT_START"
    WASH_SALE_ADJUSTMENT = "WASH_SALE_ADJUSTMENT"
    ACCOUNT_HEADER = "ACCOUNT_HEADER"
    SECTION_BOUNDARY = "SECTION_BOUNDARY"
    NOISE = "NOISE"


class DisclosureState(StrEnum):
    EXPANDED = "EXPANDED"
    COLLAPSED = "COLLAPSED"
    ABSENT = "ABSENT"
    PENDING = "PENDING"  # another header crossed before any marker


class ParserState(StrEnum):
    SCANNING_FOR_SYMBOL = "SCANNING_FOR_SYMBOL"
    CONFIRMING_SYMBOL = "CONFIRMING_SYMBOL"
    AWAITING_MARKER_OR_NEXT_SYMBOL = "AWAITING_MARKER_OR_NEXT_SYMBOL"
    EXTRACTING_LOT_BLOCK = "EXTRACTING_LOT_BLOCK"
    RESYNCING = "RESYNCING"


class ValidationStatus(StrEnum):
    MATCHED = "MATCHED"
    MISMATCHED = "MISMATCHED"
    MISSING = "MISSING"
    UNVERIFIED = "UNVERIFIED"


class AnomalyKind(StrEnum):
    MALFORMED_RECORD = "MALFORMED_RECORD"
    TRUNCATED_RECORD = "TRUNCATED_RECORD"
    UNMATCHED_WASH_SALE = "UNMATCHED_WASH_SALE"
    FALSE_SYMBOL = "FALSE_SYMBOL"
    UNATTRIBUTED_BLOCK = "UNATTRIBUTED_BLOCK"
