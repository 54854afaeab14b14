"""Data models for gainslots."""

from gainslots.models.config import ParserConfig
from gainslots.models.enums import (
    AnomalyKind,
    DisclosureState,
    LineTag,
    ParserState,
    ValidationStatus,
)
from gainslots.models.lines import ClassifiedLine, Line
from gainslots.models.lots import (
    LotBlock,
    LotRecord,
    ParseAnomaly,
    SymbolContext,
    SymbolKey,
    SymbolLotSet,
)
from gainslots.models.reports import SymbolDiff, ValidationReport

__all__ = [
    "AnomalyKind",
    "ClassifiedLine",
    "DisclosureState",
    "Line",
    "LineTag",
    "LotBlock",
    "LotRecord",
    "ParseAnomaly",
    "ParserConfig",
    "ParserState",
    "SymbolContext",
    "SymbolDiff",
    "SymbolKey",
    "SymbolLotSet",
    "ValidationReport",
    "ValidationStatus",
]
