"""Line-stream parsing for realized gains/losses statements."""

from gainslots.parsing.classifier import classify, classify_lines
from gainslots.parsing.extractor import LotBlockExtractor
from gainslots.parsing.statement import ParseResult, RealizedGainsParser
from gainslots.parsing.tracker import SymbolTracker, TrackerResult

__all__ = [
    "LotBlockExtractor",
    "ParseResult",
    "RealizedGainsParser",
    "SymbolTracker",
    "TrackerResult",
    "classify",
    "classify_lines",
]
