"""Parser state transition table."""

from gainslots.exceptions import IllegalTransitionError
from gainslots.models.enums import ParserState

TRANSITIONS: dict[ParserState, frozenset[ParserState]] = {
    ParserState.SCANNING_FOR_SYMBOL: frozenset({
        ParserState.SCANNING_FOR_SYMBOL,
        ParserState.CONFIRMING_SYMBOL,
        ParserState.EXTRACTING_LOT_BLOCK,
    }),
    ParserState.CONFIRMING_SYMBOL: frozenset({
        ParserState.SCANNING_FOR_SYMBOL,
        ParserState.AWAITING_MARKER_OR_NEXT_SYMBOL,
    }),
    ParserState.AWAITING_MARKER_OR_NEXT_SYMBOL: frozenset({
        ParserState.SCANNING_FOR_SYMBOL,
    }),
    ParserState.EXTRACTING_LOT_BLOCK: frozenset({
        ParserState.EXTRACTING_LOT_BLOCK,
        ParserState.RESYNCING,
        ParserState.SCANNING_FOR_SYMBOL,
    }),
    ParserState.RESYNCING: frozenset({
        ParserState.EXTRACTING_LOT_BLOCK,
        ParserState.RESYNCING,
        ParserState.SCANNING_FOR_SYMBOL,
    }),
}


def advance(current: ParserState, target: ParserState) -> ParserState:
    """Return ``target`` if the table allows moving there from ``current``."""
    if target not in TRANSITIONS[current]:
        raise IllegalTransitionError(current.value, target.value)
    return target
