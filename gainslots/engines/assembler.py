"""Section assembler: attributes extracted lot blocks to symbol contexts."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from gainslots.models.config import ParserConfig
from gainslots.models.enums import AnomalyKind, DisclosureState
from gainslots.models.lots import (
    LotBlock,
    ParseAnomaly,
    SymbolContext,
    SymbolKey,
    SymbolLotSet,
)

logger = logging.getLogger(__name__)

_ORPHAN_CANDIDATES = frozenset({DisclosureState.PENDING, DisclosureState.EXPANDED})


@dataclass
class AssemblyResult:
    lot_sets: dict[SymbolKey, SymbolLotSet] = field(default_factory=dict)
    anomalies: list[ParseAnomaly] = field(default_factory=list)


class SectionAssembler:
    """Resolves which symbol each lot block belongs to.

    Physical adjacency decides first: a block right after a marker belongs to
    the context that owns that marker, and a markerless block belongs to the
    context whose inline detail starts where the block starts. Blocks left
    over (markers nobody owned, typically from interleaved columns) go to the
    nearest preceding PENDING (or still blockless EXPANDED) context in the
    same account, preferring one whose printed quantity reconciles with the
    block. COLLAPSED and ABSENT contexts never receive lots.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def assemble(
        self,
        contexts: Sequence[SymbolContext],
        blocks: Sequence[LotBlock],
        marker_owners: Mapping[int, SymbolKey],
    ) -> AssemblyResult:
        inline_owners = {
            c.detail_index: c.key
            for c in contexts
            if c.marker_index is None and c.detail_index is not None
        }
        assigned: dict[SymbolKey, LotBlock] = {}
        anomalies: list[ParseAnomaly] = []

        for block in sorted(blocks, key=lambda b: b.start_index):
            if not block.records:
                continue

            owner = self._owner_by_adjacency(block, marker_owners, inline_owners)
            if owner is None:
                owner = self._owner_by_backward_scan(block, contexts, assigned)

            if owner is None or owner in assigned:
                logger.warning(
                    "Lines %d-%d: %d lot record(s) totalling %s could not be attributed",
                    block.start_index, block.end_index, len(block.records), block.quantity,
                )
                anomalies.append(ParseAnomaly(
                    kind=AnomalyKind.UNATTRIBUTED_BLOCK,
                    line_index=block.start_index,
                    message=(
                        f"{len(block.records)} lot record(s) totalling {block.quantity} "
                        "have no owning symbol"
                    ),
                ))
                continue

            logger.debug(
                "Lines %d-%d: %d lot record(s) attributed to %s",
                block.start_index, block.end_index, len(block.records), owner.label(),
            )
            assigned[owner] = block

        lot_sets: dict[SymbolKey, SymbolLotSet] = {}
        for context in contexts:
            block = assigned.get(context.key)
            lots = block.records if block is not None else ()
            lot_sets[context.key] = SymbolLotSet(context=context, lots=lots)
        return AssemblyResult(lot_sets=lot_sets, anomalies=anomalies)

    def _owner_by_adjacency(
        self,
        block: LotBlock,
        marker_owners: Mapping[int, SymbolKey],
        inline_owners: Mapping[int, SymbolKey],
    ) -> SymbolKey | None:
        if block.marker_index is not None:
            return marker_owners.get(block.marker_index)
        return inline_owners.get(block.start_index)

    def _owner_by_backward_scan(
        self,
        block: LotBlock,
        contexts: Sequence[SymbolContext],
        assigned: Mapping[SymbolKey, LotBlock],
    ) -> SymbolKey | None:
        preceding = [c for c in contexts if c.header_index < block.start_index]
        if not preceding:
            return None
        account = preceding[-1].account
        candidates = [
            c for c in reversed(preceding)
            if c.disclosure in _ORPHAN_CANDIDATES
            and c.account == account
            and c.key not in assigned
        ]
        if not candidates:
            return None

        tolerance = self.config.quantity_tolerance
        quantity = block.quantity
        reconciled = [
            c for c in candidates
            if c.summary_quantity is not None
            and abs(c.summary_quantity - quantity) <= tolerance
        ]
        # Candidates are nearest-first, so [0] is the nearest preceding context.
        return (reconciled or candidates)[0].key
