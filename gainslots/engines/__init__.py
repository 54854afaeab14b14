"""Assembly and validation engines."""

from gainslots.engines.assembler import AssemblyResult, SectionAssembler
from gainslots.engines.validator import LotValidator

__all__ = [
    "AssemblyResult",
    "LotValidator",
    "SectionAssembler",
]
