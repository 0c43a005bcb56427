"""
Combining class, decomposition and composition tables.

Decompositions are stored fully expanded: after `close_decompositions` no
value contains a codepoint that is itself a key of the same table.
"""

import logging
from typing import AbstractSet, Dict, Iterable, List, NamedTuple, Tuple

from utf8tables.errors import CompileError
from utf8tables.records import UnicodeDataRecord

logger = logging.getLogger(__name__)

Decompositions = Dict[int, Tuple[int, ...]]


class DecompositionTables(NamedTuple):
    combining_class: Dict[int, int]
    canonical_decomposition: Decompositions
    compatibility_decomposition: Decompositions
    canonical_composition: Dict[Tuple[int, ...], int]


def close_decompositions(table: Decompositions) -> int:
    """
    Expands every decomposition of ``table`` in place until a full pass
    changes nothing, and returns the number of passes.

    Substitutions read the current state of the table, so an entry rewritten
    earlier in a pass is seen expanded by the entries that follow it.
    """
    passes = 0
    changed = True
    while changed:
        if passes > len(table):
            raise CompileError("decomposition table does not converge, "
                               "it contains a cycle")
        changed = False
        passes += 1
        for code, decomposition in table.items():
            expanded = tuple(c for part in decomposition
                             for c in table.get(part, (part,)))
            if expanded != decomposition:
                table[code] = expanded
                changed = True
    return passes


def build_decompositions(records: Iterable[UnicodeDataRecord],
                         exclusions: AbstractSet[int]) -> DecompositionTables:
    combining_class = {}
    canonical = {} #type: Decompositions
    compatibility = {} #type: Decompositions
    # codepoints whose canonical decomposition may be recomposed
    composable = [] #type: List[int]

    for record in records:
        if record.combining:
            combining_class[record.code] = record.combining

        if not record.decomposition:
            continue

        if record.decomposition_tag is None:
            canonical[record.code] = record.decomposition
            if len(record.decomposition) > 1 and record.code not in exclusions:
                composable.append(record.code)

        compatibility[record.code] = record.decomposition

    passes = close_decompositions(canonical)
    logger.debug("canonical decompositions closed in %d passes", passes)
    passes = close_decompositions(compatibility)
    logger.debug("compatibility decompositions closed in %d passes", passes)

    # The runtime falls back to the canonical table
    for code in [c for c, d in compatibility.items() if canonical.get(c) == d]:
        del compatibility[code]

    composition = {}
    for code in composable:
        decomposition = canonical[code]
        if decomposition in composition:
            logger.warning("U+%04X and U+%04X share the decomposition %s",
                           composition[decomposition], code,
                           ' '.join('%04X' % c for c in decomposition))
        composition[decomposition] = code

    logger.info("%d canonical and %d compatibility decompositions, "
                "%d compositions, %d combining classes",
                len(canonical), len(compatibility), len(composition),
                len(combining_class))
    return DecompositionTables(combining_class, canonical, compatibility,
                               composition)
