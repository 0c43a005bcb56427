"""Upper-case, lower-case and full case folding tables."""

import logging
from typing import Dict, Iterable, List, Mapping, Tuple

from utf8tables.records import CaseFoldingRecord, UnicodeDataRecord

logger = logging.getLogger(__name__)

CaseFolding = Tuple[List[int], List[Tuple[int, ...]]]


def build_case_maps(records: Iterable[UnicodeDataRecord]) -> Tuple[Dict[int, int], Dict[int, int]]:
    """
    Collects the simple upper- and lower-case mappings of UnicodeData.txt.

    Self mappings are implicit and left out.
    """
    upper_case = {}
    lower_case = {}
    for record in records:
        if record.upper is not None and record.upper != record.code:
            upper_case[record.code] = record.upper
        if record.lower is not None and record.lower != record.code:
            lower_case[record.code] = record.lower

    logger.info("%d upper case and %d lower case mappings",
                len(upper_case), len(lower_case))
    return upper_case, lower_case


def build_case_folding(records: Iterable[CaseFoldingRecord],
                       lower_case: Mapping[int, int]) -> CaseFolding:
    """
    Keeps the full (status F) foldings that simple lower-casing does not
    already provide.

    The result is a pair of parallel lists, keys and folded sequences, in
    file order.
    """
    keys = []
    values = []
    for record in records:
        if record.status != 'F':
            continue
        lower = lower_case.get(record.code)
        if lower is not None and (lower,) == record.mapping:
            continue
        keys.append(record.code)
        values.append(record.mapping)

    logger.info("%d full case foldings", len(keys))
    return keys, values
