"""Quick-check character classes for the four normalization forms."""

import logging
from typing import AbstractSet, Dict, Iterable, List, Set

from utf8tables.ranges import Range, compile_ranges, render_ranges
from utf8tables.records import DerivedPropertyRecord, UnicodeDataRecord

logger = logging.getLogger(__name__)

FORMS = ('NFC', 'NFKC', 'NFD', 'NFKD')
# Anything but Yes may need normalization
TRIGGER_VALUES = ('M', 'N')

__all__ = ['FORMS', 'combining_codepoints', 'quick_check_ranges',
           'build_quick_checks', 'render_quick_checks']


def combining_codepoints(records: Iterable[UnicodeDataRecord]) -> Set[int]:
    """Codepoints with a non-zero canonical combining class."""
    return {record.code for record in records if record.combining > 0}


def quick_check_ranges(properties: Iterable[DerivedPropertyRecord], form: str,
                       combining: AbstractSet[int]) -> List[Range]:
    if form not in FORMS:
        raise ValueError(f"unknown normalization form: {form}")
    prop = f"{form}_QC"
    triggers = [(p.first, p.last) for p in properties
                if p.property == prop and p.value in TRIGGER_VALUES]
    return compile_ranges(triggers + list(combining))


def build_quick_checks(properties: Iterable[DerivedPropertyRecord],
                       combining: AbstractSet[int]) -> Dict[str, List[Range]]:
    """
    Compiles the trigger ranges of every normalization form, plus the
    standalone ``combining`` class used to detect strings needing canonical
    reordering.
    """
    properties = [p for p in properties if p.property.endswith('_QC')]
    checks = {}
    for form in FORMS:
        checks[form] = quick_check_ranges(properties, form, combining)
        logger.info("%s quick check: %d ranges", form, len(checks[form]))
    checks['combining'] = compile_ranges(combining)
    logger.info("combining check: %d ranges", len(checks['combining']))
    return checks


def render_quick_checks(checks: Dict[str, List[Range]],
                        escaped: bool = False) -> Dict[str, str]:
    return {name: render_ranges(ranges, escaped) for name, ranges in checks.items()}
