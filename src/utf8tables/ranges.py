"""
Compression of codepoint sets into sorted range lists.

The range list is the canonical form; `render_ranges` turns it into the
body of a regular expression character class for the runtime library.
"""

from typing import Iterable, List, NamedTuple, Tuple, Union

from utf8tables.codec import MAX_CODEPOINT
from utf8tables.errors import CodepointError

CLASS_SPECIALS = '\\]^-'


class Range(NamedTuple):
    lo: int
    hi: int


def _expand(items: Iterable[Union[int, Tuple[int, int]]]) -> Iterable[int]:
    for item in items:
        if isinstance(item, tuple):
            lo, hi = item
            if lo > hi:
                raise ValueError(f"reversed range: {lo:#x}..{hi:#x}")
            yield from range(lo, hi + 1)
        else:
            yield item


def compile_ranges(items: Iterable[Union[int, Tuple[int, int]]]) -> List[Range]:
    """
    Merges codepoints and ``(lo, hi)`` ranges into the minimal list of
    sorted, non-overlapping, non-adjacent ranges covering the same set.
    """
    codepoints = sorted(set(_expand(items)))
    if codepoints and not (0 <= codepoints[0] and codepoints[-1] <= MAX_CODEPOINT):
        bad = codepoints[0] if codepoints[0] < 0 else codepoints[-1]
        raise CodepointError(f"codepoint out of range: {bad:#x}")

    ranges = []
    for c in codepoints:
        if ranges and ranges[-1].hi + 1 == c:
            ranges[-1] = Range(ranges[-1].lo, c)
        else:
            ranges.append(Range(c, c))
    return ranges


def _literal(c: int) -> str:
    char = chr(c)
    return '\\' + char if char in CLASS_SPECIALS else char


def _escaped(c: int) -> str:
    return '\\x{%x}' % c


def render_ranges(ranges: Iterable[Range], escaped: bool = False) -> str:
    """
    Renders a range list as a character class body, without the brackets.

    Runs of three or more codepoints use ``lo-hi``; shorter runs list their
    codepoints. With ``escaped``, codepoints are written as ``\\x{hex}``
    instead of literal characters.
    """
    fmt = _escaped if escaped else _literal
    parts = []
    for r in ranges:
        if r.hi - r.lo >= 2:
            parts.append(fmt(r.lo) + '-' + fmt(r.hi))
        elif r.hi == r.lo + 1:
            parts.append(fmt(r.lo) + fmt(r.hi))
        else:
            parts.append(fmt(r.lo))
    return ''.join(parts)
