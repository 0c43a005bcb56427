"""
Legacy charset, bestfit and transliteration tables.

Unlike the UCD tables these are byte-keyed from the start: the source side
of a charset map is a raw 1 or 2 byte code.
"""

import logging
import re
from typing import Dict, Iterable

from utf8tables.codec import encode
from utf8tables.records import BestFitRecord, CharsetRecord, TranslitRecord

logger = logging.getLogger(__name__)

BESTFIT_NAME_RE = re.compile(r'^(bestfit\d+)\.txt$')

__all__ = ['BESTFIT_NAME_RE', 'code_to_bytes', 'is_charset_map_name',
           'build_charset_map', 'build_bestfit_map', 'build_translit_map']


def code_to_bytes(code: int) -> bytes:
    """A charset code as its 1 or 2 byte big-endian sequence."""
    if code > 0xffff:
        raise ValueError(f"up to 2 byte code is supported: 0x{code:x}")
    if code > 0xff:
        return bytes((code >> 8, code & 0xff))
    return bytes((code,))


def is_charset_map_name(name: str) -> bool:
    """Vendor charset maps are the extension-less files of a map directory."""
    return '.' not in name


def _store(table, key, value, what):
    if key in table and table[key] != value:
        logger.warning("duplicate %s source %s: %r replaced by %r",
                       what, key.hex(), table[key], value)
    table[key] = value


def build_charset_map(records: Iterable[CharsetRecord]) -> Dict[bytes, bytes]:
    """Maps raw charset codes to the UTF-8 encoding of their codepoint."""
    charmap = {} #type: Dict[bytes, bytes]
    for record in records:
        _store(charmap, code_to_bytes(record.code), encode(record.codepoint),
               'charset')
    return charmap


def build_bestfit_map(records: Iterable[BestFitRecord]) -> Dict[bytes, bytes]:
    """Maps UTF-8 encoded codepoints to their best fitting codepage bytes."""
    charmap = {} #type: Dict[bytes, bytes]
    for record in records:
        _store(charmap, encode(record.codepoint), record.value, 'bestfit')
    return charmap


def build_translit_map(records: Iterable[TranslitRecord]) -> Dict[bytes, str]:
    charmap = {} #type: Dict[bytes, str]
    for record in records:
        _store(charmap, encode(record.codepoint), record.replacement,
               'translit')
    return charmap
