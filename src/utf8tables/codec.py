"""Codepoint <-> UTF-8 conversion used by every table builder."""

from typing import Dict, Iterable, Mapping, Sequence, Tuple, Union

from utf8tables.errors import CodepointError

MAX_CODEPOINT = 0x10ffff

__all__ = ['MAX_CODEPOINT', 'encode', 'decode', 'encode_sequence',
           'encode_table']


def encode(ucs: int) -> bytes:
    """
    Converts a codepoint to its UTF-8 byte sequence.

    Surrogate codepoints are encoded like any other value; anything outside
    0..0x10FFFF raises CodepointError instead of being wrapped around.
    """
    if not 0 <= ucs <= MAX_CODEPOINT:
        raise CodepointError(f"codepoint out of range: {ucs:#x}")

    if ucs < 0x80:
        return bytes((ucs,))
    elif ucs < 0x800:
        return bytes((0xc0 | ucs >> 6,
                      0x80 | ucs & 0x3f))
    elif ucs < 0x10000:
        return bytes((0xe0 | ucs >> 12,
                      0x80 | ucs >> 6 & 0x3f,
                      0x80 | ucs & 0x3f))
    else:
        return bytes((0xf0 | ucs >> 18,
                      0x80 | ucs >> 12 & 0x3f,
                      0x80 | ucs >> 6 & 0x3f,
                      0x80 | ucs & 0x3f))


def decode(data: bytes) -> int:
    """
    Converts one UTF-8 byte sequence back to its codepoint.

    The whole of ``data`` must be a single encoded codepoint.
    """
    if not data:
        raise CodepointError("empty byte sequence")

    lead = data[0]
    if lead < 0x80:
        length, ucs = 1, lead
    elif 0xc0 <= lead < 0xe0:
        length, ucs = 2, lead & 0x1f
    elif 0xe0 <= lead < 0xf0:
        length, ucs = 3, lead & 0x0f
    elif 0xf0 <= lead < 0xf8:
        length, ucs = 4, lead & 0x07
    else:
        raise CodepointError(f"invalid lead byte: 0x{lead:02x}")

    if len(data) != length:
        raise CodepointError(
            f"expected {length} bytes after lead 0x{lead:02x}, got {len(data)}")

    for byte in data[1:]:
        if byte & 0xc0 != 0x80:
            raise CodepointError(f"invalid continuation byte: 0x{byte:02x}")
        ucs = ucs << 6 | byte & 0x3f

    if ucs > MAX_CODEPOINT:
        raise CodepointError(f"codepoint out of range: {ucs:#x}")
    return ucs


def encode_sequence(codepoints: Iterable[int]) -> bytes:
    return b''.join(encode(c) for c in codepoints)


TableValue = Union[int, str, bytes, Sequence[int]]


def encode_table(table: Mapping[Union[int, Tuple[int, ...]], TableValue],
                 values: str = 'sequence') -> Dict[bytes, Union[int, str, bytes]]:
    """
    Converts a codepoint-keyed table to the byte-keyed form the runtime loads.

    Keys are single codepoints or codepoint tuples. ``values`` selects how
    values are converted:

    - ``'sequence'``: a tuple of codepoints, concatenated as UTF-8
    - ``'codepoint'``: a single codepoint, encoded as UTF-8
    - ``'raw'``: kept as is (small integers, text, raw bytes)
    """
    result = {}
    for key, value in table.items():
        if isinstance(key, tuple):
            key = encode_sequence(key)
        else:
            key = encode(key)

        if values == 'sequence':
            value = encode_sequence(value)
        elif values == 'codepoint':
            value = encode(value)
        elif values != 'raw':
            raise ValueError(f"unknown value conversion: {values}")
        result[key] = value
    return result
