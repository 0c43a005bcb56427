"""
Line parsers for the Unicode database and charset mapping formats.

Every parser takes an iterable of text lines and lazily yields one typed
record per meaningful line. Lines that do not match the expected format
(comments, blank lines, garbage) are skipped; only failing to read the file
itself is an error, see `read_file_lines`.
"""

import logging
import re
from typing import Iterable, Iterator, NamedTuple, Optional, Tuple, Union

from utf8tables.errors import InputFileError, ReadFileLineError

logger = logging.getLogger(__name__)

# 00C0;LATIN CAPITAL LETTER A WITH GRAVE;Lu;0;L;0041 0300;;;;N;...;;;00E0;
UNICODE_DATA_FIELDS = 15
# 0049; T; 0131; # LATIN CAPITAL LETTER I
CASE_FOLDING_RE = re.compile(r'^([0-9A-F]+); ([CFST]); ([0-9A-F]+(?: [0-9A-F]+)*);')
# 0958    #  DEVANAGARI LETTER QA
# # 0344  COMBINING GREEK DIALYTIKA TONOS
EXCLUSION_RE = re.compile(r'^(?:# )?([0-9A-F]{4,6})\s')
# 0340..0341    ; NFC_QC; N # Mn   [2] COMBINING GRAVE TONE MARK..
CODE_RANGE_RE = re.compile(r'^([0-9A-F]+)(?:\.\.([0-9A-F]+))?$')
# 0x80	0x20AC	#EURO SIGN
CHARSET_RE = re.compile(r'^0x([0-9A-F]+)[ \t]+0x([0-9A-F]+)', re.IGNORECASE)
# 0x00a0	0x20	;No-Break Space
BESTFIT_FIELD_RE = re.compile(r'^(?:0x|[WB])?([0-9A-F]+)$', re.IGNORECASE)
# 00C4	"A	# LATIN CAPITAL LETTER A WITH DIAERESIS
TRANSLIT_RE = re.compile(r'^([0-9A-F]+)\t([^\t]+)\t', re.IGNORECASE)


class UnicodeDataRecord(NamedTuple):
    code: int
    name: str
    combining: int
    # None for a canonical decomposition, the tag without brackets otherwise
    decomposition_tag: Optional[str]
    decomposition: Tuple[int, ...]
    upper: Optional[int]
    lower: Optional[int]


class CaseFoldingRecord(NamedTuple):
    code: int
    status: str
    mapping: Tuple[int, ...]


class DerivedPropertyRecord(NamedTuple):
    first: int
    last: int
    property: str
    value: Optional[str]


class CharsetRecord(NamedTuple):
    code: int
    codepoint: int


class BestFitRecord(NamedTuple):
    codepoint: int
    value: bytes


class TranslitRecord(NamedTuple):
    codepoint: int
    replacement: str


class read_file_lines:
    # Conventionally, a context manager class name is lowercase.
    # pylint: disable=invalid-name,too-few-public-methods
    """Context manager to read a text file line by line.

    ```
    with read_file_lines(filename) as lines:
        for line in lines:
            process(line)
    ```
    is equivalent to
    ```
    with open(filename, encoding='utf-8') as input_file:
        for line in input_file:
            process(line)
    ```
    except that a file that cannot be opened raises InputFileError, and if
    process(line) raises an exception, it is annotated with the file name and
    line number.
    """
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        self.filename = filename
        self.encoding = encoding
        self.line_number = 'entry' #type: Union[int, str]
        self.file = None

    def __enter__(self) -> 'read_file_lines':
        try:
            self.file = open(self.filename, 'r', encoding=self.encoding)
        except OSError as e:
            raise InputFileError(self.filename, e.strerror or str(e)) from e
        return self

    def __iter__(self) -> Iterator[str]:
        assert self.file is not None
        for line_number, content in enumerate(self.file, 1):
            self.line_number = line_number
            yield content
        self.line_number = 'exit'

    def __exit__(self, exc_type, exc_value, exc_traceback) -> None:
        if self.file is not None:
            self.file.close()
        if exc_type is None:
            return
        if isinstance(exc_value, (InputFileError, ReadFileLineError)):
            return
        if isinstance(exc_value, (OSError, UnicodeDecodeError)):
            raise InputFileError(self.filename, str(exc_value)) from exc_value
        if isinstance(exc_value, Exception):
            raise ReadFileLineError(self.filename, self.line_number) \
                from exc_value


def _skipped(kind: str, line: str) -> None:
    line = line.strip()
    if line and not line.startswith('#'):
        logger.debug("skipping malformed %s line: %r", kind, line)


def _hex_list(text: str) -> Tuple[int, ...]:
    return tuple(int(v, 16) for v in text.split())


def parse_unicode_data(lines: Iterable[str]) -> Iterator[UnicodeDataRecord]:
    """Parses UnicodeData.txt."""
    for line in lines:
        data = line.rstrip('\r\n').split(';')
        if len(data) < UNICODE_DATA_FIELDS:
            _skipped('UnicodeData', line)
            continue
        try:
            code = int(data[0], 16)
            combining = int(data[3]) if data[3] else 0

            tag = None
            decomposition = () #type: Tuple[int, ...]
            if data[5]:
                value = data[5]
                if value[0] == '<':
                    tag, value = value.split(None, 1)
                    tag = tag[1:-1]
                decomposition = _hex_list(value)

            upper = int(data[12], 16) if data[12] else None
            lower = int(data[13], 16) if data[13] else None
        except ValueError:
            _skipped('UnicodeData', line)
            continue

        yield UnicodeDataRecord(code, data[1], combining, tag, decomposition,
                                upper, lower)


def parse_case_folding(lines: Iterable[str]) -> Iterator[CaseFoldingRecord]:
    """Parses CaseFolding.txt, all four statuses included."""
    for line in lines:
        m = CASE_FOLDING_RE.match(line)
        if not m:
            _skipped('CaseFolding', line)
            continue
        yield CaseFoldingRecord(int(m.group(1), 16), m.group(2),
                                _hex_list(m.group(3)))


def parse_composition_exclusions(lines: Iterable[str]) -> Iterator[int]:
    """
    Parses CompositionExclusions.txt.

    Codepoints listed behind a ``# `` prefix are derived exclusions
    (singletons and non-starter decompositions) and are returned as well.
    """
    for line in lines:
        m = EXCLUSION_RE.match(line)
        if m:
            yield int(m.group(1), 16)


def parse_derived_properties(lines: Iterable[str]) -> Iterator[DerivedPropertyRecord]:
    """
    Parses DerivedNormalizationProps.txt style files.

    ``value`` is None for binary properties such as Full_Composition_Exclusion.
    """
    for line in lines:
        fields = [f.strip() for f in line.split('#', 1)[0].split(';')]
        if len(fields) < 2 or not fields[1]:
            _skipped('DerivedNormalizationProps', line)
            continue
        m = CODE_RANGE_RE.match(fields[0])
        if not m:
            _skipped('DerivedNormalizationProps', line)
            continue
        first = int(m.group(1), 16)
        last = int(m.group(2), 16) if m.group(2) else first
        value = fields[2] if len(fields) > 2 and fields[2] else None
        yield DerivedPropertyRecord(first, last, fields[1], value)


def parse_charset_map(lines: Iterable[str]) -> Iterator[CharsetRecord]:
    """Parses a vendor charset map (``0x<code> 0x<unicode>`` lines)."""
    for line in lines:
        m = CHARSET_RE.match(line)
        if not m:
            _skipped('charset map', line)
            continue
        code = int(m.group(1), 16)
        if code > 0xffff:
            _skipped('charset map', line)
            continue
        yield CharsetRecord(code, int(m.group(2), 16))


def _bestfit_value(digits: str) -> Optional[bytes]:
    value = int(digits, 16)
    if len(digits) <= 2:
        return bytes((value,))
    if len(digits) == 4:
        return bytes((value >> 8, value & 0xff))
    return None


def parse_bestfit(lines: Iterable[str]) -> Iterator[BestFitRecord]:
    """
    Parses the WCTABLE section of a Windows bestfit file.

    Lines before the ``WCTABLE`` marker are ignored, reading stops at the
    following ``ENDCODEPAGE`` marker.
    """
    lines = iter(lines)
    for line in lines:
        if line.startswith('WCTABLE'):
            break
    else:
        return

    for line in lines:
        if line.startswith('ENDCODEPAGE'):
            break

        fields = line.rstrip().split('\t')
        if len(fields) < 2:
            continue
        key = BESTFIT_FIELD_RE.match(fields[0].strip())
        value = BESTFIT_FIELD_RE.match(fields[1].strip())
        if not key or not value:
            _skipped('bestfit', line)
            continue

        raw = _bestfit_value(value.group(1))
        if raw is None:
            _skipped('bestfit', line)
            continue
        yield BestFitRecord(int(key.group(1), 16), raw)


def parse_translit(lines: Iterable[str]) -> Iterator[TranslitRecord]:
    """Parses a translit.def file (``<hex>\\t<replacement>\\t`` lines)."""
    for line in lines:
        m = TRANSLIT_RE.match(line)
        if not m:
            _skipped('translit', line)
            continue
        yield TranslitRecord(int(m.group(1), 16), m.group(2))
