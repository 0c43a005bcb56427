import logging

import pytest

# -----------------------------------------------------------
# Sample input files, trimmed copies of the real databases
# -----------------------------------------------------------

UNICODE_DATA = """\
0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;
0061;LATIN SMALL LETTER A;Ll;0;L;;;;;N;;;0041;;0041
00A8;DIAERESIS;Sk;0;ON;<compat> 0020 0308;;;;N;SPACING DIAERESIS;;;;
00C0;LATIN CAPITAL LETTER A WITH GRAVE;Lu;0;L;0041 0300;;;;N;LATIN CAPITAL LETTER A GRAVE;;;00E0;
00C2;LATIN CAPITAL LETTER A WITH CIRCUMFLEX;Lu;0;L;0041 0302;;;;N;LATIN CAPITAL LETTER A CIRCUMFLEX;;;00E2;
00C5;LATIN CAPITAL LETTER A WITH RING ABOVE;Lu;0;L;0041 030A;;;;N;LATIN CAPITAL LETTER A RING;;;00E5;
00DF;LATIN SMALL LETTER SHARP S;Ll;0;L;;;;;N;;;;;
00E0;LATIN SMALL LETTER A WITH GRAVE;Ll;0;L;0061 0300;;;;N;LATIN SMALL LETTER A GRAVE;;00C0;;00C0
0300;COMBINING GRAVE ACCENT;Mn;230;NSM;;;;;N;NON-SPACING GRAVE;;;;
0301;COMBINING ACUTE ACCENT;Mn;230;NSM;;;;;N;NON-SPACING ACUTE;;;;
0302;COMBINING CIRCUMFLEX ACCENT;Mn;230;NSM;;;;;N;NON-SPACING CIRCUMFLEX;;;;
0308;COMBINING DIAERESIS;Mn;230;NSM;;;;;N;NON-SPACING DIAERESIS;;;;
030A;COMBINING RING ABOVE;Mn;230;NSM;;;;;N;NON-SPACING RING ABOVE;;;;
0340;COMBINING GRAVE TONE MARK;Mn;230;NSM;0300;;;;N;NON-SPACING GRAVE TONE MARK;;;;
0344;COMBINING GREEK DIALYTIKA TONOS;Mn;230;NSM;0308 0301;;;;N;GREEK NON-SPACING DIAERESIS TONOS;;;;
0958;DEVANAGARI LETTER QA;Lo;0;L;0915 093C;;;;N;;;;;
1EA6;LATIN CAPITAL LETTER A WITH CIRCUMFLEX AND GRAVE;Lu;0;L;00C2 0300;;;;N;;;;1EA7;
1FED;GREEK DIALYTIKA AND VARIA;Sk;0;ON;00A8 0300;;;;N;;;;;
212B;ANGSTROM SIGN;Lu;0;L;00C5;;;;N;ANGSTROM UNIT;;;00E5;
AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;
D7A3;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;
FB01;LATIN SMALL LIGATURE FI;Ll;0;L;<compat> 0066 0069;;;;N;;;;;
"""

CASE_FOLDING = """\
# CaseFolding-15.0.0.txt
#
# <code>; <status>; <mapping>; # <name>

0041; C; 0061; # LATIN CAPITAL LETTER A
00C0; C; 00E0; # LATIN CAPITAL LETTER A WITH GRAVE
00C5; C; 00E5; # LATIN CAPITAL LETTER A WITH RING ABOVE
00DF; F; 0073 0073; # LATIN SMALL LETTER SHARP S
0130; F; 0069 0307; # LATIN CAPITAL LETTER I WITH DOT ABOVE
0130; T; 0069; # LATIN CAPITAL LETTER I WITH DOT ABOVE
1E9E; F; 0073 0073; # LATIN CAPITAL LETTER SHARP S
1E9E; S; 00DF; # LATIN CAPITAL LETTER SHARP S
212B; C; 00E5; # ANGSTROM SIGN
FB01; F; 0066 0069; # LATIN SMALL LIGATURE FI
this is not a record
"""

COMPOSITION_EXCLUSIONS = """\
# CompositionExclusions-15.0.0.txt
# ================================================
# (1) Script Specifics
0958    #  DEVANAGARI LETTER QA
# ================================================
# (4) Non-Starter Decompositions
# 0344          COMBINING GREEK DIALYTIKA TONOS
# Total code points: 1
"""

DERIVED_NORMALIZATION_PROPS = """\
# DerivedNormalizationProps-15.0.0.txt
00A0          ; FC_NFKC; 0020 # Zs       NO-BREAK SPACE
0340..0341    ; Full_Composition_Exclusion # Mn   [2] COMBINING GRAVE TONE MARK..COMBINING ACUTE TONE MARK
00C0..00C5    ; NFD_QC; N # L&   [6] LATIN CAPITAL LETTER A WITH GRAVE..LATIN CAPITAL LETTER A WITH RING ABOVE
0340..0341    ; NFD_QC; N # Mn   [2] COMBINING GRAVE TONE MARK..COMBINING ACUTE TONE MARK
AC00..D7A3    ; NFD_QC; N # Lo [11172] HANGUL SYLLABLE GA..HANGUL SYLLABLE HIH
0340..0341    ; NFC_QC; N # Mn   [2] COMBINING GRAVE TONE MARK..COMBINING ACUTE TONE MARK
0300..0304    ; NFC_QC; M # Mn   [5] COMBINING GRAVE ACCENT..COMBINING MACRON
00A8          ; NFKD_QC; N # Sk       DIAERESIS
00A8          ; NFKC_QC; N # Sk       DIAERESIS
0300..0304    ; NFKC_QC; M # Mn   [5] COMBINING GRAVE ACCENT..COMBINING MACRON
"""

CHARSET_MAP = """\
#
#    Name:     cp1252 to Unicode table
#
0x41\t0x0041\t#LATIN CAPITAL LETTER A
0x80\t0x20AC\t#EURO SIGN
0x81\t\t#UNDEFINED
0x8140\t0x3000\t#IDEOGRAPHIC SPACE
"""

BESTFIT = """\
CODEPAGE 1252\t; Windows Latin 1
CPINFO 1 0x3f 0x003f
MBTABLE 2
0x41\t0x0041\t;Latin Capital Letter A
0x80\t0x20ac\t;Euro Sign
WCTABLE 4
0x0041\t0x41\t;Latin Capital Letter A
0x00a0\t0x20\t;No-Break Space
0x0100\t0x41\t;Latin Capital Letter A With Macron
0x3000\t0x8140\t;Ideographic Space
ENDCODEPAGE
0x0042\t0x42\t;after the end marker
"""

TRANSLIT = """\
# Transliterations of Unicode characters
00A0\t \t# NO-BREAK SPACE
00A9\t(C)\t# COPYRIGHT SIGN
00C6\tAE\t# LATIN CAPITAL LETTER AE
2026\t...\t# HORIZONTAL ELLIPSIS
"""


def lines(text):
    return text.splitlines(keepends=True)


@pytest.fixture
def ucd_dir(tmp_path):
    """A directory holding the four UCD files the compiler reads."""
    path = tmp_path / 'ucd'
    path.mkdir()
    (path / 'UnicodeData.txt').write_text(UNICODE_DATA, encoding='utf-8')
    (path / 'CaseFolding.txt').write_text(CASE_FOLDING, encoding='utf-8')
    (path / 'CompositionExclusions.txt').write_text(COMPOSITION_EXCLUSIONS, encoding='utf-8')
    (path / 'DerivedNormalizationProps.txt').write_text(DERIVED_NORMALIZATION_PROPS, encoding='utf-8')
    return path


@pytest.fixture
def map_dir(tmp_path):
    """Charset maps and bestfit tables, plus files that must be ignored."""
    path = tmp_path / 'maps'
    path.mkdir()
    (path / 'CP1252').write_text(CHARSET_MAP, encoding='latin-1')
    (path / 'bestfit1252.txt').write_text(BESTFIT, encoding='latin-1')
    (path / 'README.txt').write_text('0x41\t0x0041\n', encoding='latin-1')
    (path / 'bestfit.txt').write_text(BESTFIT, encoding='latin-1')
    (path / 'subdir').mkdir()
    return path


@pytest.fixture
def translit_def(tmp_path):
    path = tmp_path / 'translit.def'
    path.write_text(TRANSLIT, encoding='utf-8')
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() configures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
