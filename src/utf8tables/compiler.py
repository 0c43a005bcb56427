#!/usr/bin/env python3
"""
Compile the Unicode database and charset mapping files into the lookup
tables of the UTF-8 runtime library.

Sources:
- UCD files: https://www.unicode.org/Public/UNIDATA/
- charset maps: https://www.unicode.org/Public/MAPPINGS/
- bestfit tables: https://www.unicode.org/Public/MAPPINGS/VENDORS/MICSFT/WindowsBestFit/
- translit.def: https://www.gnu.org/software/libiconv/
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from utf8tables.casemaps import build_case_folding, build_case_maps
from utf8tables.charsets import (
    BESTFIT_NAME_RE,
    build_bestfit_map,
    build_charset_map,
    build_translit_map,
    is_charset_map_name,
)
from utf8tables.codec import encode, encode_sequence, encode_table
from utf8tables.decomposition import build_decompositions
from utf8tables.errors import CompileError, InputFileError
from utf8tables.quickcheck import (
    build_quick_checks,
    combining_codepoints,
    render_quick_checks,
)
from utf8tables.records import (
    parse_bestfit,
    parse_case_folding,
    parse_charset_map,
    parse_composition_exclusions,
    parse_derived_properties,
    parse_translit,
    parse_unicode_data,
    read_file_lines,
)
from utf8tables.sink import MemoryTableSink, MsgpackTableSink, TableSink

logger = logging.getLogger(__name__)

UNICODE_DATA = 'UnicodeData.txt'
CASE_FOLDING = 'CaseFolding.txt'
COMPOSITION_EXCLUSIONS = 'CompositionExclusions.txt'
DERIVED_NORMALIZATION_PROPS = 'DerivedNormalizationProps.txt'

# Vendor maps are ASCII, with the odd latin-1 byte in comments
MAP_ENCODING = 'latin-1'


def _list_dir(path: str) -> List[str]:
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        raise InputFileError(path, e.strerror or str(e)) from e


def compile_unicode_maps(ucd_dir: str, sink: TableSink) -> None:
    """Case maps, combining classes, decompositions and compositions."""
    with read_file_lines(os.path.join(ucd_dir, COMPOSITION_EXCLUSIONS)) as lines:
        exclusions = set(parse_composition_exclusions(lines))

    with read_file_lines(os.path.join(ucd_dir, UNICODE_DATA)) as lines:
        records = list(parse_unicode_data(lines))
    logger.info("%d UnicodeData records, %d composition exclusions",
                len(records), len(exclusions))

    upper_case, lower_case = build_case_maps(records)
    tables = build_decompositions(records, exclusions)

    with read_file_lines(os.path.join(ucd_dir, CASE_FOLDING)) as lines:
        fold_keys, fold_values = build_case_folding(parse_case_folding(lines),
                                                    lower_case)

    sink.put('upperCase', encode_table(upper_case, 'codepoint'))
    sink.put('lowerCase', encode_table(lower_case, 'codepoint'))
    sink.put('caseFolding_full', ([encode(k) for k in fold_keys],
                                  [encode_sequence(v) for v in fold_values]))
    sink.put('combiningClass', encode_table(tables.combining_class, 'raw'))
    sink.put('canonicalComposition',
             encode_table(tables.canonical_composition, 'codepoint'))
    sink.put('canonicalDecomposition',
             encode_table(tables.canonical_decomposition))
    sink.put('compatibilityDecomposition',
             encode_table(tables.compatibility_decomposition))


def compile_quick_checks(ucd_dir: str, sink: TableSink,
                         escaped: bool = False) -> None:
    with read_file_lines(os.path.join(ucd_dir, UNICODE_DATA)) as lines:
        combining = combining_codepoints(parse_unicode_data(lines))

    with read_file_lines(os.path.join(ucd_dir, DERIVED_NORMALIZATION_PROPS)) as lines:
        checks = build_quick_checks(parse_derived_properties(lines), combining)

    sink.put('quickChecks', render_quick_checks(checks, escaped))


def compile_charset_maps(map_dir: str, sink: TableSink) -> None:
    """One ``from.<name>`` table per extension-less file of ``map_dir``."""
    for name in _list_dir(map_dir):
        path = os.path.join(map_dir, name)
        if not is_charset_map_name(name) or not os.path.isfile(path):
            continue
        with read_file_lines(path, MAP_ENCODING) as lines:
            charmap = build_charset_map(parse_charset_map(lines))
        sink.put(f"from.{name}", charmap)


def compile_bestfit_maps(map_dir: str, sink: TableSink) -> None:
    for name in _list_dir(map_dir):
        m = BESTFIT_NAME_RE.match(name)
        if not m:
            continue
        with read_file_lines(os.path.join(map_dir, name), MAP_ENCODING) as lines:
            charmap = build_bestfit_map(parse_bestfit(lines))
        sink.put(m.group(1), charmap)


def compile_translit_map(translit_def: str, sink: TableSink) -> None:
    with read_file_lines(translit_def) as lines:
        charmap = build_translit_map(parse_translit(lines))
    sink.put('translit', charmap)


def _steps(options: argparse.Namespace):
    """Yields (label, callable) for every step the options ask for."""
    escaped = options.escaped
    if options.ucd_dir:
        yield 'unicode maps', lambda sink: compile_unicode_maps(options.ucd_dir, sink)
        yield 'quick checks', lambda sink: compile_quick_checks(options.ucd_dir, sink, escaped)
    if options.map_dir:
        yield 'charset maps', lambda sink: compile_charset_maps(options.map_dir, sink)
    bestfit_dir = options.bestfit_dir or options.map_dir
    if bestfit_dir:
        yield 'bestfit maps', lambda sink: compile_bestfit_maps(bestfit_dir, sink)
    if options.translit:
        yield 'translit map', lambda sink: compile_translit_map(options.translit, sink)


def run(options: argparse.Namespace, sink: TableSink) -> List[str]:
    """
    Runs every configured step, each one isolated from the failures of the
    others. Returns the labels of the steps that failed.
    """
    failed = []
    for label, step in _steps(options):
        logger.info("Compiling %s", label)
        try:
            step(sink)
        except (CompileError, OSError) as e:
            logger.error("%s failed: %s", label, e)
            if e.__cause__ is not None:
                logger.error("  caused by: %s", e.__cause__)
            failed.append(label)
    return failed


def argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument('--ucd-dir', required=True,
                    help='directory holding the UCD text files')
    ap.add_argument('--map-dir', help='directory of vendor charset maps')
    ap.add_argument('--bestfit-dir',
                    help='directory of bestfit<N>.txt files (default: --map-dir)')
    ap.add_argument('--translit', help='path to translit.def')
    ap.add_argument('-o', '--out-dir', help='where to write the tables')
    ap.add_argument('--dry-run', action='store_true',
                    help='compile everything but write nothing')
    ap.add_argument('--escaped', action='store_true',
                    help=r'write quick checks with \x{hex} escapes')
    ap.add_argument('-l', '--log_file', type=str,
                    help='path to optional output log')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap


def setup_logger(log_file: Optional[str], level: int = logging.INFO) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    root.addHandler(handler)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparser()
    options = ap.parse_args(argv)
    if not options.dry_run and not options.out_dir:
        ap.error('--out-dir is required unless --dry-run is given')

    setup_logger(options.log_file,
                 logging.DEBUG if options.verbose else logging.INFO)

    sink = MemoryTableSink() if options.dry_run else MsgpackTableSink(options.out_dir)
    failed = run(options, sink)
    if failed:
        logger.error("%d step(s) failed: %s", len(failed), ', '.join(failed))
    sys.exit(1 if failed else 0)


if __name__ == '__main__':
    main()
