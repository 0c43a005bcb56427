"""
Table sinks: where finished tables end up.

`MsgpackTableSink` writes one ``<name>.mp`` file per table. Byte strings
are packed as msgpack ``bin`` and text as ``str`` so the runtime can tell
UTF-8 sequences from transliteration text.
"""

import logging
import os
from typing import Any, Dict

import msgpack

logger = logging.getLogger(__name__)

TABLE_SUFFIX = '.mp'


class TableSink:
    """Receives each compiled table under its fixed name."""

    def put(self, name: str, table: Any) -> None:
        raise NotImplementedError


class MemoryTableSink(TableSink):
    def __init__(self) -> None:
        self.tables = {} #type: Dict[str, Any]

    def put(self, name: str, table: Any) -> None:
        logger.info("- Compiled table %s (%d entries)", name, len(table))
        self.tables[name] = table


class MsgpackTableSink(TableSink):
    def __init__(self, out_dir: str) -> None:
        self.out_dir = out_dir

    def path_for(self, name: str) -> str:
        return os.path.join(self.out_dir, name + TABLE_SUFFIX)

    def put(self, name: str, table: Any) -> None:
        os.makedirs(self.out_dir, exist_ok=True)
        fname = self.path_for(name)
        logger.info("- Writing table %s (%d entries): %s",
                    name, len(table), fname)
        with open(fname, 'wb') as out:
            out.write(msgpack.packb(table, use_bin_type=True))


def load_table(fname: str) -> Any:
    """Reads back a table written by MsgpackTableSink."""
    with open(fname, 'rb') as f:
        data = f.read()
    return msgpack.unpackb(data, raw=False, strict_map_key=False)
