# -*- encoding: utf-8 -*-
# @File   : inifile.py
# @Time   : 2024/10/11 22:31:48
# @Author : Kariko Lin

"""Textual initialization files, typed.

`TextIniFile` follows the classic `IniFiles` calling convention
(`read_xxx(section, ident, default)` / `write_xxx(section, ident, value)`)
but keeps the file as text lines, so nothing it isn't asked to touch gets
lost or reordered. A section named `""` at the top of the file is written
without a header, which is how "flat" files without any section work.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal

from .abstract import LineStorage
from .ini.convert import (
    binary_length, decode_binary, encode_binary,
    format_datetime, format_decimal, format_float, format_int,
    parse_datetime, parse_decimal, parse_float, parse_int
)
from .ini.model import DELIMITER, IniDocument, is_comment
from .ini.parser import IniParser
from .storage import LocalFileStorage

__all__ = ['TextIniFile']


def _check_text(what: str, text: str) -> None:
    if '\n' in text or '\r' in text:
        raise ValueError(f'{what} must be a single line: {text!r}')


class TextIniFile:
    """一个 INI 文件的读写会话。

    The file is read once on construction (a missing file is just empty)
    and written only by `flush()` or `close()`, and only if something was
    written or deleted since the last save. Use it as a context
    manager so `close()` happens on every way out:

        ```python
        with TextIniFile('app.ini') as ini:
            port = ini.read_integer('net', 'port', 8080)
            ini.write_bool('net', 'ipv6', True)
        ```

    Reads never raise for missing data, they fall back to `default`.
    Writes create missing sections on the fly.
    """

    def __init__(
        self, filename: str, *,
        storage: LineStorage | None = None,
        encoding: str | None = None
    ) -> None:
        if storage is None:
            storage = LocalFileStorage(encoding)
        self._parser = IniParser(filename, storage)
        self._doc: IniDocument | None = self._parser.read()
        self._modified = False

    @property
    def file_name(self) -> str:
        return self._parser.filename

    @property
    def modified(self) -> bool:
        """True if anything was written or deleted since the last load/flush.
        """
        return self._modified

    @property
    def closed(self) -> bool:
        return self._doc is None

    @property
    def document(self) -> IniDocument:
        if self._doc is None:
            raise ValueError(f'I/O operation on closed ini file {self}.')
        return self._doc

    # ---- string primitives ----

    def read_string(self, section: str, ident: str, default: str) -> str:
        """An empty stored value reads the same as a missing one."""
        if ident == '':
            return ''
        sect = self.document.find(section)
        if sect is not None and (ret := sect.get(ident)):
            return ret
        return default

    def write_string(self, section: str, ident: str, value: str) -> None:
        """Set `ident` in `section`, creating the section if needed.

        An empty `value` is stored as `ident=`. The classic `IniFiles` unit
        deleted the line instead; here the identifier stays listed by
        `read_section()` and only reads back as `default`.

        Raises `ValueError` for text the line format can't hold back: line
        breaks anywhere, `=` in `ident`, or `ident` starting with `[`, which
        would load again as a section header.
        """
        if ident == '':
            return
        _check_text('section', section)
        _check_text('identifier', ident)
        _check_text('value', value)
        if DELIMITER in ident:
            raise ValueError(
                f'identifier must not contain "{DELIMITER}": {ident!r}')
        if ident.startswith('['):
            raise ValueError(
                f'identifier must not start with "[": {ident!r}')
        self.document.setdefault(section)[ident] = value
        self._modified = True

    # ---- typed accessors ----

    def read_integer(self, section: str, ident: str, default: int) -> int:
        ret = parse_int(self.read_string(section, ident, ''))
        return default if ret is None else ret

    def write_integer(self, section: str, ident: str, value: int) -> None:
        self.write_string(section, ident, format_int(value))

    def read_bool(self, section: str, ident: str, default: bool) -> bool:
        return self.read_integer(section, ident, int(default)) != 0

    def write_bool(self, section: str, ident: str, value: bool) -> None:
        self.write_integer(section, ident, 1 if value else 0)

    def read_char(self, section: str, ident: str, default: str) -> str:
        ret = self.read_string(section, ident, default)
        return ret[0] if ret else default

    def write_char(self, section: str, ident: str, value: str) -> None:
        if len(value) != 1:
            raise ValueError(f'expected a single character, got {value!r}')
        self.write_string(section, ident, value)

    def read_currency(
        self, section: str, ident: str, default: Decimal
    ) -> Decimal:
        ret = parse_decimal(self.read_string(section, ident, ''))
        return default if ret is None else ret

    def write_currency(
        self, section: str, ident: str, value: Decimal | int | float | str
    ) -> None:
        self.write_string(section, ident, format_decimal(value))

    def read_float(self, section: str, ident: str, default: float) -> float:
        ret = parse_float(self.read_string(section, ident, ''))
        return default if ret is None else ret

    def write_float(self, section: str, ident: str, value: float) -> None:
        self.write_string(section, ident, format_float(value))

    def read_datetime(
        self, section: str, ident: str, default: datetime
    ) -> datetime:
        ret = parse_datetime(self.read_string(section, ident, ''))
        return default if ret is None else ret

    def write_datetime(
        self, section: str, ident: str, value: datetime
    ) -> None:
        """Stored as `YYYY/MM/DD HH:MM:SS`, microseconds are dropped."""
        self.write_string(section, ident, format_datetime(value))

    def read_binary(
        self, section: str, ident: str,
        buffer: bytearray | memoryview, count: int | None = None
    ) -> int:
        """Decode hex pairs (`AA,BB,CC`) into `buffer`.

        At most `count` (default: `len(buffer)`) bytes are copied.

        Returns:
            - the number of bytes the value holds, which is the buffer size
            needed to read all of it (may exceed what was copied).
            - `0` if the section or identifier does not exist.
            - `-1` if a digit is not hex; `buffer` is left untouched then.
        """
        raw = self.read_string(section, ident, '')
        if count is None:
            count = len(buffer)
        data = decode_binary(raw, max(0, min(count, len(buffer))))
        if data is None:
            return -1
        buffer[:len(data)] = data
        return binary_length(raw)

    def write_binary(
        self, section: str, ident: str,
        data: bytes | bytearray | memoryview, count: int | None = None
    ) -> None:
        data = bytes(data)
        if count is not None:
            data = data[:max(0, count)]
        self.write_string(section, ident, encode_binary(data))

    # ---- sections ----

    def read_sections(self) -> list[str]:
        """All section names in file order, duplicates included."""
        return self.document.names()

    def read_section(self, section: str) -> list[str]:
        """Identifiers of `section`, comments and junk lines left out."""
        sect = self.document.find(section)
        return [] if sect is None else list(sect)

    def read_section_values(self, section: str) -> list[tuple[str, str]]:
        sect = self.document.find(section)
        return [] if sect is None else sect.pairs()

    def read_section_lines(self, section: str) -> list[str]:
        """The stored lines of `section` verbatim, comments included."""
        sect = self.document.find(section)
        return [] if sect is None else list(sect.lines)

    def write_section_values(
        self, section: str,
        pairs: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> None:
        """`write_string()` each pair, in order. Later pairs win."""
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        for k, v in pairs:
            self.write_string(section, k, v)

    def section_exists(self, section: str) -> bool:
        return section in self.document

    def value_exists(self, section: str, ident: str) -> bool:
        sect = self.document.find(section)
        return sect is not None and ident in sect

    def erase_section(self, section: str) -> None:
        # the headerless section can't go as a whole.
        if section == '':
            return
        if self.document.remove(section):
            self._modified = True

    def delete_key(self, section: str, ident: str) -> None:
        if section == '' or ident == '' or is_comment(ident):
            return
        sect = self.document.find(section)
        if sect is not None and ident in sect:
            del sect[ident]
            self._modified = True

    # ---- lifecycle ----

    def flush(self) -> bool:
        """Write the file if modified. Returns whether it was written."""
        if not self._modified:
            return False
        self._parser.write(self.document)
        self._modified = False
        logging.info(f'Saved {self.file_name}.')
        return True

    def close(self) -> None:
        """`flush()`, then drop the document. Closing twice is fine.

        If the write fails the file stays open, so `close()` may be retried.
        """
        if self._doc is None:
            return
        self.flush()
        self._doc.clear()
        self._doc = None

    def __enter__(self) -> 'TextIniFile':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = 'closed' if self.closed else (
            'modified' if self._modified else 'clean')
        return f'<TextIniFile {self.file_name!r} ({state})>'

    def __str__(self) -> str:
        return self.file_name
