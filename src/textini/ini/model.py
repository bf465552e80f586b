# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure, kept as raw lines.

Every section remembers the lines it was loaded with (comments, junk,
whatever), so untouched content survives a load/save cycle verbatim.
Only `identifier=value` lines take part in lookups.
"""

from collections.abc import MutableMapping
from typing import Iterator, Sequence

COMMENT = ';'
DELIMITER = '='


def split_entry(line: str) -> tuple[str, str | None]:
    """`key=val` -> `('key', 'val')`; no delimiter -> `('', None)`.

    Nothing is stripped, `key = val` has the identifier `'key '`.
    """
    key, sep, val = line.partition(DELIMITER)
    if not sep:
        return '', None
    return key, val


def is_comment(identifier: str) -> bool:
    return identifier.startswith(COMMENT)


class IniSection(MutableMapping[str, str]):
    """INI 小节。

    A `str: str` view over `self.lines`. Item access always hits the *first*
    line carrying the identifier; setting an existing key rewrites that line
    in place, a new key goes to the end.

    Iterating skips comments (`;key=val`) and lines that are not pairs at
    all, though they stay in `self.lines`.
    """

    def __init__(
        self, section_name: str, /, lines: Sequence[str] = ()
    ) -> None:
        self._name = section_name
        self.lines: list[str] = list(lines)

    @property
    def name(self) -> str:
        return self._name

    def _index(self, key: str) -> int:
        for idx, line in enumerate(self.lines):
            ident, val = split_entry(line)
            if val is not None and ident == key:
                return idx
        return -1

    def __getitem__(self, key: str) -> str:
        if (idx := self._index(key)) == -1:
            raise KeyError(key)
        return split_entry(self.lines[idx])[1]

    def __setitem__(self, key: str, value: str) -> None:
        line = f'{key}{DELIMITER}{value}'
        if (idx := self._index(key)) == -1:
            self.lines.append(line)
        else:
            self.lines[idx] = line

    def __delitem__(self, key: str) -> None:
        if (idx := self._index(key)) == -1:
            raise KeyError(key)
        del self.lines[idx]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._index(key) != -1

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __iter__(self) -> Iterator[str]:
        for i in self.lines:
            key, _ = split_entry(i)
            if key and not is_comment(key):
                yield key

    def pairs(self) -> list[tuple[str, str]]:
        """(identifier, value) in stored order, same filter as iteration.

        Unlike `items()`, a repeated identifier shows up with each of its
        own values.
        """
        ret = []
        for i in self.lines:
            key, val = split_entry(i)
            if key and not is_comment(key):
                ret.append((key, val or ''))
        return ret

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .lines = %d }' % (self._name, len(self.lines))


class IniDocument:
    """INI 文件表示。小节按读入（或新建）顺序排列，允许重名。

        ```ini
        key = val  ; lines before any header live in section "".

        [section]
        key233 = val666
        [section]  ; kept, but every lookup stops at the first one.
        key233 = val114514
        ```

    Only the section at index 0 may go without a header, and only if its
    name is empty. That is a question of position, not of name.
    """

    def __init__(self, sections: Sequence[IniSection] = ()) -> None:
        self.sections: list[IniSection] = list(sections)

    def index(self, name: str) -> int:
        for idx, i in enumerate(self.sections):
            if i.name == name:
                return idx
        return -1

    def find(self, name: str) -> IniSection | None:
        idx = self.index(name)
        return None if idx == -1 else self.sections[idx]

    def setdefault(self, name: str) -> IniSection:
        """Return the section, creating it if needed.

        A new `""` section is put in front so it stays headerless,
        anything else is appended.
        """
        if (ret := self.find(name)) is not None:
            return ret
        ret = IniSection(name)
        if name == '':
            self.sections.insert(0, ret)
        else:
            self.sections.append(ret)
        return ret

    def remove(self, name: str) -> bool:
        idx = self.index(name)
        if idx == -1:
            return False
        del self.sections[idx]
        return True

    def names(self) -> list[str]:
        return [i.name for i in self.sections]

    def is_headerless(self, idx: int) -> bool:
        return idx == 0 and self.sections[0].name == ''

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.index(name) != -1

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def clear(self) -> None:
        self.sections.clear()
