# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Line based reader/writer of `IniDocument`.

The format, exactly:

    key0=value0  ; only allowed when the very first section is ""
    [sectionA]
    key1=value1
    ;a comment line, preserved verbatim
    key2=value2

    [sectionB]
    key3=value3

Empty lines are dropped on read and regenerated (one per section) on write.
"""

import logging
from typing import Iterable
from warnings import warn

from .model import IniDocument, IniSection
from ..abstract import FileHandler

__all__ = ['IniParser', 'IniParseError']


class IniParseError(ValueError):
    """To record a broken section header."""

    def __init__(self, lineno: int, line: str, reason: str) -> None:
        super().__init__(f'line {lineno}: {reason}: {line!r}')
        self.lineno = lineno
        self.line = line


class IniParser(FileHandler[IniDocument]):
    @staticmethod
    def readlines(lines: Iterable[str]) -> IniDocument:
        """读取已经拆分好的行。

        Raises `IniParseError` on a header without its closing bracket.
        """
        ret = IniDocument()
        this_sect: IniSection | None = None
        for lineno, i in enumerate(lines, 1):
            if i == '':
                continue
            if i[0] == '[':
                head = i.rstrip()
                if len(head) < 2 or head[-1] != ']':
                    raise IniParseError(lineno, i, 'unclosed section header')
                if head[1:-1] in ret:
                    warn(
                        f'Section {head} appears more than once (line '
                        f'{lineno}), only the first one is addressable.')
                this_sect = IniSection(head[1:-1])
                ret.sections.append(this_sect)
            else:
                if this_sect is None:
                    this_sect = IniSection('')
                    ret.sections.append(this_sect)
                this_sect.lines.append(i)
        return ret

    @staticmethod
    def dumplines(instance: IniDocument, blank_lines: int = 1) -> list[str]:
        ret: list[str] = []
        for idx, i in enumerate(instance):
            if not instance.is_headerless(idx):
                ret.append(str(i))
            ret.extend(i.lines)
            ret.extend([''] * blank_lines)
        return ret

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件。文件不存在时返回空文档。"""
        if not self._storage.exists(self._fn):
            logging.debug(f'{self._fn} does not exist, starting empty.')
            return IniDocument()
        ret = self.readlines(self._storage.read_lines(self._fn))
        logging.debug(f'Loaded {len(ret)} sections from {self._fn}.')
        return ret

    def write(self, instance: IniDocument, *, blank_lines: int = 1) -> None:
        """整个文件重写，而不是就地修改。"""
        self._storage.write_lines(
            self._fn, self.dumplines(instance, blank_lines))
        logging.debug(f'Wrote {len(instance)} sections to {self._fn}.')

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__() + f' ({self._storage})'
