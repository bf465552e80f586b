# -*- encoding: utf-8 -*-
# @File   : storage.py
# @Time   : 2024/10/12 21:40:05
# @Author : Kariko Lin

"""Storage backends for `TextIniFile`.

A backend only moves whole files around as lists of lines.
Path expansion happens in `resolve()`, everything else is the document's job.
"""

import logging
import os
from os.path import abspath, dirname, exists, expanduser, isfile
from shutil import copymode
from tempfile import NamedTemporaryFile
from typing import Sequence

import chardet

from .abstract import LineStorage

__all__ = ['LocalFileStorage', 'MemoryStorage']


def _split_lines(buf: str) -> list[str]:
    # `str.splitlines()` would also break on form feeds and friends.
    buf = buf.replace('\r\n', '\n').replace('\r', '\n')
    if buf.endswith('\n'):
        buf = buf[:-1]
    return buf.split('\n') if buf else []


class LocalFileStorage(LineStorage):
    def __init__(
        self, encoding: str | None = None, newline: str | None = None
    ) -> None:
        """`encoding=None` means UTF-8 first, then whatever `chardet` says.

        The codec that finally decoded a file is kept,
        so the file gets written back the way it came in.
        """
        self._codec = encoding
        self._newline = newline

    @property
    def encoding(self) -> str | None:
        return self._codec

    def resolve(self, path: str) -> str:
        return abspath(expanduser(path))

    def exists(self, path: str) -> bool:
        return isfile(path)

    def _decode_file(self, filename: str) -> str:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            codec = {'encoding': 'latin-1'}
            buf = raw.decode('latin-1')
        logging.warning(
            f'{filename} is not {self._codec or "utf-8"}, '
            f'decoded as {codec["encoding"]} instead.')
        self._codec = codec['encoding']
        return buf

    def read_lines(self, path: str) -> list[str]:
        try:
            with open(path, 'r', encoding=self._codec or 'utf-8') as fp:
                buf = fp.read()
        except UnicodeDecodeError:
            buf = self._decode_file(path)
        if self._codec is None and buf.startswith('\ufeff'):
            # keep the BOM for writing back, utf-8-sig puts it in front.
            self._codec = 'utf-8-sig'
            buf = buf[1:]
        return _split_lines(buf)

    def write_lines(self, path: str, lines: Sequence[str]) -> None:
        # write a sibling temp file, then swap it in.
        with NamedTemporaryFile(
            'w', encoding=self._codec or 'utf-8', newline=self._newline,
            dir=dirname(path) or '.', prefix='.textini-', suffix='.tmp',
            delete=False
        ) as fp:
            tmp = fp.name
            try:
                for i in lines:
                    fp.write(i)
                    fp.write('\n')
                fp.flush()
                os.fsync(fp.fileno())
            except BaseException:
                fp.close()
                os.unlink(tmp)
                raise
        try:
            if isfile(path):
                copymode(path, tmp)
            os.replace(tmp, path)
        except OSError:
            if exists(tmp):
                os.unlink(tmp)
            raise

    def __str__(self) -> str:
        return f'local files ({self._codec or "utf-8"})'


class MemoryStorage(LineStorage):
    """Keeps "files" in a dict. Counts writes, which is handy for tests."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.writes = 0

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_lines(self, path: str) -> list[str]:
        try:
            return _split_lines(self.files[path])
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_lines(self, path: str, lines: Sequence[str]) -> None:
        self.writes += 1
        self.files[path] = ''.join(f'{i}\n' for i in lines)

    def __str__(self) -> str:
        return f'memory ({len(self.files)} files)'
