# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, Sequence, TypeVar

T = TypeVar('T')


class LineStorage(metaclass=ABCMeta):
    """Whole-file line storage. `read_lines` never returns line breaks."""

    def resolve(self, path: str) -> str:
        return path

    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read_lines(self, path: str) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def write_lines(self, path: str, lines: Sequence[str]) -> None:
        raise NotImplementedError


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str, storage: LineStorage) -> None:
        self._storage = storage
        self._fn = storage.resolve(filename)

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
