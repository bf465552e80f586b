# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

import logging

from .abstract import LineStorage
from .ini import IniDocument, IniParseError, IniParser, IniSection
from .inifile import TextIniFile
from .storage import LocalFileStorage, MemoryStorage

__all__ = [
    'TextIniFile',
    'IniDocument', 'IniSection', 'IniParser', 'IniParseError',
    'LineStorage', 'LocalFileStorage', 'MemoryStorage'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
