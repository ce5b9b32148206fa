__all__ = (
    'ColNo',
    'ConfigKey',
    'EachCallback',
    'FileContents',
    'Indent',
    'JSONText',
    'KeyPath',
    'LineNo',
    'PythonData',
    'RawLine',
    'Token',
)


from collections.abc import Callable
from typing import Any


type ColNo = int
type LineNo = int
type Indent = int
'''A count of leading space characters.'''

type ConfigKey = str
type FileContents = str
type JSONText = str
type KeyPath = str
'''Dot-separated keys naming a subtree, e.g. ``'server.host'``.'''

type PythonData = object
type RawLine = str
type Token = str

type EachCallback = Callable[[ConfigKey, Any], int | None]
'''
A function called once per entry by :func:`blockconf.parser.each`.
A negative return value stops the iteration.
'''
