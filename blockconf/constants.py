__all__ = (
    'COMMENT_CHAR',
    'DEBUG',
    'DEFAULT_INDENT',
    'DEFAULT_MAX_DEPTH',
    'LIST_CLOSE',
    'LIST_OPEN',
    'LOG_DATEFMT',
    'LOG_FORMAT',
    'QUOTE_CHAR',
    'SPACE',
    'TAB',
)


import os


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEBUG: bool = False
'''The default debug state.'''

DEFAULT_MAX_DEPTH: int = _env_int('BLOCKCONF_MAX_DEPTH', 256)
'''
How deeply blocks may nest before parsing fails.
Override with the ``BLOCKCONF_MAX_DEPTH`` environment variable.
'''

DEFAULT_INDENT: int = 2
'''Spaces per nesting level used when rendering a tree.'''


# Syntax:
COMMENT_CHAR: str = '#'
QUOTE_CHAR: str = '"'
LIST_OPEN: str = '['
LIST_CLOSE: str = ']'
SPACE: str = ' '
TAB: str = '\t'


# Used by log.setup_logging():
LOG_FORMAT: str = '[{asctime}] ({levelname}:{name}) {message}'
LOG_DATEFMT: str = '%Y-%m-%d_%H:%M:%S'
