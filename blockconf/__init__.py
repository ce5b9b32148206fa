"""
#########
blockconf
#########

*Read indentation-based config files into trees of typed nodes.*

**blockconf** parses a small, YAML-like config language where
indentation nests blocks, quotes group words into one token and
``key [`` lines build lists of blocks.


:copyright: (c) 2024-present akyuute.
:license: MIT, see LICENSE for more details.
"""

__title__ = 'blockconf'
__description__ = "Read indentation-based config files into trees of typed nodes."
__url__ = "https://github.com/akyuute/blockconf"
__version__ = '0.1'
__author__ = "akyuute"
__license__ = 'MIT'
__copyright__ = "Copyright (c) 2024-present akyuute"


__all__ = (
    'BlockConfError',
    'ConfigError',
    'ExcessiveNestingDepthError',
    'Float',
    'Int',
    'List',
    'Map',
    'Nil',
    'Node',
    'NodeKind',
    'StreamUnavailableError',
    'Str',
    'TabsNotAllowedError',
    'TokenList',
    'UnterminatedQuoteError',
    'classify',
    'destroy',
    'each',
    'loads',
    'parse',
    'read',
    'show',
    'to_json',
)


from .errors import (
    BlockConfError,
    ConfigError,
    ExcessiveNestingDepthError,
    StreamUnavailableError,
    TabsNotAllowedError,
    UnterminatedQuoteError,
)
from .nodes import (
    Float,
    Int,
    List,
    Map,
    Nil,
    Node,
    NodeKind,
    Str,
    TokenList,
    classify,
    destroy,
)
from .parser import each, loads, parse, read
from .render import show, to_json
