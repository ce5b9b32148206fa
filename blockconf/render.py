__all__ = (
    'TreeRenderer',
    'show',
    'to_json',
)


import json
from collections.abc import Generator
from types import GeneratorType

from ._types import ConfigKey, FileContents, JSONText, Token
from .constants import COMMENT_CHAR, DEFAULT_INDENT, LIST_CLOSE, LIST_OPEN
from .constants import QUOTE_CHAR, SPACE
from .nodes import List, Map, Nil, Node, TokenList


class TreeRenderer:
    '''
    Convert trees of nodes to text with config file syntax.

    Text made from a tree parses back into an equal tree, except that:

    - Empty :class:`List` values are left out.
    - :class:`Nil` becomes a bare key, which parses as an empty
      :class:`Map`.
    - Scalars parse back as one-token :class:`TokenList` values.
    - A bare key of ``]`` and values starting with a ``[`` token read
      back as list syntax.

    Empty tokens and tokens containing ``"`` cannot be written at all.

    :param indent: Spaces per nesting level,
        defaults to :obj:`DEFAULT_INDENT`
    :type indent: :class:`int`
    '''
    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        if indent < 1:
            raise ValueError("Indentation must be at least one space")
        self._indent = indent * SPACE
        self._indent_level = 0

    def indent(self) -> str:
        return self._indent_level * self._indent

    @staticmethod
    def quote(token: Token) -> Token:
        '''
        Wrap `token` in quotes if it contains spaces or starts with
        :obj:`COMMENT_CHAR`, so that it reads back as one token.

        :raises: :exc:`ValueError` if `token` is empty or contains a
            quote character, since neither can be read back
        '''
        if not token:
            raise ValueError("Cannot write an empty token")
        if QUOTE_CHAR in token:
            msg = f"Cannot write {token!r}: it contains {QUOTE_CHAR}"
            raise ValueError(msg)
        if SPACE in token or token.startswith(COMMENT_CHAR):
            return f"{QUOTE_CHAR}{token}{QUOTE_CHAR}"
        return token

    def stringify(self, tree: Map) -> FileContents:
        '''
        Convert a :class:`Map` to the contents of a config file.

        :param tree: The tree to convert
        :type tree: :class:`Map`
        '''
        self._indent_level = 0
        lines = self.visit(tree)
        if not lines:
            return ''
        return '\n'.join(lines) + '\n'

    def stringify_entry(self, key: ConfigKey, node: Node) -> FileContents:
        '''
        Convert one entry to config file text, as if it were the only
        entry of a top-level :class:`Map`.

        :param key: The entry's key
        :type key: :class:`ConfigKey`

        :param node: The entry's value
        :type node: :class:`Node`
        '''
        self._indent_level = 0
        lines = self._run(self._visit_entry(key, node))
        if not lines:
            return ''
        return '\n'.join(lines) + '\n'

    def visit(self, node: Node):
        '''
        Use a stack to overcome the Python recursion limit.
        Credit to Dave Beazley (2014).
        '''
        return self._run(self.genvisit(node))

    def _run(self, gen: Generator):
        stack = [gen]
        result = None
        while stack:
            try:
                node = stack[-1].send(result)
                stack.append(self.genvisit(node))
                result = None
            except StopIteration as e:
                stack.pop()
                result = e.value
        return result

    def genvisit(self, node: Node):
        '''
        Use generators to overcome the Python recursion limit.
        Credit to Dave Beazley (2014).
        '''
        name = 'visit_' + type(node).__name__
        result = getattr(self, name)(node)
        if isinstance(result, GeneratorType):
            result = (yield from result)
        return result

    def visit_Map(self, node: Map) -> list[str]:
        lines = []
        for key, val in node.items():
            lines.extend((yield from self._visit_entry(key, val)))
        return lines

    def _visit_entry(self, key: ConfigKey, val: Node) -> list[str]:
        '''
        A generator.
        Return the lines for one key and its value, yielding nested
        nodes to be visited.
        '''
        lines = []
        dent = self.indent()
        key = self.quote(key)
        match val:
            case Map():
                lines.append(f"{dent}{key}")
                self._indent_level += 1
                lines.extend((yield val))
                self._indent_level -= 1

            case List():
                # Each element gets its own `key [` line and the shared
                # list stays open until the single `]`.
                for elem in val:
                    if not isinstance(elem, Map):
                        msg = f"Cannot write list {key!r}: {elem!r} is not a Map"
                        raise ValueError(msg)
                    lines.append(f"{dent}{key} {LIST_OPEN}")
                    self._indent_level += 1
                    lines.extend((yield elem))
                    self._indent_level -= 1
                if val:
                    lines.append(f"{dent}{LIST_CLOSE}")

            case Nil():
                lines.append(f"{dent}{key}")

            case _:
                value = (yield val)
                lines.append(f"{dent}{key} {value}")
        return lines

    def visit_TokenList(self, node: TokenList) -> str:
        return ' '.join(self.quote(t) for t in node)

    def _visit_scalar(self, node: Node) -> str:
        return self.quote(str(node.value))

    visit_Str = _visit_scalar
    visit_Int = _visit_scalar
    visit_Float = _visit_scalar


def show(data: Map, indent: int = DEFAULT_INDENT) -> FileContents:
    '''
    Render a parsed config as config file text.

    :param data: The tree to render
    :type data: :class:`Map`

    :param indent: Spaces per nesting level,
        defaults to :obj:`DEFAULT_INDENT`
    :type indent: :class:`int`
    '''
    return TreeRenderer(indent).stringify(data)


def to_json(data: Node, indent: int = 4, infer: bool = False) -> JSONText:
    '''
    Render a parsed config as JSON.

    :param data: The tree to render
    :type data: :class:`Node`

    :param indent: Spaces per JSON nesting level, defaults to 4
    :type indent: :class:`int`

    :param infer: Write number-like tokens as numbers,
        defaults to ``False``
    :type infer: :class:`bool`
    '''
    return json.dumps(data.to_data(infer=infer), indent=indent)
