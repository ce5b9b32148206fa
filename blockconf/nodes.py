'''
The typed tree built by the parser.

Every parsed config is a :class:`Map` at its root. Each entry of a
:class:`Map` holds one of:

- a :class:`TokenList` for lines like ``key a b c``
- a nested :class:`Map` for a key alone on its line
- a :class:`List` of :class:`Map` for ``key [`` lines

Scalars (:class:`Str`, :class:`Int`, :class:`Float`) come from
:func:`classify` and are never produced by the parser itself.
'''

__all__ = (
    'Float',
    'Int',
    'List',
    'Map',
    'Nil',
    'Node',
    'NodeKind',
    'Str',
    'TokenList',
    'classify',
    'destroy',
)


import re
from collections.abc import (
    Iterable,
    Iterator,
    MutableMapping,
    MutableSequence,
)
from enum import Enum
from typing import Any

from ._types import ConfigKey, EachCallback, PythonData, Token


INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

# What float(s) accepts, minus surrounding whitespace and digit separators:
_REJECT_FLOAT = re.compile(r'^\s|\s$|_')
# Integers as strtol() reads them in base 0:
_INTEGER = re.compile(
    r'[+-]?(?P<digits>0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)'
)


class NodeKind(Enum):
    NIL = 'NIL'
    STR = 'STR'
    INT = 'INT'
    FLOAT = 'FLOAT'
    TOKENS = 'TOKENS'
    MAP = 'MAP'
    LIST = 'LIST'


class Node:
    '''
    Base class for every value in a parsed tree.
    '''
    __slots__ = ()
    kind: NodeKind = None

    def children(self) -> Iterable['Node']:
        '''
        Return the nodes directly owned by this node.
        '''
        return ()

    def _release(self) -> None:
        '''
        Drop this node's own storage. Children are handled by
        :meth:`destroy()`.
        '''
        pass

    def destroy(self) -> None:
        '''
        Release this node and every node beneath it, children before
        their parents. Destroying a node twice does nothing the second
        time.
        '''
        # Walk without recursion so deep trees cannot exhaust the stack.
        order = []
        stack = [self]
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(node.children())
        for node in reversed(order):
            node._release()

    def to_data(self, infer: bool = False) -> PythonData:
        '''
        Convert this node to plain Python data.

        :param infer: Convert number-like tokens using :func:`classify`,
            defaults to ``False``
        :type infer: :class:`bool`
        '''
        raise NotImplementedError

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"{cls}({self.to_data()!r})"


class Nil(Node):
    '''
    An empty value.
    '''
    __slots__ = ()
    kind = NodeKind.NIL
    value = None

    def to_data(self, infer: bool = False) -> None:
        return None

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Nil)

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return 'Nil()'


class _Scalar(Node):
    __slots__ = ('value',)

    def __init__(self, value) -> None:
        self.value = value

    def to_data(self, infer: bool = False) -> str | int | float:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))


class Str(_Scalar):
    __slots__ = ()
    kind = NodeKind.STR

    def __init__(self, value: str) -> None:
        self.value = str(value)


class Int(_Scalar):
    __slots__ = ()
    kind = NodeKind.INT

    def __init__(self, value: int) -> None:
        self.value = int(value)


class Float(_Scalar):
    __slots__ = ()
    kind = NodeKind.FLOAT

    def __init__(self, value: float) -> None:
        self.value = float(value)


def classify(raw: str) -> Str | Int | Float:
    '''
    Decide whether a string denotes an integer, a float or neither.

    Strings containing ``'.'`` may only become a :class:`Float`.
    Other strings may become an :class:`Int` fitting in 64 bits, written
    the way C's ``strtol()`` reads base 0: decimal, hexadecimal with a
    ``0x`` prefix, or octal with a leading ``0`` (``'010'`` is 8).
    Python's ``0b`` and ``0o`` prefixes are not numbers here.
    The whole string must be a number: ``'3abc'`` stays a :class:`Str`.

    :param raw: The string to classify
    :type raw: :class:`str`
    '''
    if '.' in raw:
        if not _REJECT_FLOAT.search(raw):
            try:
                return Float(float(raw))
            except ValueError:
                pass
    elif (match := _INTEGER.fullmatch(raw)):
        digits = match['digits']
        if digits[:2].lower() == '0x':
            base = 16
        elif digits.startswith('0'):
            base = 8
        else:
            base = 10
        value = int(raw, base)
        if INT64_MIN <= value <= INT64_MAX:
            return Int(value)
    return Str(raw)


class TokenList(Node):
    '''
    The value tokens following a key on one line.

    :param tokens: One or more tokens
    :type tokens: :class:`Iterable[Token]`

    :raises: :exc:`ValueError` if `tokens` is empty
    '''
    __slots__ = ('tokens',)
    kind = NodeKind.TOKENS

    def __init__(self, tokens: Iterable[Token]) -> None:
        tokens = list(tokens)
        if not tokens:
            raise ValueError("A TokenList needs at least one token")
        self.tokens = tokens

    def scalars(self) -> list[Str | Int | Float]:
        '''
        Return each token converted by :func:`classify`.
        '''
        return [classify(t) for t in self.tokens]

    def _release(self) -> None:
        self.tokens.clear()

    def to_data(self, infer: bool = False) -> list[PythonData]:
        if infer:
            return [s.value for s in self.scalars()]
        return list(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, index: int | slice) -> Token | list[Token]:
        return self.tokens[index]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TokenList):
            return NotImplemented
        return self.tokens == other.tokens

    __hash__ = None


class Map(Node, MutableMapping):
    '''
    A block of config entries mapping keys to nodes.

    Setting a key that already exists replaces its value and destroys
    the old one, as does deleting a key.

    :param entries: Initial entries, optional
    :type entries: :class:`Iterable`
    '''
    __slots__ = ('_entries',)
    kind = NodeKind.MAP

    def __init__(self, entries=()) -> None:
        self._entries = {}
        self.update(entries)

    def children(self) -> Iterable[Node]:
        return self._entries.values()

    def _release(self) -> None:
        self._entries.clear()

    def __getitem__(self, key: ConfigKey) -> Node:
        return self._entries[key]

    def __setitem__(self, key: ConfigKey, node: Node) -> None:
        if not isinstance(node, Node):
            raise TypeError(
                f"Map values must be Node instances, not {type(node)}"
            )
        old = self._entries.get(key)
        self._entries[key] = node
        if old is not None and old is not node:
            old.destroy()

    def __delitem__(self, key: ConfigKey) -> None:
        self._entries.pop(key).destroy()

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return _tree_equal(self, other)

    __hash__ = None

    def clear(self) -> None:
        '''
        Destroy every entry.
        '''
        entries = tuple(self._entries.values())
        self._entries.clear()
        for node in entries:
            node.destroy()

    def each(self, callback: EachCallback) -> int:
        '''
        Call `callback` with each key and node.
        Stop early when `callback` returns a negative number.

        :param callback: A function taking a key and a node
        :type callback: :class:`EachCallback`

        :returns: The negative value that stopped iteration, else 0
        :rtype: :class:`int`
        '''
        # Copy so callbacks may modify the map.
        for key, node in tuple(self._entries.items()):
            result = callback(key, node)
            if result is not None and result < 0:
                return result
        return 0

    def pop(self, key: ConfigKey, *default) -> Node:
        '''
        Remove `key` and return its node without destroying it.
        Ownership passes to the caller.
        '''
        return self._entries.pop(key, *default)

    def popitem(self) -> tuple[ConfigKey, Node]:
        '''
        Remove and return the most recent entry without destroying it.
        '''
        return self._entries.popitem()

    def to_data(self, infer: bool = False) -> dict[ConfigKey, PythonData]:
        return _to_data(self, infer)


class List(Node, MutableSequence):
    '''
    An ordered sequence of nodes. Lists built by the parser hold one
    :class:`Map` per ``key [`` block.

    :param nodes: Initial elements, optional
    :type nodes: :class:`Iterable[Node]`
    '''
    __slots__ = ('_nodes',)
    kind = NodeKind.LIST

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes = []
        self.extend(nodes)

    def children(self) -> Iterable[Node]:
        return self._nodes

    def _release(self) -> None:
        self._nodes.clear()

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __setitem__(self, index: int, node: Node) -> None:
        if not isinstance(node, Node):
            raise TypeError(
                f"List elements must be Node instances, not {type(node)}"
            )
        old = self._nodes[index]
        self._nodes[index] = node
        if old is not node:
            old.destroy()

    def __delitem__(self, index: int) -> None:
        self._nodes.pop(index).destroy()

    def __len__(self) -> int:
        return len(self._nodes)

    def insert(self, index: int, node: Node) -> None:
        if not isinstance(node, Node):
            raise TypeError(
                f"List elements must be Node instances, not {type(node)}"
            )
        self._nodes.insert(index, node)

    def peek(self) -> Node:
        '''
        Return the first element without removing it.

        :raises: :exc:`IndexError` if the list is empty
        '''
        if not self._nodes:
            raise IndexError("peek from an empty List")
        return self._nodes[0]

    def popleft(self) -> Node:
        '''
        Remove and return the first element. Ownership passes to the
        caller, so the element is not destroyed.

        :raises: :exc:`IndexError` if the list is empty
        '''
        if not self._nodes:
            raise IndexError("pop from an empty List")
        return self._nodes.pop(0)

    def pop(self, index: int = -1) -> Node:
        '''
        Remove and return an element without destroying it.
        '''
        return self._nodes.pop(index)

    def reverse(self) -> None:
        self._nodes.reverse()

    def clear(self) -> None:
        '''
        Destroy every element.
        '''
        nodes = tuple(self._nodes)
        self._nodes.clear()
        for node in nodes:
            node.destroy()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return _tree_equal(self, other)

    __hash__ = None

    def to_data(self, infer: bool = False) -> list[PythonData]:
        return _to_data(self, infer)


def _to_data(root: Node, infer: bool) -> PythonData:
    '''
    Convert a tree to nested dicts and lists without recursion.
    '''
    stack = []

    def convert(node: Node) -> PythonData:
        match node:
            case Map():
                out = {}
            case List():
                out = []
            case _:
                return node.to_data(infer)
        stack.append((node, out))
        return out

    result = convert(root)
    while stack:
        node, out = stack.pop()
        if isinstance(out, dict):
            for key, child in node.items():
                out[key] = convert(child)
        else:
            out.extend(convert(child) for child in node)
    return result


def _tree_equal(left: Node, right: Node) -> bool:
    '''
    Compare two trees node by node without recursion.
    '''
    stack = [(left, right)]
    while stack:
        a, b = stack.pop()
        if a is b:
            continue
        match a, b:
            case Map(), Map():
                if a._entries.keys() != b._entries.keys():
                    return False
                stack.extend((a[key], b[key]) for key in a._entries)
            case List(), List():
                if len(a) != len(b):
                    return False
                stack.extend(zip(a._nodes, b._nodes))
            case (Map() | List(), _) | (_, Map() | List()):
                return False
            case _:
                if a != b:
                    return False
    return True


def destroy(node: Node) -> None:
    '''
    Release `node` and every node beneath it.

    :param node: The root of the tree to destroy, usually a :class:`Map`
    :type node: :class:`Node`
    '''
    node.destroy()
