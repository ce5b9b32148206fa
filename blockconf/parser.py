'''
Parse indentation-based config files into trees of nodes.

A config file is a block of lines. Each line holds a key followed by
zero or more value tokens::

    # Comments and blank lines are ignored.
    name "John Smith"
    server
      host localhost
      port 8080
    users [
      name alice
    users [
      name bob
    ]

A key alone on its line opens a nested block made of the more deeply
indented lines after it. A key followed by ``[`` opens a list entry:
a nested block stored as one element of a :class:`List`. List entries
keep accumulating into the same list until a bare ``]`` line appears
at the same level.
'''

__all__ = (
    'BlockParser',
    'FileParser',
    'destroy',
    'each',
    'loads',
    'parse',
    'read',
)


import logging
import os.path
from collections.abc import Generator, Iterable
from io import StringIO
from os import PathLike

from ._types import EachCallback, FileContents, Indent
from .constants import DEFAULT_MAX_DEPTH, LIST_CLOSE, LIST_OPEN
from .errors import ConfigError, ExcessiveNestingDepthError
from .errors import StreamUnavailableError
from .lexer import check_tabs, is_blank_or_comment, measure_indent
from .lexer import split_tokens
from .lines import Line, LineSource
from .nodes import List, Map, Node, TokenList, destroy
from .utils import make_error_message


logger = logging.getLogger(__name__)

# A request from one block to parse a nested block:
type BlockRequest = tuple[Indent, int]
type BlockGenerator = Generator[BlockRequest, Map, Map]


class BlockParser:
    '''
    Build a :class:`Map` from the lines of a :class:`LineSource`.
    Use generators and a stack to overcome Python's recursion limit.

    :param source: The lines to parse
    :type source: :class:`LineSource`

    :param max_depth: How deeply blocks may nest,
        defaults to :obj:`DEFAULT_MAX_DEPTH`
    :type max_depth: :class:`int`
    '''
    def __init__(
        self,
        source: LineSource,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._source = source
        self._file = source.file
        self.max_depth = max_depth

    @property
    def source(self) -> LineSource:
        return self._source

    def parse(self) -> Map:
        '''
        Parse every remaining line and return the root :class:`Map`.

        :raises: :exc:`ConfigError` upon malformed input
        :raises: :exc:`StreamUnavailableError` if reading fails
        '''
        return self.parse_block(0)

    def parse_block(self, base_indent: Indent) -> Map:
        '''
        Parse one block whose lines are indented by at least
        `base_indent` spaces, along with everything nested in it.
        The first line indented less is pushed back to the source.

        :param base_indent: The least indentation of this block
        :type base_indent: :class:`Indent`
        '''
        return self._parse(base_indent)

    def _parse(self, base_indent: Indent) -> Map:
        '''
        Run :meth:`_parse_block()` and every block nested in it outside
        the Python call stack.
        Credit to Dave Beazley (2014).
        '''
        stack = [self._parse_block(base_indent, 0)]
        result = None
        try:
            while stack:
                try:
                    args = stack[-1].send(result)
                    stack.append(self._parse_block(*args))
                    result = None
                except StopIteration as e:
                    stack.pop()
                    result = e.value
        except BaseException:
            # Let every unfinished block destroy what it built:
            while stack:
                stack.pop().close()
            raise
        return result

    def _parse_block(
        self,
        base_indent: Indent,
        depth: int
    ) -> BlockGenerator:
        '''
        A generator.
        Parse one block, yielding ``(indent, depth)`` to request each
        nested block and receiving the nested :class:`Map` in return.
        '''
        mapping = Map()
        # The List collecting `key [` entries at this level, if open:
        open_list = None
        open_key = None

        try:
            while (line := self._source.next()) is not None:
                check_tabs(line, self._file)
                text = line.text
                if is_blank_or_comment(text):
                    continue

                indent = measure_indent(text)
                if indent < base_indent:
                    # This line belongs to an enclosing block.
                    self._source.pushback(line)
                    break

                tokens = split_tokens(
                    text[indent:],
                    lineno=line.lineno,
                    file=self._file,
                    offset=indent,
                )
                if not tokens:
                    continue
                key, *rest = tokens
                logger.debug(
                    f"Line {line.lineno}: indent {indent},"
                    f" key {key!r}, value {rest!r}"
                )

                if not rest:
                    if key == LIST_CLOSE:
                        logger.debug(f"Closing list {open_key!r}")
                        open_list = None
                        open_key = None
                        continue

                    nested = (yield self._open_block(line, indent, depth))
                    self._store(mapping, key, nested)
                    logger.debug(f"Created block {key!r}")

                elif rest[0] == LIST_OPEN:
                    nested = (yield self._open_block(line, indent, depth))
                    if open_list is None:
                        open_list = List([nested])
                        open_key = key
                        self._store(mapping, key, open_list)
                        logger.debug(f"Opened list {key!r}")
                    else:
                        open_list.append(nested)
                        logger.debug(
                            f"Appended entry {len(open_list)}"
                            f" to list {open_key!r}"
                        )

                else:
                    self._store(mapping, key, TokenList(rest))
                    logger.debug(f"Storing {{{key}: {rest!r}}}")

                if key == open_key and mapping.get(key) is not open_list:
                    # The open list was replaced; stop feeding it.
                    open_list = None
                    open_key = None

        except (ConfigError, StreamUnavailableError, GeneratorExit):
            logger.debug(
                f"Destroying partial block at line {self._source.lineno}"
            )
            mapping.destroy()
            raise

        return mapping

    def _open_block(
        self,
        line: Line,
        indent: Indent,
        depth: int
    ) -> BlockRequest:
        '''
        Return the request for a block nested under `line`.

        :raises: :exc:`ExcessiveNestingDepthError` if the new block would
            nest deeper than :attr:`max_depth`
        '''
        if depth >= self.max_depth:
            raise ExcessiveNestingDepthError.hl_error(
                f"Blocks nest deeper than {self.max_depth} levels:",
                text=line.text,
                lineno=line.lineno,
                colno=indent + 1,
                length=len(line.text) - indent,
                file=self._file,
            )
        return (indent + 1, depth + 1)

    @staticmethod
    def _store(mapping: Map, key: str, node: Node) -> None:
        if key in mapping:
            logger.debug(f"Replacing {key!r}")
        mapping[key] = node


class FileParser(BlockParser):
    '''
    A class for parsing config files.

    :param file: The config file to parse
    :type file: :class:`PathLike`

    :param max_depth: How deeply blocks may nest,
        defaults to :obj:`DEFAULT_MAX_DEPTH`
    :type max_depth: :class:`int`
    '''
    def __init__(
        self,
        file: PathLike,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._path = os.path.abspath(os.path.expanduser(file))
        self.max_depth = max_depth
        self._file = os.fspath(file)
        self._source = None

    def parse(self) -> Map:
        '''
        Open the file, parse it and return the root :class:`Map`.

        :raises: :exc:`StreamUnavailableError` if the file cannot be read
        :raises: :exc:`ConfigError` upon malformed input
        '''
        logger.debug(f"Reading file {self._path}")
        try:
            f = open(self._path, 'r')
        except OSError as e:
            err = make_error_message(
                StreamUnavailableError,
                doing_what="opening config file",
                blame=e.strerror or e,
                file=self._file,
            )
            raise err from e

        with f:
            self._source = LineSource(f, self._file)
            return super().parse()


def parse(
    stream: Iterable[str],
    *,
    file: PathLike = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Map:
    '''
    Parse config lines from an open text stream and return the root
    :class:`Map`.

    :param stream: A text stream or any iterable of lines
    :type stream: :class:`Iterable[str]`

    :param file: The name of the file behind `stream`, for error
        messages, optional
    :type file: :class:`PathLike`

    :param max_depth: How deeply blocks may nest,
        defaults to :obj:`DEFAULT_MAX_DEPTH`
    :type max_depth: :class:`int`
    '''
    if stream is None:
        raise make_error_message(
            StreamUnavailableError,
            doing_what="parsing config",
            blame="No input stream was given.",
            file=file,
        )
    source = LineSource(stream, file)
    return BlockParser(source, max_depth=max_depth).parse()


def loads(
    string: FileContents,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Map:
    '''
    Parse a config string and return the root :class:`Map`.

    :param string: The config text
    :type string: :class:`FileContents`
    '''
    return parse(StringIO(string), max_depth=max_depth)


def read(
    file: PathLike,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Map:
    '''
    Read and parse a config file and return the root :class:`Map`.

    :param file: The file to read; ``~`` is expanded
    :type file: :class:`PathLike`

    :raises: :exc:`StreamUnavailableError` if the file cannot be read
    '''
    return FileParser(file, max_depth=max_depth).parse()


def each(data: Map, callback: EachCallback) -> int:
    '''
    Call `callback` once with each top-level key and node in `data`.
    A negative return value from `callback` stops the iteration.

    :param data: A parsed config
    :type data: :class:`Map`

    :param callback: A function taking a key and a node
    :type callback: :class:`EachCallback`

    :returns: The negative value that stopped iteration, else 0
    :rtype: :class:`int`
    '''
    return data.each(callback)
