__all__ = (
    'Line',
    'LineSource',
)


import logging
from collections.abc import Iterable
from os import PathLike
from typing import NamedTuple, Self

from ._types import LineNo, RawLine
from .constants import SPACE
from .errors import StreamUnavailableError
from .utils import make_error_message


logger = logging.getLogger(__name__)


class Line(NamedTuple):
    '''
    One physical line of a config file.

    :param text: The line without its newline or trailing spaces
    :type text: :class:`RawLine`

    :param lineno: The 1-indexed line number
    :type lineno: :class:`LineNo`
    '''
    text: RawLine
    lineno: LineNo


class LineSource:
    '''
    Feed lines from a stream one at a time, allowing one line to be
    pushed back for the next read.

    :param stream: A text stream or any iterable of strings
    :type stream: :class:`Iterable[str]`

    :param file: The name of the file behind `stream`, optional
    :type file: :class:`PathLike`
    '''
    def __init__(
        self,
        stream: Iterable[str],
        file: PathLike = None,
    ) -> None:
        self._lines = iter(stream)
        self._pending = None
        self._lineno = 0
        self.file = file

    @property
    def lineno(self) -> LineNo:
        '''
        Return the number of the last line read, 0 before the first read.
        '''
        return self._lineno

    def next(self) -> Line | None:
        '''
        Return the next line, or ``None`` at the end of the stream.
        A line given to :meth:`pushback()` is returned first.

        :raises: :exc:`StreamUnavailableError` when the stream cannot
            be read
        '''
        if self._pending is not None:
            line, self._pending = self._pending, None
            self._lineno = line.lineno
            return line

        try:
            raw = next(self._lines, None)
        except (OSError, UnicodeDecodeError) as e:
            err = make_error_message(
                StreamUnavailableError,
                doing_what="reading config lines",
                blame=e,
                file=self.file,
                line=self._lineno + 1,
            )
            raise err from e

        if raw is None:
            return None
        self._lineno += 1
        text = raw.rstrip('\r\n').rstrip(SPACE)
        return Line(text, self._lineno)

    def pushback(self, line: Line) -> None:
        '''
        Make `line` the result of the next call to :meth:`next()`.

        :param line: A line previously returned by :meth:`next()`
        :type line: :class:`Line`

        :raises: :exc:`RuntimeError` if a line is already pending
        '''
        if self._pending is not None:
            msg = (
                f"Cannot push back line {line.lineno}:"
                f" line {self._pending.lineno} is already pending"
            )
            raise RuntimeError(msg)
        logger.debug(f"Pushing back line {line.lineno}")
        self._pending = line
        self._lineno = line.lineno - 1

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Line:
        line = self.next()
        if line is None:
            raise StopIteration
        return line
