'''
Split config lines into tokens.

Tokens are separated by runs of spaces. Text between a pair of double
quotes is one token, spaces and all::

    name "John Smith" admin   ->   ['name', 'John Smith', 'admin']
'''

__all__ = (
    'check_tabs',
    'is_blank_or_comment',
    'measure_indent',
    'split_tokens',
)


from os import PathLike

from ._types import Indent, LineNo, RawLine, Token
from .constants import COMMENT_CHAR, QUOTE_CHAR, SPACE, TAB
from .errors import TabsNotAllowedError, UnterminatedQuoteError
from .lines import Line


def measure_indent(text: RawLine) -> Indent:
    '''
    Return the number of leading spaces in `text`.
    '''
    return len(text) - len(text.lstrip(SPACE))


def is_blank_or_comment(text: RawLine) -> bool:
    '''
    Return whether `text` is empty, all spaces, or a comment.
    '''
    content = text.lstrip(SPACE)
    return not content or content.startswith(COMMENT_CHAR)


def check_tabs(line: Line, file: PathLike = None) -> None:
    '''
    Fail if a line contains a tab character anywhere.

    :param line: The line to check
    :type line: :class:`Line`

    :param file: The file from which `line` came, optional
    :type file: :class:`PathLike`

    :raises: :exc:`TabsNotAllowedError` if `line` contains a tab
    '''
    col = line.text.find(TAB)
    if col != -1:
        raise TabsNotAllowedError.hl_error(
            "Tabs are not allowed:",
            text=line.text,
            lineno=line.lineno,
            colno=col + 1,
            file=file,
        )


def split_tokens(
    text: RawLine,
    *,
    lineno: LineNo = None,
    file: PathLike = None,
    offset: Indent = 0,
) -> list[Token]:
    '''
    Split a line with its indentation removed into tokens.

    :param text: The line contents after indentation
    :type text: :class:`RawLine`

    :param lineno: The line number of `text`, for error messages
    :type lineno: :class:`LineNo`

    :param file: The file from which `text` came, for error messages
    :type file: :class:`PathLike`

    :param offset: How many characters of indentation were removed from
        `text`, for error messages, defaults to 0
    :type offset: :class:`Indent`

    :returns: The tokens of `text` in order
    :rtype: list[:class:`Token`]

    :raises: :exc:`TabsNotAllowedError` if `text` contains a tab
    :raises: :exc:`UnterminatedQuoteError` upon an unbalanced quote
    '''
    full_line = SPACE * offset + text

    col = text.find(TAB)
    if col != -1:
        raise TabsNotAllowedError.hl_error(
            "Tabs are not allowed:",
            text=full_line,
            lineno=lineno,
            colno=offset + col + 1,
            file=file,
        )

    segments = text.split(QUOTE_CHAR)
    # Balanced quotes leave an odd number of segments.
    if len(segments) % 2 == 0:
        col = text.rfind(QUOTE_CHAR)
        raise UnterminatedQuoteError.hl_error(
            f"Unmatched quote ({QUOTE_CHAR}):",
            text=full_line,
            lineno=lineno,
            colno=offset + col + 1,
            file=file,
        )

    tokens = []
    quoted = False
    for segment in segments:
        if segment:
            if quoted:
                tokens.append(segment)
            else:
                tokens.extend(t for t in segment.split(SPACE) if t)
        quoted = not quoted
    return tokens
