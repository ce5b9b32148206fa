__all__ = (
    'BlockConfError',
    'CLIFatalError',
    'CLIUsageError',
    'ConfigError',
    'ExcessiveNestingDepthError',
    'StreamUnavailableError',
    'TabsNotAllowedError',
    'UnterminatedQuoteError',
)


from os import PathLike

from ._types import ColNo, LineNo, RawLine


class BlockConfError(Exception):
    '''
    Base class for every error raised by :mod:`blockconf`.
    '''
    pass


class ConfigError(BlockConfError, SyntaxError):
    '''
    Base exception for errors related to config file parsing.

    :param msg: The error message
    :type msg: :class:`str`

    :param file: The file being parsed, optional
    :type file: :class:`PathLike`

    :param lineno: The 1-indexed number of the offending line, optional
    :type lineno: :class:`LineNo`

    :param colno: The 1-indexed column of the offending character,
        optional
    :type colno: :class:`ColNo`

    :param text: The text of the offending line, optional
    :type text: :class:`RawLine`
    '''
    def __init__(
        self,
        msg: str,
        *,
        file: PathLike = None,
        lineno: LineNo = None,
        colno: ColNo = None,
        text: RawLine = None,
    ) -> None:
        super().__init__(msg, (file, lineno, colno, text))

    def __str__(self) -> str:
        return self.msg

    @staticmethod
    def error_leader(
        file: PathLike = None,
        lineno: LineNo = None,
        colno: ColNo = None,
    ) -> str:
        '''
        Return the beginning of an error message that features the
        filename, line number and possibly column number.
        '''
        leader = f"File {file}, " if file is not None else ''
        if lineno is not None:
            column = ', column ' + str(colno) if colno is not None else ''
            leader += f"Line {lineno}{column}: "
        return leader

    @classmethod
    def hl_error(
        cls,
        msg: str,
        *,
        text: RawLine = None,
        lineno: LineNo = None,
        colno: ColNo = None,
        length: int = 1,
        file: PathLike = None,
        indent: int = 2,
    ):
        '''
        Highlight the part of a line that caused an error.
        Return an error whose message holds the original line followed
        by a line of spaces and arrows that point to the culprit.

        :param msg: The error message to display after the leader
        :type msg: :class:`str`

        :param text: The offending line, optional
        :type text: :class:`RawLine`

        :param lineno: The line number of `text`, optional
        :type lineno: :class:`LineNo`

        :param colno: The 1-indexed column where highlighting starts,
            optional
        :type colno: :class:`ColNo`

        :param length: How many characters to highlight, defaults to 1
        :type length: :class:`int`

        :param file: The file from which `text` came, optional
        :type file: :class:`PathLike`

        :param indent: Indent the quoted line by this many spaces,
            defaults to 2
        :type indent: :class:`int`

        :returns: A new error with a custom error message
        :rtype: :class:`ConfigError`
        '''
        leader = cls.error_leader(file, lineno)
        errmsg = leader + msg
        if text is not None:
            dent = ' ' * indent
            # Tabs would throw off the arrows:
            shown = text.expandtabs(1)
            errmsg += '\n' + dent + shown
            if colno is not None:
                offset = ' ' * (colno - 1)
                errmsg += '\n' + dent + offset + '^' * max(length, 1)
        return cls(errmsg, file=file, lineno=lineno, colno=colno, text=text)


class TabsNotAllowedError(ConfigError):
    '''
    Raised when a tab character appears in a config line.
    '''
    pass


class UnterminatedQuoteError(ConfigError):
    '''
    Raised when a config line contains an odd number of quotation marks.
    '''
    pass


class ExcessiveNestingDepthError(ConfigError):
    '''
    Raised when blocks nest more deeply than the parser allows.
    '''
    pass


class StreamUnavailableError(BlockConfError, OSError):
    '''
    Raised when a config file cannot be opened or read.
    '''
    pass


class CLIFatalError(BlockConfError):
    '''
    Base class for errors that cause the CLI program to exit.

    :param msg: The error message to issue when exiting
    :type msg: :class:`str`
    '''
    def __init__(self, msg: str) -> None:
        super().__init__()
        self.msg = msg

    def __str__(self):
        return self.msg


class CLIUsageError(CLIFatalError):
    '''
    Raised when the CLI program is used incorrectly.
    '''
    pass
