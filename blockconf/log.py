__all__ = (
    'setup_logging',
)


import logging
from os import PathLike

from .constants import DEBUG, LOG_DATEFMT, LOG_FORMAT


def setup_logging(debug: bool = DEBUG, file: PathLike = None) -> None:
    '''
    Configure the root logger for the command line utility.
    Log to STDERR unless `file` is given.

    :param debug: Log debug messages, defaults to :obj:`DEBUG`
    :type debug: :class:`bool`

    :param file: Write logs to this file instead of STDERR, optional
    :type file: :class:`PathLike`
    '''
    kwargs = {}
    if file is not None:
        kwargs.update(filename=file, filemode='w')
    logging.basicConfig(
        level='DEBUG' if debug else 'WARNING',
        datefmt=LOG_DATEFMT,
        format=LOG_FORMAT,
        style='{',
        **kwargs,
    )
