__all__ = (
    'ArgParser',
)


from argparse import ArgumentParser, SUPPRESS

from . import __version__
from ._types import KeyPath
from .constants import DEFAULT_INDENT, DEFAULT_MAX_DEPTH
from .errors import CLIUsageError
from .nodes import Map, Node
from .utils import get_path, join_options


PROG = __package__


class ArgParser(ArgumentParser):
    '''
    A custom command line parser used by the command line utility.
    '''
    def __init__(self) -> None:
        super().__init__(
            prog=PROG,
            description="Parse a config file and print its contents.",
            argument_default=SUPPRESS,
        )
        self.add_arguments()

    def parse_args(self, args: list[str] = None) -> dict:
        '''
        Parse command line arguments and return a dict of options.
        If `args` is None, process from ``sys.argv``.

        :param args: The args to parse, get from ``sys.argv`` by default
        :type args: :class:`list[str]`

        :raises: :exc:`CLIUsageError` for invalid option values
        '''
        # Use vars() because dict items are more portable than attrs.
        opts = vars(super().parse_args(args))
        for name in ('indent', 'max_depth'):
            if name in opts and opts[name] < 0:
                msg = f"--{name.replace('_', '-')} must not be negative."
                raise CLIUsageError(msg)
        if opts.get('indent') == 0:
            raise CLIUsageError("--indent must be at least 1.")
        return opts

    def add_arguments(self) -> None:
        '''Equip the parser with all its arguments.'''
        self.add_argument(
            'config_file',
            help="The config file to parse.",
            metavar='FILE',
        )

        self.add_argument(
            '--json', '-j',
            dest='json_indent',
            help=(
                "Print the parsed config as JSON."
                " Optionally pass a number of spaces by which to indent."
            ),
            metavar='INDENT',
            nargs='?',
            const=4,
            type=int,
        )

        self.add_argument(
            '--infer',
            action='store_true',
            dest='infer',
            help="Write number-like tokens as numbers in JSON output.",
        )

        self.add_argument(
            '--get', '-g',
            dest='key_path',
            help="Only print the value found at this dotted key path.",
            metavar='KEY.PATH',
        )

        self.add_argument(
            '--indent', '-i',
            dest='indent',
            help=(
                "Spaces per nesting level when printing config text,"
                f" defaults to {DEFAULT_INDENT}."
            ),
            type=int,
        )

        self.add_argument(
            '--max-depth',
            dest='max_depth',
            help=(
                "Fail when blocks nest more deeply than this,"
                f" defaults to {DEFAULT_MAX_DEPTH}."
            ),
            metavar='DEPTH',
            type=int,
        )

        self.add_argument(
            '--debug',
            action='store_true',
            help="Log parsing steps to STDERR.",
        )

        self.add_argument(
            '--version', '-v',
            action='version',
            version=f"{PROG} {__version__}",
        )

    @staticmethod
    def select(data: Map, key_path: KeyPath) -> Node:
        '''
        Return the node found at `key_path` in `data`.

        :raises: :exc:`CLIUsageError` if a key is missing
        '''
        try:
            return get_path(data, key_path)
        except KeyError as e:
            missing, parent = e.args
            if isinstance(parent, Map) and parent:
                valid = join_options(
                    parent.keys(), final_sep='and', oxford=False
                )
                note = f" Valid keys here are {valid}."
            else:
                note = " There are no keys here."
            msg = f"Key {missing!r} not found in {key_path!r}.{note}"
            raise CLIUsageError(msg) from None
