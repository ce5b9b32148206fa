import logging
import sys

from .cli import ArgParser
from .constants import DEFAULT_INDENT
from .errors import CLIUsageError, ConfigError, StreamUnavailableError
from .log import setup_logging
from .nodes import Map
from .parser import read
from .render import TreeRenderer, to_json


logger = logging.getLogger(__name__)


def main(args: list[str] = None) -> None:
    '''Run the command line utility.'''
    parser = ArgParser()
    try:
        options = parser.parse_args(args)
    except CLIUsageError as e:
        parser.error(e.msg)  # Shows usage

    setup_logging(debug=options.pop('debug', False))

    file = options['config_file']
    kwargs = {}
    if 'max_depth' in options:
        kwargs['max_depth'] = options['max_depth']

    try:
        data = read(file, **kwargs)
    except (ConfigError, StreamUnavailableError) as e:
        logger.debug("Parsing failed", exc_info=True)
        print(e, file=sys.stderr)
        sys.exit(1)

    try:
        key_path = options.get('key_path')
        if key_path is None:
            node = data
        else:
            try:
                node = parser.select(data, key_path)
            except CLIUsageError as e:
                parser.error(e.msg)

        if 'json_indent' in options:
            infer = options.get('infer', False)
            output = to_json(node, options['json_indent'], infer=infer)
        else:
            renderer = TreeRenderer(options.get('indent', DEFAULT_INDENT))
            if isinstance(node, Map):
                output = renderer.stringify(node)
            else:
                # Show a lone value under its own key:
                key = key_path.rsplit('.', 1)[-1]
                output = renderer.stringify_entry(key, node)
            output = output.rstrip('\n')

        if output:
            print(output)

    except ValueError as e:
        print(f"Cannot print {file}: {e}", file=sys.stderr)
        sys.exit(1)

    finally:
        data.destroy()


if __name__ == '__main__':
    main()
