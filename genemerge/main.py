#!python
import argparse
import logging
import platform
import sys
import time

from . import __version__
from . import config as _config
from . import util as _util
from .annotate.file_io import AnnotationSource, DiscardedTranscripts, write_annotations
from .annotate.genomic import Region
from .build import GeneBuilder
from .constants import EXIT_ERROR, EXIT_INCOMPLETE, EXIT_OK, PROGNAME, cast_boolean
from .error import GeneMergeError


def region_type(text):
    try:
        return Region.parse(text)
    except GeneMergeError as err:
        raise argparse.ArgumentTypeError('invalid region: {}'.format(err))


def create_parser(argv):
    parser = argparse.ArgumentParser(
        prog=PROGNAME, formatter_class=_config.CustomHelpFormatter, add_help=False,
        description='merge the gene models of a curated and an automatic annotation source')
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v', '--version', action='version', version='%(prog)s version ' + __version__,
        help='Outputs the version number')
    required.add_argument(
        '--primary', nargs='+', required=True, help='annotation json file(s) of the curated source')
    required.add_argument(
        '--secondary', nargs='+', required=True, help='annotation json file(s) of the automatic source')
    required.add_argument(
        '--region', nargs='+', required=True, type=region_type,
        help='region(s) to build. Given as NAME, NAME:START-END or COORD_SYSTEM:VERSION:NAME:START:END:STRAND')
    required.add_argument('-o', '--output', required=True, help='path to the output annotation json file')
    optional.add_argument(
        '--discarded', nargs='+', default=[], help='annotation json file(s) of transcripts which are never output')
    optional.add_argument('--config', type=_util.filepath, help='INI file of settings to override the defaults')
    optional.add_argument(
        '--strict_biotypes', type=cast_boolean, default=None,
        help='raise an error when a gene cannot be given a final biotype. Defaults to the config setting')
    optional.add_argument('--log', help='redirect stdout to a log file', default=None)
    optional.add_argument(
        '--log_level', help='level of logging to output', choices=['INFO', 'DEBUG'], default='INFO')
    args = parser.parse_args(argv)
    return parser, args


def main(argv=None):
    """
    command line entry point

    Returns:
        int: the exit code
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {'format': '{asctime} [{levelname}] {message}', 'style': '{', 'level': args.log_level}

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'{PROGNAME}: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(vars(args))

    exit_code = EXIT_OK
    try:
        for arg in ['primary', 'secondary', 'discarded']:
            try:
                setattr(args, arg, _util.bash_expands(*getattr(args, arg)) if getattr(args, arg) else [])
            except FileNotFoundError:
                parser.error('--{} file(s) {} do not exist'.format(arg, getattr(args, arg)))

        settings = _config.read_config(args.config)
        primary = AnnotationSource.from_files(*args.primary, name='primary')
        secondary = AnnotationSource.from_files(*args.secondary, name='secondary')
        discarded = DiscardedTranscripts.from_files(*args.discarded) if args.discarded else None

        genes = []
        for region in args.region:
            builder = GeneBuilder(
                region, primary, secondary, discarded=discarded, settings=settings,
                strict_biotypes=args.strict_biotypes)
            try:
                genes.extend(builder.build_genes())
            except GeneMergeError as err:
                _util.logger.error(f'failed to build genes for {region!r}: {err!r}')
                exit_code = EXIT_INCOMPLETE
        write_annotations(genes, args.output)

        duration = int(time.time()) - start_time
        hours = duration - duration % 3600
        minutes = duration - hours - (duration - hours) % 60
        seconds = duration - hours - minutes
        _util.logger.info('run time (hh/mm/ss): {}:{:02d}:{:02d}'.format(hours // 3600, minutes // 60, seconds))
        _util.logger.info(f'run time (s): {duration}')
    except (GeneMergeError, KeyError, OSError) as err:
        logging.exception(err)  # capture the error in the logging output file
        exit_code = EXIT_ERROR
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
