from glob import glob
import logging
import os
import time

from braceexpand import braceexpand

from .constants import MergeNamespace, cast_boolean

logger = logging.getLogger('genemerge')


def bash_expands(*expressions):
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Raises:
        FileNotFoundError: an expression did not match any file

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def filepath(path):
    try:
        file_list = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    if len(file_list) > 1:
        raise TypeError('File pattern match multiple files and expected only one', path)
    return file_list[0]


class NullableType:
    def __init__(self, callback_func):
        self.callback_func = callback_func

    def __call__(self, item):
        if str(item).lower() == 'none':
            return None
        return self.callback_func(item)


def cast(value, cast_func):
    """
    cast a value to a given type

    Example:
        >>> cast('1', int)
        1
        >>> cast('no', bool)
        False
    """
    if cast_func == bool:
        return cast_boolean(value)
    return cast_func(value)


class WeakMergeNamespace(MergeNamespace):
    """
    namespace where every member can be overridden by its environment variable equivalent
    """

    def is_env_overwritable(self, attr):
        return True


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (dict): the arguments to log
    """
    logger.info('arguments')
    for arg, val in sorted(args.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info(f'{arg} = {val}')
                continue
            logger.info(f'{arg} = [')
            for v in val:
                logger.info(f'    {repr(v)}')
            logger.info(']')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info(f'{arg} = {repr(val)}')
        else:
            logger.info(f'{arg} = {object.__repr__(val)}')


class Timer:
    """
    context manager which logs the time taken to run a step of the build

    Example:
        >>> with Timer('clustering'):
        ...     cluster_into_genes(transcripts)
    """
    def __init__(self, step):
        self.step = step
        self.start_time = None

    def __enter__(self):
        self.start_time = int(time.time())
        return self

    def __exit__(self, *pos):
        logger.debug(f'{self.step} completed in {int(time.time()) - self.start_time}s')
