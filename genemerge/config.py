"""
default settings and configuration files. All settings are held in :class:`~genemerge.constants.MergeNamespace`
objects and may be overridden by environment variables (``GENEMERGE_<SETTING NAME>``) or by an INI configuration file
"""
import argparse
from configparser import ConfigParser, ExtendedInterpolation

from .cluster.constants import DEFAULTS as CLUSTER_DEFAULTS
from .constants import MergeNamespace, cast_boolean, float_percent
from .util import WeakMergeNamespace, cast, filepath, logger


BIOTYPE_DEFAULTS = WeakMergeNamespace()
"""
biotypes fetched from each source and the suffixes used to tag provenance

- primary_coding_biotypes
- primary_processed_biotypes
- primary_pseudo_biotypes
- secondary_coding_biotypes
- secondary_processed_biotypes
- secondary_pseudo_biotypes
- primary_suffix
- merged_transcript_suffix
- demoted_suffix
- merged_gene_suffix
- primary_gene_suffix
- secondary_gene_suffix
"""
BIOTYPE_DEFAULTS.add(
    'primary_coding_biotypes', ['protein_coding'], cast_type=str, listable=True,
    defn='gene biotypes fetched from the curated source and clustered as coding genes')
BIOTYPE_DEFAULTS.add(
    'primary_processed_biotypes', ['processed_transcript', 'lincRNA'], cast_type=str, listable=True,
    defn='gene biotypes fetched from the curated source and clustered as processed transcript genes')
BIOTYPE_DEFAULTS.add(
    'primary_pseudo_biotypes', ['pseudogene', 'processed_pseudogene', 'unprocessed_pseudogene'], cast_type=str,
    listable=True, defn='gene biotypes fetched from the curated source and clustered as pseudogenes')
BIOTYPE_DEFAULTS.add(
    'secondary_coding_biotypes', ['protein_coding'], cast_type=str, listable=True,
    defn='gene biotypes fetched from the automatic source and clustered as coding genes')
BIOTYPE_DEFAULTS.add(
    'secondary_processed_biotypes', ['processed_transcript'], cast_type=str, listable=True,
    defn='gene biotypes fetched from the automatic source and clustered as processed transcript genes')
BIOTYPE_DEFAULTS.add(
    'secondary_pseudo_biotypes', ['pseudogene'], cast_type=str, listable=True,
    defn='gene biotypes fetched from the automatic source and clustered as pseudogenes')
BIOTYPE_DEFAULTS.add(
    'primary_suffix', '_havana',
    defn='suffix appended to the biotype of genes and transcripts of the curated source when they are fetched')
BIOTYPE_DEFAULTS.add(
    'merged_transcript_suffix', '_ens',
    defn='suffix appended to the biotype of transcripts which were paired with a transcript of the other source')
BIOTYPE_DEFAULTS.add(
    'demoted_suffix', '_e',
    defn='suffix appended to the curated biotype given to an automatic coding transcript which loses its translation')
BIOTYPE_DEFAULTS.add(
    'merged_gene_suffix', '_ensembl_havana_gene',
    defn='suffix of the final biotype of genes supported by both sources')
BIOTYPE_DEFAULTS.add(
    'primary_gene_suffix', '_havana_gene',
    defn='suffix of the final biotype of genes supported only by the curated source')
BIOTYPE_DEFAULTS.add(
    'secondary_gene_suffix', '_ensembl_gene',
    defn='suffix of the final biotype of genes supported only by the automatic source')


LOGIC_NAME_DEFAULTS = WeakMergeNamespace()
"""
analysis names used to recognize genes and transcripts produced by a previous merge

- primary_logic_name
- merged_gene_logic_name
- merged_transcript_logic_name
"""
LOGIC_NAME_DEFAULTS.add(
    'primary_logic_name', 'havana',
    defn='logic name of curated genes. Automatic genes with this logic name are not fetched')
LOGIC_NAME_DEFAULTS.add(
    'merged_gene_logic_name', 'ensembl_havana_gene',
    defn='logic name of genes created by a previous merge')
LOGIC_NAME_DEFAULTS.add(
    'merged_transcript_logic_name', 'ensembl_havana_transcript',
    defn='logic name of transcripts created by a previous merge')


RUN_DEFAULTS = WeakMergeNamespace()
RUN_DEFAULTS.add(
    'strict_biotypes', False, cast_type=cast_boolean,
    defn='raise an error instead of warning when a gene has no transcript of a known biotype')

SECTIONS = {
    'biotypes': BIOTYPE_DEFAULTS,
    'logic_names': LOGIC_NAME_DEFAULTS,
    'cluster': CLUSTER_DEFAULTS,
    'run': RUN_DEFAULTS
}
""":class:`dict` of :class:`MergeNamespace` by :class:`str`: the default settings for each configuration section"""


def default_settings():
    """
    Returns:
        MergeNamespace: a single namespace holding all default settings. Environment variables still override them
    """
    settings = MergeNamespace()
    for defaults in SECTIONS.values():
        settings.copy_from(defaults)
    return settings


def validate_and_cast_section(section, defaults):
    """
    cast the string values of a configuration section using the types of the defaults

    Raises:
        KeyError: a key is not a known setting of the section
    """
    result = {}
    for attr, value in section.items():
        if attr not in defaults.keys():
            raise KeyError('tag not recognized', attr)
        cast_type = defaults.type(attr)
        if defaults.is_listable(attr):
            result[attr] = MergeNamespace.parse_listable_string(value, cast_type, defaults.is_nullable(attr))
        elif defaults.is_nullable(attr) and value.lower() == 'none':
            result[attr] = None
        else:
            result[attr] = cast(value, cast_type)
    return result


def read_config(filepath=None):
    """
    reads the configuration settings from the configuration file

    Args:
        filepath (str): path to the input configuration file. When None only the defaults are returned

    Returns:
        MergeNamespace: the settings of all sections

    Raises:
        KeyError: the file contains an unknown section or setting
    """
    settings = default_settings()
    if not filepath:
        return settings
    parser = ConfigParser(interpolation=ExtendedInterpolation())
    with open(filepath) as fh:
        parser.read_file(fh)
    for section in parser.sections():
        if section not in SECTIONS:
            raise KeyError('section not recognized', section, list(SECTIONS.keys()))
        for attr, value in validate_and_cast_section(parser[section], SECTIONS[section]).items():
            logger.debug(f'config [{section}] {attr} = {repr(value)}')
            settings[attr] = value
    return settings


def write_config(filename):
    """
    write the default settings to an INI file which can be edited and passed back to :func:`read_config`
    """
    parser = ConfigParser()
    for section, defaults in SECTIONS.items():
        parser[section] = {}
        for attr, value in defaults.items():
            if defaults.is_listable(attr):
                value = ' '.join([str(v) for v in value])
            parser[section][attr] = str(value)
    logger.info(f'writing: {filename}')
    with open(filename, 'w') as configfile:
        parser.write(configfile)


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type in [float_percent, float]:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None
