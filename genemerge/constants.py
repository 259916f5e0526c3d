"""
module responsible for small utility functions and constants used throughout the genemerge package
"""
import argparse
import os
import re


PROGNAME = 'genemerge'
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INCOMPLETE = 2


def cast_boolean(input_value):
    """
    Example:
        >>> cast_boolean('yes')
        True
        >>> cast_boolean('0')
        False
    """
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class MergeNamespace:
    """
    Namespace to hold module constants

    Example:
        >>> nspace = MergeNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.otherthing
        2
    """
    DELIM = r'[;,\s]+'
    """:class:`str`: delimiter to use is parsing listable variables from the environment or config file"""

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_nullable', set())
        object.__setattr__(self, '_listable', set())
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', PROGNAME.upper())

        for k in pos:
            if k in self._members:
                raise AttributeError('Cannot respecify existing attribute', k, self._members[k])
            self[k] = k

        for attr, val in kwargs.items():
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self[attr] = val

        for attr, value in self._members.items():
            self._set_type(attr, type(value))

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])))

    def get_env_name(self, attr):
        """
        Get the name of the corresponding environment variable

        Example:
            >>> nspace = MergeNamespace(a=1)
            >>> nspace.get_env_name('a')
            'GENEMERGE_A'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def get_env_var(self, attr):
        """
        retrieve the environment variable definition of a given attribute
        """
        env = os.environ[self.get_env_name(attr)].strip()
        attr_type = self._types.get(attr, str)

        if attr in self._listable:
            return self.parse_listable_string(env, attr_type, attr in self._nullable)
        if attr in self._nullable and env.lower() == 'none':
            return None
        return attr_type(env)

    @classmethod
    def parse_listable_string(cls, string, cast_type=str, nullable=False):
        """
        Given some string, parse it into a list

        Example:
            >>> MergeNamespace.parse_listable_string('1,2,3', int)
            [1, 2, 3]
            >>> MergeNamespace.parse_listable_string('1;2,None', int, True)
            [1, 2, None]
        """
        result = []
        string = string.strip()
        for val in re.split(cls.DELIM, string) if string else []:
            if nullable and val.lower() == 'none':
                result.append(None)
            else:
                result.append(cast_type(val))
        return result

    def is_env_overwritable(self, attr):
        """
        Returns:
            bool: True if the variable is overridden by specifying the environment variable equivalent
        """
        return attr in self._env_overwritable

    def is_listable(self, attr):
        return attr in self._listable

    def is_nullable(self, attr):
        return attr in self._nullable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return variables[attr]

    def items(self):
        """
        Example:
            >>> MergeNamespace(thing=1, otherthing=2).items()
            [('thing', 1), ('otherthing', 2)]
        """
        return [(k, self[k]) for k in self.keys()]

    def to_dict(self):
        return dict(self.items())

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def copy_from(self, source, attrs=None):
        """
        Copy variables from one namespace onto the current namespace
        """
        if attrs is None:
            attrs = source.keys()
        for attr in attrs:
            self.add(
                attr, source[attr],
                listable=source.is_listable(attr),
                nullable=source.is_nullable(attr),
                defn=source.define(attr, None),
                cast_type=source.type(attr, None),
                env_overwritable=source.is_env_overwritable(attr)
            )

    def get(self, key, *pos):
        """
        get an attribute, return a default (if given) if the attribute does not exist

        Example:
            >>> nspace = MergeNamespace(thing=1, otherthing=2)
            >>> nspace.get('thing', 2)
            1
            >>> nspace.get('nonexistant_thing', 2)
            2
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. get takes a single \'default\' value argument')
        try:
            return self[key]
        except AttributeError as err:
            if pos:
                return pos[0]
            raise err

    def keys(self):
        return [k for k in self._members]

    def values(self):
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> nspace = MergeNamespace(thing=1, otherthing=2)
            >>> nspace.enforce(1)
            1
            >>> nspace.enforce(3)
            Traceback (most recent call last):
            ....
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def __iter__(self):
        return iter(self.keys())

    def _set_type(self, attr, cast_type):
        if cast_type == bool:
            self._types[attr] = cast_boolean
        else:
            self._types[attr] = cast_type

    def type(self, attr, *pos):
        """
        returns the type

        Example:
            >>> nspace = MergeNamespace(thing=1, otherthing=2)
            >>> nspace.type('thing')
            <class 'int'>
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. type takes a single \'default\' value argument')
        try:
            return self._types[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute does not exist

        Raises:
            KeyError: the attribute does not exist and a default was not given
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        try:
            return self._defns[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def add(self, attr, value, defn=None, cast_type=None, nullable=False, env_overwritable=False, listable=False):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating documentation and help menus
            cast_type (callable): the function to use in casting the value
            nullable (bool): True if this attribute can have a None value
            env_overwritable (bool): True if this attribute will be overriden by its environment variable equivalent
            listable (bool): True if this attribute can have multiple values

        Example:
            >>> nspace = MergeNamespace()
            >>> nspace.add('thing', 1, cast_type=int, defn='I am a thing')
        """
        if cast_type:
            self._set_type(attr, cast_type)
        else:
            self._set_type(attr, type(value))
        if defn:
            self._defns[attr] = defn

        if nullable:
            self._nullable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        if listable:
            self._listable.add(attr)
        self[attr] = value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


def float_percent(num):
    """
    cast input to a float between 0 and 100

    Raises:
        argparse.ArgumentTypeError: if the input cannot be cast to a float or the number is out of range
    """
    try:
        num = float(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 100')
    if num < 0 or num > 100:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 100')
    return num


CODON_SIZE = 3
""":class:`int`: the number of bases making up a codon"""

STRAND = MergeNamespace(POS=1, NEG=-1)
"""
MergeNamespace: holds controlled vocabulary for allowed strand values

- ``POS``: the forward/positive strand
- ``NEG``: the reverse/negative strand
"""


def parse_strand(value):
    """
    convert the various strand notations to a :class:`STRAND` value

    Example:
        >>> parse_strand('+')
        1
        >>> parse_strand('-1')
        -1
    """
    if str(value) in ['1', '+', '+1']:
        return STRAND.POS
    elif str(value) in ['-1', '-']:
        return STRAND.NEG
    raise TypeError('strand must be one of 1, -1, + or -', value)


PAIR_OUTCOME = MergeNamespace(
    KEEP_BOTH=0,
    SHARE_CDS=1,
    DROP_FIRST='drop_first',
    DROP_SECOND='drop_second'
)
"""
MergeNamespace: the result of comparing a curated transcript with an automatic one

- ``KEEP_BOTH``: the transcripts are structurally different and are both kept, no relationship is recorded
- ``SHARE_CDS``: both are kept and are cross-linked as sharing a coding sequence
- ``DROP_FIRST``: the first (curated) transcript is redundant and is removed
- ``DROP_SECOND``: the second (automatic) transcript is redundant and is removed
"""

BIOTYPE_STATUS = MergeNamespace(
    CODING='protein_coding',
    PROCESSED='processed_transcript',
    PSEUDO='pseudogene',
    UNCLASSIFIED='unclassified'
)
""":class:`MergeNamespace`: the final gene categories in order of priority"""

SOURCE = MergeNamespace(PRIMARY='primary', SECONDARY='secondary', MERGED='merged')
"""
MergeNamespace: provenance of an annotation object

- ``PRIMARY``: from the curated source
- ``SECONDARY``: from the automatic source
- ``MERGED``: supported by both
"""

XREF = MergeNamespace(
    RECORD='Vega_transcript',
    RECORD_ID='OTTT',
    SHARES_CDS='shares_CDS_with_OTTT',
    SHARES_CDS_AND_UTR='shares_CDS_and_UTR_with_OTTT',
    SHARES_CDS_WITH_SECONDARY='shares_CDS_with_ENST'
)
""":class:`MergeNamespace`: database names of the cross references written by the transcript reconciliation"""

MERGE_XREFS = [XREF.SHARES_CDS_AND_UTR, XREF.SHARES_CDS, XREF.SHARES_CDS_WITH_SECONDARY, XREF.RECORD_ID]
""":class:`list` of :class:`str`: cross references left over from a previous merge which are removed on input"""

ATTRIBUTE = MergeNamespace(
    SECONDARY_LINK='enst_link',
    TRANSCRIPT_EDGE='TranscriptEdge',
    TRANSCRIPT_PROTEIN_SUPPORT='tp_otter_support',
    TRANSCRIPT_DNA_SUPPORT='td_otter_support',
    EXON_PROTEIN_SUPPORT='ep_otter_support',
    EXON_DNA_SUPPORT='ed_otter_support'
)
""":class:`MergeNamespace`: attribute codes written by the transcript reconciliation"""

FEATURE_TYPE = MergeNamespace(DNA='dna', PROTEIN='protein')
""":class:`MergeNamespace`: the alignment type of a supporting feature"""
