import re

from ..constants import STRAND
from ..interval import Interval


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """
    def __eq__(self, other):
        options = {str(self)}
        if self.startswith('chr'):
            options.add(str(self[3:]))
        else:
            options.add('chr' + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(re.sub('^chr', '', str(self)))

    def __lt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__lt__(self_std_repr, other_std_repr)


class BioInterval:

    def __init__(self, reference_object, start, end=None, name=None, strand=None):
        """
        Args:
            reference_object: the object this interval is on
            start (int): start of the interval (inclusive)
            end (int): end of the interval (inclusive)
            name: optional
            strand (STRAND): the strand the interval is defined on

        Example:
            >>> b = BioInterval('1', 12572784, 12578898, 'q22.2')
            >>> b[0]
            12572784
            >>> b[1]
            12578898
        """
        self.reference_object = reference_object
        self.name = name
        self.position = Interval(start, end)
        self.strand = strand

    @property
    def start(self):
        """*int*: the start position"""
        return self.position.start

    @property
    def end(self):
        """*int*: the end position"""
        return self.position.end

    def __getitem__(self, index):
        return Interval.__getitem__(self, index)

    def __len__(self):
        """
        Example:
            >>> b = BioInterval('1', 12572784, 12578898, 'q22.2')
            >>> len(b)
            6115
        """
        return self.position.length()

    def key(self):
        """:class:`tuple`: a tuple representing the items expected to be unique. for hashing and comparing"""
        return (self.reference_object, self.position, self.name)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def get_strand(self):
        """
        pulls strand information from the current object, or follows reference
        objects until the strand is found

        Returns:
            STRAND: the strand of this or any of its reference objects

        Raises:
            AttributeError: raised if the strand is not set on this or any of its reference objects
        """
        if self.strand is not None:
            return self.strand
        tried = set()
        parent = self.reference_object
        while parent is not None and id(parent) not in tried:
            if getattr(parent, 'strand', None) is not None:
                return parent.strand
            tried.add(id(parent))
            parent = getattr(parent, 'reference_object', None)
        raise AttributeError('strand has not been defined', self)

    @property
    def is_reverse(self):
        """True if the interval is on the reverse/negative strand.

        Raises:
            AttributeError: if the strand is not specified
        """
        strand = self.get_strand()
        if strand == STRAND.NEG:
            return True
        elif strand == STRAND.POS:
            return False
        raise AttributeError('strand has not been defined', self)

    def to_dict(self):
        """
        creates a dictionary representing the current object

        Returns:
            :class:`dict` by :class:`str`: the dictionary of attribute values
        """
        return {
            'name': self.name,
            'start': self.start,
            'end': self.end
        }

    def __repr__(self):
        cls = self.__class__.__name__
        refname = getattr(self.reference_object, 'name', self.reference_object)
        return '{}({}:{}-{}, name={})'.format(cls, refname, self.start, self.end, self.name)
