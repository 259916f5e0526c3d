"""
records attached to transcripts and exons which are carried through the merge: alignment evidence, cross references
and attributes
"""
from ..constants import FEATURE_TYPE, STRAND
from ..interval import Interval


class SupportingFeature:
    """
    an alignment of an external sequence (the hit) supporting a transcript or an exon
    """

    def __init__(
        self, hseqname, start, end, strand=STRAND.POS, hstart=None, hend=None, hstrand=STRAND.POS,
        score=None, feature_type=FEATURE_TYPE.DNA
    ):
        """
        Args:
            hseqname (str): name of the aligned sequence
            start (int): genomic start of the alignment
            end (int): genomic end of the alignment
            strand (STRAND): genomic strand of the alignment
            hstart (int): start of the alignment on the hit sequence
            hend (int): end of the alignment on the hit sequence
            hstrand (STRAND): strand of the alignment on the hit sequence
            score (float): alignment score
            feature_type (FEATURE_TYPE): dna or protein alignment
        """
        self.hseqname = hseqname
        self.position = Interval(start, end)
        self.strand = STRAND.enforce(strand)
        self.hstart = hstart
        self.hend = hend
        self.hstrand = hstrand
        self.score = score
        self.feature_type = FEATURE_TYPE.enforce(feature_type)

    @property
    def start(self):
        return self.position.start

    @property
    def end(self):
        return self.position.end

    @property
    def is_protein(self):
        return self.feature_type == FEATURE_TYPE.PROTEIN

    def key(self):
        """:class:`tuple`: features with the same key describe the same piece of evidence"""
        return (self.hseqname, self.start, self.end, self.strand, self.hstart, self.hend)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'SupportingFeature({}, {}-{}, hit={}-{})'.format(
            self.hseqname, self.start, self.end, self.hstart, self.hend)

    def to_dict(self):
        return {
            'hseqname': self.hseqname,
            'start': self.start,
            'end': self.end,
            'strand': self.strand,
            'hstart': self.hstart,
            'hend': self.hend,
            'hstrand': self.hstrand,
            'score': self.score,
            'feature_type': self.feature_type
        }


class DBEntry:
    """
    cross reference of an annotation object to an external database record
    """

    def __init__(self, dbname, primary_id, display_id=None, status='XREF'):
        self.dbname = dbname
        self.primary_id = primary_id
        self.display_id = display_id if display_id is not None else primary_id
        self.status = status

    def key(self):
        return (self.dbname, self.primary_id, self.display_id)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'DBEntry({}:{})'.format(self.dbname, self.display_id)

    def to_dict(self):
        return {
            'dbname': self.dbname,
            'primary_id': self.primary_id,
            'display_id': self.display_id,
            'status': self.status
        }


class Attribute:
    """
    a coded key/value annotation on a transcript
    """

    def __init__(self, code, value, name=None, description=None):
        self.code = code
        self.value = value
        self.name = name if name is not None else code
        self.description = description

    def key(self):
        return (self.code, self.value)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'Attribute({}={})'.format(self.code, self.value)

    def to_dict(self):
        return {'code': self.code, 'value': self.value, 'name': self.name, 'description': self.description}
