from copy import copy

from ..constants import CODON_SIZE, STRAND
from ..error import MalformedInputError
from ..interval import Interval


class Translation:
    """
    the coding region of a transcript. The boundaries are stored as indices into the exon list of the transcript
    (transcription order) and 1-based offsets from the 5' end of those exons so that exon objects may be replaced
    (see :func:`~genemerge.prune.prune_exons`) without invalidating the translation
    """

    def __init__(self, start_exon_index, start_offset, end_exon_index, end_offset, transcript=None, name=None):
        """
        Args:
            start_exon_index (int): index of the exon containing the first coding base
            start_offset (int): position of the first coding base in the start exon, counted from its 5' end
            end_exon_index (int): index of the exon containing the last coding base
            end_offset (int): position of the last coding base in the end exon, counted from its 5' end
            transcript (Transcript): the transcript this is a translation of
            name (str): optional
        """
        self.start_exon_index = int(start_exon_index)
        self.start_offset = int(start_offset)
        self.end_exon_index = int(end_exon_index)
        self.end_offset = int(end_offset)
        self.reference_object = transcript
        self.name = name
        if self.start_exon_index > self.end_exon_index:
            raise MalformedInputError(
                'translation cannot start in a later exon than it ends', self.start_exon_index, self.end_exon_index)
        if self.start_offset < 1 or self.end_offset < 1:
            raise MalformedInputError('translation offsets are 1-based', self.start_offset, self.end_offset)

    @property
    def transcript(self):
        """:class:`~genemerge.annotate.genomic.Transcript`: the transcript this is a translation of"""
        return self.reference_object

    @classmethod
    def from_genomic(cls, transcript, start, end, name=None):
        """
        create a translation from the genomic coordinates of its coding region

        Args:
            transcript (Transcript): the transcript being translated
            start (int): the lowest genomic coordinate of the coding region
            end (int): the highest genomic coordinate of the coding region

        Raises:
            MalformedInputError: a boundary does not fall inside an exon of the transcript
        """
        if start > end:
            raise MalformedInputError('coding region start > end', transcript.name, start, end)

        def containing_exon(pos):
            for index, exon in enumerate(transcript.exons):
                if pos in exon.position:
                    return index, exon
            raise MalformedInputError('coding region boundary is not exonic', transcript.name, pos)

        if transcript.get_strand() == STRAND.NEG:
            start_exon_index, start_exon = containing_exon(end)
            end_exon_index, end_exon = containing_exon(start)
            start_offset = start_exon.end - end + 1
            end_offset = end_exon.end - start + 1
        else:
            start_exon_index, start_exon = containing_exon(start)
            end_exon_index, end_exon = containing_exon(end)
            start_offset = start - start_exon.start + 1
            end_offset = end - end_exon.start + 1
        return cls(start_exon_index, start_offset, end_exon_index, end_offset, transcript=transcript, name=name)

    def validate(self):
        """
        check that the translation fits the exons of its transcript

        Raises:
            MalformedInputError: the indices or offsets are out of range of the transcript exons
        """
        exons = self.transcript.exons
        if self.end_exon_index >= len(exons):
            raise MalformedInputError(
                'translation end exon is outside the transcript', self.transcript.name, self.end_exon_index)
        if self.start_offset > len(self.start_exon) or self.end_offset > len(self.end_exon):
            raise MalformedInputError(
                'translation offset is outside its exon', self.transcript.name, self.start_offset, self.end_offset)
        if self.genomic_start > self.genomic_end:
            raise MalformedInputError(
                'translation start and end are reversed', self.transcript.name, self.genomic_start, self.genomic_end)

    @property
    def start_exon(self):
        return self.transcript.exons[self.start_exon_index]

    @property
    def end_exon(self):
        return self.transcript.exons[self.end_exon_index]

    @property
    def genomic_start(self):
        """*int*: the lowest genomic coordinate of the coding region"""
        if self.transcript.get_strand() == STRAND.NEG:
            return self.end_exon.end - self.end_offset + 1
        return self.start_exon.start + self.start_offset - 1

    @property
    def genomic_end(self):
        """*int*: the highest genomic coordinate of the coding region"""
        if self.transcript.get_strand() == STRAND.NEG:
            return self.start_exon.end - self.start_offset + 1
        return self.end_exon.start + self.end_offset - 1

    def translateable_exons(self):
        """
        copies of the coding exons trimmed to the coding region, in transcription order. The copies share the
        supporting evidence lists of the original exons

        Returns:
            :class:`list` of :class:`~genemerge.annotate.genomic.Exon`: the coding part of each coding exon
        """
        coding = Interval(self.genomic_start, self.genomic_end)
        result = []
        for exon in self.transcript.exons[self.start_exon_index:self.end_exon_index + 1]:
            trimmed = copy(exon)
            trimmed.position = exon.position & coding
            result.append(trimmed)
        return result

    @property
    def coding_length(self):
        """*int*: the number of coding bases"""
        return sum([len(exon) for exon in self.translateable_exons()])

    @property
    def length(self):
        """
        *int*: the number of amino acids the coding region translates to

        Example:
            >>> Translation.from_genomic(Transcript([(1, 30)], strand=1), 1, 30).length
            10
        """
        return self.coding_length // CODON_SIZE

    def to_dict(self):
        return {
            'name': self.name,
            'start_exon': self.start_exon_index,
            'start_offset': self.start_offset,
            'end_exon': self.end_exon_index,
            'end_offset': self.end_offset
        }

    def __repr__(self):
        return 'Translation({}, {}-{})'.format(
            getattr(self.transcript, 'name', None), self.genomic_start, self.genomic_end)
