import re
import sys

from .base import BioInterval, ReferenceName
from .protein import Translation
from ..constants import STRAND
from ..error import MalformedInputError, NotSpecifiedError
from ..interval import Interval


class Region(BioInterval):
    """
    the piece of a reference sequence genes are fetched and built for
    """

    def __init__(self, seq_region_name, start=1, end=None, coord_system='chromosome', version=None):
        """
        Args:
            seq_region_name (str): the name of the reference sequence
            start (int): start of the region (inclusive)
            end (int): end of the region (inclusive). Defaults to the end of the sequence
            coord_system (str): name of the coordinate system the sequence belongs to
            version (str): version of the coordinate system (ex. the assembly name)

        Example:
            >>> Region('1', 1000, 2000, version='GRCh38')
        """
        if seq_region_name is None or not str(seq_region_name):
            raise NotSpecifiedError('a region requires a sequence name')
        BioInterval.__init__(
            self, ReferenceName(seq_region_name), start, end if end is not None else sys.maxsize, name=None)
        self.coord_system = coord_system
        self.version = version

    @property
    def seq_region_name(self):
        return self.reference_object

    @classmethod
    def parse(cls, text):
        """
        parse a region from a string

        Args:
            text (str): one of ``name``, ``name:start-end`` or ``coord_system:version:name:start:end[:strand]``

        Raises:
            NotSpecifiedError: the input string is empty
            MalformedInputError: the input string does not match any of the accepted forms

        Example:
            >>> Region.parse('chr1:100-200')
            Region(chr1:100-200)
            >>> Region.parse('chromosome:GRCh38:1:100:200:1')
            Region(1:100-200)
        """
        text = str(text).strip() if text is not None else ''
        if not text:
            raise NotSpecifiedError('a region requires a sequence name')
        match = re.match(r'^([^:]+):([^:]*):([^:]+):(\d+):(\d+)(:-?1)?$', text)
        if match:
            return cls(
                match.group(3), int(match.group(4)), int(match.group(5)),
                coord_system=match.group(1), version=match.group(2) or None)
        match = re.match(r'^([^:]+):(\d+)-(\d+)$', text)
        if match:
            return cls(match.group(1), int(match.group(2)), int(match.group(3)))
        if ':' in text:
            raise MalformedInputError('could not parse the region', text)
        return cls(text)

    def overlaps(self, other):
        """
        True if the other object is on the same reference sequence and shares any position with this region
        """
        if getattr(other, 'seq_region', None) is not None and other.seq_region != self.seq_region_name:
            return False
        return Interval.overlaps(self, other)

    def __str__(self):
        return ':'.join([
            str(self.coord_system), str(self.version or ''), str(self.seq_region_name),
            str(self.start), str(self.end), '1'
        ])

    def __repr__(self):
        return 'Region({}:{}-{})'.format(self.seq_region_name, self.start, self.end)

    def key(self):
        return (self.seq_region_name, self.position, self.coord_system, self.version)


class Exon(BioInterval):
    """
    an exon of a transcript. Exons which are structurally identical (see :meth:`key`) compare equal regardless of the
    evidence they carry
    """

    def __init__(
        self, start, end, strand=None, phase=None, end_phase=None, name=None, supporting_features=None,
        transcript=None
    ):
        """
        Args:
            start (int): the genomic start position (inclusive)
            end (int): the genomic end position (inclusive)
            strand (STRAND): the strand of the exon. Taken from the transcript when not given
            phase (int): the reading frame phase at the start of the exon (-1 or None if not coding)
            end_phase (int): the reading frame phase at the end of the exon
            name (str): the exon id
            supporting_features (:class:`list` of :class:`~genemerge.annotate.evidence.SupportingFeature`): evidence
            transcript (Transcript): the transcript this exon belongs to

        Example:
            >>> Exon(15, 78, strand=STRAND.POS)
        """
        BioInterval.__init__(self, transcript, start, end, name=name, strand=strand)
        if strand is not None:
            STRAND.enforce(strand)
        self.phase = phase
        self.end_phase = end_phase
        self.supporting_features = []
        self.add_supporting_features(*(supporting_features or []))

    @property
    def transcript(self):
        """:class:`Transcript`: the transcript this exon was created for"""
        return self.reference_object

    def key(self):
        """:class:`tuple`: exons with the same key are structurally identical"""
        return (self.start, self.end, self.strand, self.phase, self.end_phase)

    def add_supporting_features(self, *features):
        """
        add evidence to the exon, features already present are not duplicated

        Returns:
            int: the number of features added
        """
        added = 0
        for feature in features:
            if feature not in self.supporting_features:
                self.supporting_features.append(feature)
                added += 1
        return added

    def flush_supporting_features(self):
        self.supporting_features = []

    def to_dict(self):
        return {
            'name': self.name,
            'start': self.start,
            'end': self.end,
            'phase': self.phase,
            'end_phase': self.end_phase,
            'supporting_features': [f.to_dict() for f in self.supporting_features]
        }

    def __repr__(self):
        return 'Exon({}-{}{})'.format(self.start, self.end, '' if self.strand is None else '/{}'.format(self.strand))


class Transcript(BioInterval):
    """
    a transcript model. The exons are kept in transcription order: ascending genomic start on the forward strand
    and descending genomic start on the reverse strand. Transcripts are compared by identity
    """

    def __init__(
        self, exons, strand=None, name=None, biotype=None, logic_name=None, translation=None, coding_region=None,
        dbentries=None, attributes=None, supporting_features=None, seq_region=None, region=None, gene=None
    ):
        """
        Args:
            exons (:class:`list` of :class:`Exon` or :class:`tuple` of :class:`int`): the exons of the transcript
            strand (STRAND): the strand of the transcript. Taken from the exons when not given
            name (str): the transcript id
            biotype (str): the transcript biotype
            logic_name (str): the name of the analysis which created the transcript
            translation (Translation): the coding region given as exon indices into the ordered exon list
            coding_region (:class:`tuple` of :class:`int`): the coding region given as genomic start and end.
                Used in place of translation
            dbentries (:class:`list` of :class:`~genemerge.annotate.evidence.DBEntry`): cross references
            attributes (:class:`list` of :class:`~genemerge.annotate.evidence.Attribute`): attributes
            supporting_features (:class:`list` of :class:`~genemerge.annotate.evidence.SupportingFeature`):
                transcript level evidence
            seq_region (str): the name of the reference sequence
            region (Region): the region the transcript was fetched on
            gene (Gene): the gene the transcript belongs to

        Raises:
            MalformedInputError: the exons are missing, overlap or are on different strands
            NotSpecifiedError: the strand was not given and could not be taken from the exons

        Example:
            >>> Transcript([(100, 200), (300, 400)], strand=STRAND.POS, coding_region=(150, 350))
        """
        if not exons:
            raise MalformedInputError('a transcript requires at least one exon', name)
        exons = [e if isinstance(e, Exon) else Exon(e[0], e[1], strand=strand) for e in exons]
        exon_strands = {e.strand for e in exons if e.strand is not None}
        if strand is None:
            if len(exon_strands) != 1:
                raise NotSpecifiedError('could not determine the strand of the transcript', name, exon_strands)
            strand = exon_strands.pop()
        STRAND.enforce(strand)
        for exon in exons:
            if exon.strand is None:
                exon.strand = strand
            elif exon.strand != strand:
                raise MalformedInputError('exon is on a different strand than its transcript', name, exon)
            if exon.reference_object is None:
                exon.reference_object = self
        exons = sorted(exons, key=lambda x: x.start)
        for previous, current in zip(exons, exons[1:]):
            if Interval.overlaps(previous, current):
                raise MalformedInputError('exons of a transcript cannot overlap', name, previous, current)

        if strand == STRAND.NEG:
            exons.reverse()

        BioInterval.__init__(
            self, gene, min([e.start for e in exons]), max([e.end for e in exons]), name=name, strand=strand)
        self.exons = exons
        self.biotype = biotype
        self.logic_name = logic_name
        self.dbentries = []
        self.attributes = []
        self.supporting_features = []
        self.seq_region = ReferenceName(seq_region) if seq_region is not None else None
        self.region = region
        self._translation = None
        for entry in dbentries or []:
            self.add_dbentry(entry)
        for attr in attributes or []:
            self.add_attribute(attr)
        self.add_supporting_features(*(supporting_features or []))

        if translation is not None and coding_region is not None:
            raise MalformedInputError('give a translation or a coding region, not both', name)
        if coding_region is not None:
            translation = Translation.from_genomic(self, coding_region[0], coding_region[1])
        self.translation = translation

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

    @property
    def gene(self):
        """:class:`Gene`: the gene the transcript currently belongs to"""
        return self.reference_object

    @property
    def translation(self):
        """:class:`~genemerge.annotate.protein.Translation`: the coding region or None if non-coding"""
        return self._translation

    @translation.setter
    def translation(self, translation):
        if translation is not None:
            translation.reference_object = self
            translation.validate()
        self._translation = translation

    def remove_translation(self):
        self._translation = None

    @property
    def is_coding(self):
        return self._translation is not None

    @property
    def coding_region_start(self):
        """*int*: the lowest genomic position of the coding region, None for non-coding transcripts"""
        return self._translation.genomic_start if self._translation is not None else None

    @property
    def coding_region_end(self):
        """*int*: the highest genomic position of the coding region, None for non-coding transcripts"""
        return self._translation.genomic_end if self._translation is not None else None

    def translateable_exons(self):
        """
        Returns:
            :class:`list` of :class:`Exon`: the coding exons trimmed to the coding region (empty if non-coding)
        """
        if self._translation is None:
            return []
        return self._translation.translateable_exons()

    def add_dbentry(self, entry):
        """
        Returns:
            bool: True if the cross reference was added, False if it was already present
        """
        if entry in self.dbentries:
            return False
        self.dbentries.append(entry)
        return True

    def get_dbentries(self, dbname=None):
        return [e for e in self.dbentries if dbname is None or e.dbname == dbname]

    def flush_xrefs(self, dbnames):
        """
        remove all cross references to any of the given databases

        Returns:
            int: the number of cross references removed
        """
        kept = [e for e in self.dbentries if e.dbname not in dbnames]
        removed = len(self.dbentries) - len(kept)
        self.dbentries = kept
        return removed

    def add_attribute(self, attribute):
        """
        Returns:
            bool: True if the attribute was added, False if it was already present
        """
        if attribute in self.attributes:
            return False
        self.attributes.append(attribute)
        return True

    def get_attributes(self, code=None):
        return [a for a in self.attributes if code is None or a.code == code]

    def add_supporting_features(self, *features):
        added = 0
        for feature in features:
            if feature not in self.supporting_features:
                self.supporting_features.append(feature)
                added += 1
        return added

    def flush_supporting_features(self):
        self.supporting_features = []

    def to_dict(self):
        result = BioInterval.to_dict(self)
        result.update({
            'strand': self.strand,
            'biotype': self.biotype,
            'logic_name': self.logic_name,
            'exons': [e.to_dict() for e in self.exons],
            'translation': self._translation.to_dict() if self._translation is not None else None,
            'dbentries': [e.to_dict() for e in self.dbentries],
            'attributes': [a.to_dict() for a in self.attributes],
            'supporting_features': [f.to_dict() for f in self.supporting_features]
        })
        return result

    def __repr__(self):
        return 'Transcript({}, {}:{}-{}/{}, biotype={})'.format(
            self.name, self.seq_region, self.start, self.end, self.strand, self.biotype)


class Gene(BioInterval):
    """
    a set of transcripts. The span and strand of the gene are derived from its transcripts so that transcripts may
    be added and removed during the merge. Genes are compared by identity
    """

    def __init__(self, transcripts=None, name=None, biotype=None, logic_name=None, seq_region=None):
        """
        Args:
            transcripts (:class:`list` of :class:`Transcript`): the transcripts of the gene
            name (str): the gene id
            biotype (str): the gene biotype
            logic_name (str): the name of the analysis which created the gene
            seq_region (str): the name of the reference sequence. Taken from the transcripts when not given
        """
        self.reference_object = None
        self.name = name
        self.strand = None
        self.biotype = biotype
        self.logic_name = logic_name
        self.transcripts = []
        for transcript in transcripts or []:
            self.add_transcript(transcript)
        if seq_region is None:
            seq_region = next((t.seq_region for t in self.transcripts if t.seq_region is not None), None)
        self.seq_region = ReferenceName(seq_region) if seq_region is not None else None

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

    @property
    def position(self):
        """
        Raises:
            AttributeError: the gene has no transcripts
        """
        if not self.transcripts:
            raise AttributeError('cannot compute the span of a gene without transcripts', self.name)
        return Interval.union(*[t.position for t in self.transcripts])

    def get_strand(self):
        if not self.transcripts:
            raise AttributeError('strand has not been defined', self.name)
        return self.transcripts[0].get_strand()

    @property
    def exons(self):
        """:class:`list` of :class:`Exon`: the distinct exon objects of all transcripts"""
        exons = []
        seen = set()
        for transcript in self.transcripts:
            for exon in transcript.exons:
                if id(exon) not in seen:
                    seen.add(id(exon))
                    exons.append(exon)
        return exons

    def add_transcript(self, transcript):
        """
        add a transcript to the gene. The transcript is detached from any gene it previously pointed to
        """
        if any([t is transcript for t in self.transcripts]):
            return
        self.transcripts.append(transcript)
        transcript.reference_object = self

    def remove_transcript(self, transcript):
        """
        Raises:
            ValueError: the transcript does not belong to the gene
        """
        for index, current in enumerate(self.transcripts):
            if current is transcript:
                del self.transcripts[index]
                return
        raise ValueError('transcript is not associated with this gene', transcript, self.name)

    def to_dict(self):
        return {
            'name': self.name,
            'biotype': self.biotype,
            'logic_name': self.logic_name,
            'seq_region': self.seq_region,
            'start': self.start,
            'end': self.end,
            'strand': self.get_strand(),
            'transcripts': [t.to_dict() for t in self.transcripts]
        }

    def __repr__(self):
        if not self.transcripts:
            return 'Gene({}, transcripts=0)'.format(self.name)
        return 'Gene({}, {}:{}-{}, biotype={}, transcripts={})'.format(
            self.name, self.seq_region, self.start, self.end, self.biotype, len(self.transcripts))
