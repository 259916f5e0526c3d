"""
module which holds all functions relating to loading and writing annotation files and the in-memory sources which
the gene builder fetches genes from
"""
import copy
import json

from .evidence import Attribute, DBEntry, SupportingFeature
from .genomic import Exon, Gene, Transcript
from .protein import Translation
from ..constants import parse_strand
from ..error import MalformedInputError
from ..util import NullableType, logger


def _parse_features(records):
    features = []
    for record in records or []:
        record = dict(record)
        for attr in ['strand', 'hstrand']:
            if attr in record:
                record[attr] = parse_strand(record[attr])
        features.append(SupportingFeature(**record))
    return features


def _parse_transcript(transcript_dict, seq_region=None):
    name = transcript_dict.get('name', None)
    try:
        strand = parse_strand(transcript_dict['strand'])
    except KeyError:
        raise MalformedInputError('transcript is missing the strand', name)
    except TypeError as err:
        raise MalformedInputError('transcript strand is not valid', name, str(err))

    cast_phase = NullableType(int)
    exons = []
    for exon_dict in transcript_dict.get('exons', []):
        exons.append(Exon(
            exon_dict['start'], exon_dict['end'], strand=strand,
            phase=cast_phase(exon_dict.get('phase', None)),
            end_phase=cast_phase(exon_dict.get('end_phase', None)),
            name=exon_dict.get('name', None),
            supporting_features=_parse_features(exon_dict.get('supporting_features', []))
        ))

    transcript = Transcript(
        exons,
        strand=strand,
        name=name,
        biotype=transcript_dict.get('biotype', None),
        logic_name=transcript_dict.get('logic_name', None),
        dbentries=[DBEntry(**e) for e in transcript_dict.get('dbentries', [])],
        attributes=[Attribute(**a) for a in transcript_dict.get('attributes', [])],
        supporting_features=_parse_features(transcript_dict.get('supporting_features', [])),
        seq_region=transcript_dict.get('seq_region', seq_region)
    )
    translation = transcript_dict.get('translation', None)
    if translation:
        if 'genomic_start' in translation:
            transcript.translation = Translation.from_genomic(
                transcript, translation['genomic_start'], translation['genomic_end'], name=translation.get('name'))
        else:
            transcript.translation = Translation(
                translation['start_exon'], translation['start_offset'],
                translation['end_exon'], translation['end_offset'],
                name=translation.get('name', None)
            )
    return transcript


def parse_annotations_json(data):
    """
    parses a json of annotation information into annotation objects

    Args:
        data (dict): the parsed json content. Expects a top level 'genes' list

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the genes

    Raises:
        MalformedInputError: a gene or transcript is missing required content
    """
    genes = []
    try:
        gene_dicts = data['genes']
    except (KeyError, TypeError):
        raise MalformedInputError('annotations input has unexpected form. expected a top level genes list')
    for gene_dict in gene_dicts:
        seq_region = gene_dict.get('seq_region', gene_dict.get('chr', None))
        gene = Gene(
            name=gene_dict.get('name', None),
            biotype=gene_dict.get('biotype', None),
            logic_name=gene_dict.get('logic_name', None),
            seq_region=seq_region
        )
        for transcript_dict in gene_dict.get('transcripts', []):
            gene.add_transcript(_parse_transcript(transcript_dict, seq_region))
        if not gene.transcripts:
            logger.warning(f'ignoring gene without transcripts: {gene.name}')
            continue
        genes.append(gene)
    return genes


def load_annotations(*filepaths):
    """
    loads gene models from one or more json files

    Args:
        filepaths (str): paths to the input files

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the genes of all files
    """
    genes = []
    for filename in filepaths:
        logger.info(f'loading: {filename}')
        with open(filename) as fh:
            data = json.load(fh)
        current = parse_annotations_json(data)
        logger.info(f'loaded {len(current)} genes')
        genes.extend(current)
    return genes


def write_annotations(genes, filename):
    """
    write gene models to a json file in the same format read by :func:`load_annotations`
    """
    logger.info(f'writing: {filename}')
    with open(filename, 'w') as fh:
        json.dump({'genes': [gene.to_dict() for gene in genes]}, fh, indent='  ', sort_keys=True)


class AnnotationSource:
    """
    in-memory source of gene models which can be queried by region and biotype
    """

    def __init__(self, genes=None, name=None):
        self.genes = list(genes or [])
        self.name = name

    @classmethod
    def from_files(cls, *filepaths, name=None):
        return cls(load_annotations(*filepaths), name=name)

    def fetch_genes_by_type(self, region, biotype):
        """
        Args:
            region (Region): the region to fetch genes for
            biotype (str): the gene biotype to fetch

        Returns:
            :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: copies of the genes of the given biotype
            which overlap the region. The merge modifies the genes it is given so the loaded genes are never returned
        """
        return [copy.deepcopy(g) for g in self.genes if g.biotype == biotype and region.overlaps(g)]

    def __repr__(self):
        return 'AnnotationSource({}, genes={})'.format(self.name, len(self.genes))


class DiscardedTranscripts:
    """
    set of transcript structures which have been reviewed and rejected. A transcript is discarded when a member
    has the same number of exons with exactly the same coordinates and strand in transcription order
    """

    def __init__(self, transcripts=None):
        self.structures = set()
        for transcript in transcripts or []:
            self.add(transcript)

    @classmethod
    def from_files(cls, *filepaths):
        transcripts = []
        for gene in load_annotations(*filepaths):
            transcripts.extend(gene.transcripts)
        return cls(transcripts)

    @staticmethod
    def structure(transcript):
        return tuple([(exon.start, exon.end, exon.strand) for exon in transcript.exons])

    def add(self, transcript):
        self.structures.add(DiscardedTranscripts.structure(transcript))

    def is_discarded(self, transcript):
        return DiscardedTranscripts.structure(transcript) in self.structures

    def __len__(self):
        return len(self.structures)
