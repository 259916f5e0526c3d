import os

from genemerge.annotate.evidence import DBEntry, SupportingFeature
from genemerge.annotate.genomic import Exon, Gene, Transcript
from genemerge.constants import STRAND, XREF

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


def build_transcript(exons, strand=STRAND.POS, coding=None, name=None, biotype='protein_coding', **kwargs):
    """
    shorthand for building transcripts in tests. exons are given as (start, end) tuples and the coding region as a
    genomic (start, end) tuple
    """
    exons = [Exon(start, end, strand=strand) for start, end in exons]
    return Transcript(exons, strand=strand, coding_region=coding, name=name, biotype=biotype, **kwargs)


def curated(exons, coding=None, name='OTTHUMT01', biotype='protein_coding_havana', **kwargs):
    """
    a transcript of the curated source carrying its record cross reference
    """
    transcript = build_transcript(exons, coding=coding, name=name, biotype=biotype, **kwargs)
    transcript.add_dbentry(DBEntry(XREF.RECORD, name, name))
    return transcript


def automatic(exons, coding=None, name='ENST01', biotype='protein_coding', **kwargs):
    return build_transcript(exons, coding=coding, name=name, biotype=biotype, **kwargs)


def feature(hseqname, start, end, **kwargs):
    return SupportingFeature(hseqname, start, end, **kwargs)


def gene_of(*transcripts, name='gene1'):
    return Gene(list(transcripts), name=name)
