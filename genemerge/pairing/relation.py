"""
records the outcome of pairing a curated transcript with an automatic transcript: cross references, attributes and
the transfer of alignment evidence onto the transcript which is kept
"""
from ..annotate.evidence import Attribute, DBEntry
from ..constants import ATTRIBUTE, PAIR_OUTCOME, XREF
from ..error import MalformedInputError
from ..util import logger


def record_xrefs(transcript):
    """
    Returns:
        :class:`list` of :class:`~genemerge.annotate.evidence.DBEntry`: the cross references of the transcript to its
        curated record (primary and display id are the same)
    """
    return [
        e for e in transcript.get_dbentries(XREF.RECORD) if e.primary_id == e.display_id
    ]


def _transcript_edge(transcript):
    region = transcript.region
    if region is not None:
        coord_system, version, seq_region = region.coord_system, region.version or '', region.seq_region_name
    else:
        coord_system, version, seq_region = 'chromosome', '', transcript.seq_region
    return '{}:{}:{}:{}:{}:1'.format(coord_system, version, seq_region, transcript.start, transcript.end)


def transfer_supporting_evidence(source_exon, target_exon):
    """
    copy the alignment evidence of one exon onto another. Duplicate features of the source (same hit name, genomic
    and hit coordinates) are only copied once and features already on the target are not duplicated

    Returns:
        int: the number of features added to the target
    """
    unique = {}
    for feature in source_exon.supporting_features:
        key = (feature.hseqname, feature.start, feature.end, feature.hstart, feature.hend)
        unique.setdefault(key, feature)
    return target_exon.add_supporting_features(*unique.values())


def transfer_supporting_features(source, target):
    """
    copy the transcript level evidence and then the exon level evidence of the source transcript onto the target.
    Exons are paired by their position in the transcript

    Raises:
        MalformedInputError: the transcripts have a different number of exons
    """
    if len(source.exons) != len(target.exons):
        raise MalformedInputError(
            'cannot transfer exon evidence between transcripts with a different number of exons',
            source.name, target.name)
    target.add_supporting_features(*source.supporting_features)
    for source_exon, target_exon in zip(source.exons, target.exons):
        transfer_supporting_evidence(source_exon, target_exon)


def add_evidence_attributes(source, target):
    """
    summarize the alignment evidence of the source transcript as attributes of the target. Every distinct hit name
    becomes one attribute with a code depending on the level (transcript or exon) and type (dna or protein) of the
    feature
    """
    hits = []
    for feature in source.supporting_features:
        code = ATTRIBUTE.TRANSCRIPT_PROTEIN_SUPPORT if feature.is_protein else ATTRIBUTE.TRANSCRIPT_DNA_SUPPORT
        hits.append((code, feature.hseqname))
    for exon in source.exons:
        for feature in exon.supporting_features:
            code = ATTRIBUTE.EXON_PROTEIN_SUPPORT if feature.is_protein else ATTRIBUTE.EXON_DNA_SUPPORT
            hits.append((code, feature.hseqname))
    added = 0
    for code, hseqname in hits:
        if target.add_attribute(Attribute(code, hseqname)):
            added += 1
    return added


def add_unmatched_xref(transcript):
    """
    link a curated transcript which was not paired to its own record
    """
    for entry in record_xrefs(transcript):
        transcript.add_dbentry(DBEntry(XREF.RECORD_ID, entry.primary_id, transcript.name))


def set_transcript_relation(outcome, first, second):
    """
    record the relationship decided for a pair of transcripts

    Args:
        outcome (PAIR_OUTCOME): the decision for the pair
        first (Transcript): the curated transcript
        second (Transcript): the automatic transcript

    Raises:
        MalformedInputError: the curated transcript is dropped and the exon counts of the pair differ
        ValueError: the outcome does not record a relationship
    """
    entries = record_xrefs(first)
    if outcome == PAIR_OUTCOME.SHARE_CDS:
        for entry in entries:
            second.add_dbentry(DBEntry(XREF.SHARES_CDS, entry.primary_id, entry.display_id))
            first.add_dbentry(DBEntry(XREF.RECORD_ID, entry.primary_id, entry.display_id))
        second.add_attribute(Attribute(ATTRIBUTE.SECONDARY_LINK, second.name))
        first.add_dbentry(DBEntry(XREF.SHARES_CDS_WITH_SECONDARY, second.name, second.name))
    elif outcome == PAIR_OUTCOME.DROP_FIRST:
        for entry in entries:
            second.add_dbentry(DBEntry(XREF.SHARES_CDS, entry.primary_id, entry.display_id))
        second.add_attribute(Attribute(ATTRIBUTE.TRANSCRIPT_EDGE, _transcript_edge(first)))
        if len(first.exons) != len(second.exons):
            raise MalformedInputError(
                'cannot transfer exon evidence between transcripts with a different number of exons',
                first.name, second.name)
        for source_exon, target_exon in zip(first.exons, second.exons):
            transfer_supporting_evidence(source_exon, target_exon)
        add_evidence_attributes(first, second)
    elif outcome == PAIR_OUTCOME.DROP_SECOND:
        for entry in entries:
            first.add_dbentry(DBEntry(XREF.SHARES_CDS_AND_UTR, entry.primary_id, entry.display_id))
        transfer_supporting_features(second, first)
    else:
        raise ValueError('outcome does not record a relationship', outcome)
    logger.debug(f'{first.name} and {second.name}: {outcome}')
