from .pairing import apply_pair_effect, classify_pair
from .relation import add_evidence_attributes, add_unmatched_xref, set_transcript_relation
from ..config import BIOTYPE_DEFAULTS
from ..constants import PAIR_OUTCOME
from ..util import logger

# pairings are chosen by outcome in this order, earlier candidates win ties
OUTCOME_PRIORITY = [PAIR_OUTCOME.DROP_SECOND, PAIR_OUTCOME.DROP_FIRST, PAIR_OUTCOME.SHARE_CDS]


def split_by_source(gene, primary_suffix):
    """
    Returns:
        :class:`tuple` of :class:`list` of :class:`~genemerge.annotate.genomic.Transcript`: the curated (biotype
        carries the primary suffix) and automatic transcripts of the gene
    """
    primary, secondary = [], []
    for transcript in gene.transcripts:
        if transcript.biotype and transcript.biotype.endswith(primary_suffix):
            primary.append(transcript)
        else:
            secondary.append(transcript)
    return primary, secondary


def choose_pairing(primary_transcript, candidates):
    """
    compare a curated transcript to the automatic candidates and pick the strongest relationship

    Returns:
        :class:`tuple`: the outcome, the name of the deciding rule and the chosen candidate. The candidate is None when
        no candidate is related to the curated transcript
    """
    best = (PAIR_OUTCOME.KEEP_BOTH, None, None)
    for candidate in candidates:
        outcome, rule_name = classify_pair(primary_transcript, candidate)
        logger.debug(f'{primary_transcript.name} vs {candidate.name}: {outcome} ({rule_name})')
        if outcome == PAIR_OUTCOME.KEEP_BOTH:
            continue
        if best[2] is None or OUTCOME_PRIORITY.index(outcome) < OUTCOME_PRIORITY.index(best[0]):
            best = (outcome, rule_name, candidate)
    return best


def _tag_merged(transcript, suffix):
    if not (transcript.biotype or '').endswith(suffix):
        transcript.biotype = '{}{}'.format(transcript.biotype or '', suffix)


def merge_redundant_transcripts(genes, settings=None):
    """
    within each gene pair the curated transcripts with the automatic transcripts and remove the redundant
    member of each pair. Each curated transcript is paired with at most one automatic transcript

    Args:
        genes (:class:`list` of :class:`~genemerge.annotate.genomic.Gene`): the clustered genes
        settings (MergeNamespace): biotype settings (primary_suffix, merged_transcript_suffix, demoted_suffix)

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the input genes
    """
    if settings is None:
        settings = BIOTYPE_DEFAULTS
    dropped = 0
    for gene in genes:
        primary, secondary = split_by_source(gene, settings.primary_suffix)
        if not primary:
            continue
        for primary_transcript in primary:
            add_evidence_attributes(primary_transcript, primary_transcript)
            primary_transcript.flush_supporting_features()

            outcome, rule_name, candidate = choose_pairing(primary_transcript, secondary)
            if candidate is None:
                add_unmatched_xref(primary_transcript)
                continue
            logger.debug(f'paired {primary_transcript.name} with {candidate.name}: {outcome} ({rule_name})')
            apply_pair_effect(rule_name, primary_transcript, candidate, demoted_suffix=settings.demoted_suffix)
            set_transcript_relation(outcome, primary_transcript, candidate)
            _tag_merged(primary_transcript, settings.merged_transcript_suffix)
            _tag_merged(candidate, settings.merged_transcript_suffix)

            if outcome == PAIR_OUTCOME.DROP_FIRST:
                gene.remove_transcript(primary_transcript)
                dropped += 1
            elif outcome == PAIR_OUTCOME.DROP_SECOND:
                gene.remove_transcript(candidate)
                secondary = [t for t in secondary if t is not candidate]
                dropped += 1
    logger.info(f'removed {dropped} redundant transcripts')
    return genes
