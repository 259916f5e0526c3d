"""
decides the relationship between a transcript from the curated source (first) and one from the automatic source
(second) which were clustered into the same gene
"""
from collections import namedtuple

from ..config import BIOTYPE_DEFAULTS
from ..constants import PAIR_OUTCOME, STRAND
from ..util import logger


class PairContext(namedtuple('PairContext', [
    'first', 'second', 'first_exons', 'second_exons', 'first_coding_exons', 'second_coding_exons'
])):
    """
    the transcripts being compared with their exons and trimmed coding exons in transcription order
    """

    def __new__(cls, first, second):
        return super(PairContext, cls).__new__(
            cls, first, second, list(first.exons), list(second.exons),
            first.translateable_exons(), second.translateable_exons())

    @property
    def both_noncoding(self):
        return not self.first.is_coding and not self.second.is_coding

    @property
    def first_coding_only(self):
        return self.first.is_coding and not self.second.is_coding

    @property
    def second_coding_only(self):
        return not self.first.is_coding and self.second.is_coding

    @property
    def single_exon(self):
        return len(self.first_exons) == 1


Rule = namedtuple('Rule', ['name', 'predicate', 'outcome', 'effect'])
"""
a row of the pairing decision table

- ``name``: identifies the rule in logs and tests
- ``predicate``: callable given a :class:`PairContext`, the first rule returning True decides the outcome
- ``outcome``: the :attr:`PAIR_OUTCOME` of the pair
- ``effect``: optional callable applied to the pair when the decision is acted on
"""


def _same_coords(exon, other):
    return exon.start == other.start and exon.end == other.end and exon.strand == other.strand


def _span(exons):
    return (min([e.start for e in exons]), max([e.end for e in exons]))


def _splice_ends_match(exons, other_exons):
    """
    True if the inner (spliced) boundaries of the terminal exons agree
    """
    if exons[0].strand != other_exons[0].strand:
        return False
    if exons[0].strand == STRAND.NEG:
        return exons[0].start == other_exons[0].start and exons[-1].end == other_exons[-1].end
    return exons[0].end == other_exons[0].end and exons[-1].start == other_exons[-1].start


def has_utr(exons, coding_exons):
    """
    True if the transcript extends beyond its coding region on either end
    """
    return _span(exons) != _span(coding_exons)


def check_internal_exon_structure(exons, other_exons):
    """
    compare the exon structure of two transcripts ignoring the outer boundaries of the terminal exons

    Args:
        exons (:class:`list` of :class:`~genemerge.annotate.genomic.Exon`): exons in transcription order
        other_exons (:class:`list` of :class:`~genemerge.annotate.genomic.Exon`): exons in transcription order

    Returns:
        bool: True if the exon counts are equal, all internal exons are identical and the spliced boundaries of the
        terminal exons agree
    """
    if not exons or len(exons) != len(other_exons):
        return False
    if not _splice_ends_match(exons, other_exons):
        return False
    for exon, other in zip(exons[1:-1], other_exons[1:-1]):
        if not _same_coords(exon, other):
            return False
    return True


def check_terminal_exon_structure(exons, other_exons):
    """
    compare the genomic extent of two transcripts

    Args:
        exons (:class:`list` of :class:`~genemerge.annotate.genomic.Exon`): exons of the first transcript
        other_exons (:class:`list` of :class:`~genemerge.annotate.genomic.Exon`): exons of the second transcript

    Returns:
        bool: False only when the second set of exons extends beyond the first on at least one end and does not fall
        short of it on the other, True otherwise (including when both are identical or are on different strands)

    Example:
        >>> check_terminal_exon_structure([Exon(100, 200, 1)], [Exon(50, 200, 1)])
        False
        >>> check_terminal_exon_structure([Exon(100, 200, 1)], [Exon(100, 200, 1)])
        True
    """
    if exons[0].strand != other_exons[0].strand:
        return True
    start, end = _span(exons)
    other_start, other_end = _span(other_exons)
    if (start, end) != (other_start, other_end) and other_start <= start and other_end >= end:
        return False
    return True


def _internal_coding_exons_match(ctx):
    for exon, other in zip(ctx.first_coding_exons[1:-1], ctx.second_coding_exons[1:-1]):
        if not _same_coords(exon, other):
            return False
    return True


def _terminal_exons_identical(ctx):
    return _same_coords(ctx.first_exons[0], ctx.second_exons[0]) and \
        _same_coords(ctx.first_exons[-1], ctx.second_exons[-1])


def _second_has_utr(ctx):
    return has_utr(ctx.second_exons, ctx.second_coding_exons)


def _demote_second(first, second, demoted_suffix=None):
    """
    remove the translation of the second transcript and give it the biotype of the first with the demoted suffix
    """
    if demoted_suffix is None:
        demoted_suffix = BIOTYPE_DEFAULTS.demoted_suffix
    second.remove_translation()
    second.biotype = '{}{}'.format(first.biotype, demoted_suffix)
    logger.debug(f'removed the translation of {second.name} and set the biotype to {second.biotype}')


RULES = [
    Rule('strand_mismatch', lambda c: c.first.get_strand() != c.second.get_strand(), PAIR_OUTCOME.KEEP_BOTH, None),
    Rule('exon_count_mismatch', lambda c: len(c.first_exons) != len(c.second_exons), PAIR_OUTCOME.KEEP_BOTH, None),
    # both non-coding
    Rule(
        'noncoding_internal_mismatch',
        lambda c: c.both_noncoding and not check_internal_exon_structure(c.second_exons, c.first_exons),
        PAIR_OUTCOME.KEEP_BOTH, None),
    Rule(
        'noncoding_first_not_shorter',
        lambda c: c.both_noncoding and check_terminal_exon_structure(c.first_exons, c.second_exons),
        PAIR_OUTCOME.DROP_SECOND, None),
    Rule('noncoding_second_longer', lambda c: c.both_noncoding, PAIR_OUTCOME.DROP_FIRST, None),
    # first coding, second non-coding
    Rule(
        'first_coding_internal_mismatch',
        lambda c: c.first_coding_only and not check_internal_exon_structure(c.second_exons, c.first_coding_exons),
        PAIR_OUTCOME.KEEP_BOTH, None),
    Rule('first_coding', lambda c: c.first_coding_only, PAIR_OUTCOME.DROP_SECOND, None),
    # first non-coding, second coding
    Rule(
        'second_coding_internal_mismatch',
        lambda c: c.second_coding_only and not c.single_exon and not check_internal_exon_structure(
            c.first_exons, c.second_exons),
        PAIR_OUTCOME.KEEP_BOTH, None),
    Rule(
        'second_coding_demoted',
        lambda c: c.second_coding_only and check_terminal_exon_structure(c.first_exons, c.second_coding_exons),
        PAIR_OUTCOME.DROP_FIRST, _demote_second),
    Rule('second_coding', lambda c: c.second_coding_only, PAIR_OUTCOME.DROP_SECOND, None),
    # both coding
    Rule(
        'translation_mismatch',
        lambda c: c.first.coding_region_start != c.second.coding_region_start or
        c.first.coding_region_end != c.second.coding_region_end,
        PAIR_OUTCOME.KEEP_BOTH, None),
    Rule(
        'single_exon_identical',
        lambda c: c.single_exon and _same_coords(c.first_exons[0], c.second_exons[0]) and
        _same_coords(c.first_coding_exons[0], c.second_coding_exons[0]),
        PAIR_OUTCOME.DROP_SECOND, None),
    Rule(
        'single_exon_second_contained_without_utr',
        lambda c: c.single_exon and c.first_exons[0].start <= c.second_exons[0].start and
        c.first_exons[0].end >= c.second_exons[0].end and not _second_has_utr(c),
        PAIR_OUTCOME.DROP_SECOND, None),
    Rule(
        'single_exon_second_utr',
        lambda c: c.single_exon and not _same_coords(c.first_exons[0], c.second_exons[0]) and _second_has_utr(c),
        PAIR_OUTCOME.DROP_FIRST, None),
    Rule('single_exon', lambda c: c.single_exon, PAIR_OUTCOME.KEEP_BOTH, None),
    Rule(
        'coding_exon_count_mismatch',
        lambda c: len(c.first_coding_exons) != len(c.second_coding_exons),
        PAIR_OUTCOME.KEEP_BOTH, None),
    Rule('internal_coding_exon_mismatch', lambda c: not _internal_coding_exons_match(c), PAIR_OUTCOME.KEEP_BOTH, None),
    Rule(
        'internal_exon_mismatch',
        lambda c: not all([_same_coords(e, o) for e, o in zip(c.first_exons[1:-1], c.second_exons[1:-1])]),
        PAIR_OUTCOME.SHARE_CDS, None),
    Rule('identical_exons', _terminal_exons_identical, PAIR_OUTCOME.DROP_SECOND, None),
    Rule(
        'first_utr_only',
        lambda c: _splice_ends_match(c.first_exons, c.second_exons) and not _second_has_utr(c),
        PAIR_OUTCOME.DROP_SECOND, None),
    Rule(
        'different_utr',
        lambda c: _splice_ends_match(c.first_exons, c.second_exons) and _second_has_utr(c),
        PAIR_OUTCOME.DROP_FIRST, None),
    Rule('shared_cds', lambda c: True, PAIR_OUTCOME.SHARE_CDS, None),
]
""":class:`list` of :class:`Rule`: the pairing decision table in priority order"""


def match_rule(first, second):
    """
    Returns:
        Rule: the first rule of the decision table which applies to the pair
    """
    ctx = PairContext(first, second)
    for rule in RULES:
        if rule.predicate(ctx):
            return rule
    raise AssertionError('no pairing rule matched', first, second)


def classify_pair(first, second):
    """
    decide the relationship between two transcripts without modifying them

    Args:
        first (Transcript): the transcript from the curated source
        second (Transcript): the transcript from the automatic source

    Returns:
        :class:`tuple` of :class:`PAIR_OUTCOME` and :class:`str`: the outcome and the name of the deciding rule
    """
    rule = match_rule(first, second)
    return rule.outcome, rule.name


def apply_pair_effect(rule_name, first, second, demoted_suffix=None):
    """
    apply the side effect (if any) of a rule of the decision table to the pair
    """
    for rule in RULES:
        if rule.name == rule_name:
            if rule.effect is not None:
                rule.effect(first, second, demoted_suffix=demoted_suffix)
            return
    raise KeyError('not a pairing rule', rule_name)


def are_matched_pair(first, second, demoted_suffix=None):
    """
    compare two transcripts and apply the side effect of the deciding rule

    Args:
        first (Transcript): the transcript from the curated source
        second (Transcript): the transcript from the automatic source
        demoted_suffix (str): suffix given to the biotype of a coding second transcript which loses its translation

    Returns:
        0 if both transcripts are kept unrelated, 1 if both are kept and share a coding sequence, otherwise the
        transcript which should be removed
    """
    rule = match_rule(first, second)
    logger.debug(f'{first.name} vs {second.name}: {rule.name}')
    if rule.effect is not None:
        rule.effect(first, second, demoted_suffix=demoted_suffix)
    if rule.outcome == PAIR_OUTCOME.DROP_FIRST:
        return first
    elif rule.outcome == PAIR_OUTCOME.DROP_SECOND:
        return second
    return rule.outcome
