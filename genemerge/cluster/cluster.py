from shortuuid import uuid

from .constants import DEFAULTS
from ..annotate.genomic import Gene
from ..error import ClusterIntegrityError
from ..interval import Interval, overlap_percent
from ..util import logger


class CodingExonCache:
    """
    memoizes the coding exons of transcripts for a single clustering run. The coding exons of a transcript are its
    translateable exons made unique by structure and sorted by genomic start
    """

    def __init__(self):
        self._exons = {}

    def clear(self):
        self._exons = {}

    def get(self, transcript):
        """
        Returns:
            :class:`list` of :class:`~genemerge.annotate.genomic.Exon`: the coding exons of the transcript
        """
        key = id(transcript)
        if key not in self._exons:
            unique = {}
            for exon in transcript.translateable_exons():
                unique.setdefault(exon.key(), exon)
            self._exons[key] = sorted(unique.values(), key=lambda x: (x.start, x.end))
        return self._exons[key]

    def __len__(self):
        return len(self._exons)


def _exons_overlap(exons, other_exons):
    for exon in exons:
        for other in other_exons:
            if exon.strand == other.strand and Interval.overlaps(exon, other):
                return True
    return False


def _cluster_by_exon_overlap(transcripts, get_span, get_exons):
    """
    single pass clustering where a transcript joins every cluster it overlaps. When a transcript matches more than
    one cluster the matching clusters are merged together with the transcript

    Args:
        transcripts (:class:`list` of :class:`~genemerge.annotate.genomic.Transcript`): the sorted transcripts
        get_span (callable): returns the span of a transcript used for the first overlap check
        get_exons (callable): returns the exons of a transcript used for the second overlap check

    Returns:
        :class:`list` of :class:`list` of :class:`~genemerge.annotate.genomic.Transcript`: the clusters
    """
    clusters = []
    for transcript in transcripts:
        span = get_span(transcript)
        exons = get_exons(transcript)
        matching = []
        for index, cluster in enumerate(clusters):
            for member in cluster:
                if Interval.overlaps(span, get_span(member)) and _exons_overlap(exons, get_exons(member)):
                    matching.append(index)
                    break
        if not matching:
            clusters.append([transcript])
        elif len(matching) == 1:
            clusters[matching[0]].append(transcript)
        else:
            merged = []
            for index in matching:
                merged.extend(clusters[index])
            merged.append(transcript)
            clusters = [merged] + [c for i, c in enumerate(clusters) if i not in matching]
    return clusters


def check_clusters(num_transcripts, clusters):
    """
    check that a list of clusters is a partition of the clustered transcripts

    Args:
        num_transcripts (int): the number of transcripts which were clustered
        clusters (list): the clusters as lists of transcripts or genes

    Raises:
        ClusterIntegrityError: a transcript was assigned twice, a cluster is empty or transcripts were lost
    """
    seen = set()
    for cluster in clusters:
        members = getattr(cluster, 'transcripts', cluster)
        if not members:
            raise ClusterIntegrityError('found an empty cluster', cluster)
        for transcript in members:
            if id(transcript) in seen:
                raise ClusterIntegrityError('transcript was assigned to more than one cluster', transcript)
            seen.add(id(transcript))
    if len(seen) != num_transcripts:
        raise ClusterIntegrityError(
            'clustered transcripts ({}) does not equal the number of transcripts input ({})'.format(
                len(seen), num_transcripts))


def _new_gene(transcripts):
    """
    wrap a cluster in a new gene. The name is derived from the location and member transcripts so that the same input
    always gives the same names
    """
    gene = Gene(transcripts)
    key = '{}:{}-{}:{}:{}'.format(
        gene.seq_region, gene.start, gene.end, gene.get_strand(), ','.join(sorted([str(t.name) for t in transcripts])))
    gene.name = 'cluster-{}'.format(uuid(name=key))
    return gene


def cluster_into_genes(transcripts, cache=None):
    """
    cluster coding transcripts into genes. Two transcripts are put in the same gene when their coding regions overlap
    and at least one pair of their coding exons overlap on the same strand. Non-coding transcripts are ignored

    Args:
        transcripts (:class:`list` of :class:`~genemerge.annotate.genomic.Transcript`): transcripts to cluster
        cache (CodingExonCache): cache of coding exons for this run. It is cleared before clustering

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the clustered genes

    Raises:
        ClusterIntegrityError: the clusters are not a partition of the coding transcripts
    """
    if cache is None:
        cache = CodingExonCache()
    cache.clear()
    coding = []
    for transcript in transcripts:
        if transcript.is_coding:
            coding.append(transcript)
        else:
            logger.debug(f'ignoring non-coding transcript in coding clustering: {transcript.name}')
    coding.sort(key=lambda t: (t.coding_region_start, -1 * t.coding_region_end))

    clusters = _cluster_by_exon_overlap(
        coding,
        lambda t: (t.coding_region_start, t.coding_region_end),
        cache.get
    )
    check_clusters(len(coding), clusters)
    logger.info(f'clustered {len(coding)} coding transcripts into {len(clusters)} genes')
    return [_new_gene(c) for c in clusters]


def cluster_into_pseudogenes(transcripts):
    """
    cluster transcripts into genes by genomic span and overlap of any of their exons on the same strand

    Args:
        transcripts (:class:`list` of :class:`~genemerge.annotate.genomic.Transcript`): transcripts to cluster

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the clustered genes

    Raises:
        ClusterIntegrityError: the clusters are not a partition of the input transcripts
    """
    transcripts = sorted(transcripts, key=lambda t: (t.start, -1 * t.end))
    clusters = _cluster_by_exon_overlap(transcripts, lambda t: t.position, lambda t: t.exons)
    check_clusters(len(transcripts), clusters)
    logger.info(f'clustered {len(transcripts)} non-coding transcripts into {len(clusters)} genes')
    return [_new_gene(c) for c in clusters]


def get_coding_length(gene):
    """
    Returns:
        int: the length (amino acids) of the longest translation of the gene, 0 if the gene has no coding transcripts
    """
    return max([t.translation.length for t in gene.transcripts if t.is_coding] or [0])


def coding_exons_for_gene(gene, cache=None):
    """
    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Exon`: the coding exons of all transcripts of the gene
    """
    if cache is None:
        cache = CodingExonCache()
    exons = []
    for transcript in gene.transcripts:
        exons.extend(cache.get(transcript))
    return exons


def combine_gene_clusters(coding_genes, pseudo_genes, min_overlap_percent=None):
    """
    move the transcripts of pseudogene clusters into the coding cluster they overlap. A pseudogene is absorbed by the
    first coding gene (sorted by start, longest first) where some coding exon and pseudogene exon on the same strand
    overlap by more than the threshold percentage of the coding length of the coding gene

    Args:
        coding_genes (:class:`list` of :class:`~genemerge.annotate.genomic.Gene`): the coding clusters
        pseudo_genes (:class:`list` of :class:`~genemerge.annotate.genomic.Gene`): the non-coding clusters
        min_overlap_percent (float): the overlap percentage which must be exceeded

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the coding genes followed by the pseudogenes
        which were not absorbed
    """
    if min_overlap_percent is None:
        min_overlap_percent = DEFAULTS.min_pseudogene_overlap_percent
    coding_genes = sorted(coding_genes, key=lambda g: (g.start, -1 * g.end))
    pseudo_genes = sorted(pseudo_genes, key=lambda g: (g.start, -1 * g.end))
    cache = CodingExonCache()
    remaining = []

    for pseudo_gene in pseudo_genes:
        absorbed_by = None
        for coding_gene in coding_genes:
            if not Interval.overlaps(coding_gene, pseudo_gene):
                continue
            coding_length = get_coding_length(coding_gene)
            if not coding_length:
                continue
            for coding_exon in coding_exons_for_gene(coding_gene, cache):
                for exon in pseudo_gene.exons:
                    if coding_exon.strand != exon.strand:
                        continue
                    if overlap_percent(coding_exon, exon, coding_length) > min_overlap_percent:
                        absorbed_by = coding_gene
                        break
                if absorbed_by is not None:
                    break
            if absorbed_by is not None:
                break
        if absorbed_by is None:
            remaining.append(pseudo_gene)
            continue
        logger.debug(f'{absorbed_by.name} absorbed {pseudo_gene.name} ({len(pseudo_gene.transcripts)} transcripts)')
        for transcript in list(pseudo_gene.transcripts):
            pseudo_gene.remove_transcript(transcript)
            absorbed_by.add_transcript(transcript)
    logger.info(f'absorbed {len(pseudo_genes) - len(remaining)} of {len(pseudo_genes)} non-coding genes')
    return coding_genes + remaining
