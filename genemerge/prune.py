"""
collapses structurally identical exons of a gene into a single shared exon object
"""
from .util import logger


def prune_exons(gene):
    """
    replace every exon of the gene by the first structurally identical exon (same start, end, strand, phase and
    end phase) seen in transcript order. Translations reference exons by index and remain valid

    Args:
        gene (Gene): the gene to prune

    Returns:
        Gene: the input gene

    Example:
        >>> prune_exons(gene)
        >>> gene.transcripts[0].exons[0] is gene.transcripts[1].exons[0]
        True
    """
    unique_exons = {}
    for transcript in gene.transcripts:
        exons = []
        for exon in transcript.exons:
            exons.append(unique_exons.setdefault(exon.key(), exon))
        transcript.exons = exons
    return gene


def make_shared_exons_unique(genes):
    """
    apply :func:`prune_exons` to a list of genes

    Returns:
        :class:`list` of :class:`Gene`: the input genes
    """
    for gene in genes:
        before = len(gene.exons)
        prune_exons(gene)
        if before != len(gene.exons):
            logger.debug(f'{gene.name}: pruned exons from {before} to {len(gene.exons)}')
    return genes
