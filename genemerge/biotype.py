"""
assigns the final biotype of the merged genes from the biotypes of their transcripts
"""
from .config import BIOTYPE_DEFAULTS
from .constants import BIOTYPE_STATUS, SOURCE
from .error import UnclassifiableBiotypeError
from .util import logger


def _strip_suffix(biotype, suffix):
    if suffix and biotype.endswith(suffix):
        return biotype[:-1 * len(suffix)]
    return biotype


class BiotypeSets:
    """
    the transcript biotypes recognized for each final gene category
    """

    def __init__(self, coding, processed, pseudo):
        self.coding = set(coding)
        self.processed = set(processed)
        self.pseudo = set(pseudo)

    @classmethod
    def from_settings(cls, settings=None):
        """
        build the sets from the configured automatic biotypes and the curated biotypes tagged with the primary suffix

        Example:
            >>> sets = BiotypeSets.from_settings()
            >>> 'protein_coding_havana' in sets.coding
            True
        """
        if settings is None:
            settings = BIOTYPE_DEFAULTS
        suffix = settings.primary_suffix

        def tagged(biotypes):
            return [b + suffix for b in biotypes]

        return cls(
            list(settings.secondary_coding_biotypes) + tagged(settings.primary_coding_biotypes),
            list(settings.secondary_processed_biotypes) + tagged(settings.primary_processed_biotypes),
            list(settings.secondary_pseudo_biotypes) + tagged(settings.primary_pseudo_biotypes)
        )

    def category(self, biotype):
        """
        Returns:
            BIOTYPE_STATUS: the category of an (untagged) biotype or None if it is not recognized
        """
        if biotype in self.coding:
            return BIOTYPE_STATUS.CODING
        elif biotype in self.processed:
            return BIOTYPE_STATUS.PROCESSED
        elif biotype in self.pseudo:
            return BIOTYPE_STATUS.PSEUDO
        return None


def classify_transcript_biotype(biotype, biotype_sets=None, settings=None):
    """
    Args:
        biotype (str): the biotype of a transcript after merging
        biotype_sets (BiotypeSets): the recognized biotypes
        settings (MergeNamespace): biotype settings

    Returns:
        :class:`tuple` of :class:`BIOTYPE_STATUS` and :class:`SOURCE`: the category (None if the biotype is not
        recognized) and provenance of the transcript

    Example:
        >>> classify_transcript_biotype('protein_coding_havana_ens')
        ('protein_coding', 'merged')
    """
    if settings is None:
        settings = BIOTYPE_DEFAULTS
    if biotype_sets is None:
        biotype_sets = BiotypeSets.from_settings(settings)
    biotype = biotype or ''
    untagged = _strip_suffix(_strip_suffix(biotype, settings.merged_transcript_suffix), settings.demoted_suffix)
    if settings.merged_transcript_suffix and biotype.endswith(settings.merged_transcript_suffix):
        source = SOURCE.MERGED
    elif settings.primary_suffix and untagged.endswith(settings.primary_suffix):
        source = SOURCE.PRIMARY
    else:
        source = SOURCE.SECONDARY
    return biotype_sets.category(untagged), source


def gene_provenance_suffix(sources, settings=None):
    """
    Args:
        sources (:class:`set` of :class:`SOURCE`): provenance of the transcripts of the gene

    Returns:
        str: the suffix of the gene biotype
    """
    if settings is None:
        settings = BIOTYPE_DEFAULTS
    if SOURCE.MERGED in sources or (SOURCE.PRIMARY in sources and SOURCE.SECONDARY in sources):
        return settings.merged_gene_suffix
    elif SOURCE.PRIMARY in sources:
        return settings.primary_gene_suffix
    return settings.secondary_gene_suffix


def update_biotypes(genes, settings=None, strict=False):
    """
    set the biotype of each gene from the category and provenance of its transcripts. Category priority is coding,
    then processed transcript, then pseudogene

    Args:
        genes (:class:`list` of :class:`~genemerge.annotate.genomic.Gene`): the merged genes
        settings (MergeNamespace): biotype settings
        strict (bool): raise an error for genes with no recognized transcript biotype

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the genes which could not be classified

    Raises:
        UnclassifiableBiotypeError: strict mode and a gene has no transcript with a recognized biotype
    """
    if settings is None:
        settings = BIOTYPE_DEFAULTS
    biotype_sets = BiotypeSets.from_settings(settings)
    unclassified = []
    for gene in genes:
        categories = set()
        sources = set()
        for transcript in gene.transcripts:
            category, source = classify_transcript_biotype(transcript.biotype, biotype_sets, settings)
            sources.add(source)
            if category is not None:
                categories.add(category)
        suffix = gene_provenance_suffix(sources, settings)

        for status in [BIOTYPE_STATUS.CODING, BIOTYPE_STATUS.PROCESSED, BIOTYPE_STATUS.PSEUDO]:
            if status in categories:
                gene.biotype = status + suffix
                break
        else:
            biotypes = sorted({str(t.biotype) for t in gene.transcripts})
            if strict:
                raise UnclassifiableBiotypeError(
                    'gene has no transcript of a recognized biotype', gene.name, gene.start, gene.end, biotypes)
            logger.warning(
                f'gene {gene.name} ({gene.seq_region}:{gene.start}-{gene.end}) has no transcript of a recognized '
                f'biotype: {biotypes}')
            gene.biotype = BIOTYPE_STATUS.UNCLASSIFIED + suffix
            unclassified.append(gene)
    return unclassified
