"""
builds the merged gene set of a region from the curated and automatic annotation sources
"""
from .biotype import update_biotypes
from .cluster.cluster import cluster_into_genes, cluster_into_pseudogenes, combine_gene_clusters
from .config import default_settings
from .constants import MERGE_XREFS, XREF
from .error import NotSpecifiedError
from .pairing.main import merge_redundant_transcripts
from .prune import make_shared_exons_unique
from .util import Timer, logger


class GeneBuilder:
    """
    runs the merge for a single region

    Attributes:
        region (Region): the region genes are fetched for
        primary (AnnotationSource): the curated source
        secondary (AnnotationSource): the automatic source
        discarded (DiscardedTranscripts): transcript structures which are never included in the output
        settings (MergeNamespace): all settings (see :func:`~genemerge.config.read_config`)
        strict_biotypes (bool): raise an error for genes which cannot be given a final biotype
        unclassified (:class:`list` of :class:`Gene`): genes of the last build which could not be classified
    """

    def __init__(self, region, primary, secondary, discarded=None, settings=None, strict_biotypes=None):
        if region is None:
            raise NotSpecifiedError('a region is required to build genes')
        self.region = region
        self.primary = primary
        self.secondary = secondary
        self.discarded = discarded
        self.settings = settings if settings is not None else default_settings()
        if strict_biotypes is None:
            strict_biotypes = self.settings.get('strict_biotypes', False)
        self.strict_biotypes = strict_biotypes
        self.unclassified = []

    @staticmethod
    def flush_xref(transcript):
        """
        remove the cross references written by a previous merge

        Returns:
            int: the number of cross references removed
        """
        return transcript.flush_xrefs(MERGE_XREFS)

    def check_merge_transcript_status(self, genes):
        """
        select the transcripts of fetched genes which take part in the merge. Removes the cross references of a
        previous merge from the selected transcripts

        Args:
            genes (:class:`list` of :class:`~genemerge.annotate.genomic.Gene`): the fetched genes

        Returns:
            :class:`list` of :class:`~genemerge.annotate.genomic.Transcript`: the selected transcripts
        """
        transcripts = []
        for gene in genes:
            for transcript in gene.transcripts:
                if gene.logic_name == self.settings.merged_gene_logic_name and \
                        transcript.logic_name == self.settings.primary_logic_name:
                    logger.debug(f'skipping curated-only transcript {transcript.name} of merged gene {gene.name}')
                    continue
                elif transcript.logic_name == self.settings.merged_transcript_logic_name and \
                        transcript.get_dbentries(XREF.SHARES_CDS_WITH_SECONDARY) and \
                        not transcript.get_dbentries(XREF.SHARES_CDS_AND_UTR):
                    logger.debug(f'skipping previously merged transcript with a different UTR: {transcript.name}')
                    continue
                GeneBuilder.flush_xref(transcript)
                if self.discarded is not None and self.discarded.is_discarded(transcript):
                    logger.debug(f'skipping discarded transcript: {transcript.name}')
                    continue
                transcript.region = self.region
                transcripts.append(transcript)
        return transcripts

    def _fetch_secondary(self, biotypes):
        genes = []
        for biotype in biotypes:
            for gene in self.secondary.fetch_genes_by_type(self.region, biotype):
                if gene.logic_name == self.settings.primary_logic_name:
                    logger.debug(f'skipping automatic gene imported from the curated source: {gene.name}')
                    continue
                genes.append(gene)
        logger.info(f'retrieved {len(genes)} automatic genes of types: {", ".join(biotypes)}')
        return genes

    def _fetch_primary(self, biotypes):
        genes = []
        suffix = self.settings.primary_suffix
        for biotype in biotypes:
            for gene in self.primary.fetch_genes_by_type(self.region, biotype):
                gene.biotype = '{}{}'.format(gene.biotype, suffix)
                for transcript in gene.transcripts:
                    transcript.biotype = '{}{}'.format(transcript.biotype, suffix)
                genes.append(gene)
        logger.info(f'retrieved {len(genes)} curated genes of types: {", ".join(biotypes)}')
        return genes

    def fetch_transcripts(self):
        """
        fetch the genes of both sources and select the transcripts to be merged

        Returns:
            :class:`tuple` of :class:`list` of :class:`Transcript`: the coding, processed and pseudogene transcripts
        """
        groups = []
        for group in ['coding', 'processed', 'pseudo']:
            genes = self._fetch_secondary(self.settings['secondary_{}_biotypes'.format(group)])
            genes.extend(self._fetch_primary(self.settings['primary_{}_biotypes'.format(group)]))
            transcripts = self.check_merge_transcript_status(genes)
            logger.info(f'selected {len(transcripts)} {group} transcripts')
            groups.append(transcripts)
        return tuple(groups)

    def build_genes(self):
        """
        Returns:
            :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the merged genes of the region

        Raises:
            ClusterIntegrityError: clustering did not partition the transcripts
            UnclassifiableBiotypeError: strict biotypes and a gene could not be given a final biotype
        """
        logger.info(f'building genes for {self.region!r}')
        with Timer('fetching'):
            coding, processed, pseudo = self.fetch_transcripts()

        with Timer('clustering'):
            coding_genes = cluster_into_genes(coding)
            logger.info(f'coding gene clusters: {len(coding_genes)}')
            processed_genes = cluster_into_pseudogenes(processed)
            logger.info(f'processed transcript gene clusters: {len(processed_genes)}')
            pseudo_genes = cluster_into_pseudogenes(pseudo)
            logger.info(f'pseudogene clusters: {len(pseudo_genes)}')
            genes = combine_gene_clusters(
                coding_genes, pseudo_genes + processed_genes, self.settings.min_pseudogene_overlap_percent)
            logger.info(f'total clusters: {len(genes)}')

        with Timer('merging'):
            merge_redundant_transcripts(genes, self.settings)
            make_shared_exons_unique(genes)
            self.unclassified = update_biotypes(genes, self.settings, strict=self.strict_biotypes)
        logger.info(f'{len(genes)} genes built ({len(self.unclassified)} unclassified)')
        return genes


def build_genes(region, primary, secondary, **kwargs):
    """
    build the merged genes of a region. See :class:`GeneBuilder` for the keyword arguments

    Returns:
        :class:`list` of :class:`~genemerge.annotate.genomic.Gene`: the merged genes
    """
    return GeneBuilder(region, primary, secondary, **kwargs).build_genes()
