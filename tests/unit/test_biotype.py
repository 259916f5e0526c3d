import pytest

from genemerge.biotype import BiotypeSets, classify_transcript_biotype, gene_provenance_suffix, update_biotypes
from genemerge.config import BIOTYPE_DEFAULTS
from genemerge.constants import BIOTYPE_STATUS, SOURCE, MergeNamespace
from genemerge.error import UnclassifiableBiotypeError

from ..util import build_transcript, gene_of


def gene_with(*biotypes):
    transcripts = [
        build_transcript([(100 + i * 1000, 200 + i * 1000)], biotype=biotype, name='t{}'.format(i))
        for i, biotype in enumerate(biotypes)
    ]
    return gene_of(*transcripts)


class TestBiotypeSets:
    def test_from_default_settings(self):
        sets = BiotypeSets.from_settings()
        assert 'protein_coding' in sets.coding
        assert 'protein_coding_havana' in sets.coding
        assert 'lincRNA_havana' in sets.processed
        assert 'lincRNA' not in sets.processed
        assert 'processed_pseudogene_havana' in sets.pseudo
        assert sets.category('pseudogene') == BIOTYPE_STATUS.PSEUDO
        assert sets.category('miRNA') is None


class TestClassifyTranscriptBiotype:
    @pytest.mark.parametrize('biotype,category,source', [
        ('protein_coding', BIOTYPE_STATUS.CODING, SOURCE.SECONDARY),
        ('protein_coding_havana', BIOTYPE_STATUS.CODING, SOURCE.PRIMARY),
        ('protein_coding_ens', BIOTYPE_STATUS.CODING, SOURCE.MERGED),
        ('protein_coding_havana_ens', BIOTYPE_STATUS.CODING, SOURCE.MERGED),
        ('processed_transcript_havana_e_ens', BIOTYPE_STATUS.PROCESSED, SOURCE.MERGED),
        ('lincRNA_havana', BIOTYPE_STATUS.PROCESSED, SOURCE.PRIMARY),
        ('pseudogene', BIOTYPE_STATUS.PSEUDO, SOURCE.SECONDARY),
        ('snRNA', None, SOURCE.SECONDARY),
        (None, None, SOURCE.SECONDARY),
    ])
    def test_classify(self, biotype, category, source):
        assert classify_transcript_biotype(biotype) == (category, source)

    def test_exact_match_only(self):
        # a biotype containing a known biotype is not a match
        assert classify_transcript_biotype('protein_coding_variant')[0] is None

    @pytest.mark.parametrize('biotype,source', [
        ('misc_havana_like', SOURCE.SECONDARY),
        ('protein_coding_ensv', SOURCE.SECONDARY),
        ('protein_coding_ens_havana', SOURCE.PRIMARY),
        ('processed_transcript_havana_e', SOURCE.PRIMARY),
    ])
    def test_provenance_from_suffix_only(self, biotype, source):
        assert classify_transcript_biotype(biotype)[1] == source


class TestGeneProvenanceSuffix:
    def test_suffixes(self):
        assert gene_provenance_suffix({SOURCE.MERGED}) == '_ensembl_havana_gene'
        assert gene_provenance_suffix({SOURCE.PRIMARY, SOURCE.SECONDARY}) == '_ensembl_havana_gene'
        assert gene_provenance_suffix({SOURCE.PRIMARY}) == '_havana_gene'
        assert gene_provenance_suffix({SOURCE.SECONDARY}) == '_ensembl_gene'


class TestUpdateBiotypes:
    @pytest.mark.parametrize('biotypes,expected', [
        (['protein_coding'], 'protein_coding_ensembl_gene'),
        (['protein_coding_havana'], 'protein_coding_havana_gene'),
        (['protein_coding_ens', 'pseudogene'], 'protein_coding_ensembl_havana_gene'),
        (['processed_transcript'], 'processed_transcript_ensembl_gene'),
        (['lincRNA_havana'], 'processed_transcript_havana_gene'),
        (['processed_transcript_havana', 'processed_transcript'], 'processed_transcript_ensembl_havana_gene'),
        (['pseudogene'], 'pseudogene_ensembl_gene'),
        (['unprocessed_pseudogene_havana'], 'pseudogene_havana_gene'),
        (['pseudogene_havana_ens'], 'pseudogene_ensembl_havana_gene'),
    ])
    def test_combinations(self, biotypes, expected):
        gene = gene_with(*biotypes)
        assert update_biotypes([gene]) == []
        assert gene.biotype == expected

    def test_priority(self):
        gene = gene_with('pseudogene', 'processed_transcript', 'protein_coding')
        update_biotypes([gene])
        assert gene.biotype == 'protein_coding_ensembl_gene'
        gene = gene_with('pseudogene_havana', 'processed_transcript')
        update_biotypes([gene])
        assert gene.biotype == 'processed_transcript_ensembl_havana_gene'

    def test_unclassified(self, caplog):
        gene = gene_with('snRNA_havana')
        unclassified = update_biotypes([gene])
        assert unclassified == [gene]
        assert gene.biotype == 'unclassified_havana_gene'
        assert 'snRNA_havana' in caplog.text

    def test_unclassified_strict(self):
        with pytest.raises(UnclassifiableBiotypeError):
            update_biotypes([gene_with('snRNA')], strict=True)

    def test_custom_settings(self):
        settings = MergeNamespace(**BIOTYPE_DEFAULTS.to_dict())
        settings.secondary_pseudo_biotypes = ['polymorphic_pseudogene']
        settings.secondary_gene_suffix = '_auto'
        gene = gene_with('polymorphic_pseudogene')
        update_biotypes([gene], settings)
        assert gene.biotype == 'pseudogene_auto'
