import sys

import pytest

from genemerge.annotate.base import ReferenceName
from genemerge.annotate.evidence import Attribute, DBEntry, SupportingFeature
from genemerge.annotate.genomic import Exon, Gene, Region, Transcript
from genemerge.annotate.protein import Translation
from genemerge.constants import FEATURE_TYPE, STRAND
from genemerge.error import MalformedInputError, NotSpecifiedError

from ..util import build_transcript


class TestReferenceName:
    def test_chr_prefix(self):
        assert ReferenceName('chr1') == ReferenceName('1')
        assert ReferenceName('1') == 'chr1'
        assert ReferenceName('1') != ReferenceName('2')
        assert hash(ReferenceName('chr1')) == hash(ReferenceName('1'))


class TestRegion:
    def test_parse_full(self):
        region = Region.parse('chromosome:GRCh38:1:100:200:1')
        assert region.seq_region_name == '1'
        assert region.start == 100
        assert region.end == 200
        assert region.coord_system == 'chromosome'
        assert region.version == 'GRCh38'
        assert str(region) == 'chromosome:GRCh38:1:100:200:1'

    def test_parse_range(self):
        region = Region.parse('chr1:100-200')
        assert region.seq_region_name == 'chr1'
        assert (region.start, region.end) == (100, 200)
        assert region.version is None

    def test_parse_name_only(self):
        region = Region.parse('X')
        assert region.start == 1
        assert region.end == sys.maxsize

    def test_parse_error(self):
        with pytest.raises(MalformedInputError):
            Region.parse('1:abc')
        with pytest.raises(NotSpecifiedError):
            Region.parse('')
        with pytest.raises(NotSpecifiedError):
            Region.parse(None)

    def test_overlaps(self):
        region = Region('1', 100, 200)
        assert region.overlaps(build_transcript([(150, 300)], seq_region='chr1'))
        assert not region.overlaps(build_transcript([(150, 300)], seq_region='2'))
        assert not region.overlaps(build_transcript([(201, 300)], seq_region='1'))
        assert region.overlaps(build_transcript([(1, 100)]))


class TestEvidence:
    def test_feature_equality(self):
        first = SupportingFeature('hit1', 1, 10, hstart=1, hend=10, score=5)
        second = SupportingFeature('hit1', 1, 10, hstart=1, hend=10, score=100)
        assert first == second
        assert len({first, second}) == 1
        assert first != SupportingFeature('hit1', 1, 10, strand=STRAND.NEG, hstart=1, hend=10)

    def test_feature_type(self):
        assert not SupportingFeature('hit1', 1, 10).is_protein
        assert SupportingFeature('hit1', 1, 10, feature_type=FEATURE_TYPE.PROTEIN).is_protein
        with pytest.raises(KeyError):
            SupportingFeature('hit1', 1, 10, feature_type='rna')

    def test_dbentry_display_id_default(self):
        entry = DBEntry('OTTT', 'OTTHUMT01')
        assert entry.display_id == 'OTTHUMT01'
        assert entry == DBEntry('OTTT', 'OTTHUMT01', 'OTTHUMT01', status='KNOWN')

    def test_attribute(self):
        attr = Attribute('enst_link', 'ENST01')
        assert attr.name == 'enst_link'
        assert attr == Attribute('enst_link', 'ENST01', name='other')
        assert attr != Attribute('enst_link', 'ENST02')


class TestExon:
    def test_key_ignores_evidence(self):
        first = Exon(1, 10, strand=STRAND.POS, phase=0, end_phase=1)
        second = Exon(1, 10, strand=STRAND.POS, phase=0, end_phase=1, supporting_features=[
            SupportingFeature('hit', 1, 10)])
        assert first == second
        assert first != Exon(1, 10, strand=STRAND.POS, phase=1, end_phase=1)

    def test_add_supporting_features_dedup(self):
        exon = Exon(1, 10, strand=STRAND.POS)
        assert exon.add_supporting_features(SupportingFeature('hit', 1, 10), SupportingFeature('hit', 1, 10)) == 1
        assert exon.add_supporting_features(SupportingFeature('hit', 1, 10)) == 0
        assert len(exon.supporting_features) == 1
        exon.flush_supporting_features()
        assert not exon.supporting_features

    def test_bad_strand(self):
        with pytest.raises(KeyError):
            Exon(1, 10, strand=2)


class TestTranscript:
    def test_exon_order_forward(self):
        transcript = build_transcript([(300, 400), (100, 200)], strand=STRAND.POS)
        assert [e.start for e in transcript.exons] == [100, 300]
        assert (transcript.start, transcript.end) == (100, 400)

    def test_exon_order_reverse(self):
        transcript = build_transcript([(100, 200), (300, 400)], strand=STRAND.NEG)
        assert [e.start for e in transcript.exons] == [300, 100]

    def test_strand_from_exons(self):
        transcript = Transcript([Exon(1, 10, strand=STRAND.NEG), Exon(20, 30, strand=STRAND.NEG)])
        assert transcript.get_strand() == STRAND.NEG

    def test_strand_not_specified(self):
        with pytest.raises(NotSpecifiedError):
            Transcript([(1, 10)])

    def test_mixed_strands(self):
        with pytest.raises(MalformedInputError):
            Transcript([Exon(1, 10, strand=STRAND.NEG), Exon(20, 30, strand=STRAND.POS)])

    def test_overlapping_exons(self):
        with pytest.raises(MalformedInputError):
            build_transcript([(1, 10), (10, 30)])

    def test_no_exons(self):
        with pytest.raises(MalformedInputError):
            Transcript([], strand=STRAND.POS)

    def test_identity_equality(self):
        first = build_transcript([(1, 10)])
        second = build_transcript([(1, 10)])
        assert first != second
        assert first == first
        assert len({first, second}) == 2

    def test_noncoding(self):
        transcript = build_transcript([(1, 10), (20, 30)])
        assert not transcript.is_coding
        assert transcript.coding_region_start is None
        assert transcript.translateable_exons() == []

    def test_coding_region(self):
        transcript = build_transcript([(100, 200), (300, 400)], coding=(150, 350))
        assert transcript.is_coding
        assert transcript.coding_region_start == 150
        assert transcript.coding_region_end == 350
        exons = transcript.translateable_exons()
        assert [(e.start, e.end) for e in exons] == [(150, 200), (300, 350)]
        # original exons untouched
        assert [(e.start, e.end) for e in transcript.exons] == [(100, 200), (300, 400)]

    def test_remove_translation(self):
        transcript = build_transcript([(100, 200)], coding=(100, 150))
        transcript.remove_translation()
        assert not transcript.is_coding

    def test_translation_and_coding_region(self):
        with pytest.raises(MalformedInputError):
            Transcript(
                [(1, 10)], strand=STRAND.POS, coding_region=(1, 9), translation=Translation(0, 1, 0, 9))

    def test_dbentries(self):
        transcript = build_transcript([(1, 10)])
        assert transcript.add_dbentry(DBEntry('OTTT', 'a'))
        assert not transcript.add_dbentry(DBEntry('OTTT', 'a'))
        transcript.add_dbentry(DBEntry('Uniprot', 'b'))
        transcript.add_dbentry(DBEntry('shares_CDS_with_ENST', 'c'))
        assert len(transcript.get_dbentries('OTTT')) == 1
        assert transcript.flush_xrefs(['OTTT', 'shares_CDS_with_ENST']) == 2
        assert [e.dbname for e in transcript.dbentries] == ['Uniprot']

    def test_attributes(self):
        transcript = build_transcript([(1, 10)])
        assert transcript.add_attribute(Attribute('a', '1'))
        assert not transcript.add_attribute(Attribute('a', '1'))
        assert transcript.add_attribute(Attribute('a', '2'))
        assert len(transcript.get_attributes('a')) == 2
        assert transcript.get_attributes('b') == []

    def test_to_dict(self):
        transcript = build_transcript([(100, 200), (300, 400)], coding=(150, 350), name='t1')
        result = transcript.to_dict()
        assert result['name'] == 't1'
        assert result['strand'] == STRAND.POS
        assert result['translation']['start_exon'] == 0
        assert result['translation']['end_offset'] == 51
        assert len(result['exons']) == 2


class TestTranslation:
    def test_from_genomic_forward(self):
        transcript = build_transcript([(100, 200), (300, 400), (500, 600)], coding=(150, 550))
        translation = transcript.translation
        assert translation.start_exon_index == 0
        assert translation.start_offset == 51
        assert translation.end_exon_index == 2
        assert translation.end_offset == 51
        assert translation.genomic_start == 150
        assert translation.genomic_end == 550
        assert translation.coding_length == 51 + 101 + 51

    def test_from_genomic_reverse(self):
        transcript = build_transcript([(100, 200), (300, 400), (500, 600)], strand=STRAND.NEG, coding=(150, 550))
        translation = transcript.translation
        # first exon in transcription order is the highest one
        assert translation.start_exon_index == 0
        assert translation.start_exon.start == 500
        assert translation.start_offset == 51
        assert translation.end_exon.start == 100
        assert translation.end_offset == 51
        assert translation.genomic_start == 150
        assert translation.genomic_end == 550
        assert [(e.start, e.end) for e in translation.translateable_exons()] == [(500, 550), (300, 400), (150, 200)]

    def test_intronic_boundary(self):
        with pytest.raises(MalformedInputError):
            build_transcript([(100, 200), (300, 400)], coding=(250, 350))

    def test_length(self):
        transcript = build_transcript([(1, 30)], coding=(1, 30))
        assert transcript.translation.length == 10
        transcript = build_transcript([(1, 31)], coding=(1, 31))
        assert transcript.translation.length == 10

    def test_bad_indices(self):
        with pytest.raises(MalformedInputError):
            Translation(1, 1, 0, 1)
        with pytest.raises(MalformedInputError):
            Translation(0, 0, 0, 1)

    def test_validate_out_of_range(self):
        with pytest.raises(MalformedInputError):
            Transcript([(1, 10)], strand=STRAND.POS, translation=Translation(0, 1, 1, 5))
        with pytest.raises(MalformedInputError):
            Transcript([(1, 10)], strand=STRAND.POS, translation=Translation(0, 1, 0, 11))

    def test_indices_survive_exon_replacement(self):
        transcript = build_transcript([(100, 200), (300, 400)], coding=(150, 350))
        transcript.exons = [Exon(100, 200, strand=STRAND.POS), Exon(300, 400, strand=STRAND.POS)]
        assert transcript.coding_region_start == 150
        assert transcript.coding_region_end == 350


class TestGene:
    def test_span_from_transcripts(self):
        first = build_transcript([(100, 200)])
        second = build_transcript([(150, 400)])
        gene = Gene([first, second], name='g1')
        assert (gene.start, gene.end) == (100, 400)
        assert first.gene is gene
        gene.remove_transcript(second)
        assert (gene.start, gene.end) == (100, 200)

    def test_empty_gene_position(self):
        with pytest.raises(AttributeError):
            Gene(name='g1').position

    def test_remove_missing_transcript(self):
        gene = Gene([build_transcript([(100, 200)])])
        with pytest.raises(ValueError):
            gene.remove_transcript(build_transcript([(100, 200)]))

    def test_add_transcript_once(self):
        transcript = build_transcript([(100, 200)])
        gene = Gene([transcript])
        gene.add_transcript(transcript)
        assert len(gene.transcripts) == 1

    def test_exons_distinct_objects(self):
        first = build_transcript([(100, 200)])
        second = build_transcript([(100, 200)])
        gene = Gene([first, second])
        assert len(gene.exons) == 2
        second.exons = first.exons
        assert len(gene.exons) == 1

    def test_seq_region_from_transcripts(self):
        gene = Gene([build_transcript([(100, 200)], seq_region='chr2')])
        assert gene.seq_region == '2'
        assert gene.get_strand() == STRAND.POS
