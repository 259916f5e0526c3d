import argparse

import pytest

from genemerge.config import (
    BIOTYPE_DEFAULTS,
    CustomHelpFormatter,
    default_settings,
    get_metavar,
    read_config,
    validate_and_cast_section,
    write_config,
)
from genemerge.constants import cast_boolean, float_percent
from genemerge.util import filepath


@pytest.fixture
def config_file(tmp_path):
    def write(content):
        path = tmp_path / 'genemerge.cfg'
        path.write_text(content)
        return str(path)
    return write


class TestDefaultSettings:
    def test_all_sections(self):
        settings = default_settings()
        assert settings.primary_suffix == '_havana'
        assert settings.merged_gene_logic_name == 'ensembl_havana_gene'
        assert settings.min_pseudogene_overlap_percent == 10.0
        assert settings.strict_biotypes is False

    def test_independent_copies(self):
        settings = default_settings()
        settings.primary_suffix = '_cur'
        assert default_settings().primary_suffix == '_havana'
        assert BIOTYPE_DEFAULTS.primary_suffix == '_havana'


class TestReadConfig:
    def test_no_file(self):
        assert read_config().to_dict() == default_settings().to_dict()

    def test_round_trip(self, tmp_path):
        filename = str(tmp_path / 'written.cfg')
        write_config(filename)
        assert read_config(filename).to_dict() == default_settings().to_dict()

    def test_override(self, config_file):
        settings = read_config(config_file(
            '[cluster]\nmin_pseudogene_overlap_percent = 20\n\n'
            '[biotypes]\nsecondary_pseudo_biotypes = pseudogene polymorphic_pseudogene\n\n'
            '[run]\nstrict_biotypes = yes\n'
        ))
        assert settings.min_pseudogene_overlap_percent == 20.0
        assert settings.secondary_pseudo_biotypes == ['pseudogene', 'polymorphic_pseudogene']
        assert settings.strict_biotypes is True
        assert settings.primary_suffix == '_havana'

    def test_interpolation(self, config_file):
        settings = read_config(config_file(
            '[biotypes]\nprimary_suffix = _cur\nprimary_gene_suffix = ${primary_suffix}_gene\n'
        ))
        assert settings.primary_gene_suffix == '_cur_gene'

    def test_unknown_section(self, config_file):
        with pytest.raises(KeyError):
            read_config(config_file('[reference]\nannotations = file.json\n'))

    def test_unknown_setting(self, config_file):
        with pytest.raises(KeyError):
            read_config(config_file('[cluster]\nmin_overlap = 20\n'))

    def test_bad_value(self, config_file):
        with pytest.raises(ValueError):
            read_config(config_file('[cluster]\nmin_pseudogene_overlap_percent = ten\n'))

    def test_environment_overrides_file(self, config_file, monkeypatch):
        settings = read_config(config_file('[cluster]\nmin_pseudogene_overlap_percent = 20\n'))
        monkeypatch.setenv('GENEMERGE_MIN_PSEUDOGENE_OVERLAP_PERCENT', '25')
        assert settings.min_pseudogene_overlap_percent == 25.0
        monkeypatch.delenv('GENEMERGE_MIN_PSEUDOGENE_OVERLAP_PERCENT')
        assert settings.min_pseudogene_overlap_percent == 20.0


class TestValidateAndCastSection:
    def test_cast(self):
        result = validate_and_cast_section({'primary_coding_biotypes': 'a,b'}, BIOTYPE_DEFAULTS)
        assert result == {'primary_coding_biotypes': ['a', 'b']}


class TestHelp:
    def test_get_metavar(self):
        assert get_metavar(bool) == '{True,False}'
        assert get_metavar(cast_boolean) == '{True,False}'
        assert get_metavar(float_percent) == 'FLOAT'
        assert get_metavar(int) == 'INT'
        assert get_metavar(filepath) == 'FILEPATH'
        assert get_metavar(str) is None

    def test_formatter(self):
        parser = argparse.ArgumentParser(prog='genemerge', formatter_class=CustomHelpFormatter)
        parser.add_argument('--min_overlap', type=float_percent, default=10.0, help='overlap threshold')
        parser.add_argument('--output', required=True, help='output file')
        text = parser.format_help()
        assert '--min_overlap FLOAT' in text
        assert '(default: 10.0)' in text
        assert '(default: None)' not in text
