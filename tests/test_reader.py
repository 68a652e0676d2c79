"""Tests for weighmatch.reader module."""

import logging

import pytest

from weighmatch import Competitor
from weighmatch.matching import run_matching
from weighmatch.reader import (
    build_team_map,
    detect_delimiter,
    detect_encoding,
    normalize_whitespace,
    parse_priority,
    read_competitors,
    resolve_team,
    validate_entry,
)


class TestDetectEncoding:
    """Tests for encoding detection."""

    def test_utf16le_bom(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_bytes(b'\xff\xfe' + 'Name\tTeam\tWeight\n'.encode('utf-16-le'))
        assert detect_encoding(f) == 'utf-16-le'

    def test_utf8_fallback(self, tmp_path):
        f = tmp_path / 'test.csv'
        f.write_text('hello', encoding='utf-8')
        assert detect_encoding(f) == 'utf-8-sig'


class TestDetectDelimiter:
    """Tests for delimiter detection."""

    def test_tab(self):
        assert detect_delimiter('Name\tTeam\tWeight') == '\t'

    def test_semicolon(self):
        assert detect_delimiter('Name;Team;Weight') == ';'

    def test_comma(self):
        assert detect_delimiter('Name,Team,Weight') == ','


class TestNormalizeWhitespace:
    """Tests for whitespace normalization."""

    def test_collapses_and_strips(self):
        assert normalize_whitespace('  Red   Team ') == 'Red Team'

    def test_unicode_whitespace(self):
        # U+2006 = Six-Per-Em Space
        assert normalize_whitespace('a\u2006b') == 'a b'


class TestResolveTeam:
    """Tests for team label resolution."""

    def test_known_color(self):
        assert resolve_team('red') == 'red'

    def test_case_and_team_suffix(self):
        assert resolve_team('Red Team') == 'red'
        assert resolve_team('  BLUE  ') == 'blue'

    def test_typo_resolved(self):
        assert resolve_team('Redd') == 'red'
        assert resolve_team('bleu') == 'blue'

    def test_unknown_label_kept(self):
        assert resolve_team('Dragons') == 'dragons'

    def test_threshold_one_disables_fuzzy(self):
        assert resolve_team('Redd', threshold=1.0) == 'redd'

    def test_multi_word_label_kept(self):
        assert resolve_team('Golden Eagles') == 'golden eagles'
        assert resolve_team('Golden Eagles') != resolve_team('Gold')

    def test_taken_colour_not_absorbed(self):
        assert resolve_team('Reds', taken=frozenset({'red'})) == 'reds'


class TestBuildTeamMap:
    """Tests for resolving all labels of a file together."""

    def test_used_colour_blocks_fuzzy_hit(self):
        team_map = build_team_map(['Red', 'Reds', 'Red Team'])
        assert team_map == {'red': 'red', 'reds': 'reds'}

    def test_two_labels_competing_for_one_colour(self):
        team_map = build_team_map(['Redd', 'Reds'])
        assert team_map == {'redd': 'redd', 'reds': 'reds'}

    def test_gold_and_golden_eagles(self):
        team_map = build_team_map(['Gold', 'Golden Eagles'])
        assert team_map == {'gold': 'gold', 'golden eagles': 'golden eagles'}

    def test_single_typo_resolved(self):
        assert build_team_map(['bleu', 'Red']) == {'bleu': 'blue', 'red': 'red'}


class TestParsePriority:
    """Tests for the priority flag."""

    @pytest.mark.parametrize('value', ['', '0', 'no', 'False'])
    def test_normal(self, value):
        assert parse_priority(value) is False

    @pytest.mark.parametrize('value', ['1', 'yes', 'TRUE'])
    def test_priority(self, value):
        assert parse_priority(value) is True

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_priority('maybe')


class TestValidateEntry:
    """Tests for entry field rules."""

    def test_valid(self):
        validate_entry('Ana', 150)

    def test_empty_name(self):
        with pytest.raises(ValueError):
            validate_entry('', 150)

    def test_name_too_long(self):
        with pytest.raises(ValueError):
            validate_entry('A' * 21, 150)

    @pytest.mark.parametrize('weight', [99, 1000])
    def test_weight_not_three_digits(self, weight):
        with pytest.raises(ValueError):
            validate_entry('Ana', weight)

    @pytest.mark.parametrize('weight', [100, 999])
    def test_weight_bounds(self, weight):
        validate_entry('Ana', weight)


class TestReadCompetitors:
    """Tests for reading entry lists."""

    def test_sample_count(self, sample_competitors):
        assert len(sample_competitors) == 6

    def test_sample_fields(self, sample_competitors):
        ana = sample_competitors[0]
        assert isinstance(ana, Competitor)
        assert ana == Competitor(
            competitor_id=1, name='Ana', team='red', weight=150, priority=True,
        )

    def test_ids_sequential(self, sample_competitors):
        assert [c.competitor_id for c in sample_competitors] == [1, 2, 3, 4, 5, 6]

    def test_teams_resolved(self, sample_competitors):
        teams = {c.name: c.team for c in sample_competitors}
        assert teams['Dee'] == 'red'
        # "blue" is already used by Ben, so "bleu" stays its own team
        assert teams['Eli'] == 'bleu'

    def test_label_close_to_used_colour_kept_apart(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_text('Name,Team,Weight\nAna,Red,150\nBen,Reds,150\n', encoding='utf-8')
        competitors = read_competitors(f)
        assert [c.team for c in competitors] == ['red', 'reds']
        records = run_matching(competitors)
        assert records[0].competitor_a == 1
        assert records[0].competitor_b == 2
        assert records[0].match_type == 'exact'

    def test_misspelled_colour_resolved_when_unused(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_text('Name,Team,Weight\nAna,Gren,150\nBen,Navy,150\n', encoding='utf-8')
        assert [c.team for c in read_competitors(f)] == ['green', 'navy']

    def test_invalid_rows_skipped(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING):
            competitors = read_competitors(data_dir / 'entries.csv')
        names = {c.name for c in competitors}
        assert 'Gus' not in names
        assert 'Hal' not in names
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3

    def test_priority_column_optional(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_text('Name;Team;Weight\nAna;red;150\n', encoding='utf-8')
        competitors = read_competitors(f)
        assert competitors[0].priority is False

    def test_utf16_tab_file(self, tmp_path):
        f = tmp_path / 'entries.csv'
        text = 'Name\tTeam\tWeight\tPriority\nJosé\tgreen\t180\t1\n'
        f.write_bytes(b'\xff\xfe' + text.encode('utf-16-le'))
        competitors = read_competitors(f)
        assert competitors == [
            Competitor(competitor_id=1, name='José', team='green', weight=180, priority=True),
        ]

    def test_missing_columns(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_text('Name,Weight\nAna,150\n', encoding='utf-8')
        with pytest.raises(ValueError, match='Team'):
            read_competitors(f)

    def test_empty_file(self, tmp_path):
        f = tmp_path / 'entries.csv'
        f.write_text('', encoding='utf-8')
        with pytest.raises(ValueError):
            read_competitors(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_competitors(tmp_path / 'missing.csv')
