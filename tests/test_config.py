"""Unit tests for scoring configuration loading."""

import json

import pytest

from palms.config import (
    clear_config_cache,
    get_bonus_rules,
    get_config,
    get_leaderboard_size,
    get_name_columns,
    get_tyfcb_unit,
)
from palms.schemas import ScoringConfig


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_config_cache()
    yield
    clear_config_cache()


class TestScoringConfig:
    """Tests for scoring_config.json handling."""

    def test_defaults(self):
        """Test the built-in defaults carry the canonical bonus rules."""
        config = ScoringConfig()
        assert [r.points for r in config.bonus_rules] == [100, 100, 100, 150]
        assert config.tyfcb_unit == 1.0
        assert config.leaderboard_size == 10

    def test_load_from_file(self, tmp_path):
        """Test loading a custom rule set and name columns."""
        path = tmp_path / 'scoring_config.json'
        path.write_text(json.dumps({
            'bonus_rules': [{'name': '20 Visitors', 'points': 100, 'thresholds': {'visitors': 20}}],
            'tyfcb_unit': 1000,
            'name_columns': [' Participant '],
        }))
        config = get_config(path)
        assert config.bonus_rules[0].thresholds == {'visitors': 20}
        assert config.tyfcb_unit == 1000
        assert config.name_columns == ['participant']

    def test_invalid_file(self, tmp_path):
        """Test invalid settings are rejected."""
        path = tmp_path / 'scoring_config.json'
        path.write_text(json.dumps({'tyfcb_unit': 0}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            get_config(path)

    def test_missing_explicit_file(self, tmp_path):
        """Test a missing explicit config path raises."""
        with pytest.raises(FileNotFoundError):
            get_config(tmp_path / 'nope.json')

    def test_repository_config_matches_defaults(self):
        """Test the shipped config file holds the canonical rules."""
        assert get_config().bonus_rules == ScoringConfig().bonus_rules

    def test_accessors_read_cached_config(self):
        """Test the accessor helpers return the loaded settings."""
        config = get_config()
        assert get_bonus_rules() == config.bonus_rules
        assert get_tyfcb_unit() == config.tyfcb_unit
        assert get_name_columns() == ['member name', 'participant name', 'name', 'member']
        assert get_leaderboard_size() == 10
