"""Shared fixtures for PALMS tests."""

import copy

import pytest

from palms.roster import RosterStore, build_roster
from palms.schemas import DEFAULT_BONUS_RULES


ROSTER_CONFIG = {
    'teams': [
        {
            'key': 'teamA',
            'name': 'Team A',
            'captain': 'Sajid Hasan',
            'color': '#dc2626',
            'members': ['Sajid Hasan', 'Prannav Khanna'],
        },
        {
            'key': 'teamB',
            'name': 'Team B',
            'captain': 'Vijay Gupta',
            'color': '#2563eb',
            'members': ['Vijay Gupta', 'Himanshu Sharma'],
        },
        {
            'key': 'teamC',
            'name': 'Team C',
            'captain': 'Abhinav Gupta',
            'color': '#16a34a',
            'members': [{'name': 'Abhinav Gupta', 'first_name': 'Abhinav', 'last_name': 'Gupta'}],
        },
    ],
}


@pytest.fixture
def roster():
    """Three-team roster with all counters at zero."""
    return build_roster(ROSTER_CONFIG)


@pytest.fixture
def store(roster):
    """In-memory roster store."""
    return RosterStore(roster)


@pytest.fixture
def bonus_rules():
    """Canonical team bonus rules."""
    return list(DEFAULT_BONUS_RULES)


@pytest.fixture
def roster_config():
    """Roster definition as it appears in roster.json."""
    return copy.deepcopy(ROSTER_CONFIG)
