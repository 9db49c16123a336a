"""Validation functions for rosters and scoring results."""

from dataclasses import fields

from .models import MemberScore, MemberStats, Roster, TeamScore


def validate_roster(roster: Roster) -> list[str]:
    """
    Validate that a roster is internally consistent.

    Checks:
    - Team member list matches the member data keys
    - No member name (case-insensitive) appears on more than one team
    - No negative counters

    Args:
        roster: Roster to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    seen: dict[str, str] = {}

    for key, team in roster.teams.items():
        if set(team.members) != set(team.data) or len(team.members) != len(team.data):
            errors.append(f'{key} member list does not match member data')

        for name, member in team.data.items():
            folded = name.strip().lower()
            if folded in seen and seen[folded] != key:
                errors.append(f'{name} is on both {seen[folded]} and {key}')
            seen[folded] = key

            for f in fields(MemberStats):
                value = getattr(member.stats, f.name)
                if value < 0:
                    errors.append(f'{name} has negative {f.name}: {value}')

    return errors


def validate_member_score(name: str, score: MemberScore) -> list[str]:
    """
    Check that a member's score is internally consistent.

    Args:
        name: Member name (for messages)
        score: MemberScore to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    breakdown_sum = sum(score.breakdown.values())
    if abs(breakdown_sum - score.total) > 0.001:
        warnings.append(
            f'{name} breakdown sum ({breakdown_sum}) != total ({score.total})'
        )
    return warnings


def validate_team_score(score: TeamScore) -> list[str]:
    """
    Check that a team's score adds up.

    Sanity checks:
    - Member points sum to individual points
    - Bonus awards sum to bonus points
    """
    warnings = []
    member_sum = sum(points for _name, points in score.members)
    if abs(member_sum - score.individual_points) > 0.001:
        warnings.append(
            f'{score.name} member points ({member_sum}) != individual points ({score.individual_points})'
        )
    bonus_sum = sum(b.points for b in score.bonuses)
    if bonus_sum != score.bonus_points:
        warnings.append(
            f'{score.name} bonus awards ({bonus_sum}) != bonus points ({score.bonus_points})'
        )
    return warnings
