"""Team aggregation, bonus thresholds and leaderboards."""

from dataclasses import fields
from typing import Iterable, Optional

from .config import get_bonus_rules, get_tyfcb_unit
from .constants import CATEGORY_COUNTS, LEADERBOARD_CATEGORIES
from .models import (
    BonusAward,
    IndividualScore,
    MemberStats,
    Roster,
    Team,
    TeamScore,
    TeamStats,
)
from .schemas import BonusRule
from .scoring import score_member


def team_totals(team: Team) -> MemberStats:
    """Sum every raw counter across a team's members."""
    totals = MemberStats()
    for member in team.iter_members():
        for f in fields(MemberStats):
            totals.add(f.name, getattr(member.stats, f.name))
    return totals


def rule_met(rule: BonusRule, totals: MemberStats) -> bool:
    """Check one bonus rule against team-wide raw totals."""
    for key, minimum in rule.thresholds.items():
        if totals.get(key) < minimum:
            return False
    if rule.combined_min is not None:
        combined = sum(totals.get(key) for key in rule.combined_metrics)
        if combined < rule.combined_min:
            return False
    return True


def evaluate_bonuses(totals: MemberStats, rules: Iterable[BonusRule]) -> list[BonusAward]:
    """Return every bonus the totals qualify for; each rule applies once."""
    return [BonusAward(name=rule.name, points=rule.points) for rule in rules if rule_met(rule, totals)]


def score_team(
    team: Team,
    rules: Optional[Iterable[BonusRule]] = None,
    tyfcb_unit: Optional[float] = None,
) -> TeamScore:
    """
    Score a team: summed member points plus team bonuses.

    Bonuses are evaluated against team-wide raw counters, never against
    points, and each rule is awarded at most once per team.

    Args:
        team: Team to score
        rules: Bonus rules (default: from scoring config)
        tyfcb_unit: TYFCB unit size (default: from scoring config)
    """
    if rules is None:
        rules = get_bonus_rules()
    if tyfcb_unit is None:
        tyfcb_unit = get_tyfcb_unit()

    result = TeamScore(
        team_key=team.key,
        name=team.name,
        captain=team.captain,
        color=team.color,
    )

    for member in team.iter_members():
        points = score_member(member, tyfcb_unit).total
        result.members.append((member.name, points))
        result.individual_points += points

    totals = team_totals(team)
    result.bonuses = evaluate_bonuses(totals, rules)
    result.bonus_points = sum(b.points for b in result.bonuses)
    result.stats = TeamStats(
        total_present=totals.present,
        total_referrals_given=totals.rgi + totals.rgo,
        total_visitors=totals.visitors,
        total_one_to_ones=totals.one_to_ones,
        total_tyfcb=totals.tyfcb,
    )
    return result


def get_team_leaderboard(
    roster: Roster,
    rules: Optional[Iterable[BonusRule]] = None,
    tyfcb_unit: Optional[float] = None,
) -> list[TeamScore]:
    """Team scores sorted by total score, highest first (ties keep roster order)."""
    if rules is not None:
        rules = list(rules)
    scores = [score_team(team, rules, tyfcb_unit) for team in roster.teams.values()]
    return sorted(scores, key=lambda s: s.total_score, reverse=True)


def get_individual_leaderboard(
    roster: Roster,
    category: str = 'total',
    limit: Optional[int] = None,
    tyfcb_unit: Optional[float] = None,
) -> list[IndividualScore]:
    """
    Rank every member by one score category.

    Args:
        roster: Roster to rank
        category: One of LEADERBOARD_CATEGORIES
        limit: Keep only the top N entries
        tyfcb_unit: TYFCB unit size (default: from scoring config)

    Raises:
        ValueError: If category is unknown
    """
    if category not in CATEGORY_COUNTS:
        raise ValueError(
            f'Unknown category {category!r}; expected one of {", ".join(LEADERBOARD_CATEGORIES)}'
        )
    if tyfcb_unit is None:
        tyfcb_unit = get_tyfcb_unit()

    count_keys = CATEGORY_COUNTS[category]
    entries = []
    for team, member in roster.iter_members():
        score = score_member(member, tyfcb_unit)
        raw_count = sum(member.stats.get(k) for k in count_keys) if count_keys else None
        entries.append(IndividualScore(
            name=member.name,
            team=team.name,
            team_color=team.color,
            category=category,
            points=score.category(category),
            raw_count=raw_count,
            total_points=score.total,
        ))

    entries.sort(key=lambda e: e.points, reverse=True)
    if limit is not None:
        entries = entries[:limit]
    return entries


def list_latecomers(roster: Roster) -> list[tuple[str, str, int]]:
    """Members with any late arrivals as (name, team name, late count)."""
    latecomers = []
    for team, member in roster.iter_members():
        stats = member.stats
        late = stats.late + stats.late_mild + stats.late_significant
        if late > 0:
            latecomers.append((member.name, team.name, late))
    return latecomers
