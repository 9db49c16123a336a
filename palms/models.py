"""Data models for the PALMS scoring engine."""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional, Tuple

from .constants import CURRENCY_DECIMALS, CURRENCY_METRICS
from .errors import RosterError


@dataclass
class MemberStats:
    """Accumulated metric counters for one member."""
    present: int = 0
    absent: int = 0
    late: int = 0
    medical: int = 0
    substitute: int = 0
    on_time: int = 0
    late_mild: int = 0
    late_significant: int = 0
    rgi: int = 0
    rgo: int = 0
    rri: int = 0
    rro: int = 0
    visitors: int = 0
    one_to_ones: int = 0
    tyfcb: float = 0.0  # currency amount, not a count
    ceu: int = 0
    inductions: int = 0

    def get(self, key: str):
        return getattr(self, key)

    def add(self, key: str, amount) -> None:
        """Add a non-negative amount to one counter.

        Currency totals are rounded to cents after every addition, so the
        stored amount doesn't depend on the order amounts arrive in.
        """
        if amount < 0:
            raise ValueError(f'Cannot add negative amount {amount} to {key}')
        total = getattr(self, key) + amount
        if key in CURRENCY_METRICS:
            total = round(total, CURRENCY_DECIMALS)
        setattr(self, key, total)

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class Member:
    """A roster member and their running counters."""
    name: str
    first_name: str = ''
    last_name: str = ''
    stats: MemberStats = field(default_factory=MemberStats)


@dataclass
class Team:
    """A team with its captain and members.

    ``members`` keeps display order; ``data`` maps member name -> Member.
    """
    key: str
    name: str
    captain: str = ''
    color: str = ''
    members: List[str] = field(default_factory=list)
    data: Dict[str, Member] = field(default_factory=dict)

    def add_member(self, member: Member) -> Member:
        if member.name in self.data:
            raise RosterError(f'{member.name} is already on {self.name}')
        self.members.append(member.name)
        self.data[member.name] = member
        return member

    def iter_members(self):
        for name in self.members:
            yield self.data[name]


@dataclass
class Roster:
    """All teams, keyed by team key in display order."""
    teams: Dict[str, Team] = field(default_factory=dict)

    def add_team(self, team: Team) -> Team:
        if team.key in self.teams:
            raise RosterError(f'Duplicate team key: {team.key}')
        self.teams[team.key] = team
        return team

    def iter_members(self):
        """Yield (team, member) pairs in roster order."""
        for team in self.teams.values():
            for member in team.iter_members():
                yield team, member


@dataclass
class MemberScore:
    """Point breakdown for one member."""
    attendance: float = 0
    referrals: float = 0
    visitors: float = 0
    one_to_ones: float = 0
    tyfcb: float = 0
    ceu: float = 0
    breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return (
            self.attendance + self.referrals + self.visitors
            + self.one_to_ones + self.tyfcb + self.ceu
        )

    def category(self, name: str) -> float:
        """Return one category subtotal ('total' included)."""
        if name == 'total':
            return self.total
        if name == 'late':
            return sum(
                v for k, v in self.breakdown.items()
                if k in ('late', 'late_mild', 'late_significant')
            )
        if name not in ('attendance', 'referrals', 'visitors', 'one_to_ones', 'tyfcb', 'ceu'):
            raise ValueError(f'Unknown score category: {name}')
        return getattr(self, name)


@dataclass
class TeamStats:
    """Team-wide raw totals shown next to a team score."""
    total_present: int = 0
    total_referrals_given: int = 0
    total_visitors: int = 0
    total_one_to_ones: int = 0
    total_tyfcb: float = 0.0


@dataclass
class BonusAward:
    """A bonus rule a team has met."""
    name: str
    points: int


@dataclass
class TeamScore:
    """Aggregated team score for the team leaderboard."""
    team_key: str
    name: str
    captain: str
    color: str
    individual_points: float = 0
    bonus_points: int = 0
    bonuses: List[BonusAward] = field(default_factory=list)
    stats: TeamStats = field(default_factory=TeamStats)
    members: List[Tuple[str, float]] = field(default_factory=list)  # (name, points)

    @property
    def total_score(self) -> float:
        return self.individual_points + self.bonus_points


@dataclass
class IndividualScore:
    """One row of an individual leaderboard."""
    name: str
    team: str
    team_color: str
    category: str
    points: float
    raw_count: Optional[float]
    total_points: float


@dataclass
class ProcessingResult:
    """Outcome of one upload batch."""
    success: bool = True
    message: str = ''
    rows_processed: int = 0
    rows_matched: int = 0
    unmatched: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def summary(self, max_items: int = 5) -> str:
        """Render a single status line, truncating long name and error lists."""
        if not self.success:
            return f'❌ {self.message}'

        parts = [
            f'✅ Processed {self.rows_processed} rows, matched {self.rows_matched}'
        ]
        if self.unmatched:
            parts.append(
                f'unmatched {len(self.unmatched)}: {_truncate(self.unmatched, max_items)}'
            )
        if self.errors:
            parts.append(
                f'errors {len(self.errors)}: {_truncate(self.errors, max_items)}'
            )
        return '; '.join(parts)


def _truncate(items: List[str], max_items: int) -> str:
    shown = ', '.join(items[:max_items])
    if len(items) > max_items:
        shown += f' ... and {len(items) - max_items} more'
    return shown
