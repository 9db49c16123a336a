"""Pydantic schemas for roster configuration, scoring configuration and snapshots."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import METRIC_KEYS, NAME_COLUMNS


def _check_metric_keys(keys):
    for key in keys:
        if key not in METRIC_KEYS:
            raise ValueError(f'Invalid metric: {key}')


class MemberConfig(BaseModel):
    """Member entry in roster.json."""

    name: str = Field(..., min_length=1)
    first_name: str = ''
    last_name: str = ''

    class Config:
        extra = 'forbid'


class TeamConfig(BaseModel):
    """Team entry in roster.json."""

    key: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    captain: str = ''
    color: str = ''
    members: list[MemberConfig] = Field(default_factory=list)

    @field_validator('members', mode='before')
    @classmethod
    def coerce_member_names(cls, v):
        """Allow plain name strings as members."""
        return [{'name': m} if isinstance(m, str) else m for m in v]

    class Config:
        extra = 'forbid'


class RosterConfig(BaseModel):
    """Complete roster.json file structure."""

    teams: list[TeamConfig]

    @model_validator(mode='after')
    def validate_unique_names(self):
        """Team keys and member names (case-insensitive) must be unique."""
        keys = [t.key for t in self.teams]
        if len(keys) != len(set(keys)):
            raise ValueError(f'Duplicate team keys: {keys}')

        seen: dict[str, str] = {}
        for team in self.teams:
            for member in team.members:
                folded = member.name.strip().lower()
                if folded in seen:
                    raise ValueError(
                        f'Member name {member.name!r} appears in both {seen[folded]} and {team.key}'
                    )
                seen[folded] = team.key
        return self

    class Config:
        extra = 'forbid'


class StatsSnapshot(BaseModel):
    """Every member counter, all fields required so reload is lossless."""

    present: int = Field(..., ge=0)
    absent: int = Field(..., ge=0)
    late: int = Field(..., ge=0)
    medical: int = Field(..., ge=0)
    substitute: int = Field(..., ge=0)
    on_time: int = Field(..., ge=0)
    late_mild: int = Field(..., ge=0)
    late_significant: int = Field(..., ge=0)
    rgi: int = Field(..., ge=0)
    rgo: int = Field(..., ge=0)
    rri: int = Field(..., ge=0)
    rro: int = Field(..., ge=0)
    visitors: int = Field(..., ge=0)
    one_to_ones: int = Field(..., ge=0)
    tyfcb: float = Field(..., ge=0)
    ceu: int = Field(..., ge=0)
    inductions: int = Field(..., ge=0)

    class Config:
        extra = 'forbid'


class MemberSnapshot(BaseModel):
    """Member with counters."""

    name: str = Field(..., min_length=1)
    first_name: str = ''
    last_name: str = ''
    stats: StatsSnapshot

    class Config:
        extra = 'forbid'


class TeamSnapshot(BaseModel):
    """Team with owned member data."""

    name: str = Field(..., min_length=1)
    captain: str = ''
    color: str = ''
    members: list[str]
    data: dict[str, MemberSnapshot]

    @model_validator(mode='after')
    def validate_members_match_data(self):
        """Member list and member data keys must stay in sync."""
        if set(self.members) != set(self.data) or len(self.members) != len(self.data):
            raise ValueError(
                f'{self.name} member list {self.members} does not match member data {list(self.data)}'
            )
        return self

    class Config:
        extra = 'forbid'


class RosterSnapshot(BaseModel):
    """Persisted roster state."""

    version: int = Field(default=0, ge=0)
    teams: dict[str, TeamSnapshot]

    class Config:
        extra = 'forbid'


class BonusRule(BaseModel):
    """Team bonus awarded when team-wide raw totals reach thresholds.

    Every per-metric minimum in ``thresholds`` must be met; when
    ``combined_min`` is set, the sum of ``combined_metrics`` must reach it too.
    """

    name: str = Field(..., min_length=1)
    points: int = Field(..., ge=0)
    thresholds: dict[str, float] = Field(default_factory=dict)
    combined_metrics: list[str] = Field(default_factory=list)
    combined_min: float | None = Field(default=None, ge=0)

    @field_validator('thresholds')
    @classmethod
    def validate_threshold_metrics(cls, v):
        _check_metric_keys(v)
        return v

    @field_validator('combined_metrics')
    @classmethod
    def validate_combined_metrics(cls, v):
        _check_metric_keys(v)
        return v

    @model_validator(mode='after')
    def validate_has_condition(self):
        if not self.thresholds and self.combined_min is None:
            raise ValueError(f'Bonus rule {self.name!r} has no condition')
        if self.combined_min is not None and not self.combined_metrics:
            raise ValueError(f'Bonus rule {self.name!r} sets combined_min without combined_metrics')
        return self

    class Config:
        extra = 'forbid'


DEFAULT_BONUS_RULES = [
    BonusRule(name='50 One-to-Ones', points=100, thresholds={'one_to_ones': 50}),
    BonusRule(name='50 Referrals (30 Outside + 20 Inside)', points=100, thresholds={'rgo': 30, 'rgi': 20}),
    BonusRule(name='10 Visitors', points=100, thresholds={'visitors': 10}),
    BonusRule(name='3 Inductions', points=150, thresholds={'inductions': 3}),
]


class ScoringConfig(BaseModel):
    """Scoring configuration settings."""

    bonus_rules: list[BonusRule] = Field(default_factory=lambda: list(DEFAULT_BONUS_RULES))
    tyfcb_unit: float = Field(default=1.0, gt=0)
    name_columns: list[str] = Field(default_factory=lambda: list(NAME_COLUMNS))
    leaderboard_size: int = Field(default=10, ge=1)

    @field_validator('name_columns')
    @classmethod
    def normalize_name_columns(cls, v):
        """Name columns are compared lower-cased and trimmed."""
        return [c.strip().lower() for c in v if c.strip()]

    class Config:
        extra = 'forbid'
