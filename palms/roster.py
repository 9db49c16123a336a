"""Roster store: building, persisting and mutating the team roster."""

import copy
import logging
import threading
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .constants import DEFAULT_TEAMS
from .errors import EmptyUploadError, MemberNotFoundError, PalmsError, RosterError
from .models import Member, MemberStats, ProcessingResult, Roster, Team
from .reconciler import find_member
from .schemas import RosterConfig, RosterSnapshot
from .uploader import apply_rows
from .utils import load_json, save_json

logger = logging.getLogger('palms.roster')


def build_roster(config: RosterConfig | Mapping) -> Roster:
    """
    Build a fresh roster (all counters zero) from a roster configuration.

    Raises:
        RosterError: If the configuration is invalid, including member
            names that repeat across teams (compared case-insensitively)
    """
    if not isinstance(config, RosterConfig):
        try:
            config = RosterConfig.model_validate(config)
        except ValueError as e:
            raise RosterError(f'Invalid roster configuration:\n{e}') from e

    roster = Roster()
    for team_config in config.teams:
        team = roster.add_team(Team(
            key=team_config.key,
            name=team_config.name,
            captain=team_config.captain,
            color=team_config.color,
        ))
        for member_config in team_config.members:
            name = member_config.name.strip()
            first, last = member_config.first_name, member_config.last_name
            if not first and not last and ' ' in name:
                first, last = name.split(' ', 1)
            team.add_member(Member(name=name, first_name=first, last_name=last))
    return roster


def default_roster() -> Roster:
    """Three empty teams, the state a new dashboard starts in."""
    return build_roster({'teams': [{'key': key, 'name': name} for key, name in DEFAULT_TEAMS]})


def load_roster_config(path: Path | str) -> Roster:
    """Build a roster from a roster.json file."""
    try:
        config = load_json(path, schema=RosterConfig)
    except ValueError as e:
        raise RosterError(str(e)) from e
    return build_roster(config)


def roster_to_snapshot(roster: Roster, version: int = 0) -> dict:
    """Serialize a roster with every counter present."""
    teams = {}
    for key, team in roster.teams.items():
        teams[key] = {
            'name': team.name,
            'captain': team.captain,
            'color': team.color,
            'members': list(team.members),
            'data': {
                name: {
                    'name': member.name,
                    'first_name': member.first_name,
                    'last_name': member.last_name,
                    'stats': member.stats.as_dict(),
                }
                for name, member in team.data.items()
            },
        }
    return {'version': version, 'teams': teams}


def roster_from_snapshot(data: Mapping | RosterSnapshot) -> Roster:
    """Restore a roster saved by roster_to_snapshot."""
    if not isinstance(data, RosterSnapshot):
        try:
            data = RosterSnapshot.model_validate(data)
        except ValueError as e:
            raise RosterError(f'Invalid roster snapshot:\n{e}') from e

    roster = Roster()
    seen: dict[str, str] = {}
    for key, team_snapshot in data.teams.items():
        team = roster.add_team(Team(
            key=key,
            name=team_snapshot.name,
            captain=team_snapshot.captain,
            color=team_snapshot.color,
        ))
        for name in team_snapshot.members:
            folded = name.strip().lower()
            if folded in seen:
                raise RosterError(f'Member name {name!r} appears in both {seen[folded]} and {key}')
            seen[folded] = key

            member_snapshot = team_snapshot.data[name]
            team.add_member(Member(
                name=name,
                first_name=member_snapshot.first_name,
                last_name=member_snapshot.last_name,
                stats=MemberStats(**member_snapshot.stats.model_dump()),
            ))
    return roster


def save_roster(path: Path | str, roster: Roster, version: int = 0) -> None:
    """Write a roster snapshot to JSON."""
    save_json(path, roster_to_snapshot(roster, version))


def load_roster(path: Path | str) -> tuple[Roster, int]:
    """Load a roster snapshot, returning (roster, version)."""
    try:
        snapshot = load_json(path, schema=RosterSnapshot)
    except ValueError as e:
        raise RosterError(str(e)) from e
    return roster_from_snapshot(snapshot), snapshot.version


def clear_roster(roster: Roster) -> None:
    """Zero every member's counters; team membership is kept."""
    for _team, member in roster.iter_members():
        member.stats.clear()


def mark_late(roster: Roster, name: str) -> tuple[str, str]:
    """
    Record one late arrival for a member.

    Returns:
        (team_key, member_name) of the updated member

    Raises:
        MemberNotFoundError: If no team has a member with that name
    """
    found = find_member(roster, name)
    if found is None:
        raise MemberNotFoundError(name.strip())
    team_key, member_name = found
    roster.teams[team_key].data[member_name].stats.add('late', 1)
    return found


class RosterStore:
    """
    Owns the current roster and publishes changes atomically.

    Every mutation runs under one lock. Uploads are applied to a deep copy
    that replaces the current roster only when the whole batch succeeded.
    When ``state_path`` is set, the snapshot is saved after each change.
    """

    def __init__(
        self,
        roster: Optional[Roster] = None,
        version: int = 0,
        state_path: Optional[Path | str] = None,
        name_columns: Optional[Iterable[str]] = None,
    ):
        self._roster = roster if roster is not None else default_roster()
        self.version = version
        self.state_path = Path(state_path) if state_path else None
        self.name_columns = list(name_columns) if name_columns is not None else None
        self._lock = threading.Lock()

    @classmethod
    def load(cls, state_path: Path | str, **kwargs) -> 'RosterStore':
        """Open a store from a saved snapshot."""
        roster, version = load_roster(state_path)
        return cls(roster, version=version, state_path=state_path, **kwargs)

    @property
    def roster(self) -> Roster:
        return self._roster

    def snapshot(self) -> dict:
        return roster_to_snapshot(self._roster, self.version)

    def _publish(self, roster: Roster) -> None:
        # Nothing is published unless the save succeeds.
        version = self.version + 1
        if self.state_path is not None:
            save_roster(self.state_path, roster, version)
        self._roster = roster
        self.version = version

    def save(self) -> None:
        """Write the current snapshot to ``state_path``."""
        if self.state_path is None:
            raise ValueError('RosterStore has no state_path to save to')
        with self._lock:
            save_roster(self.state_path, self._roster, self.version)

    def process_upload(self, rows: Iterable[Mapping], source: str = 'upload') -> ProcessingResult:
        """
        Apply one report as an atomic batch.

        Returns:
            ProcessingResult; on failure the roster is unchanged
        """
        with self._lock:
            try:
                # Any error from the row source fails the whole batch.
                rows = list(rows)
            except Exception as e:
                logger.error(f'Reading {source} failed: {type(e).__name__}: {e}')
                return ProcessingResult(success=False, message=f'Failed to process {source}: {e}')

            try:
                if not rows:
                    raise EmptyUploadError(f'{source} contains no data rows')
                working = copy.deepcopy(self._roster)
                result = apply_rows(working, rows, self.name_columns)
            except (PalmsError, ValueError) as e:
                logger.error(f'Upload of {source} failed: {e}')
                return ProcessingResult(success=False, message=f'Failed to process {source}: {e}')

            try:
                self._publish(working)
            except OSError as e:
                logger.error(f'Saving {source} to {self.state_path} failed: {e}')
                return ProcessingResult(success=False, message=f'Failed to save {source}: {e}')

        result.message = f'{source} processed'
        logger.info(
            f'{source}: processed {result.rows_processed}, matched {result.rows_matched}, '
            f'unmatched {len(result.unmatched)}, errors {len(result.errors)}'
        )
        return result

    def mark_late(self, name: str) -> tuple[str, str]:
        """Record one late arrival; raises MemberNotFoundError if unknown."""
        with self._lock:
            working = copy.deepcopy(self._roster)
            found = mark_late(working, name)
            self._publish(working)
        logger.info(f'Marked {found[1]} late')
        return found

    def reset(self) -> None:
        """Zero every counter (membership is kept)."""
        with self._lock:
            working = copy.deepcopy(self._roster)
            clear_roster(working)
            self._publish(working)
        logger.info('All competition data has been reset')
