from .models import (
    MemberStats,
    Member,
    Team,
    Roster,
    MemberScore,
    TeamScore,
    IndividualScore,
    ProcessingResult,
)
from .errors import (
    PalmsError,
    RosterError,
    MemberNotFoundError,
    UploadError,
    EmptyUploadError,
    FileDecodeError,
)
from .headers import normalize_header, display_header, map_headers
from .reconciler import extract_member_name, find_member, resolve_row
from .accumulator import apply_row, coerce_value
from .scoring import score_member
from .teams import (
    score_team,
    get_team_leaderboard,
    get_individual_leaderboard,
    list_latecomers,
)
from .uploader import apply_rows, upload_file
from .roster import (
    RosterStore,
    build_roster,
    default_roster,
    load_roster_config,
    load_roster,
    save_roster,
    clear_roster,
    mark_late,
)
from .file_reader import read_rows, validate_file, generate_sample_csv

__all__ = [
    # Models
    'MemberStats',
    'Member',
    'Team',
    'Roster',
    'MemberScore',
    'TeamScore',
    'IndividualScore',
    'ProcessingResult',
    # Errors
    'PalmsError',
    'RosterError',
    'MemberNotFoundError',
    'UploadError',
    'EmptyUploadError',
    'FileDecodeError',
    # Reconciliation
    'normalize_header',
    'display_header',
    'map_headers',
    'extract_member_name',
    'find_member',
    'resolve_row',
    'apply_row',
    'coerce_value',
    # Scoring
    'score_member',
    'score_team',
    'get_team_leaderboard',
    'get_individual_leaderboard',
    'list_latecomers',
    # Uploads and roster store
    'apply_rows',
    'upload_file',
    'RosterStore',
    'build_roster',
    'default_roster',
    'load_roster_config',
    'load_roster',
    'save_roster',
    'clear_roster',
    'mark_late',
    # File reading
    'read_rows',
    'validate_file',
    'generate_sample_csv',
]
