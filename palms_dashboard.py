#!/usr/bin/env python3
"""
PALMS Dashboard CLI

Tracks a chapter competition from uploaded PALMS reports. State lives in a
JSON snapshot that is created from a roster file and updated after every
upload.

Usage:
    python palms_dashboard.py init --roster data/roster.json
    python palms_dashboard.py upload reports/week_1.csv reports/week_2.xlsx
    python palms_dashboard.py late "Sajid Hasan"
    python palms_dashboard.py teams
    python palms_dashboard.py individuals --category referrals --top 5
    python palms_dashboard.py reset --yes
"""

import argparse
import logging
import sys
from pathlib import Path

from palms import (
    MemberNotFoundError,
    RosterError,
    RosterStore,
    generate_sample_csv,
    get_individual_leaderboard,
    get_team_leaderboard,
    list_latecomers,
    load_roster_config,
    upload_file,
)
from palms.config import get_leaderboard_size, get_name_columns
from palms.constants import LEADERBOARD_CATEGORIES
from palms.logging_config import UPLOAD_DETAIL_LOGGERS, get_logger, setup_logging
from palms.validators import validate_roster, validate_team_score

DEFAULT_STATE = Path("data/palms_state.json")


def open_store(state_path: Path) -> RosterStore:
    """Open the saved state, or exit with a hint to run init."""
    if not state_path.exists():
        print(f"❌ State file not found: {state_path}")
        print("   Run `palms_dashboard.py init --roster data/roster.json` first.")
        sys.exit(1)
    try:
        return RosterStore.load(state_path, name_columns=get_name_columns())
    except (RosterError, ValueError) as e:
        print(f"❌ Could not load {state_path}: {e}")
        sys.exit(1)


def cmd_init(args) -> int:
    state_path = Path(args.state)
    if state_path.exists() and not args.force:
        print(f"⚠️  {state_path} already exists (use --force to overwrite)")
        return 1

    try:
        roster = load_roster_config(args.roster)
    except (RosterError, FileNotFoundError) as e:
        print(f"❌ {e}")
        return 1

    errors = validate_roster(roster)
    if errors:
        for error in errors:
            print(f"❌ {error}")
        return 1

    store = RosterStore(roster, state_path=state_path)
    store.save()
    members = sum(len(t.members) for t in roster.teams.values())
    print(f"Initialized {len(roster.teams)} teams ({members} members) in {state_path}")
    return 0


def cmd_upload(args) -> int:
    store = open_store(Path(args.state))
    status = 0
    logger = get_logger("cli")
    for path in args.files:
        logger.info(f"Uploading {path}")
        result = upload_file(store, path)
        print(result.summary(max_items=args.max_items))
        if not result.success:
            status = 1
    return status


def cmd_late(args) -> int:
    store = open_store(Path(args.state))
    try:
        _team_key, member_name = store.mark_late(args.name)
    except MemberNotFoundError as e:
        print(f"⚠️  {e}")
        return 1
    print(f"✅ Latecomer updated: {member_name}")

    for name, team, late in list_latecomers(store.roster):
        print(f"  {name} ({team}): {late}")
    return 0


def cmd_teams(args) -> int:
    store = open_store(Path(args.state))
    leaderboard = get_team_leaderboard(store.roster)

    print("=" * 60)
    print("TEAM LEADERBOARD")
    print("=" * 60)
    for rank, team in enumerate(leaderboard, 1):
        print(f"  {rank}. {team.name} (Captain: {team.captain or '-'}): {team.total_score:g} pts")
        print(f"     Individual: {team.individual_points:g}  Bonus: {team.bonus_points}")
        for bonus in team.bonuses:
            print(f"     ✅ {bonus.name} (+{bonus.points} pts)")
        if args.members:
            for name, points in team.members:
                print(f"       - {name}: {points:g} pts")
        for warning in validate_team_score(team):
            print(f"     ⚠️  {warning}")
    return 0


def cmd_individuals(args) -> int:
    store = open_store(Path(args.state))
    top = args.top or get_leaderboard_size()
    leaderboard = get_individual_leaderboard(store.roster, args.category, limit=top)

    print(f"INDIVIDUAL LEADERBOARD: {args.category}")
    for rank, entry in enumerate(leaderboard, 1):
        count = f" ({entry.raw_count:g})" if entry.raw_count is not None else ""
        print(f"  {rank}. {entry.name} [{entry.team}]: {entry.points:g} pts{count}")
    return 0


def cmd_reset(args) -> int:
    if not args.yes:
        print("⚠️  This will permanently delete ALL competition data. Re-run with --yes to confirm.")
        return 1
    store = open_store(Path(args.state))
    store.reset()
    print("✅ All data has been reset")
    return 0


def cmd_sample(args) -> int:
    sample = generate_sample_csv()
    if args.output:
        Path(args.output).write_text(sample + "\n", encoding="utf-8")
        print(f"Sample written to {args.output}")
    else:
        print(sample)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PALMS report competition dashboard")
    parser.add_argument(
        "--state", "-s",
        default=str(DEFAULT_STATE),
        help="Path to the roster state JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write logs to ./logs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Create the state file from a roster")
    init.add_argument("--roster", "-r", default="data/roster.json", help="Roster definition JSON")
    init.add_argument("--force", action="store_true", help="Overwrite existing state")
    init.set_defaults(func=cmd_init)

    upload = subparsers.add_parser("upload", help="Upload one or more PALMS reports")
    upload.add_argument("files", nargs="+", help="CSV or XLSX report files")
    upload.add_argument("--max-items", type=int, default=5, help="Unmatched names/errors to show")
    upload.set_defaults(func=cmd_upload)

    late = subparsers.add_parser("late", help="Mark a member late")
    late.add_argument("name", help="Member name")
    late.set_defaults(func=cmd_late)

    teams = subparsers.add_parser("teams", help="Show the team leaderboard")
    teams.add_argument("--members", action="store_true", help="List member points")
    teams.set_defaults(func=cmd_teams)

    individuals = subparsers.add_parser("individuals", help="Show an individual leaderboard")
    individuals.add_argument(
        "--category", "-c",
        choices=LEADERBOARD_CATEGORIES,
        default="total",
        help="Score category to rank by",
    )
    individuals.add_argument("--top", "-n", type=int, default=None, help="Number of members to show")
    individuals.set_defaults(func=cmd_individuals)

    reset = subparsers.add_parser("reset", help="Reset all competition data")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset.set_defaults(func=cmd_reset)

    sample = subparsers.add_parser("sample", help="Print a sample PALMS CSV")
    sample.add_argument("--output", "-o", default=None, help="Write to this file instead")
    sample.set_defaults(func=cmd_sample)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        levels = dict.fromkeys(UPLOAD_DETAIL_LOGGERS, logging.NOTSET)
    else:
        levels = UPLOAD_DETAIL_LOGGERS
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=args.log_file,
        levels=levels,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
