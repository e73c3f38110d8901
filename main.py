"""
Fishing competition results - command line

  python main.py standings --folder <id> [--data backup.json] [--penalty 20] [--exclude 0] [--output out.json]
  python main.py results --competition <id> [--data backup.json] [--output out.json]

Without --data the records are read from Supabase.
"""
import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from app.config import get_standings_config
from data_pipeline.normalizer import parse_export
from data_pipeline.schemas import SavedCompetitionSchema, CriteriumFolderSchema
from ranking.criterium import calculate_standings, order_by_competition_number
from ranking.models import Standings
from ranking.results import calculate_results, results_rows


def setup_logging():
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level="INFO"
    )
    logger.add(
        "logs/standings_{time:YYYY-MM-DD}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )


# ==================== Loading ====================

def load_backup(path: str) -> Tuple[List[SavedCompetitionSchema], List[CriteriumFolderSchema]]:
    with open(path, "r", encoding="utf-8") as f:
        data = parse_export(json.load(f))
    return data["competitions"], data["folders"]


async def load_from_supabase() -> Tuple[List[SavedCompetitionSchema], List[CriteriumFolderSchema]]:
    from database.supabase_client import SupabaseDB

    db = SupabaseDB()
    return await db.load_competitions(), await db.load_folders()


def load_records(path: Optional[str]) -> Tuple[List[SavedCompetitionSchema], List[CriteriumFolderSchema]]:
    if path:
        return load_backup(path)
    return asyncio.run(load_from_supabase())


def folder_competitions(competitions: List[SavedCompetitionSchema], folder_id: str) -> List[SavedCompetitionSchema]:
    in_folder = [c for c in competitions if c.criterium_folder_id == folder_id]
    return order_by_competition_number(in_folder, lambda c: c.name)


# ==================== Output ====================

def print_table(rows: List[List[Any]], title: str = ""):
    widths = [max(len(str(row[i])) for row in rows) for i in range(len(rows[0]))]
    print(f"\n{'=' * 60}")
    print(f" {title}")
    print(f"{'=' * 60}")
    for index, row in enumerate(rows):
        print("  ".join(str(cell).rjust(width) for cell, width in zip(row, widths)))
        if index == 0:
            print("-" * (sum(widths) + 2 * (len(widths) - 1)))


def write_json(data: Dict[str, Any], path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    logger.info(f"Written: {path}")


# ==================== Commands ====================

def cmd_standings(args) -> int:
    competitions, folders = load_records(args.data)
    folder = next((f for f in folders if f.id == args.folder), None)
    if folder is None:
        logger.error(f"Criterium folder not found: {args.folder}")
        return 1

    events = folder_competitions(competitions, folder.id)
    try:
        standings: Standings = calculate_standings(
            [c.to_event_result() for c in events],
            penalty_points=args.penalty,
            exclude_count=args.exclude,
        )
    except ValueError as e:
        logger.error(f"Invalid standings parameters: {e}")
        return 1

    if args.output:
        write_json(standings.to_dict(), args.output)
    else:
        print_table(standings.to_rows(), title=f"Standings {folder.name}")
    return 0


def cmd_results(args) -> int:
    competitions, _ = load_records(args.data)
    competition = next((c for c in competitions if c.id == args.competition), None)
    if competition is None:
        logger.error(f"Competition not found: {args.competition}")
        return 1

    try:
        results = calculate_results(competition.to_participants(), competition.sector_sizes)
    except ValueError as e:
        logger.error(f"Cannot compute results of {competition.name!r}: {e}")
        return 1

    if args.output:
        write_json({"competition": competition.name, "results": [r.to_dict() for r in results]}, args.output)
    else:
        print_table(results_rows(results), title=f"{competition.name} {competition.date} {competition.location}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    config = get_standings_config()

    parser = argparse.ArgumentParser(description="Fishing competition results and criterium standings")
    sub = parser.add_subparsers(dest="command", required=True)

    standings = sub.add_parser("standings", help="Criterium standings of a folder")
    standings.add_argument("--folder", required=True, help="Criterium folder id")
    standings.add_argument("--data", type=str, help="Backup export file (default: Supabase)")
    standings.add_argument("--penalty", type=int, default=config.default_penalty_points, help="Points for a missed event")
    standings.add_argument("--exclude", type=int, default=config.default_exclude_count, help="Worst results dropped")
    standings.add_argument("--output", type=str, help="Write JSON instead of printing")
    standings.set_defaults(func=cmd_standings)

    results = sub.add_parser("results", help="Placing of one competition")
    results.add_argument("--competition", required=True, help="Saved competition id")
    results.add_argument("--data", type=str, help="Backup export file (default: Supabase)")
    results.add_argument("--output", type=str, help="Write JSON instead of printing")
    results.set_defaults(func=cmd_results)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
