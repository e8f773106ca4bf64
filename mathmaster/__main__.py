"""
Command line view of stored progress.

Usage:
  python -m mathmaster lessons                   # Lesson status in assessment mode
  python -m mathmaster lessons --mode practice
  python -m mathmaster summary                   # Totals and recommended lesson
  python -m mathmaster reset --yes               # Wipe stored progress
"""

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

from mathmaster.classroom import CurriculumIndex, ProgressStore, ProgressionGate
from mathmaster.config import DEFAULT_PROGRESS_DB
from mathmaster.errors import MathMasterError
from mathmaster.schemas import LessonStatus, QuizMode

logger = logging.getLogger("mathmaster")

STATUS_MARKERS = {
    LessonStatus.PASSED: "✓",
    LessonStatus.FAILED: "✗",
    LessonStatus.UNLOCKED: "○",
    LessonStatus.LOCKED: "◌",
}


def cmd_lessons(gate: ProgressionGate, args) -> int:
    mode = QuizMode(args.mode)
    for nav_chapter in gate.navigation_tree(mode):
        print(f"{nav_chapter.chapter.title} ({nav_chapter.passed_count}/{nav_chapter.total_count})")
        for nav_lesson in nav_chapter.lessons:
            score = "" if nav_lesson.best_score is None else f"  {nav_lesson.best_score:g}"
            print(f"  {STATUS_MARKERS[nav_lesson.status]} {nav_lesson.lesson.id:<9} {nav_lesson.lesson.title}{score}")
    return 0


def cmd_summary(gate: ProgressionGate, args) -> int:
    summary = gate.progress_summary()
    for key, value in summary.items():
        print(f"{key}: {value}")
    return 0


def cmd_reset(gate: ProgressionGate, args) -> int:
    if not args.yes:
        print("Refusing to reset progress without --yes", file=sys.stderr)
        return 1
    gate.progress.reset()
    print("Progress reset.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathmaster",
        description="Math 6 Master progress viewer",
    )
    parser.add_argument("--db", type=Path, default=DEFAULT_PROGRESS_DB,
                        help=f"Progress database (default: {DEFAULT_PROGRESS_DB})")
    parser.add_argument("--curriculum", type=Path, default=None,
                        help="Curriculum JSON file (default: packaged curriculum)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    lessons = subparsers.add_parser("lessons", help="List lessons with status")
    lessons.add_argument("--mode", choices=[m.value for m in QuizMode],
                         default=QuizMode.ASSESSMENT.value)
    lessons.set_defaults(func=cmd_lessons)

    summary = subparsers.add_parser("summary", help="Show progress summary")
    summary.set_defaults(func=cmd_summary)

    reset = subparsers.add_parser("reset", help="Wipe stored progress")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset.set_defaults(func=cmd_reset)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        index = CurriculumIndex.from_file(args.curriculum) if args.curriculum else CurriculumIndex.default()
        gate = ProgressionGate(index, ProgressStore(args.db))
        return args.func(gate, args)
    except (MathMasterError, OSError, ValueError, sqlite3.Error) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
