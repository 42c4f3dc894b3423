#!/usr/bin/env python3
"""
plan_page.py - Inspect the stage plan of a page and evaluate task counters.

Prints the stage sequence of a page with the lines each stage covers, the
batch a student at a given line would get, and optionally the decision for a
set of pass/fail counters.

Usage:
  python scripts/plan_page.py --page 5
  python scripts/plan_page.py --page 1 --stage STAGE_1_1 --line 6 --level LEVEL_2
  python scripts/plan_page.py --page 5 --stage STAGE_3 --passed 80 --failed 0 --required 80
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hifztrack.classroom import PageGeometry, ProgressionEngine, stage_info
from hifztrack.schemas import GroupLevel, Stage
from hifztrack.utils import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Reports
# -----------------------------------------------------------------------------

def describe_page(engine: ProgressionEngine, page: int) -> list[dict]:
    """One row per stage of the page: stage, title, line range."""
    rows = []
    for stage in engine.stage_sequence_for_page(page):
        lines = engine.line_range_for_stage(stage, page)
        rows.append({
            "stage": stage.value,
            "title": stage_info(stage).title,
            "start_line": lines.start_line,
            "end_line": lines.end_line,
        })
    return rows


def build_report(engine: ProgressionEngine, args: argparse.Namespace) -> dict:
    geometry = engine.geometry
    report = {
        "page": args.page,
        "line_count": geometry.line_count_for_page(args.page),
        "stages": describe_page(engine, args.page),
    }

    if args.stage:
        plan = engine.plan_task(args.stage, args.line, args.level, args.page)
        report["task"] = plan.model_dump(mode="json")
        report["after_pass"] = engine.advance_position(
            args.stage, args.line, args.level, args.page
        ).model_dump(mode="json")
        report["completion_percent"] = geometry.completion_percent(args.page, args.line)

    if args.required is not None:
        decision = engine.evaluate_progress(
            args.passed, args.failed, args.required, args.stage or Stage.STAGE_1_1, args.page
        )
        report["decision"] = decision.model_dump(mode="json")

    return report


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> dict:
    parser = argparse.ArgumentParser(
        description="Show the stage plan for a page and evaluate task counters.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--page", type=int, required=True, help="Page number")
    parser.add_argument(
        "--stage",
        choices=[s.value for s in Stage],
        help="Current stage of the student",
    )
    parser.add_argument("--line", type=int, default=1, help="Current line (default: 1)")
    parser.add_argument(
        "--level",
        choices=[lv.value for lv in GroupLevel],
        default=GroupLevel.LEVEL_1.value,
        help="Group level (default: LEVEL_1)",
    )
    parser.add_argument("--passed", type=int, default=0, help="Passed submissions")
    parser.add_argument("--failed", type=int, default=0, help="Failed submissions")
    parser.add_argument("--required", type=int, help="Required submissions; enables the decision")
    parser.add_argument("--settings", type=Path, help="Settings YAML (default: config/memorization.yaml)")

    args = parser.parse_args(argv)

    if args.page < 1:
        parser.error("--page must be 1 or greater")

    try:
        settings = load_settings(args.settings)
    except (FileNotFoundError, ValueError) as e:
        parser.error(str(e))

    if args.page > settings.total_pages:
        parser.error(f"--page must not exceed {settings.total_pages}")

    engine = ProgressionEngine(PageGeometry(settings), settings)
    logger.info(f"Page {args.page}: {engine.geometry.line_count_for_page(args.page)} lines")

    report = build_report(engine, args)
    print(json.dumps(report, indent=2, ensure_ascii=False))
    return report


if __name__ == "__main__":
    main()
