"""reelplan command-line interface with subcommands.

Usage:
    reelplan plan <input.json> [-o timeline.json] [--decisions decisions.json]
                  [--silence silencedetect.log] [--seed N] [--report report.md]
    reelplan validate <timeline.json> [--fps 30]
    reelplan report <timeline.json> [--fps 30] [-o report.md]
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from pydantic import ValidationError

from reelplan.config import settings
from reelplan.errors import ReelPlanError
from reelplan.export.report import generate_plan_report, generate_timeline_report
from reelplan.models.pipeline import PipelineEvent
from reelplan.models.project import PipelineInput
from reelplan.models.timeline import Timeline
from reelplan.pipeline.runner import run_pipeline, run_pipeline_with_decisions
from reelplan.services.decisions import load_editorial_decisions
from reelplan.services.silence import parse_ffmpeg_silence_output
from reelplan.services.timeline_builder import get_timeline_stats, validate_timeline

logger = logging.getLogger(__name__)


def _load_input(path: Path) -> PipelineInput:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return PipelineInput.model_validate(data)


def _print_event(event: PipelineEvent) -> None:
    print(f"\r  [{event.progress * 100:3.0f}%] {event.stage}: {event.message}".ljust(72), end="", flush=True)


def _load_timeline(path: Path) -> Timeline:
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        return Timeline.load(path)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Error: invalid timeline file {path}: {e}", file=sys.stderr)
        sys.exit(1)


# --- plan subcommand ---


def cmd_plan(args: argparse.Namespace) -> None:
    """Build a timeline from a pipeline input file."""
    input_path = Path(args.input).resolve()
    if not input_path.exists():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    try:
        run_input = _load_input(input_path)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Error: invalid input file {input_path}: {e}", file=sys.stderr)
        sys.exit(1)

    silence_path = Path(args.silence).resolve() if args.silence else None
    if silence_path is not None and not silence_path.exists():
        print(f"Error: file not found: {silence_path}", file=sys.stderr)
        sys.exit(1)

    seed = args.seed if args.seed is not None else settings.random_seed
    rng = random.Random(seed)
    on_event = None if args.quiet else _print_event

    print(f"Planning: {input_path.name}")
    try:
        if silence_path is not None:
            log_text = silence_path.read_text(encoding="utf-8")
            silence = parse_ffmpeg_silence_output(log_text, run_input.avatar_duration_seconds)
            run_input = run_input.model_copy(update={"silence": silence})

        if args.decisions:
            decisions = load_editorial_decisions(Path(args.decisions))
            result = run_pipeline_with_decisions(run_input, decisions, rng=rng, on_event=on_event)
        else:
            result = run_pipeline(run_input, rng=rng, on_event=on_event)
    except ReelPlanError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)
    if on_event:
        print()

    output = Path(args.output) if args.output else input_path.with_name(f"{input_path.stem}.timeline.json")
    output = result.timeline.save(output)

    fps = run_input.config.fps
    if args.report:
        report_path = Path(args.report)
        report_path.write_text(generate_plan_report(result, fps), encoding="utf-8")
        print(f"  Report: {report_path}")

    stats = result.stats
    breakdown = stats.layout_breakdown
    print(f"  Duration: {stats.total_duration} ({stats.item_count} items)")
    print(f"  Layouts: A={breakdown['A']}, B={breakdown['B']}, C={breakdown['C']}")
    print(f"  Transitions: {stats.transition_count}, caption words: {stats.caption_word_count}")
    for warning in result.warnings:
        print(f"  Warning: {warning}")
    for error in result.validation.errors:
        print(f"  Error: {error}", file=sys.stderr)

    print(f"\nDone: {output}")
    if not result.validation.valid:
        sys.exit(1)


# --- validate subcommand ---


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a saved timeline."""
    timeline = _load_timeline(Path(args.timeline))
    validation = validate_timeline(timeline)
    stats = get_timeline_stats(timeline, args.fps)

    print(f"Items: {stats.item_count}, duration: {stats.total_duration}")
    for warning in validation.warnings:
        print(f"  Warning: {warning}")
    for error in validation.errors:
        print(f"  Error: {error}")

    print("Valid" if validation.valid else "Invalid")
    if not validation.valid:
        sys.exit(1)


# --- report subcommand ---


def cmd_report(args: argparse.Namespace) -> None:
    """Write a Markdown report for a saved timeline."""
    timeline = _load_timeline(Path(args.timeline))
    report = generate_timeline_report(timeline, args.fps)

    if args.output:
        Path(args.output).write_text(report, encoding="utf-8")
        print(f"Report: {args.output}")
    else:
        print(report)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reelplan",
        description="Turn a talking-head script and helper assets into a frame-accurate edit plan",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Build a timeline from a pipeline input JSON")
    plan.add_argument("input", help="Pipeline input JSON file")
    plan.add_argument("-o", "--output", help="Timeline JSON output path")
    plan.add_argument("--decisions", help="Editorial decisions JSON (skips matching and planning)")
    plan.add_argument("--silence", help="ffmpeg silencedetect log for avatar trimming")
    plan.add_argument("--seed", type=int, default=None, help="Random seed for transitions")
    plan.add_argument("--report", help="Write a Markdown report to this path")
    plan.add_argument("-q", "--quiet", action="store_true", help="Hide progress output")
    plan.set_defaults(func=cmd_plan)

    validate = subparsers.add_parser("validate", help="Validate a timeline JSON")
    validate.add_argument("timeline", help="Timeline JSON file")
    validate.add_argument("--fps", type=int, default=settings.fps, help="Frames per second")
    validate.set_defaults(func=cmd_validate)

    report = subparsers.add_parser("report", help="Markdown report for a timeline JSON")
    report.add_argument("timeline", help="Timeline JSON file")
    report.add_argument("--fps", type=int, default=settings.fps, help="Frames per second")
    report.add_argument("-o", "--output", help="Report output path (default: stdout)")
    report.set_defaults(func=cmd_report)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
        stream=sys.stderr,
    )

    args.func(args)


if __name__ == "__main__":
    main()
