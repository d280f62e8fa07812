"""Kritrim CLI entrypoints."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import uuid
from pathlib import Path
from typing import Mapping

from .album import compose_album
from .catalog import ASPECT_RATIO_OPTIONS, CULTURAL_LOOKS, ERA_CATEGORIES, FIGURE_SIZE_OPTIONS, FILTERS
from .catalog import IMAGE_FRAMING_OPTIONS, PREDEFINED_STYLES, get_filter, regions_for
from .cli_progress import ProgressTicker, job_lines
from .engine import KritrimEngine
from .errors import KritrimError, MissingSelection, SelectionError, SuggestionError
from .generation import GenerationClient
from .jobs import Job, JobStatus
from .providers import default_registry
from .providers.base import ImagePayload, suffix_for_mime_type
from .runs.events import EventWriter
from .scheduler import DEFAULT_CONCURRENCY
from .selection import (
    CulturalSelection,
    FilterSelection,
    ImaginationInputs,
    ImaginationSelection,
    QuickTripSelection,
    Selection,
)
from .suggestions import SUGGESTION_FIELDS, SuggestionClient
from .utils import getenv_int, load_dotenv, slugify

EXIT_OK = 0
EXIT_JOB_FAILED = 1
EXIT_BAD_INPUT = 2

_IMAGINATION_ARGS = (
    "scenery",
    "attire",
    "pose",
    "hair_style",
    "eye_style",
    "figure_size",
    "style",
    "aspect_ratio",
    "image_framing",
)


def _add_session_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--image", required=True, help="Path to the source photo (png/jpeg/webp)")
    parser.add_argument("--out", required=True, help="Directory for generated images")
    parser.add_argument("--events", help="Path to events.jsonl")
    parser.add_argument("--provider", help="Transport to use (gemini or dryrun)")
    parser.add_argument("--album", action="store_true", help="Also write an album page of the results")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kritrim", description="Reimagine a photo through time, culture and style")
    sub = parser.add_subparsers(dest="command")

    quick = sub.add_parser("quick", help="Generate several eras at once")
    _add_session_args(quick)
    quick.add_argument("--era", action="append", default=[], help="Era to generate (repeatable, up to 6)")
    quick.add_argument("--concurrency", type=int, help="Requests in flight at once")

    cultural = sub.add_parser("cultural", help="Traditional attire for a country and region")
    _add_session_args(cultural)
    cultural.add_argument("--country", required=True)
    cultural.add_argument("--region", required=True, help="Region or attire name")

    imagination = sub.add_parser("imagination", help="Free-form scene")
    _add_session_args(imagination)
    imagination.add_argument("--scenery", default="")
    imagination.add_argument("--attire", default="")
    imagination.add_argument("--pose", default="")
    imagination.add_argument("--hair-style", dest="hair_style", default="")
    imagination.add_argument("--eye-style", dest="eye_style", default="")
    imagination.add_argument("--figure-size", dest="figure_size", default=FIGURE_SIZE_OPTIONS[0])
    imagination.add_argument("--style", default="")
    imagination.add_argument("--aspect-ratio", dest="aspect_ratio", default=ASPECT_RATIO_OPTIONS[0])
    imagination.add_argument("--framing", dest="image_framing", default=IMAGE_FRAMING_OPTIONS[0])

    filter_cmd = sub.add_parser("filter", help="Apply a photographic filter look")
    _add_session_args(filter_cmd)
    filter_cmd.add_argument("--filter", dest="filter_name", required=True)

    suggest = sub.add_parser("suggest", help="Surprise-me suggestion for an imagination field")
    suggest.add_argument("field", choices=SUGGESTION_FIELDS)
    suggest.add_argument("--provider", help="Transport to use (gemini or dryrun)")

    catalog = sub.add_parser("catalog", help="List the built-in choices")
    catalog.add_argument("kind", choices=("eras", "countries", "filters", "styles"))
    catalog.add_argument("--country", help="List the regions for one country")

    return parser


def _resolve_provider(name: str | None) -> str:
    return str(name or os.getenv("KRITRIM_PROVIDER") or "gemini").strip().lower()


def _build_engine(provider: str | None, events: EventWriter | None, concurrency: int | None = None) -> KritrimEngine:
    transports = default_registry().build(_resolve_provider(provider))
    resolved_concurrency = concurrency or getenv_int("KRITRIM_CONCURRENCY", DEFAULT_CONCURRENCY)
    return KritrimEngine(
        GenerationClient(transports.image, events=events),
        SuggestionClient(transports.text, events=events),
        events=events,
        concurrency=resolved_concurrency,
    )


def _selection_from_args(args: argparse.Namespace) -> Selection:
    if args.command == "quick":
        return QuickTripSelection(tuple(args.era))
    if args.command == "cultural":
        return CulturalSelection(country=args.country, region=args.region)
    if args.command == "imagination":
        return ImaginationSelection(
            inputs=ImaginationInputs.from_mapping({name: getattr(args, name) for name in _IMAGINATION_ARGS})
        )
    if get_filter(args.filter_name) is None:
        raise MissingSelection(f"Unknown filter: {args.filter_name}. Run `kritrim catalog filters` for the list.")
    return FilterSelection(filter_name=args.filter_name)


def write_results(jobs: Mapping[str, Job], out_dir: Path) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for key, job in jobs.items():
        if job.status is not JobStatus.DONE or job.result is None:
            continue
        payload = ImagePayload.from_data_url(job.result)
        path = out_dir / f"kritrim-{slugify(key)}{suffix_for_mime_type(payload.mime_type)}"
        path.write_bytes(payload.to_bytes())
        written.append(path)
    return written


def _handle_session(args: argparse.Namespace) -> int:
    out_dir = Path(args.out)
    events_path = Path(args.events) if args.events else out_dir / "events.jsonl"
    events = EventWriter(events_path, str(uuid.uuid4()))
    engine = _build_engine(args.provider, events, getattr(args, "concurrency", None))
    try:
        engine.load_image_file(Path(args.image))
    except (OSError, KritrimError) as exc:
        print(f"Could not load image: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        selection = _selection_from_args(args)
    except SelectionError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_BAD_INPUT
    ticker = ProgressTicker("Generating images")
    ticker.start_ticking()
    try:
        jobs = asyncio.run(engine.generate(selection))
    except SelectionError as exc:
        ticker.stop(summary="Nothing generated")
        print(str(exc), file=sys.stderr)
        return EXIT_BAD_INPUT
    done = sum(1 for job in jobs.values() if job.status is JobStatus.DONE)
    ticker.stop(summary=f"Generated {done}/{len(jobs)}")

    color = bool(getattr(sys.stdout, "isatty", lambda: False)())
    for line in job_lines(jobs, color=color):
        print(line)
    for path in write_results(jobs, out_dir):
        print(f"Saved {path}")
    if args.album and engine.album_images():
        album = ImagePayload.from_data_url(compose_album(engine.album_images()))
        album_path = out_dir / "kritrim-album.jpg"
        album_path.write_bytes(album.to_bytes())
        print(f"Saved {album_path}")
    return EXIT_OK if done == len(jobs) else EXIT_JOB_FAILED


def _handle_suggest(args: argparse.Namespace) -> int:
    engine = _build_engine(args.provider, None)
    try:
        suggestion = asyncio.run(engine.suggest(args.field))
    except SuggestionError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_JOB_FAILED
    print(suggestion)
    return EXIT_OK


def _handle_catalog(args: argparse.Namespace) -> int:
    lines: list[str] = []
    if args.kind == "eras":
        for category in ERA_CATEGORIES:
            lines.append(f"{category.name}:")
            lines.extend(f"  {era}" for era in category.eras)
    elif args.kind == "countries":
        if args.country:
            if args.country not in CULTURAL_LOOKS:
                print(f"Unknown country: {args.country}", file=sys.stderr)
                return EXIT_BAD_INPUT
            lines.extend(regions_for(args.country))
        else:
            lines.extend(sorted(CULTURAL_LOOKS))
    elif args.kind == "filters":
        lines.extend(f"{spec.name}: {spec.description}" for spec in FILTERS)
    else:
        lines.extend(PREDEFINED_STYLES)
    for line in lines:
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command in {"quick", "cultural", "imagination", "filter"}:
        raise SystemExit(_handle_session(args))
    if args.command == "suggest":
        raise SystemExit(_handle_suggest(args))
    if args.command == "catalog":
        raise SystemExit(_handle_catalog(args))
    parser.print_help()
    raise SystemExit(1)


if __name__ == "__main__":
    main()
