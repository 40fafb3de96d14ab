"""
Faraway CLI - Command-line interface for the scorer.

Usage:
    faraway catalog <catalog_csv>                   Summarize a card table
    faraway score <catalog_csv> R.. [S..]           Score one tableau
    faraway replay <catalog_csv> <frames.jsonl>     Replay recorded frames
    faraway serve                                   Run the HTTP API

A frames file holds one JSON list of detections per line, as the
detector emits them (identifier, bbox, confidence).
"""

import argparse
import json
import sys

from .config import FarawayConfig
from .exceptions import CatalogLoadError, ConfigError, GameStateError, ParseError
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Faraway - camera-driven board game scorer",
        prog="faraway",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    catalog_parser = subparsers.add_parser("catalog", help="Summarize a card table")
    catalog_parser.add_argument("catalog_file", help="Path to the card table CSV")

    score_parser = subparsers.add_parser("score", help="Score one tableau")
    score_parser.add_argument("catalog_file", help="Path to the card table CSV")
    score_parser.add_argument(
        "cards", nargs="+", help="Card labels in placement order, e.g. R12 R40 S3"
    )

    replay_parser = subparsers.add_parser("replay", help="Replay recorded detector frames")
    replay_parser.add_argument("catalog_file", help="Path to the card table CSV")
    replay_parser.add_argument("frames_file", help="JSON-lines file, one frame per line")
    replay_parser.add_argument("--window", type=int, default=None, help="Window size")
    replay_parser.add_argument(
        "--confidence", type=float, default=None, help="Confidence threshold"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = FarawayConfig.from_env()
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(2)
    setup_logging(args.log_level or config.log_level, format_json=config.log_json)

    commands = {
        "catalog": cmd_catalog,
        "score": cmd_score,
        "replay": cmd_replay,
        "serve": cmd_serve,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args, config)
    except (CatalogLoadError, ConfigError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def _load_catalog(path):
    from .catalog import CardCatalog

    return CardCatalog.from_csv(path)


def cmd_catalog(args, config):
    """Summarize a card table."""
    catalog = _load_catalog(args.catalog_file)
    print(f"Regions: {catalog.region_count}")
    print(f"Sanctuaries: {catalog.sanctuary_count}")


def cmd_score(args, config):
    """Score one tableau given as card labels."""
    from .api.service import ScoringService
    from .api.schemas import ErrorResponse, ScoreLayoutRequest
    from .engine_core.cards import CardKind
    from .vision.parser import decode_label

    regions, sanctuaries = [], []
    for label in args.cards:
        try:
            kind, card_id = decode_label(label)
        except ParseError as e:
            print(f"Error: {e}")
            sys.exit(1)
        (regions if kind is CardKind.REGION else sanctuaries).append(card_id)

    service = ScoringService(_load_catalog(args.catalog_file))
    result = service.score_layout(ScoreLayoutRequest(regions=regions, sanctuaries=sanctuaries))
    if isinstance(result, ErrorResponse):
        print(f"Error: {result.error}")
        for error in (result.details or {}).get("errors", []):
            print(f"  - {error}")
        sys.exit(1)
    print_state(result)


def cmd_replay(args, config):
    """
    Push recorded frames through the window, polling after each one the
    way the UI timer does, and print the stable tableau.
    """
    from .api.service import ScoringService
    from .vision.stabilizer import StabilizationWindow

    catalog = _load_catalog(args.catalog_file)
    window = StabilizationWindow(
        catalog,
        window_size=config.window_size if args.window is None else args.window,
        confidence_threshold=(
            config.confidence_threshold if args.confidence is None else args.confidence
        ),
    )
    service = ScoringService(catalog, window)

    try:
        with open(args.frames_file, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    frame = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning("Skipping line %d: %s", line_number, e)
                    continue
                if not isinstance(frame, list):
                    logger.warning("Skipping line %d: expected a JSON list", line_number)
                    continue
                service.submit_detections(frame)
                try:
                    window.query()
                except GameStateError:
                    continue
                break
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read frames file {args.frames_file}: {e}")
        sys.exit(1)

    result = service.get_state()
    if result.status.value != "ready":
        print(f"No stable tableau: {result.guidance} ({result.detail})")
        sys.exit(1)
    print_state(result)


def cmd_serve(args, config):
    """Run the HTTP API."""
    import uvicorn

    from .api.app import create_app
    from .api.service import ScoringService

    service = ScoringService.from_config(config)
    uvicorn.run(create_app(service), host=args.host, port=args.port)


def print_state(result):
    print(f"Score: {result.total_score}")
    if result.confidence is not None:
        print(f"Confidence: {result.confidence:.2f}")
    for card in result.cards:
        print(f"  {card.label:>5}  {card.score}")


if __name__ == "__main__":
    main()
