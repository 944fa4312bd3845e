from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path
from typing import Sequence

from hexmapper.cli.preview import render_preview_png
from hexmapper.content.io import canonical_json, load_documents, write_render_json
from hexmapper.content.schema import DocumentValidationError, is_valid_turn_id
from hexmapper.mapping.hash import merged_state_hash
from hexmapper.mapping.merge import dump_merged_tiles
from hexmapper.mapping.pipeline import run_pipeline

CLAN_ID_PATTERN = re.compile(r"0[0-9]{3}")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _clan_id(value: str) -> str:
    if not CLAN_ID_PATTERN.fullmatch(value):
        raise argparse.ArgumentTypeError(f"invalid clan {value!r}: must be 4 digits starting with 0")
    return value


def _turn_id(value: str) -> str:
    if not is_valid_turn_id(value):
        raise argparse.ArgumentTypeError(f"invalid turn {value!r}: must be YYYY-MM format")
    return value


def _output_path(value: str) -> Path:
    path = Path(value)
    if path.suffix != ".json":
        raise argparse.ArgumentTypeError(f"output {value!r}: must end in .json")
    if not path.parent.is_dir():
        raise argparse.ArgumentTypeError(f"output {value!r}: directory {str(path.parent)!r} does not exist")
    return path


def _preview_path(value: str) -> Path:
    path = Path(value)
    if path.suffix != ".png":
        raise argparse.ArgumentTypeError(f"preview {value!r}: must end in .png")
    if not path.parent.is_dir():
        raise argparse.ArgumentTypeError(f"preview {value!r}: directory {str(path.parent)!r} does not exist")
    return path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexmapper-render",
        description=(
            "Merge per-turn map observation documents into one map state. Without --output the "
            "documents are only loaded, validated and merged."
        ),
    )
    parser.add_argument("paths", nargs="+", help="Observation document JSON files, in any order")
    parser.add_argument("--clan", required=True, type=_clan_id, help="Owning clan id, e.g. 0987")
    parser.add_argument("--output", type=_output_path, help="Path to write the render map JSON")
    parser.add_argument("--preview", type=_preview_path, help="Optional path to write a PNG preview")
    parser.add_argument("--max-turn", type=_turn_id, help="Ignore documents for turns after YYYY-MM")
    parser.add_argument(
        "--dump-merged",
        action="store_true",
        help="Print the merged tile state as canonical JSON, sorted by location",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Log stage summaries")
    verbosity.add_argument("--debug", action="store_true", help="Log per-document and per-tile detail")
    verbosity.add_argument("--quiet", action="store_true", help="Log errors only")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose:
        return logging.INFO
    if args.debug:
        return logging.DEBUG
    return logging.WARNING


def _configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(level=_log_level(args), format=LOG_FORMAT)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        loaded = load_documents(args.paths)
        result = run_pipeline(
            [entry.document for entry in loaded],
            args.clan,
            max_turn=args.max_turn,
        )

        bounds = result.bounds
        print(
            f"bounds upper_left={bounds.upper_left.to_grid()} "
            f"lower_right={bounds.lower_right.to_grid()} "
            f"offset={bounds.offset.to_grid()}"
        )
        print(
            f"ok tiles={len(result.tiles)} events={result.event_count} "
            f"merged_hash={merged_state_hash(result.tiles)}"
        )

        if args.dump_merged:
            print(canonical_json(dump_merged_tiles(result.tiles)))

        if args.output is not None:
            write_render_json(args.output, result.render_map)
            print(f"wrote {args.output}")

        if args.preview is not None:
            render_preview_png(result.render_map, args.preview)
            print(f"wrote {args.preview}")

    except DocumentValidationError as exc:
        for issue in exc.issues:
            print(f"error: {issue}")
        print(f"error: {exc}")
        return 1
    except Exception as exc:
        print(f"error: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
