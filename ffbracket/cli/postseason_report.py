from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

from ffbracket.config import load_league_config
from ffbracket.constants import SCHEMA_VERSION
from ffbracket.report.collect import build_postseason_context
from ffbracket.report.formatters import format_json, format_markdown
from ffbracket.report.models import PostseasonContext

logger = logging.getLogger(__name__)

OUT_DIR = os.environ.get("FFBRACKET_OUT_DIR", "reports/postseason")

# format name -> (canonical key, file suffix)
_FORMAT_ALIASES = {"md": ("markdown", "md"), "markdown": ("markdown", "md"), "json": ("json", "json")}


def _renderer(kind: str, json_pretty: bool) -> Callable[[PostseasonContext], str]:
    if kind == "json":
        return lambda ctx: format_json(ctx, SCHEMA_VERSION, pretty=json_pretty)
    return format_markdown


def generate_postseason_report(
    *,
    input_path: str | Path,
    season: int,
    out_dir: str = OUT_DIR,
    output_formats: Sequence[str] | None = None,
    include_playoffs: bool = False,
    json_pretty: bool = True,
    dry_run: bool = False,
) -> dict:
    """Resolve one season and write its report files.

    Returns a summary of what was (or, with ``dry_run``, would be) written.
    """
    requested = []
    for name in output_formats or ["markdown"]:
        try:
            requested.append(_FORMAT_ALIASES[name.lower()])
        except KeyError:
            raise ValueError(f"Unsupported format: {name}") from None

    cfg = load_league_config(input_path)
    ctx = build_postseason_context(cfg, season, include_playoffs=include_playoffs)
    season_dir = Path(out_dir) / str(ctx.season)

    written: dict[str, dict[str, Any]] = {}
    for kind, suffix in requested:
        text = _renderer(kind, json_pretty)(ctx)
        target = season_dir / f"season-{ctx.season}.{suffix}"
        if not dry_run:
            season_dir.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        logger.info(f"{kind}: {len(text)} bytes -> {target}{' (dry run)' if dry_run else ''}")
        written[kind] = {"path": str(target), "bytes": len(text), "written": not dry_run}

    res = ctx.result
    return {
        "formats": written,
        "meta": {
            "schema_version": SCHEMA_VERSION,
            "league_id": ctx.league_id,
            "season": ctx.season,
        },
        "written": not dry_run,
        "entries": {
            "standings": len(ctx.standings),
            "seedings": len(res.seedings),
            "upper_rounds": len(res.upper_bracket),
            "placement_rounds": len(res.placement_games),
            "lower_rounds": len(res.lower_bracket),
        },
        "champion": res.summary.champion.name if res.summary.champion else None,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve standings and the postseason bracket from a league document"
    )
    parser.add_argument("input", help="League document (YAML or JSON)")
    parser.add_argument("--season", type=int, required=True, help="Season to resolve (e.g., 2024)")
    parser.add_argument("--out-dir", default=OUT_DIR, help="Output directory")
    parser.add_argument(
        "--formats",
        default="markdown",
        help="Comma-separated list of output formats (markdown,json)",
    )
    parser.add_argument(
        "--include-playoffs",
        action="store_true",
        help="Fold postseason weeks into the standings table (seeding never uses them)",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose logging to stderr")
    parser.add_argument(
        "--dry-run", action="store_true", help="Build report but do not write files"
    )
    parser.set_defaults(json_pretty=True)
    parser.add_argument(
        "--json-pretty",
        dest="json_pretty",
        action="store_true",
        help="(Default) Pretty-print JSON output when using --formats json",
    )
    parser.add_argument(
        "--json-compact",
        dest="json_pretty",
        action="store_false",
        help="Use compact JSON (no whitespace)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
    )
    formats = [f.strip() for f in args.formats.split(",") if f.strip()]

    try:
        summary = generate_postseason_report(
            input_path=args.input,
            season=args.season,
            out_dir=args.out_dir,
            output_formats=formats,
            include_playoffs=args.include_playoffs,
            json_pretty=args.json_pretty,
            dry_run=args.dry_run,
        )
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(summary, indent=2, sort_keys=True))
    for kind, info in summary["formats"].items():
        verb = "Wrote" if info["written"] else "Would write"
        print(f"{verb} [{kind}]: {info['path']}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
