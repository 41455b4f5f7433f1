from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .analysis_run import default_jobs, run_fame
from .analysis_write import write_entries
from .config import DEFAULT_LANGUAGES_CONFIG, resolve_language_extensions
from .errors import GitFameError
from .models import FORMATS, ORDER_KEYS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-fame",
        description="Rank contributors by the lines, commits and files they own at a git revision.",
    )
    parser.add_argument("--repository", type=Path, default=Path("."), help="Path to the git repository.")
    parser.add_argument("--revision", type=str, default="HEAD", help="Commit, branch or tag to analyze.")
    parser.add_argument("--order-by", choices=list(ORDER_KEYS), default="lines", help="Primary sort key.")
    parser.add_argument("--use-committer", action="store_true", help="Attribute lines to committers instead of authors.")
    parser.add_argument("--format", choices=list(FORMATS), default="tabular", help="Output format.")
    parser.add_argument("--extensions", type=str, default="", help="File extensions to keep, e.g. '.go,.md'.")
    parser.add_argument("--languages", type=str, default="", help="Languages to keep, e.g. 'go,markdown'.")
    parser.add_argument("--exclude", type=str, default="", help="Glob patterns of files to skip, e.g. 'vendor/*,docs/*'. '*' also matches '/'.")
    parser.add_argument("--restrict-to", type=str, default="", help="Glob patterns of files to keep; everything else is ignored. '*' also matches '/', so '*.go' keeps nested files too.")
    parser.add_argument(
        "--languages-config-path",
        type=Path,
        default=DEFAULT_LANGUAGES_CONFIG,
        help="JSON table mapping language names to extensions.",
    )
    parser.add_argument("--jobs", type=int, default=default_jobs(), help="Parallel git blame jobs.")
    parser.add_argument("--timeout", type=float, default=None, help="Abort if the analysis takes longer than this many seconds.")
    parser.add_argument("--progress", action="store_true", help="Report progress on stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _split_csv_args(values: list[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    extensions = _split_csv_args([args.extensions])
    languages = _split_csv_args([args.languages])
    try:
        if languages:
            extensions.extend(resolve_language_extensions(languages, args.languages_config_path))
        result = run_fame(
            repo=args.repository,
            revision=args.revision,
            order_by=args.order_by,
            use_committer=bool(args.use_committer),
            extensions=extensions,
            exclude=_split_csv_args([args.exclude]),
            restrict_to=_split_csv_args([args.restrict_to]),
            jobs=int(args.jobs),
            deadline_s=args.timeout,
            progress=bool(args.progress),
        )
        write_entries(sys.stdout, result.entries, args.format)
    except GitFameError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
