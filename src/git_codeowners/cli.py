from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, NoReturn, TextIO

from . import __version__
from .config import load_log_config, load_path_config, settings_from_args
from .errors import GitCodeownersError
from .history import annotate_log
from .models import Settings
from .owners import format_owners
from .ownership import Ruleset

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_NO_OWNERS = 2


class _Parser(argparse.ArgumentParser):
    # Exit 2 means "no owners"; a bad command line is a setup failure.
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_CONFIG, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="git-codeowners", description="GitHub CODEOWNERS answer sheet.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c",
        "--codeowners",
        type=Path,
        default=None,
        help="Explicit path to a CODEOWNERS file, relative to --repo. Exits 1 if the file does not exist.",
    )
    parser.add_argument("-C", "--repo", type=Path, default=Path("."), help="Run as if started in this directory.")
    g = parser.add_mutually_exclusive_group()
    g.add_argument("-t", "--teams", action="store_true", help="Only show team owners.")
    g.add_argument("-u", "--users", action="store_true", help="Only show user owners.")
    g.add_argument("-e", "--emails", action="store_true", help="Only show email owners.")

    sub = parser.add_subparsers(dest="command", required=True)
    p = sub.add_parser("path", help="Print the owners of a path.")
    p.add_argument(
        "path",
        help="Path of a file in the repo. With '-', paths are read from stdin one per line. Exits 2 if no owners resolve.",
    )
    lg = sub.add_parser("log", help="Annotate git history with owners and summarize per owner.")
    lg.add_argument("revspecs", nargs="+", metavar="revspec", help="Revision range, e.g. main..HEAD.")
    return parser


def resolve_paths(paths: Iterable[str], ruleset: Ruleset, settings: Settings, out: TextIO) -> int:
    """
    Print owners for each path in turn. Stops at the first path without
    (displayed) owners and returns EXIT_NO_OWNERS; later paths are not consumed.
    """
    for raw in paths:
        path = raw.rstrip("\r\n")
        if not path.strip():
            continue
        owned = format_owners(ruleset.resolve(path), settings)
        if not owned:
            return EXIT_NO_OWNERS
        out.write(" ".join(owned) + "\n")
        out.flush()
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)
    settings = settings_from_args(args)
    explicit = args.codeowners
    if explicit is not None and not explicit.is_absolute():
        explicit = args.repo / explicit
    try:
        if args.command == "path":
            ruleset = load_path_config(explicit=explicit, cwd=args.repo)
            paths = sys.stdin if args.path == "-" else [args.path]
            return resolve_paths(paths, ruleset, settings, sys.stdout)
        repo, ruleset = load_log_config(explicit=explicit, cwd=args.repo)
        annotate_log(repo, args.revspecs, ruleset, settings, sys.stdout)
        return EXIT_OK
    except GitCodeownersError as e:
        sys.stdout.flush()
        print(f"git-codeowners: {e}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    raise SystemExit(main())
