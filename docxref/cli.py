import argparse

from . import __version__
from .corpus import DEFAULT_DIR, DEFAULT_PATTERN
from .rewrite import crossreference


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docxref",
        description="Turn mentions of declared ids into <link> cross-references.",
    )
    parser.add_argument(
        "dpath",
        nargs="?",
        default=DEFAULT_DIR,
        help="Folder containing the documents, default {}".format(DEFAULT_DIR),
    )
    parser.add_argument(
        "--pattern",
        action="store",
        default=DEFAULT_PATTERN,
        help="Regexp matching the document filenames, default {}".format(
            DEFAULT_PATTERN
        ),
    )
    parser.add_argument(
        "--mode",
        choices=["legacy", "tree"],
        default="legacy",
        help="Substitute on raw text (legacy) or on parsed documents (tree)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the documents that would change without writing them",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    changed = crossreference(
        args.dpath, pattern=args.pattern, mode=args.mode, dry_run=args.dry_run
    )
    if args.dry_run:
        for path in changed:
            print("would change {}".format(path))
    print("{} documents changed".format(len(changed)))
