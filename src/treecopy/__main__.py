"""Entry point: python -m treecopy SOURCE... [--to DIR]"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from treecopy.copying.decisions import provider_for_policy
from treecopy.copying.errors import CopyError
from treecopy.copying.operations import clone_item, copy_items
from treecopy.infrastructure import config
from treecopy.infrastructure.config import parse_conflict_policy
from treecopy.infrastructure.logger import install_exception_hooks, logger
from treecopy.tree.fs import FsDirectory, FsFile
from treecopy.tree.types import Node


def _to_node(path: Path) -> Node:
    if path.is_dir():
        return FsDirectory(path)
    return FsFile(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treecopy", description="Copy files or directories into a directory")
    parser.add_argument("sources", nargs="+", type=Path, help="Files or directories to copy")
    parser.add_argument("--to", dest="target", type=Path, help="Target directory (default: common parent)")
    parser.add_argument("--new-name", help="New name for the copy (single source only)")
    parser.add_argument(
        "--on-conflict",
        type=parse_conflict_policy,
        default=None,
        help="ask, overwrite or skip when a different file already exists (default: TREECOPY_CONFLICT_POLICY)",
    )
    parser.add_argument("--clone", action="store_true", help="Duplicate the single source next to itself (no --to)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    decisions = provider_for_policy(args.on_conflict or config.CONFLICT_POLICY)
    items = [_to_node(source) for source in args.sources]

    try:
        if args.clone:
            if len(items) != 1 or not args.new_name or args.target is not None:
                print("Usage: python -m treecopy --clone SOURCE --new-name NAME", file=sys.stderr)
                return 2
            outcome = clone_item(items[0], args.new_name, decisions)
        else:
            target = None
            if args.target is not None:
                if not args.target.is_dir():
                    logger.error("Target is not a directory", target=str(args.target))
                    return 1
                target = FsDirectory(args.target)
            outcome = copy_items(items, target, args.new_name, decisions)
    except CopyError as err:
        logger.error(str(err), **err.details)
        return 1

    print(json.dumps(outcome.to_report().model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    install_exception_hooks()
    sys.exit(main())
