"""Command-line entry point: build the site in memory, then serve it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .builder import build_site
from .config import DEFAULT_EXCLUDES, DEFAULT_HOST, DEFAULT_PORT, SiteConfig
from .errors import MdserveError
from .server import serve
from .store import ArtifactStore

logger = logging.getLogger("mdserve.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a tree of Markdown documents to HTML and serve it over HTTP.",
    )
    parser.add_argument(
        "-r",
        "--root-dir",
        default=".",
        type=Path,
        help="The root directory for collecting .md documents from",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=None,
        metavar="PREFIX",
        help=(
            "Skip directories whose name starts with PREFIX (repeatable; "
            f"default: {', '.join(sorted(DEFAULT_EXCLUDES))})"
        ),
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="Interface to listen on (default: all interfaces)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to listen on (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--build-only",
        action="store_true",
        help="Build the site, report the result and exit without serving",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SiteConfig:
    exclude = frozenset(args.exclude) if args.exclude is not None else DEFAULT_EXCLUDES
    return SiteConfig(
        root_dir=Path(args.root_dir).resolve(),
        exclude=exclude,
        host=args.host,
        port=args.port,
    )


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args)
    config = config_from_args(args)

    store = ArtifactStore()
    try:
        report = build_site(config, store)
    except (MdserveError, OSError) as exc:
        logger.error("Build failed: %s", exc)
        return 1
    store.freeze()

    if args.verbose:
        for skipped in report.skipped:
            logger.debug("Skipped %s: %s", skipped.source_path, skipped.reason)
        for asset in report.assets:
            logger.debug(
                "Asset %s (%d bytes) referenced by %s",
                asset.store_path,
                asset.size,
                asset.document_path,
            )

    if args.build_only:
        return 0

    try:
        serve(store.serve_root(), config.host, config.port)
    except OSError as exc:
        logger.error("Could not start HTTP server on port %d: %s", config.port, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
