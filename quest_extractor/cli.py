"""
Command-line entry point.
Run: quest-extractor [--approved scripts/approved-quests.json] [--output-dir public/data/quests]
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .batch import ApprovedListError, load_approved_quests, run_batch
from .config import ExtractorConfig, load_config
from .fetcher import LocalSourceFetcher, QuestSourceFetcher

logger = logging.getLogger("quest_extractor")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quest-extractor",
        description="Extract quest steps, rewards and requirements from Quest Helper Java sources.",
    )
    parser.add_argument("--approved", help="JSON file of quest name -> true/false")
    parser.add_argument("--output-dir", help="Directory for the per-quest JSON files")
    parser.add_argument("--index", help="Also write a quest index JSON to this path (keep it outside --output-dir)")
    parser.add_argument("--base-url", help="Raw URL of the Quest Helper quests directory")
    parser.add_argument("--source-dir", help="Read <folder>/<ClassName>.java files from this directory instead of HTTP")
    parser.add_argument("--workers", type=int, help="Quests processed concurrently")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--retries", type=int, help="Attempts per quest file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_args(config: ExtractorConfig, args: argparse.Namespace) -> ExtractorConfig:
    """Command-line flags override environment/default configuration."""
    if args.approved:
        config.approved_path = args.approved
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.index:
        config.index_path = args.index
    if args.base_url:
        config.base_url = args.base_url
    if args.source_dir:
        config.source_dir = args.source_dir
    if args.workers is not None:
        config.workers = max(1, args.workers)
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.retries is not None:
        config.retries = max(1, args.retries)
    return config


def make_fetcher(config: ExtractorConfig):
    if config.source_dir:
        return LocalSourceFetcher(config.source_dir)
    return QuestSourceFetcher(
        base_url=config.base_url,
        user_agent=config.user_agent,
        timeout=config.timeout,
        retries=config.retries,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = apply_args(load_config(), args)

    try:
        names = load_approved_quests(config.approved_path)
    except ApprovedListError as e:
        logger.error("Failed to read approved quest list: %s", e)
        return 1

    if not names:
        logger.info("No approved quests with value true.")
        return 0

    fetcher = make_fetcher(config)
    try:
        run_batch(
            names,
            fetcher,
            config.output_dir,
            workers=config.workers,
            index_path=config.index_path or None,
        )
    finally:
        fetcher.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
