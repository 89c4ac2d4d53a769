"""Command-line entry point for issue-mdx."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_CONTENT_SELECTOR, DEFAULT_PAGE_URL, ExportConfig
from .errors import IssueMdxError
from .exporter import export_page

logger = logging.getLogger("issue_mdx.cli")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} must be at least 1")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Download a web page's content region and its images, and save it as Markdown."
        ),
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=DEFAULT_PAGE_URL,
        help="Page to export (default: %(default)s)",
    )
    parser.add_argument(
        "--selector",
        default=DEFAULT_CONTENT_SELECTOR,
        help="CSS selector of the content region",
    )
    parser.add_argument(
        "--output",
        default=".",
        type=Path,
        help="Directory where Markdown and images should be written",
    )
    parser.add_argument(
        "--markdown-name",
        default="content.md",
        help="Filename of the generated Markdown document",
    )
    parser.add_argument(
        "--name-length",
        type=positive_int,
        default=10,
        help="Number of random hex characters in image filenames",
    )
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=4,
        help="Maximum number of concurrent image downloads (1 downloads sequentially)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Log failed image downloads instead of aborting the export",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Network timeout in seconds for each request",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = ExportConfig(
        page_url=args.url,
        content_selector=args.selector,
        output_root=Path(args.output).resolve(),
        markdown_filename=args.markdown_name,
        name_length=args.name_length,
        max_workers=args.workers,
        fail_fast=not args.keep_going,
        timeout=args.timeout,
    )

    try:
        result = export_page(config)
    except (IssueMdxError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1

    downloaded, referenced = result.image_counts
    logger.info(
        "Finished in %.2fs (%d/%d images downloaded)",
        result.total_seconds,
        downloaded,
        referenced,
    )
    logger.debug("Markdown: %s | images: %s", result.markdown_path, result.images_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
