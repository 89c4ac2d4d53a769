"""High-level orchestration for exporting a page region to Markdown."""

from __future__ import annotations

import logging
import time
from typing import Optional

import requests

from .catalog import TokenFactory, build_image_catalog
from .config import ExportConfig
from .content import fetch_page, select_content
from .images import download_images
from .markdown import render_markdown
from .models import ExportResult

logger = logging.getLogger("issue_mdx")


def export_page(
    config: ExportConfig,
    session: Optional[requests.Session] = None,
    token_factory: Optional[TokenFactory] = None,
) -> ExportResult:
    """Fetch the configured page, download its images and write the Markdown.

    The Markdown file is only written once every earlier step has succeeded.
    """
    start = time.perf_counter()
    images_dir = config.images_dir
    images_dir.mkdir(parents=True, exist_ok=True)

    html = fetch_page(config.page_url, session=session, timeout=config.timeout)
    region = select_content(html, config.content_selector)

    catalog = build_image_catalog(
        region,
        name_length=config.name_length,
        token_factory=token_factory,
    )
    logger.info("Found %d images in the content", len(catalog))

    report = download_images(
        catalog,
        images_dir,
        session=session,
        max_workers=config.max_workers,
        fail_fast=config.fail_fast,
        timeout=config.timeout,
    )
    if report.failures:
        logger.warning(
            "%d of %d images could not be downloaded",
            len(report.failures),
            len(catalog),
        )

    markdown = render_markdown(region, catalog, image_prefix=f"./{config.images_dirname}")

    output_path = config.markdown_path
    output_path.write_text(markdown, encoding="utf-8")
    logger.info("Saved Markdown to %s", output_path)

    return ExportResult(
        source_url=config.page_url,
        markdown_path=output_path,
        images_dir=images_dir,
        catalog=catalog,
        assets=report.assets,
        failures=report.failures,
        total_seconds=time.perf_counter() - start,
    )
