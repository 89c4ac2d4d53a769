"""Image downloading utilities."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Dict, Optional

import requests
from filetype import guess

from .errors import ImageDownloadError
from .models import DownloadReport, ImageAsset, ImageCatalog

logger = logging.getLogger("issue_mdx")

CHUNK_SIZE = 8192
SNIFF_BYTES = 262


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def download_image(
    session: requests.Session,
    source_url: str,
    destination: Path,
    timeout: Optional[float] = 30.0,
    chunk_size: int = CHUNK_SIZE,
) -> ImageAsset:
    """Stream one image to ``destination`` and sync it to disk."""
    try:
        with session.get(source_url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            written = 0
            head = b""
            with open(destination, "wb") as handle:
                for chunk in resp.iter_content(chunk_size):
                    if not chunk:
                        continue
                    if len(head) < SNIFF_BYTES:
                        head += chunk[: SNIFF_BYTES - len(head)]
                    handle.write(chunk)
                    written += len(chunk)
                handle.flush()
                os.fsync(handle.fileno())
    except (requests.RequestException, OSError) as exc:
        destination.unlink(missing_ok=True)
        raise ImageDownloadError(source_url, destination.name, exc) from exc

    detected = detect_image_format(head)
    if detected is None:
        logger.warning(
            "Downloaded %s from %s but it does not look like an image",
            destination.name,
            source_url,
        )
    logger.info("Downloaded: %s", destination.name)
    return ImageAsset(
        source_url=source_url,
        filename=destination.name,
        path=destination,
        bytes_written=written,
        detected_format=detected,
    )


def _session_getter(
    session: Optional[requests.Session],
) -> Callable[[], requests.Session]:
    """Return the caller's session, or one session per worker thread."""
    if session is not None:
        return lambda: session
    local = threading.local()

    def get() -> requests.Session:
        if getattr(local, "session", None) is None:
            local.session = requests.Session()
        return local.session

    return get


def download_images(
    catalog: ImageCatalog,
    images_dir: Path,
    session: Optional[requests.Session] = None,
    max_workers: int = 4,
    fail_fast: bool = True,
    timeout: Optional[float] = 30.0,
    chunk_size: int = CHUNK_SIZE,
) -> DownloadReport:
    """Download every catalogued image into ``images_dir``.

    With ``fail_fast`` the first failure cancels the downloads that have not
    started yet and is re-raised. Otherwise failures are logged and listed in
    the report. Assets are returned in catalog order.

    Without ``session`` each worker thread opens its own ``requests.Session``.
    A session passed in is shared by all workers and must tolerate that.
    """
    images_dir.mkdir(parents=True, exist_ok=True)
    report = DownloadReport()
    if not catalog:
        return report

    get_session = _session_getter(session)

    def fetch(source_url: str, destination: Path) -> ImageAsset:
        return download_image(get_session(), source_url, destination, timeout, chunk_size)

    workers = max(1, min(max_workers, len(catalog)))
    futures: Dict[str, Future] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        for source_url, filename in catalog.items():
            futures[source_url] = executor.submit(fetch, source_url, images_dir / filename)
        if fail_fast:
            _, pending = wait(futures.values(), return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()

    for source_url, future in futures.items():
        if future.cancelled():
            continue
        exc = future.exception()
        if exc is None:
            report.assets.append(future.result())
            continue
        if fail_fast or not isinstance(exc, ImageDownloadError):
            raise exc
        logger.warning("%s", exc)
        report.failures[source_url] = str(exc)
    return report
