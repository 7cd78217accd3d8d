"""HTML → PDF printing with headless Chromium (Playwright sync API).

BROWSER LIFECYCLE
------------------
A browser is launched for every export and closed before export() returns,
on success and on failure alike.  Nothing is kept between requests: a
Lambda execution environment may be frozen between invocations, and a
Chromium process frozen mid-flight does not always come back cleanly.

CLOUD RUNTIME FLAGS
--------------------
Lambda has no user namespaces (no sandbox), a tiny /dev/shm and no GPU,
so Chromium is started with the flags below.  CHROMIUM_EXECUTABLE_PATH
points at the binary shipped in the function's layer.  In offline mode
the path is ignored and Playwright's own Chromium build is used, and the
PDF is also written to LOCAL_PDF_PATH for inspection.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from certgen.core.errors import PdfExportError
from certgen.core.metrics import PDF_RENDER_DURATION

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--single-process",
    "--no-zygote",
)

DEFAULT_VIEWPORT = {"width": 800, "height": 600}


class PdfExporter(Protocol):
    def export(self, html: str) -> bytes: ...


class PlaywrightPdfExporter:
    def __init__(
        self,
        *,
        executable_path: str | None = None,
        local_copy_path: Path | None = None,
    ) -> None:
        self._executable_path = executable_path
        self._local_copy_path = local_copy_path

    def export(self, html: str) -> bytes:
        start = time.monotonic()
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(
                    headless=True,
                    args=list(CHROMIUM_ARGS),
                    executable_path=self._executable_path,
                )
                try:
                    page = browser.new_page(viewport=DEFAULT_VIEWPORT)
                    # Content is set directly; everything it needs is inlined.
                    page.set_content(html, wait_until="load")
                    pdf = page.pdf(
                        format="A4",
                        landscape=True,
                        print_background=True,
                        prefer_css_page_size=True,
                        path=self._local_copy_path,
                    )
                finally:
                    browser.close()
        except PlaywrightError as exc:
            logger.exception("Chromium failed to render certificate PDF")
            raise PdfExportError(str(exc)) from exc
        finally:
            PDF_RENDER_DURATION.observe(time.monotonic() - start)

        if self._local_copy_path is not None:
            logger.info("Wrote local PDF copy to %s", self._local_copy_path)
        return pdf
