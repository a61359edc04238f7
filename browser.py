# browser.py
"""
Headless Chromium access via Playwright.

- BrowserSession launches one browser per run and must be closed on every exit path
  (use it as a context manager).
- load_snapshot navigates once and captures the rendered DOM plus per-element layout facts.
- print_pdf renders an HTML string to a PDF file with the same browser.
"""

import logging
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from checks.dom import PageSnapshot
from config import BROWSER_ARGS, DEFAULT_PAGE_TIMEOUT, PDF_FORMAT, PDF_MARGIN

logger = logging.getLogger("wcag_checker")

# One record per element, in document order: [tag, offsetWidth, offsetHeight, tabIndex, hasClickHandler]
LAYOUT_SCRIPT = """
() => Array.from(document.querySelectorAll('*')).map((el) => [
    el.tagName.toLowerCase(),
    typeof el.offsetWidth === 'number' ? el.offsetWidth : null,
    typeof el.offsetHeight === 'number' ? el.offsetHeight : null,
    typeof el.tabIndex === 'number' ? el.tabIndex : -1,
    el.onclick !== null && el.onclick !== undefined,
])
"""


class AuditError(Exception):
    """Base error for a run that cannot produce a report."""


class NavigationError(AuditError):
    """The browser could not be launched or the page could not be loaded."""


def _close_page(page) -> None:
    # Close errors are logged, never raised
    try:
        page.close()
    except PlaywrightError as e:
        logger.warning("Could not close page: %s", e)


class BrowserSession:
    """
    One Playwright-driven Chromium instance.

    Usage:
        with BrowserSession(timeout=30) as session:
            snapshot = session.load_snapshot(url)
    """

    def __init__(self, timeout: float = DEFAULT_PAGE_TIMEOUT):
        self.timeout_ms = int(timeout * 1000)
        self._playwright = None
        self._browser = None

    def __enter__(self) -> "BrowserSession":
        self.launch()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def launch(self) -> None:
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=True, args=BROWSER_ARGS, timeout=self.timeout_ms
            )
        except PlaywrightError as e:
            self.close()
            raise NavigationError(f"Could not launch browser: {e}") from e

    def close(self) -> None:
        # Safe to call more than once
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        try:
            if browser is not None:
                browser.close()
        finally:
            if playwright is not None:
                playwright.stop()

    def _new_page(self):
        if self._browser is None:
            raise AuditError("Browser session is not open")
        page = self._browser.new_page()
        page.set_default_timeout(self.timeout_ms)
        return page

    def load_snapshot(self, url: str) -> PageSnapshot:
        """
        Navigate to url and capture the rendered DOM with its layout facts.
        """
        page = self._new_page()
        try:
            logger.info("Loading %s", url)
            page.goto(url, timeout=self.timeout_ms)
            html = page.content()
            layout_records = page.evaluate(LAYOUT_SCRIPT)
            final_url: Optional[str] = page.url
        except PlaywrightError as e:
            raise NavigationError(f"Could not load {url}: {e}") from e
        finally:
            _close_page(page)
        return PageSnapshot.from_html(html, url=final_url or url, layout_records=layout_records)

    def print_pdf(self, html: str, path: str) -> str:
        page = self._new_page()
        try:
            page.set_content(html)
            page.pdf(path=path, format=PDF_FORMAT, print_background=True, margin=PDF_MARGIN)
        finally:
            _close_page(page)
        return path
