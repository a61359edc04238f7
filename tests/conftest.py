# tests/conftest.py
"""
Shared fixtures: page snapshots built from inline HTML, and a fake browser session
standing in for Playwright so no browser is needed.
"""

import pytest

from checks.dom import PageSnapshot


def page_from(body: str, head: str = "", url: str = "https://example.com/", layout_records=None) -> PageSnapshot:
    html = f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"
    return PageSnapshot.from_html(html, url=url, layout_records=layout_records)


def count_by_category(findings):
    counts = {}
    for f in findings:
        counts[f.category] = counts.get(f.category, 0) + 1
    return counts


class FakeSession:
    """
    Mimics BrowserSession: serves a fixed HTML page and writes a stub PDF holding the report HTML.
    """

    instances = []

    def __init__(self, timeout=30, html="", fail_navigation=False):
        self.timeout = timeout
        self.html = html
        self.fail_navigation = fail_navigation
        self.closed = False
        self.printed_html = None
        FakeSession.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def load_snapshot(self, url):
        if self.fail_navigation:
            from browser import NavigationError
            raise NavigationError(f"Could not load {url}: net::ERR_NAME_NOT_RESOLVED")
        return PageSnapshot.from_html(self.html, url=url)

    def print_pdf(self, html, path):
        self.printed_html = html
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(html)
        return path


@pytest.fixture
def fake_session_factory():
    FakeSession.instances = []

    def build(html="", fail_navigation=False):
        def factory(timeout=30):
            return FakeSession(timeout=timeout, html=html, fail_navigation=fail_navigation)
        return factory

    return build
