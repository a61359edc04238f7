# tests/test_browser.py
"""
Tests for BrowserSession with Playwright stubbed out.

- browser.sync_playwright is monkeypatched, so no Chromium is launched.
- Every page, the browser and Playwright itself must be closed exactly once,
  whether navigation succeeds or fails.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError

import browser
from browser import BrowserSession, NavigationError

HTML = "<html><head></head><body><span>x</span></body></html>"
RECORDS = [
    ["html", 800, 600, -1, False],
    ["head", 0, 0, -1, False],
    ["body", 800, 600, -1, False],
    ["span", 0, 0, -1, False],
]


class StubPage:
    def __init__(self, goto_error=None, close_error=None):
        self.goto_error = goto_error
        self.close_error = close_error
        self.url = "https://example.com/landing"
        self.timeout = None
        self.close_calls = 0
        self.pdf_kwargs = None
        self.content_set = None

    def set_default_timeout(self, timeout):
        self.timeout = timeout

    def goto(self, url, timeout=None):
        if self.goto_error is not None:
            raise self.goto_error

    def content(self):
        return HTML

    def evaluate(self, script):
        return RECORDS

    def set_content(self, html):
        self.content_set = html

    def pdf(self, **kwargs):
        self.pdf_kwargs = kwargs

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class StubBrowser:
    def __init__(self, page):
        self.page = page
        self.close_calls = 0

    def new_page(self):
        return self.page

    def close(self):
        self.close_calls += 1


class StubChromium:
    def __init__(self, stub_browser, launch_error=None):
        self.stub_browser = stub_browser
        self.launch_error = launch_error
        self.launch_kwargs = None

    def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.stub_browser


class StubPlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stop_calls = 0

    def start(self):
        return self

    def stop(self):
        self.stop_calls += 1


def install_stub(monkeypatch, page=None, launch_error=None):
    page = page or StubPage()
    stub_browser = StubBrowser(page)
    playwright = StubPlaywright(StubChromium(stub_browser, launch_error=launch_error))
    monkeypatch.setattr(browser, "sync_playwright", lambda: playwright)
    return playwright, stub_browser, page


def test_load_snapshot_attaches_evaluated_layout(monkeypatch):
    playwright, stub_browser, page = install_stub(monkeypatch)

    with BrowserSession(timeout=5) as session:
        snapshot = session.load_snapshot("https://example.com/")

    assert snapshot.url == "https://example.com/landing"
    assert snapshot.layout_for(snapshot.select_one("span")).width == 0
    assert page.timeout == 5000
    assert playwright.chromium.launch_kwargs["headless"] is True
    assert page.close_calls == 1
    assert stub_browser.close_calls == 1
    assert playwright.stop_calls == 1


def test_navigation_error_closes_everything_once(monkeypatch):
    error = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
    playwright, stub_browser, page = install_stub(monkeypatch, page=StubPage(goto_error=error))

    with pytest.raises(NavigationError) as exc:
        with BrowserSession() as session:
            session.load_snapshot("https://no-such-host.invalid/")

    assert "ERR_NAME_NOT_RESOLVED" in str(exc.value)
    assert exc.value.__cause__ is error
    assert page.close_calls == 1
    assert stub_browser.close_calls == 1
    assert playwright.stop_calls == 1


def test_page_close_failure_keeps_navigation_error(monkeypatch):
    page = StubPage(goto_error=PlaywrightError("Timeout 30000ms exceeded"),
                    close_error=PlaywrightError("Target page has been closed"))
    playwright, stub_browser, _ = install_stub(monkeypatch, page=page)

    with pytest.raises(NavigationError) as exc:
        with BrowserSession() as session:
            session.load_snapshot("https://example.com/")

    assert "Timeout 30000ms exceeded" in str(exc.value)
    assert page.close_calls == 1
    assert stub_browser.close_calls == 1
    assert playwright.stop_calls == 1


def test_launch_failure_is_a_navigation_error(monkeypatch):
    playwright, stub_browser, _ = install_stub(
        monkeypatch, launch_error=PlaywrightError("Executable doesn't exist")
    )

    with pytest.raises(NavigationError):
        BrowserSession().launch()

    assert playwright.stop_calls == 1
    assert stub_browser.close_calls == 0


def test_print_pdf_uses_report_page_settings(monkeypatch, tmp_path):
    playwright, stub_browser, page = install_stub(monkeypatch)
    target = str(tmp_path / "report.pdf")

    with BrowserSession() as session:
        assert session.print_pdf("<h1>Report</h1>", target) == target

    assert page.content_set == "<h1>Report</h1>"
    assert page.pdf_kwargs["path"] == target
    assert page.pdf_kwargs["format"] == "A4"
    assert page.pdf_kwargs["print_background"] is True
    assert page.close_calls == 1
    assert playwright.stop_calls == 1


def test_close_is_idempotent(monkeypatch):
    playwright, stub_browser, _ = install_stub(monkeypatch)
    session = BrowserSession()
    session.launch()
    session.close()
    session.close()
    assert stub_browser.close_calls == 1
    assert playwright.stop_calls == 1
