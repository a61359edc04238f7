# main.py
"""
CLI entrypoint for the checker.

- Loads one URL in headless Chromium, runs every rule group against the rendered page,
  and writes JSON and PDF reports.
- Prints a colorful summary; --verbose also echoes every finding.
- Exits non-zero on any error; no reports are written when the page cannot be loaded.
"""

import argparse
import logging
import os
from typing import Dict, Optional

from browser import BrowserSession
from checks import run_checks, summarize_findings
from config import DEFAULT_PAGE_TIMEOUT, DEFAULT_REPORT_DIR, ENV_REPORT_DIR, ENV_TIMEOUT
from utils import CONSOLE, print_summary_and_report_path, save_report

__version__ = "1.0.0"

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("wcag_checker")


def audit_url(url: str, verbose: bool = False, report_dir: str = DEFAULT_REPORT_DIR,
              timeout: float = DEFAULT_PAGE_TIMEOUT, session_factory=BrowserSession) -> Dict[str, str]:
    """
    Run one audit and return the saved report paths.

    The browser session stays open for the whole run (the PDF is printed with it)
    and is closed on every exit path.
    """
    CONSOLE.print(f"Checking {url} for WCAG compliance...", style="blue", markup=False)
    with session_factory(timeout=timeout) as session:
        snapshot = session.load_snapshot(url)
        findings = run_checks(snapshot)
        summary = summarize_findings(findings)
        logger.info("Found %d issues (%d critical)", summary.total, summary.critical)
        report_paths = save_report(url, findings, session, out_dir=report_dir)
    print_summary_and_report_path(findings, summary, report_paths, verbose=verbose)
    return report_paths


def resolve_timeout(cli_value: Optional[float]) -> float:
    # CLI -> env -> config default
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(ENV_TIMEOUT)
    if env_value:
        return float(env_value)
    return DEFAULT_PAGE_TIMEOUT


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="wcag-checker",
        description="CLI utility to check websites for WCAG compliance.",
    )
    p.add_argument("url", help="Website URL to check")
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed output for each issue",
    )
    p.add_argument(
        "--report-dir",
        help=f"Directory to save reports (default: ${ENV_REPORT_DIR} or current directory)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        help=f"Page-load timeout in seconds (default: ${ENV_TIMEOUT} or {DEFAULT_PAGE_TIMEOUT})",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv=None, session_factory=BrowserSession) -> int:
    args = parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    report_dir = args.report_dir or os.environ.get(ENV_REPORT_DIR) or DEFAULT_REPORT_DIR
    try:
        audit_url(
            args.url,
            verbose=args.verbose,
            report_dir=report_dir,
            timeout=resolve_timeout(args.timeout),
            session_factory=session_factory,
        )
    except Exception as e:
        logger.debug("Audit failed", exc_info=True)
        CONSOLE.print(f"Error: {e}", style="bold red", markup=False)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
