# utils.py
"""
Utility helpers: report generation and console output.

- Uses Rich for colorful, wrapped tables and per-finding output in the terminal.
- Saves a JSON report and a PDF report (HTML printed to PDF by the browser session).
"""

from dataclasses import asdict
from datetime import datetime, timezone
from html import escape
from typing import Dict, List, Optional
import json
import os

from rich.console import Console
from rich.table import Table
from rich.text import Text

from config import IMPACT_COLORS
from models import Finding, FindingSummary

CONSOLE = Console()


def ensure_reports_dir(path: str = ".") -> str:
    os.makedirs(path, exist_ok=True)
    return path


def report_timestamp(now: Optional[datetime] = None) -> str:
    """
    ISO 8601 UTC timestamp with millisecond precision, ':' and '.' replaced by '-'
    so it can be used in a file name, e.g. "2024-05-01T12-30-00-123Z".
    """
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def findings_to_json(url: str, findings: List[Finding]) -> str:
    return json.dumps({"url": url, "violations": [asdict(f) for f in findings]}, indent=2)


def save_json_report(url: str, findings: List[Finding], timestamp: str, out_dir: str = ".") -> str:
    out_dir = ensure_reports_dir(out_dir)
    json_path = os.path.join(out_dir, f"report-{timestamp}.json")
    with open(json_path, "w", encoding="utf-8") as fh:
        fh.write(findings_to_json(url, findings))
    return json_path


def build_html_report(url: str, findings: List[Finding]) -> str:
    """
    Render the printable report: title, URL, total count, then one numbered block per finding.
    """
    html_rows: List[str] = []
    html_rows.append("<!doctype html>")
    html_rows.append("<html><head><meta charset='utf-8'><title>Accessibility Audit Report</title>")
    html_rows.append("<style>body{font-family:Helvetica,Arial,sans-serif;margin:20px;color:#000}"
                     "h1{color:#4B9CD3;text-align:center;font-size:22pt;margin-bottom:2em}"
                     "h2{color:#333;text-decoration:underline;font-size:16pt}"
                     ".meta{font-size:14pt;margin:0.5em 0}"
                     ".issue{page-break-inside:avoid;margin-bottom:1em}"
                     ".issue h3{font-size:12pt;font-weight:normal;color:#333;margin:0 0 0.5em}"
                     ".issue ul{list-style:disc;margin:0;padding-left:20px;font-size:10pt}"
                     ".issue li{margin-bottom:0.4em}.impact{color:#FF5733}</style>")
    html_rows.append("</head><body>")
    html_rows.append("<h1>Accessibility Audit Report</h1>")
    html_rows.append(f"<p class='meta' id='url'>URL: {escape(url)}</p>")
    html_rows.append(f"<p class='meta' id='total'>Total Violations: {len(findings)}</p>")
    html_rows.append("<h2>Issues Found:</h2>")
    for index, f in enumerate(findings, start=1):
        html_rows.append("<div class='issue'>")
        html_rows.append(f"<h3>{index}. {escape(f.category)}</h3><ul>")
        html_rows.append(f"<li>Element: {escape(f.element_tag)}</li>")
        html_rows.append(f"<li>Description: {escape(f.description)}</li>")
        html_rows.append(f"<li>WCAG Criteria: {escape(f.wcag_criterion)}</li>")
        html_rows.append(f"<li class='impact'>Impact: {escape(f.impact)}</li>")
        html_rows.append(f"<li>Selector: {escape(f.path)}</li>")
        html_rows.append(f"<li>Suggestion: {escape(f.suggestion)}</li>")
        html_rows.append("</ul></div>")
    html_rows.append("</body></html>")
    return "\n".join(html_rows)


def save_pdf_report(url: str, findings: List[Finding], session, timestamp: str, out_dir: str = ".") -> str:
    """
    Print the HTML report to PDF using an open BrowserSession.
    """
    out_dir = ensure_reports_dir(out_dir)
    pdf_path = os.path.join(out_dir, f"report-{timestamp}.pdf")
    return session.print_pdf(build_html_report(url, findings), pdf_path)


def save_report(url: str, findings: List[Finding], session, out_dir: str = ".",
                timestamp: Optional[str] = None) -> Dict[str, str]:
    """
    Save JSON and PDF reports sharing one timestamp and return their paths.
    """
    timestamp = timestamp or report_timestamp()
    json_path = save_json_report(url, findings, timestamp, out_dir)
    pdf_path = save_pdf_report(url, findings, session, timestamp, out_dir)
    return {"json": json_path, "pdf": pdf_path}

# --- Console printing with color/wrapping -----------------------------------

def _impact_text(impact: str) -> Text:
    return Text(impact, style=f"bold {IMPACT_COLORS.get(impact, 'white')}")


def print_finding(f: Finding, console: Optional[Console] = None) -> None:
    """
    Echo every field of one finding, colored by impact.
    """
    console = console or CONSOLE
    color = IMPACT_COLORS.get(f.impact, "white")
    console.print(Text(f"{f.category}: {f.description}", style=f"bold {color}"))
    console.print(f"WCAG Criteria: {f.wcag_criterion}", markup=False)
    console.print(f"Element: {f.element_tag}", markup=False)
    console.print(f"Path: {f.path}", markup=False)
    console.print(Text("Impact: ").append(_impact_text(f.impact)))
    console.print(f"Suggestion: {f.suggestion}\n", markup=False)


def print_summary_and_report_path(findings: List[Finding], summary: FindingSummary,
                                  report_paths: Dict[str, str], verbose: bool = False,
                                  console: Optional[Console] = None) -> None:
    """
    Print the per-criterion summary, the critical count and the saved report paths.
    In verbose mode every finding is echoed first.
    """
    console = console or CONSOLE
    if verbose:
        for f in findings:
            print_finding(f, console)

    console.print("\nWCAG Compliance Summary:", style="bold")
    console.print("=======================")
    console.print(f"Total issues found: {summary.total}")
    if summary.total:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("WCAG Criterion", style="cyan", overflow="fold")
        table.add_column("Issues", justify="right")
        for criterion, count in summary.counts().items():
            table.add_row(Text(criterion), f"{count} {'issue' if count == 1 else 'issues'}")
        console.print(table)
    console.print(Text(f"Critical issues: {summary.critical}", style="bold red" if summary.critical else "green"))

    console.print("\nSaved reports:")
    console.print(f"- JSON: {report_paths.get('json')}", markup=False)
    console.print(f"- PDF:  {report_paths.get('pdf')}\n", markup=False)
