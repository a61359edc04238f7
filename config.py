"""
Central configuration and tunable constants.

- Page-load timeout and report directory can be overridden by CLI args or environment variables.
- Impact labels and their console colors are centralized for easy tuning.
"""

# Impact scale, most to least severe
IMPACT_CRITICAL = "critical"
IMPACT_SERIOUS = "serious"
IMPACT_MODERATE = "moderate"
IMPACT_MINOR = "minor"
IMPACTS = (IMPACT_CRITICAL, IMPACT_SERIOUS, IMPACT_MODERATE, IMPACT_MINOR)

IMPACT_COLORS = {
    IMPACT_CRITICAL: "red",
    IMPACT_SERIOUS: "yellow",
    IMPACT_MODERATE: "blue",
    IMPACT_MINOR: "grey50",
}

# Browser model:
# - One headless Chromium per run, one page, navigated once
# - The same page-load timeout bounds the launch and the navigation
DEFAULT_PAGE_TIMEOUT = 30  # seconds
BROWSER_ARGS = [
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-setuid-sandbox",
    "--no-sandbox",
    "--no-zygote",
]

# Reports land in the working directory unless told otherwise
DEFAULT_REPORT_DIR = "."
PDF_FORMAT = "A4"
PDF_MARGIN = {"top": "10mm", "right": "10mm", "bottom": "12mm", "left": "10mm"}

# Environment overrides
ENV_TIMEOUT = "WCAG_CHECKER_TIMEOUT"
ENV_REPORT_DIR = "WCAG_CHECKER_REPORT_DIR"
