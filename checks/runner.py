# checks/runner.py
"""
Run the rule groups against one page snapshot and aggregate the results.

- Groups run sequentially in a fixed order; findings are concatenated, never deduplicated.
- A group that raises is logged and contributes nothing; the remaining groups still run.
"""

import logging
from typing import Callable, Iterable, Iterator, List, Tuple

from checks.adaptable import check_adaptable
from checks.dom import PageSnapshot
from checks.keyboard import check_keyboard_accessibility
from checks.text_alternatives import check_text_alternatives
from checks.time_based_media import check_time_based_media
from config import IMPACT_CRITICAL
from models import Finding, FindingSummary

logger = logging.getLogger("wcag_checker")

RuleGroup = Callable[[PageSnapshot], Iterator[Finding]]

RULE_GROUPS: Tuple[Tuple[str, RuleGroup], ...] = (
    ("text-alternatives", check_text_alternatives),
    ("time-based-media", check_time_based_media),
    ("adaptable", check_adaptable),
    ("keyboard-accessibility", check_keyboard_accessibility),
)


def run_rule_group(name: str, group: RuleGroup, page: PageSnapshot) -> List[Finding]:
    """
    Evaluate one group to completion. Partial output of a failing group is dropped.
    """
    try:
        findings = list(group(page))
    except Exception:
        logger.warning("Rule group %s failed; no findings recorded for it", name, exc_info=True)
        return []
    logger.debug("Rule group %s produced %d findings", name, len(findings))
    return findings


def run_checks(page: PageSnapshot, groups: Iterable[Tuple[str, RuleGroup]] = RULE_GROUPS) -> List[Finding]:
    findings: List[Finding] = []
    for name, group in groups:
        findings.extend(run_rule_group(name, group, page))
    return findings


def summarize_findings(findings: Iterable[Finding]) -> FindingSummary:
    """
    Group findings by WCAG criterion (first-appearance order) and count totals.
    """
    summary = FindingSummary()
    for f in findings:
        summary.by_criterion.setdefault(f.wcag_criterion, []).append(f)
        summary.total += 1
        if f.impact == IMPACT_CRITICAL:
            summary.critical += 1
    return summary
