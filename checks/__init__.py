"""
Accessibility rule groups evaluated against a loaded page snapshot.
"""

from checks.dom import PageSnapshot, element_path
from checks.runner import RULE_GROUPS, run_checks, summarize_findings

__all__ = ["PageSnapshot", "element_path", "RULE_GROUPS", "run_checks", "summarize_findings"]
