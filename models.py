# models.py
"""
Data models used by the checker.

- Finding is a small, frozen, serializable dataclass; one per reported defect.
- FindingSummary is the aggregate view the console and reports print.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List

from config import IMPACTS, IMPACT_CRITICAL


@dataclass(frozen=True)
class Finding:
    """
    Represents a single accessibility defect.

    Fields:
    - category: short tag for the check that fired (e.g. "Image", "CAPTCHA", "keyboard-trap")
    - element_tag: lowercase tag name of the offending element
    - path: ancestor chain of the element (e.g. "html > body > div#main > img")
    - description: free-text explanation
    - wcag_criterion: success criterion label (e.g. "1.1.1 Non-text Content")
    - impact: one of critical, serious, moderate, minor
    - suggestion: remediation hint
    """
    category: str
    element_tag: str
    path: str
    description: str
    wcag_criterion: str
    impact: str
    suggestion: str

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Finding.{f.name} must be a non-empty string, got {value!r}")
        if self.impact not in IMPACTS:
            raise ValueError(f"Unknown impact {self.impact!r}; expected one of {', '.join(IMPACTS)}")


@dataclass
class FindingSummary:
    """
    Findings grouped by WCAG criterion, in order of first appearance.
    """
    total: int = 0
    critical: int = 0
    by_criterion: Dict[str, List[Finding]] = field(default_factory=dict)

    def counts(self) -> Dict[str, int]:
        return {criterion: len(items) for criterion, items in self.by_criterion.items()}
