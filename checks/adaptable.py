# checks/adaptable.py
"""
Adaptable-structure checks (WCAG 1.3.x).

- Presentational tags, tab order hints, sensory-only instructions, viewport
  scaling, input purpose and unlabeled roles.
- The sensory-characteristics check tests every element's full text content, so
  a matching phrase is also reported on each of its ancestors.
"""

import re
from typing import Iterator, Optional

from bs4 import Tag

from checks.dom import PageSnapshot, attr, element_path, text_content
from config import IMPACT_CRITICAL, IMPACT_MODERATE
from models import Finding

SENSORY_PHRASES_RE = re.compile(
    r"click the red button|above the blue text|on the right side", re.IGNORECASE
)
VIEWPORT_PATH = "head > meta[name='viewport']"


def _finding(element: Tag, category: str, description: str, criterion: str,
             impact: str, suggestion: str, path: Optional[str] = None) -> Finding:
    return Finding(
        category=category,
        element_tag=element.name.lower(),
        path=path or element_path(element),
        description=description,
        wcag_criterion=criterion,
        impact=impact,
        suggestion=suggestion,
    )


def check_presentational_markup(page: PageSnapshot) -> Iterator[Finding]:
    for el in page.select("b, i, u, font"):
        yield _finding(el, "Non-semantic formatting", "Non-semantic elements detected.",
                       "1.3.1 Info and Relationships", IMPACT_MODERATE,
                       "Use <strong> instead of <b>, <em> instead of <i>, and CSS for styling.")


def check_meaningful_sequence(page: PageSnapshot) -> Iterator[Finding]:
    for el in page.select("[tabindex]"):
        if not el.has_attr("aria-flowto") and not el.has_attr("aria-labelledby"):
            yield _finding(el, "Tab order issue",
                           "Tab order may not reflect a meaningful reading sequence.",
                           "1.3.2 Meaningful Sequence", IMPACT_CRITICAL,
                           "Use aria-flowto or aria-labelledby to maintain logical navigation order.")


def check_sensory_characteristics(page: PageSnapshot) -> Iterator[Finding]:
    for el in page.soup.find_all(True):
        if SENSORY_PHRASES_RE.search(text_content(el)):
            yield _finding(el, "Sensory-dependent instructions",
                           "Instructions rely on color, shape, or position.",
                           "1.3.3 Sensory Characteristics", IMPACT_CRITICAL,
                           "Provide alternative text descriptions like 'Click the submit button.'")


def check_orientation(page: PageSnapshot) -> Iterator[Finding]:
    meta = page.select_one('meta[name="viewport"]')
    if meta is not None and "user-scalable=no" in attr(meta, "content"):
        yield _finding(meta, "Restricted viewport scaling", "Viewport scaling is restricted.",
                       "1.3.4 Orientation", IMPACT_MODERATE,
                       "Allow users to rotate their device by removing 'user-scalable=no'.",
                       path=VIEWPORT_PATH)


def check_input_purpose(page: PageSnapshot) -> Iterator[Finding]:
    for field in page.select("input"):
        if not field.has_attr("autocomplete"):
            yield _finding(field, "Missing autocomplete attribute",
                           "Input field missing autocomplete attribute.",
                           "1.3.5 Identify Input Purpose", IMPACT_MODERATE,
                           "Add an 'autocomplete' attribute (e.g., autocomplete='email' for email fields).")


def check_identify_purpose(page: PageSnapshot) -> Iterator[Finding]:
    for el in page.select("[role]"):
        if not el.has_attr("aria-label") and not el.has_attr("aria-describedby"):
            yield _finding(el, "Unlabeled UI component", "UI component role is unclear.",
                           "1.3.6 Identify Purpose", IMPACT_CRITICAL,
                           "Use aria-label or aria-describedby to describe the purpose of the UI component.")


ADAPTABLE_CHECKS = (
    check_presentational_markup,
    check_meaningful_sequence,
    check_sensory_characteristics,
    check_orientation,
    check_input_purpose,
    check_identify_purpose,
)


def check_adaptable(page: PageSnapshot) -> Iterator[Finding]:
    for check in ADAPTABLE_CHECKS:
        yield from check(page)
