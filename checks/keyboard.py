# checks/keyboard.py
"""
Keyboard accessibility checks (WCAG 2.1).

- Focusability: interactive elements must be reachable by Tab and must not rely on
  click handlers alone.
- Keyboard traps: dialog-like containers holding focusable content must offer a
  way out (close/exit button, .close element, or aria-modal).
- Each audit is guarded on its own: an error while evaluating one is logged and
  that audit reports nothing, the other still runs.
"""

import logging
from typing import Callable, Iterator, List

from checks.dom import PageSnapshot, element_path
from config import IMPACT_CRITICAL
from models import Finding

logger = logging.getLogger("wcag_checker")

INTERACTIVE_SELECTOR = (
    'a[href], button, input, select, textarea, [role="button"], [role="link"], [tabindex]'
)
DIALOG_SELECTOR = 'dialog, [role="dialog"], .modal, [class*="modal"], [role="alertdialog"]'
FOCUSABLE_SELECTOR = 'a[href], button, input, select, textarea, [tabindex]:not([tabindex="-1"])'
ESCAPE_SELECTOR = 'button[aria-label*="close"], button[aria-label*="exit"], .close'
KEYBOARD_HANDLER_ATTRS = ("onkeydown", "onkeypress", "onkeyup", "onkeyenter")


def check_focusability(page: PageSnapshot) -> Iterator[Finding]:
    for el in page.select(INTERACTIVE_SELECTOR):
        layout = page.layout_for(el)
        has_keyboard_handler = any(el.has_attr(name) for name in KEYBOARD_HANDLER_ATTRS)
        if layout.tab_index < 0:
            description = "Element is not keyboard accessible"
        elif layout.has_click_handler and not has_keyboard_handler:
            description = "Element has click handler but no keyboard event handler"
        else:
            continue
        yield Finding(
            category="keyboard-accessibility",
            element_tag=el.name.lower(),
            path=element_path(el, suffix="class"),
            description=description,
            wcag_criterion="WCAG 2.1 Keyboard",
            impact=IMPACT_CRITICAL,
            suggestion="Add keyboard event handlers or ensure proper tabIndex value",
        )


def check_keyboard_traps(page: PageSnapshot) -> Iterator[Finding]:
    for container in page.select(DIALOG_SELECTOR):
        if page.select_one(FOCUSABLE_SELECTOR, root=container) is None:
            continue
        has_escape = (
            page.select_one(ESCAPE_SELECTOR, root=container) is not None
            or container.has_attr("aria-modal")
        )
        if not has_escape:
            yield Finding(
                category="keyboard-trap",
                element_tag=container.name.lower(),
                path=element_path(container),
                description="Element may trap keyboard focus without providing an escape mechanism",
                wcag_criterion="WCAG 2.1.2 No Keyboard Trap",
                impact=IMPACT_CRITICAL,
                suggestion="Add a keyboard-accessible escape mechanism",
            )


def _guarded(check: Callable[[PageSnapshot], Iterator[Finding]], page: PageSnapshot) -> List[Finding]:
    try:
        return list(check(page))
    except Exception:
        logger.warning("Error during keyboard accessibility check %s", check.__name__, exc_info=True)
        return []


def check_keyboard_accessibility(page: PageSnapshot) -> Iterator[Finding]:
    yield from _guarded(check_focusability, page)
    yield from _guarded(check_keyboard_traps, page)
