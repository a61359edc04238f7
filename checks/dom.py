# checks/dom.py
"""
Page snapshot and DOM helpers shared by every rule group.

- PageSnapshot wraps a BeautifulSoup tree of the rendered page together with the
  layout facts only a live browser can answer (rendered size, effective tab index,
  bound click handler).
- element_path builds the ancestor-chain string reported on each Finding.
- The attribute helpers mirror the DOM accessors the rules need.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger("wcag_checker")

# Node types the DOM keeps out of textContent
_NON_TEXT_NODES = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

# Elements that take part in the default tab order without a tabindex attribute
_FOCUSABLE_BY_DEFAULT = {"button", "input", "select", "textarea", "iframe", "summary"}
_TABINDEX_RE = re.compile(r"^\s*([+-]?\d+)")

# Elements whose content the browser keeps as raw text (noscript: scripting enabled)
_RAW_TEXT_ELEMENTS = ["noscript", "iframe", "noembed", "noframes", "xmp"]


@dataclass(frozen=True)
class ElementLayout:
    """
    Live layout facts for one element. width/height are None when unknown
    (no browser, or the element has no offset box, e.g. <svg>).
    """
    width: Optional[float]
    height: Optional[float]
    tab_index: int
    has_click_handler: bool


def element_path(element: Tag, suffix: str = "id") -> str:
    """
    Return the ancestor chain of an element, root first, e.g. "html > body > div#a > span".

    suffix="id" appends "#id" when the element has a non-empty id.
    suffix="class" does the same, but falls back to ".class1.class2" when there is no id.
    """
    parts: List[str] = []
    node = element
    while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
        selector = node.name.lower()
        node_id = attr(node, "id")
        if node_id:
            selector += "#" + node_id
        elif suffix == "class":
            classes = class_list(node)
            if classes:
                selector += "." + ".".join(classes)
        parts.append(selector)
        node = node.parent
    return " > ".join(reversed(parts))


# --- Attribute helpers -----------------------------------------------------

def attr(tag: Tag, name: str) -> str:
    """
    Raw attribute value as a string ("" when absent).
    """
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def attr_is_blank(tag: Tag, name: str) -> bool:
    """
    True when the attribute is missing or only whitespace.
    """
    return not attr(tag, name).strip()


def class_list(tag: Tag) -> List[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return [c for c in value if c]


def text_content(tag: Tag) -> str:
    """
    Concatenated text of every descendant text node, like the DOM's textContent.
    Unlike get_text() this keeps <script> and <style> text.
    """
    return "".join(
        str(node) for node in tag.descendants
        if isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_NODES)
    )


def inline_style(tag: Tag) -> Dict[str, str]:
    """
    Parse the style attribute into a property -> value dict (last declaration wins).
    """
    declarations: Dict[str, str] = {}
    for chunk in attr(tag, "style").split(";"):
        if ":" not in chunk:
            continue
        prop, _, value = chunk.partition(":")
        value = value.replace("!important", "").strip().lower()
        declarations[prop.strip().lower()] = value
    return declarations


def default_tab_index(tag: Tag) -> int:
    """
    The tab index a browser reports for an element, computed from markup alone.
    """
    match = _TABINDEX_RE.match(attr(tag, "tabindex"))
    if match:
        return int(match.group(1))
    if tag.name in ("a", "area") and tag.has_attr("href"):
        return 0
    if tag.name in _FOCUSABLE_BY_DEFAULT or tag.has_attr("contenteditable"):
        return 0
    return -1


def _normalize_inert_content(soup: BeautifulSoup) -> None:
    """
    Match the live DOM: <template> content is not part of the document tree, and
    the content of raw-text elements (<noscript>, <iframe> fallback, <noembed>,
    <noframes>, <xmp>) is a single text node rather than child elements.
    """
    for template in soup.find_all("template"):
        template.clear()
    for raw in soup.find_all(_RAW_TEXT_ELEMENTS):
        if raw.find(True) is None:
            continue
        inner = raw.decode_contents()
        raw.clear()
        raw.append(NavigableString(inner))


# --- Snapshot ----------------------------------------------------------------

class PageSnapshot:
    """
    Read-only view of one loaded page that the rules are evaluated against.

    Build one with PageSnapshot.from_html(); pass layout_records (one
    [tag, width, height, tabIndex, hasClickHandler] record per element in document
    order, as returned by the browser) to attach live layout facts.
    """

    def __init__(self, soup: BeautifulSoup, url: str = "",
                 layout: Optional[Dict[int, ElementLayout]] = None):
        self.soup = soup
        self.url = url
        self._layout = layout or {}
        # First <base href> wins, resolved against the page URL
        base = soup.find("base", href=True)
        self.base_url = urljoin(url, attr(base, "href")) if base is not None else url

    @classmethod
    def from_html(cls, html: str, url: str = "",
                  layout_records: Optional[Sequence[Sequence[Any]]] = None) -> "PageSnapshot":
        soup = BeautifulSoup(html, "html.parser")
        _normalize_inert_content(soup)
        layout: Dict[int, ElementLayout] = {}
        if layout_records is not None:
            elements = soup.find_all(True)
            names = [el.name.lower() for el in elements]
            record_names = [str(rec[0]).lower() for rec in layout_records]
            if names == record_names:
                for el, rec in zip(elements, layout_records):
                    layout[id(el)] = ElementLayout(
                        width=rec[1],
                        height=rec[2],
                        tab_index=int(rec[3]),
                        has_click_handler=bool(rec[4]),
                    )
            else:
                logger.warning(
                    "Layout snapshot does not line up with parsed DOM (%d vs %d elements); "
                    "falling back to markup-only layout", len(record_names), len(names)
                )
        return cls(soup, url=url, layout=layout)

    def select(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        """
        CSS selector query in document order, like querySelectorAll.
        """
        return (root if root is not None else self.soup).select(selector)

    def select_one(self, selector: str, root: Optional[Tag] = None) -> Optional[Tag]:
        return (root if root is not None else self.soup).select_one(selector)

    def layout_for(self, tag: Tag) -> ElementLayout:
        known = self._layout.get(id(tag))
        if known is not None:
            return known
        return ElementLayout(
            width=None,
            height=None,
            tab_index=default_tab_index(tag),
            has_click_handler=tag.has_attr("onclick"),
        )

    def resolve_url(self, value: str) -> str:
        """
        Resolve a relative href/src against the document base URL (<base href> when
        present, else the page URL), like the DOM's .href/.src properties.
        """
        if not value:
            return ""
        if self.base_url:
            return urljoin(self.base_url, value)
        return value
