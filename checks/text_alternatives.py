# checks/text_alternatives.py
"""
Text-alternative checks (WCAG 1.1.1 Non-text Content).

- Each check is a generator over the page snapshot yielding zero or more Findings.
- Checks are independent: one element routinely fires several of them
  (a bare <video> is reported by the video, test/exercise and sensory checks).
- check_text_alternatives runs them all in a fixed order.
"""

import re
from typing import Iterator

from bs4 import Tag

from checks.dom import (
    PageSnapshot, attr, attr_is_blank, class_list, element_path, inline_style, text_content,
)
from config import IMPACT_CRITICAL, IMPACT_MODERATE
from models import Finding

NON_TEXT_CONTENT = "1.1.1 Non-text Content"
NAME_ROLE_VALUE = "4.1.2 Name, Role, Value"

CAPTCHA_KEYWORDS = ("captcha", "challenge", "verification", "security check")
CAPTCHA_VENDOR_CLASSES = ("g-recaptcha", "h-captcha", "cf-turnstile")
CAPTCHA_IFRAME_RE = re.compile(r"recaptcha|hcaptcha|captcha|turnstile", re.IGNORECASE)
CAPTCHA_SUGGESTION = (
    "Provide alternative verification methods like audio CAPTCHA, "
    "text-based CAPTCHA, or human assistance."
)


def _finding(element: Tag, category: str, description: str, suggestion: str,
             criterion: str = NON_TEXT_CONTENT, impact: str = IMPACT_CRITICAL) -> Finding:
    return Finding(
        category=category,
        element_tag=element.name.lower(),
        path=element_path(element),
        description=description,
        wcag_criterion=criterion,
        impact=impact,
        suggestion=suggestion,
    )


# --- Element-specific checks -------------------------------------------------

def check_images(page: PageSnapshot) -> Iterator[Finding]:
    for img in page.select("img"):
        if attr_is_blank(img, "alt"):
            yield _finding(img, "Image", "Image is missing alt text",
                           "Add an alt attribute with a meaningful description.")


def check_svg_labels(page: PageSnapshot) -> Iterator[Finding]:
    for svg in page.select("svg"):
        if attr_is_blank(svg, "aria-label"):
            yield _finding(svg, "SVG Icon", "SVG Icon is missing aria-label text",
                           "Use aria-label to describe the icon.")


def check_svg_roles(page: PageSnapshot) -> Iterator[Finding]:
    for svg in page.select("svg"):
        if attr_is_blank(svg, "role"):
            yield _finding(svg, "SVG Icon", "SVG Icon is missing role text",
                           'Use role="img" to describe the icon.')


def check_image_buttons(page: PageSnapshot) -> Iterator[Finding]:
    for button in page.select('input[type="image"]'):
        if attr_is_blank(button, "alt"):
            yield _finding(button, "Image Button", "Image Button is missing alt text",
                           "Add an alt attribute to describe the button action.")


def check_image_map_areas(page: PageSnapshot) -> Iterator[Finding]:
    for area in page.select("area"):
        if attr_is_blank(area, "alt"):
            target = page.resolve_url(attr(area, "href")) or "No Link"
            yield _finding(area, "Image Map Area", f"Image Map Area '{target}' is missing alt text",
                           "Add an alt attribute describing the clickable area.")


def check_embedded_objects(page: PageSnapshot) -> Iterator[Finding]:
    for obj in page.select("object"):
        if not obj.has_attr("title") and not obj.has_attr("aria-label"):
            data = attr(obj, "data") or "No Data"
            yield _finding(obj, "Embedded Object", f"Embedded Object '{data}' is missing alt text",
                           "Use the title attribute or aria-label for accessibility.")


def check_iframes(page: PageSnapshot) -> Iterator[Finding]:
    for iframe in page.select("iframe"):
        if attr_is_blank(iframe, "title"):
            src = page.resolve_url(attr(iframe, "src")) or "No Source"
            yield _finding(iframe, "Iframe", f"Iframe '{src}' is missing title text",
                           "Add a title attribute describing the iframe content.")


def check_video_tracks(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if page.select_one('track[kind="captions"]', root=video) is None:
            src = attr(video, "src") or "No Source"
            yield _finding(video, "Video", f"Video '{src}' is missing track text",
                           'Provide a <track> with kind="captions" for subtitles.')


def check_audio_tracks(page: PageSnapshot) -> Iterator[Finding]:
    for audio in page.select("audio"):
        if page.select_one('track[kind="descriptions"]', root=audio) is None:
            src = attr(audio, "src") or "No Source"
            yield _finding(audio, "Audio", f"Audio '{src}' is missing track text",
                           'Provide a <track> with kind="descriptions" for transcripts.')


def check_canvases(page: PageSnapshot) -> Iterator[Finding]:
    for canvas in page.select("canvas"):
        if not canvas.has_attr("aria-label"):
            yield _finding(canvas, "Canvas", "Canvas is missing aria-label text",
                           "Use aria-label or provide fallback text inside <canvas>.")


def check_abbreviations(page: PageSnapshot) -> Iterator[Finding]:
    for abbr in page.select("abbr"):
        if not abbr.has_attr("title"):
            yield _finding(abbr, "Abbreviation", "Abbreviation is missing title text",
                           "Use the title attribute to define the abbreviation.")


def check_buttons(page: PageSnapshot) -> Iterator[Finding]:
    for button in page.select("button"):
        if not text_content(button).strip() and not button.has_attr("aria-label"):
            yield _finding(button, "Button", "Button is missing text or an aria-label",
                           "Ensure buttons have visible text or an aria-label.")


def check_icon_links(page: PageSnapshot) -> Iterator[Finding]:
    for link in page.select("a"):
        if not text_content(link).strip() and not link.has_attr("aria-label"):
            href = page.resolve_url(attr(link, "href")) or "No Link"
            yield _finding(link, "Link with Icon", f"Link with Icon '{href}' is missing aria-label text",
                           "Add an aria-label to describe the purpose of the link.")


def check_figures(page: PageSnapshot) -> Iterator[Finding]:
    for figure in page.select("figure"):
        if page.select_one("figcaption", root=figure) is None:
            yield _finding(figure, "Figure", "Figure is missing figcaption text",
                           "Add a <figcaption> to describe the figure content.")


# --- Cross-cutting checks ----------------------------------------------------

def check_test_or_exercise(page: PageSnapshot) -> Iterator[Finding]:
    for element in page.select("canvas, object, iframe, embed, video"):
        if not element.has_attr("aria-label") and not element.has_attr("title"):
            yield _finding(element, "Test/Exercise", "Test/Exercise is missing aria-label or title text",
                           "Provide a text description using aria-label or title.")


def check_sensory_content(page: PageSnapshot) -> Iterator[Finding]:
    for element in page.select("video, audio, canvas, embed, object"):
        if not element.has_attr("aria-describedby") and not element.has_attr("aria-label"):
            yield _finding(element, "Sensory Content",
                           "Sensory Content is missing aria-describedby or aria-label text",
                           "Provide captions, transcripts, or an ARIA description.")


def _under_aria_hidden(element: Tag) -> bool:
    node = element
    while isinstance(node, Tag):
        if attr(node, "aria-hidden") == "true":
            return True
        node = node.parent
    return False


def is_captcha(element: Tag) -> bool:
    """
    Keyword and vendor-class heuristics for CAPTCHA widgets.
    """
    alt_text = attr(element, "alt").strip().lower()
    aria_label = attr(element, "aria-label").strip().lower()
    src = attr(element, "src").lower()
    classes = " ".join(class_list(element)).lower()
    element_id = attr(element, "id").lower()

    for keyword in CAPTCHA_KEYWORDS:
        if (keyword in alt_text or keyword in aria_label or keyword in src
                or keyword in classes or keyword in element_id):
            return True
    return any(vendor in classes or vendor in element_id for vendor in CAPTCHA_VENDOR_CLASSES)


def check_captcha(page: PageSnapshot) -> Iterator[Finding]:
    for element in page.select("img, audio, object, embed, iframe, div, span"):
        if _under_aria_hidden(element):
            continue
        if is_captcha(element):
            yield _finding(element, "CAPTCHA",
                           "CAPTCHA detected, ensure an accessible alternative is available.",
                           CAPTCHA_SUGGESTION)
        # Vendor iframes are reported again on their own
        if element.name == "iframe" and CAPTCHA_IFRAME_RE.search(attr(element, "src")):
            yield _finding(element, "CAPTCHA",
                           "CAPTCHA iframe detected, ensure an accessible alternative is available.",
                           CAPTCHA_SUGGESTION)


def is_visually_hidden(page: PageSnapshot, element: Tag) -> bool:
    style = inline_style(element)
    if style.get("display") == "none" or style.get("visibility") == "hidden":
        return True
    layout = page.layout_for(element)
    return layout.width == 0 or layout.height == 0


def is_decorative(element: Tag) -> bool:
    if attr(element, "aria-hidden").strip() == "true":
        return True
    if attr(element, "role").strip() == "presentation":
        return True
    return element.name == "img" and attr(element, "alt").strip() == ""


def check_decorative_content(page: PageSnapshot) -> Iterator[Finding]:
    for element in page.select("img, svg, div, span, i, icon, canvas, iframe"):
        if is_visually_hidden(page, element) and not is_decorative(element):
            yield _finding(element, "Decorative Content",
                           "Visually hidden content is missing proper accessibility attributes.",
                           'Use aria-hidden="true", role="presentation", or alt="" for purely decorative elements.',
                           impact=IMPACT_MODERATE)
        if element.name == "iframe" and not element.has_attr("title"):
            yield _finding(element, "Decorative Content",
                           "Iframe is missing a title attribute, which may cause accessibility issues.",
                           'Provide a descriptive title for meaningful iframes, or use aria-hidden="true" for decorative ones.',
                           criterion=NAME_ROLE_VALUE, impact=IMPACT_MODERATE)


TEXT_ALTERNATIVE_CHECKS = (
    check_images,
    check_svg_labels,
    check_svg_roles,
    check_image_buttons,
    check_image_map_areas,
    check_embedded_objects,
    check_iframes,
    check_video_tracks,
    check_audio_tracks,
    check_canvases,
    check_abbreviations,
    check_buttons,
    check_icon_links,
    check_figures,
    check_test_or_exercise,
    check_sensory_content,
    check_captcha,
    check_decorative_content,
)


def check_text_alternatives(page: PageSnapshot) -> Iterator[Finding]:
    """
    Run every text-alternative check in order and yield their findings.
    """
    for check in TEXT_ALTERNATIVE_CHECKS:
        yield from check(page)
