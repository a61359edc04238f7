# tests/test_text_alternatives.py
"""
Tests for the text-alternative checks.

Counts are asserted per category: one element is expected to fire several checks.
"""

from checks import text_alternatives as ta
from conftest import count_by_category, page_from


def test_image_with_alt_has_no_finding():
    page = page_from('<img src="logo.png" alt="Company logo">')
    assert list(ta.check_images(page)) == []
    assert list(ta.check_text_alternatives(page)) == []


def test_image_without_alt_or_blank_alt():
    for markup in ('<img src="a.png">', '<img src="a.png" alt="">', '<img src="a.png" alt="   ">'):
        findings = list(ta.check_images(page_from(markup)))
        assert len(findings) == 1
        f = findings[0]
        assert f.category == "Image"
        assert f.element_tag == "img"
        assert f.path == "html > body > img"
        assert f.wcag_criterion == "1.1.1 Non-text Content"
        assert f.impact == "critical"


def test_svg_missing_label_and_role_gives_two_findings():
    findings = list(ta.check_text_alternatives(page_from("<svg><path d='M0 0'/></svg>")))
    assert count_by_category(findings) == {"SVG Icon": 2}
    assert {f.description for f in findings} == {
        "SVG Icon is missing aria-label text",
        "SVG Icon is missing role text",
    }


def test_svg_with_label_and_role_is_clean():
    page = page_from('<svg role="img" aria-label="Search"></svg>')
    assert list(ta.check_text_alternatives(page)) == []


def test_image_button_and_area():
    page = page_from(
        '<input type="image" src="go.png">'
        '<map name="m"><area shape="rect" href="/help"><area shape="rect"></map>'
    )
    assert len(list(ta.check_image_buttons(page))) == 1
    areas = list(ta.check_image_map_areas(page))
    assert [f.description for f in areas] == [
        "Image Map Area 'https://example.com/help' is missing alt text",
        "Image Map Area 'No Link' is missing alt text",
    ]
    assert areas[0].element_tag == "area"


def test_object_needs_title_or_aria_label():
    page = page_from('<object data="chart.swf"></object><object title="Chart"></object><object></object>')
    findings = list(ta.check_embedded_objects(page))
    assert [f.description for f in findings] == [
        "Embedded Object 'chart.swf' is missing alt text",
        "Embedded Object 'No Data' is missing alt text",
    ]


def test_untitled_iframe_fires_three_independent_checks():
    page = page_from('<iframe src="https://player.example.org/embed/42"></iframe>')
    findings = list(ta.check_text_alternatives(page))
    assert count_by_category(findings) == {"Iframe": 1, "Test/Exercise": 1, "Decorative Content": 1}
    iframe = [f for f in findings if f.category == "Iframe"][0]
    assert iframe.description == "Iframe 'https://player.example.org/embed/42' is missing title text"
    decorative = [f for f in findings if f.category == "Decorative Content"][0]
    assert decorative.wcag_criterion == "4.1.2 Name, Role, Value"
    assert decorative.impact == "moderate"


def test_bare_video_fires_video_test_and_sensory_checks():
    findings = list(ta.check_text_alternatives(page_from('<video src="intro.mp4"></video>')))
    assert count_by_category(findings) == {"Video": 1, "Test/Exercise": 1, "Sensory Content": 1}
    assert findings[0].description == "Video 'intro.mp4' is missing track text"


def test_video_with_captions_and_label_is_clean():
    page = page_from('<video aria-label="Intro"><track kind="captions" src="c.vtt"></video>')
    assert list(ta.check_text_alternatives(page)) == []


def test_audio_needs_descriptions_track():
    page = page_from('<audio src="a.mp3" aria-label="Podcast"></audio>')
    assert count_by_category(ta.check_text_alternatives(page)) == {"Audio": 1}


def test_canvas_and_abbreviation():
    page = page_from('<canvas></canvas><abbr>WCAG</abbr><abbr title="World Health Organization">WHO</abbr>')
    counts = count_by_category(ta.check_text_alternatives(page))
    assert counts == {"Canvas": 1, "Abbreviation": 1, "Test/Exercise": 1, "Sensory Content": 1}


def test_button_with_visible_text_is_clean():
    page = page_from("<button>Save</button>")
    assert list(ta.check_buttons(page)) == []


def test_icon_only_button_and_link():
    page = page_from(
        '<button><svg role="img" aria-label="x"></svg></button>'
        '<button aria-label="Close"></button>'
        '<a href="/home"><img src="home.png" alt="Home"></a>'
        '<a href="/home" aria-label="Home"><img src="home.png" alt="Home"></a>'
    )
    assert len(list(ta.check_buttons(page))) == 1
    links = list(ta.check_icon_links(page))
    assert len(links) == 1
    assert links[0].description == "Link with Icon 'https://example.com/home' is missing aria-label text"


def test_style_text_counts_as_content():
    page = page_from('<a href="/x"><style>a{}</style></a><button><style>b{}</style></button>')
    assert list(ta.check_icon_links(page)) == []
    assert list(ta.check_buttons(page)) == []


def test_figure_needs_figcaption():
    page = page_from(
        '<figure><img src="a.png" alt="A"></figure>'
        '<figure><img src="b.png" alt="B"><div><figcaption>B</figcaption></div></figure>'
    )
    findings = list(ta.check_figures(page))
    assert len(findings) == 1
    assert findings[0].path == "html > body > figure"


def test_embed_fires_test_and_sensory_checks():
    page = page_from('<embed src="game.swf">')
    assert count_by_category(ta.check_text_alternatives(page)) == {"Test/Exercise": 1, "Sensory Content": 1}


def test_captcha_keywords_and_vendor_classes():
    page = page_from(
        '<div class="g-recaptcha" data-sitekey="k"></div>'
        '<img src="/img/Captcha.png" alt="Type the letters">'
        '<span id="security-verification">Check</span>'
        '<div class="cf-turnstile"></div>'
        '<div class="newsletter">Sign up</div>'
    )
    findings = list(ta.check_captcha(page))
    assert [f.element_tag for f in findings] == ["div", "img", "span", "div"]
    assert all(f.category == "CAPTCHA" for f in findings)


def test_captcha_under_aria_hidden_is_skipped():
    page = page_from('<div aria-hidden="true"><img src="captcha.png" alt="captcha"></div>')
    assert list(ta.check_captcha(page)) == []


def test_captcha_iframe_is_reported_twice():
    page = page_from(
        '<iframe title="reCAPTCHA" src="https://www.google.com/recaptcha/api2/anchor"></iframe>'
    )
    findings = list(ta.check_captcha(page))
    assert len(findings) == 2
    assert findings[1].description == "CAPTCHA iframe detected, ensure an accessible alternative is available."


def test_turnstile_iframe_matches_only_the_iframe_pattern():
    page = page_from('<iframe title="Widget" src="https://challenges.example.net/TURNSTILE/v0"></iframe>')
    findings = list(ta.check_captcha(page))
    # "challenge" keyword in src, then the iframe pattern
    assert len(findings) == 2


def test_hidden_but_not_decorative():
    page = page_from(
        '<div style="display: none">Promo</div>'
        '<span style="visibility:hidden">x</span>'
        '<div style="display:none" aria-hidden="true">ok</div>'
        '<img src="spacer.gif" alt="" style="display:none">'
        '<i style="display:none" role="presentation"></i>'
    )
    findings = list(ta.check_decorative_content(page))
    assert [f.element_tag for f in findings] == ["div", "span"]
    assert all(f.impact == "moderate" and f.wcag_criterion == "1.1.1 Non-text Content" for f in findings)


def test_zero_size_from_live_layout_counts_as_hidden():
    records = [
        ["html", 800, 600, -1, False],
        ["head", 0, 0, -1, False],
        ["body", 800, 600, -1, False],
        ["span", 0, 18, -1, False],
        ["div", 200, 40, -1, False],
    ]
    page = page_from("<span>tracker</span><div>visible</div>", layout_records=records)
    findings = list(ta.check_decorative_content(page))
    assert len(findings) == 1
    assert findings[0].element_tag == "span"


def test_unknown_size_is_not_hidden():
    page = page_from("<svg></svg><span>text</span>")
    assert list(ta.check_decorative_content(page)) == []


def test_groups_run_in_declared_order():
    page = page_from('<video></video><img src="a.png">')
    categories = [f.category for f in ta.check_text_alternatives(page)]
    assert categories == ["Image", "Video", "Test/Exercise", "Sensory Content"]
