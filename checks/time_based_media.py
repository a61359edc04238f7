# checks/time_based_media.py
"""
Time-based media checks (WCAG 1.2.x).

Each success criterion gets its own check, even where two criteria test the same
track (1.2.3 and 1.2.5 both look for a descriptions track). A bare <video> is
therefore reported once per criterion; the findings are not merged.
"""

from typing import Iterator

from bs4 import Tag

from checks.dom import PageSnapshot, element_path
from config import IMPACT_CRITICAL
from models import Finding

MEDIA_DESCRIPTION = "Provide alternatives for time-based media."


def _finding(element: Tag, category: str, criterion: str, suggestion: str) -> Finding:
    return Finding(
        category=category,
        element_tag=element.name.lower(),
        path=element_path(element),
        description=MEDIA_DESCRIPTION,
        wcag_criterion=criterion,
        impact=IMPACT_CRITICAL,
        suggestion=suggestion,
    )


def _lacks_track(page: PageSnapshot, media: Tag, selector: str) -> bool:
    return page.select_one(selector, root=media) is None


def check_media_controls(page: PageSnapshot) -> Iterator[Finding]:
    for media in page.select("audio:not([controls]), video:not([controls])"):
        yield _finding(media, "Audio/Video without controls",
                       "1.2.1 Audio-only and Video-only (Prerecorded)",
                       "Ensure media has accessible alternative text or transcripts.")


def check_prerecorded_captions(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if _lacks_track(page, video, 'track[kind="captions"]'):
            yield _finding(video, "Missing Captions (Prerecorded)",
                           "1.2.2 Captions (Prerecorded)",
                           'Add a <track kind="captions"> to provide captions.')


def check_audio_description_or_alternative(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if _lacks_track(page, video, 'track[kind="descriptions"]'):
            yield _finding(video, "Missing Audio Descriptions",
                           "1.2.3 Audio Description or Media Alternative (Prerecorded)",
                           "Provide audio descriptions for visual content in videos.")


def check_live_captions(page: PageSnapshot) -> Iterator[Finding]:
    for media in page.select("video[live], audio[live]"):
        if _lacks_track(page, media, 'track[kind="captions"]'):
            yield _finding(media, "Missing Captions (Live)",
                           "1.2.4 Captions (Live)",
                           "Provide real-time captions for live media.")


def check_prerecorded_audio_description(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if _lacks_track(page, video, 'track[kind="descriptions"]'):
            yield _finding(video, "Missing Audio Description (Prerecorded)",
                           "1.2.5 Audio Description (Prerecorded)",
                           "Provide additional track for audio descriptions.")


def check_sign_language(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if _lacks_track(page, video, 'track[kind="sign"]'):
            yield _finding(video, "Missing Sign Language Interpretation",
                           "1.2.6 Sign Language (Prerecorded)",
                           "Provide sign language interpretation for audio content in video.")


def check_extended_audio_description(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if _lacks_track(page, video, 'track[kind="descriptions"][extended]'):
            yield _finding(video, "Missing Extended Audio Description",
                           "1.2.7 Extended Audio Description (Prerecorded)",
                           "Provide extended audio descriptions when needed.")


def check_media_alternative(page: PageSnapshot) -> Iterator[Finding]:
    for video in page.select("video"):
        if not video.has_attr("aria-describedby"):
            yield _finding(video, "Missing Media Alternative",
                           "1.2.8 Media Alternative (Prerecorded)",
                           "Provide a text alternative describing video content.")


def check_live_audio(page: PageSnapshot) -> Iterator[Finding]:
    for audio in page.select("audio[live]"):
        if not audio.has_attr("aria-live"):
            yield _finding(audio, "Missing Alternative for Live Audio",
                           "1.2.9 Audio-only (Live)",
                           "Provide alternative content for live audio streams.")


TIME_BASED_MEDIA_CHECKS = (
    check_media_controls,
    check_prerecorded_captions,
    check_audio_description_or_alternative,
    check_live_captions,
    check_prerecorded_audio_description,
    check_sign_language,
    check_extended_audio_description,
    check_media_alternative,
    check_live_audio,
)


def check_time_based_media(page: PageSnapshot) -> Iterator[Finding]:
    for check in TIME_BASED_MEDIA_CHECKS:
        yield from check(page)
