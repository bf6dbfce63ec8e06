"""Pure classifiers over pull request titles and bodies.

Every function accepts texts that may be empty or `None` and treats them as "no match".
"""

import math
import re
from collections import Counter
from collections.abc import Iterable, Sequence

from pr_style_mcp.models.style import TicketPattern, TitlePattern, Tone

CONVENTIONAL_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore", "build", "ci", "perf", "revert")

HEADING_RE = re.compile(r"^#{1,3}\s+.+$", re.MULTILINE)
CHECKBOX_RE = re.compile(r"\[[ x]\]")
BULLET_POINT_RE = re.compile(r"^\s*[-*]\s", re.MULTILINE)
NUMBERED_LIST_RE = re.compile(r"^\s*\d+\.\s", re.MULTILINE)

CONVENTIONAL_TITLE_RE = re.compile(rf"^(?P<type>{'|'.join(CONVENTIONAL_TYPES)})(\(.+\))?!?:\s")
CONVENTIONAL_PREFIX_RE = re.compile(rf"^(?P<type>{'|'.join(CONVENTIONAL_TYPES)})(\([^)]*\))?!?:")
TICKET_PREFIX_TITLE_RE = re.compile(r"^\[?[A-Z]+-\d+\]?\s")

TICKET_RE = re.compile(r"[A-Z]+-\d+")

FORMAL_RE = re.compile(r"\b(This PR|This commit|This change)\b", re.IGNORECASE)
CASUAL_RE = re.compile(r"\b(I |we |gonna|wanna|lol)\b", re.IGNORECASE)
FIRST_PERSON_RE = re.compile(r"\b(I |I'|my |we |we'|our )", re.IGNORECASE)
EMOJI_RE = re.compile("[\U0001f300-\U0001f9ff\u2600-\u26ff]")

COMMON_PHRASES = ("## Description", "## Testing", "## Changes", "Fixes #", "Closes #")

SECTION_THRESHOLD_PERCENT = 30
CASUAL_THRESHOLD_PERCENT = 30


def is_majority(count: int, total: int) -> bool:
    """Whether `count` is a strict majority of `total`."""
    return count * 2 > total


def _matches(pattern: re.Pattern[str], text: str | None) -> bool:
    return bool(text) and pattern.search(text) is not None  # pyright: ignore[reportArgumentType]


def _any_matches(pattern: re.Pattern[str], texts: Iterable[str | None]) -> bool:
    return any(_matches(pattern, text) for text in texts)


def detect_sections(bodies: Sequence[str]) -> list[str]:
    """Find the markdown headings (levels 1-3) used in at least 30% of the bodies.

    A heading counts once per body. Headings are ordered by how many bodies use them,
    ties keep the order in which they were first seen."""

    counts: Counter[str] = Counter()

    for body in bodies:
        if not body:
            continue
        headings: dict[str, None] = dict.fromkeys(heading.strip() for heading in HEADING_RE.findall(body))
        counts.update(headings.keys())

    return [
        heading for heading, count in counts.most_common() if count * 100 >= len(bodies) * SECTION_THRESHOLD_PERCENT
    ]


def uses_checkboxes(bodies: Iterable[str | None]) -> bool:
    return _any_matches(CHECKBOX_RE, bodies)


def uses_bullet_points(bodies: Iterable[str | None]) -> bool:
    return _any_matches(BULLET_POINT_RE, bodies)


def uses_numbered_lists(bodies: Iterable[str | None]) -> bool:
    return _any_matches(NUMBERED_LIST_RE, bodies)


def classify_title(title: str | None) -> TitlePattern:
    """Classify a single title. Conventional commit style is checked before ticket prefixes."""

    if _matches(CONVENTIONAL_TITLE_RE, title):
        return TitlePattern.CONVENTIONAL

    if _matches(TICKET_PREFIX_TITLE_RE, title):
        return TitlePattern.TICKET_PREFIX

    return TitlePattern.NONE


def detect_title_pattern(titles: Sequence[str]) -> TitlePattern:
    """Find the title convention used by a strict majority of the titles."""

    counts: Counter[TitlePattern] = Counter(classify_title(title) for title in titles)

    for title_pattern in (TitlePattern.CONVENTIONAL, TitlePattern.TICKET_PREFIX):
        if is_majority(counts[title_pattern], len(titles)):
            return title_pattern

    return TitlePattern.NONE


def extract_title_prefixes(titles: Iterable[str | None]) -> list[str]:
    """The distinct conventional commit prefixes (`feat:`, `fix:`, ...) in the order they were first seen."""

    prefixes: dict[str, None] = {}

    for title in titles:
        if title and (match := CONVENTIONAL_PREFIX_RE.match(title)):
            prefixes[f"{match.group('type')}:"] = None

    return list(prefixes)


def _rounded_mean(values: Sequence[int]) -> int:
    if not values:
        return 0
    # half rounds up
    return math.floor(sum(values) / len(values) + 0.5)


def average_length(bodies: Sequence[str]) -> int:
    return _rounded_mean([len(body) for body in bodies])


def average_line_count(bodies: Sequence[str]) -> int:
    return _rounded_mean([len(body.split("\n")) for body in bodies])


def mentions_tickets(bodies: Iterable[str | None]) -> bool:
    return _any_matches(TICKET_RE, bodies)


def detect_ticket_pattern(texts: Iterable[str | None]) -> TicketPattern:
    """Find the shape of the ticket identifiers across all texts. JIRA identifiers take precedence."""

    combined = " ".join(text for text in texts if text)

    if re.search(TicketPattern.JIRA.value, combined):
        return TicketPattern.JIRA

    if re.search(TicketPattern.GENERIC.value, combined):
        return TicketPattern.GENERIC

    return TicketPattern.NONE


def detect_tone(bodies: Sequence[str]) -> Tone:
    """Formal when most bodies use impersonal framing, casual when more than 30% read informally."""

    formal_count = sum(1 for body in bodies if _matches(FORMAL_RE, body))
    casual_count = sum(1 for body in bodies if _matches(CASUAL_RE, body))

    if is_majority(formal_count, len(bodies)):
        return Tone.FORMAL

    if casual_count * 100 > len(bodies) * CASUAL_THRESHOLD_PERCENT:
        return Tone.CASUAL

    return Tone.MIXED


def uses_first_person(bodies: Iterable[str | None]) -> bool:
    return _any_matches(FIRST_PERSON_RE, bodies)


def has_emoji(text: str | None) -> bool:
    return _matches(EMOJI_RE, text)


def detect_common_phrases(bodies: Sequence[str], phrases: Sequence[str] = COMMON_PHRASES) -> list[str]:
    """The phrases from `phrases` that appear in a strict majority of the bodies."""

    return [phrase for phrase in phrases if is_majority(sum(1 for body in bodies if body and phrase in body), len(bodies))]
