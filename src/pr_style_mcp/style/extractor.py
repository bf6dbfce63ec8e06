from collections.abc import Sequence
from datetime import UTC, datetime

from fastmcp.utilities.logging import get_logger

from pr_style_mcp.models.pull_request import PullRequestRecord
from pr_style_mcp.models.style import RepositoryInfo, StyleProfile
from pr_style_mcp.style import classifiers
from pr_style_mcp.style.errors import EmptyCorpusError

logger = get_logger(__name__)


def extract_style_profile(pull_requests: Sequence[PullRequestRecord], owner: str, repo: str) -> StyleProfile:
    """Learn a style profile from a non-empty sequence of merged pull requests.

    Raises:
        EmptyCorpusError: If no pull requests are provided.
    """

    if not pull_requests:
        raise EmptyCorpusError(owner=owner, repo=repo)

    bodies: list[str] = [pull_request.body for pull_request in pull_requests if pull_request.body]
    titles: list[str] = [pull_request.title for pull_request in pull_requests]

    logger.info(f"Extracting style for {owner}/{repo} from {len(pull_requests)} pull requests ({len(bodies)} with a body).")

    return StyleProfile(
        sections=tuple(classifiers.detect_sections(bodies)),
        uses_checkboxes=classifiers.uses_checkboxes(bodies),
        uses_bullet_points=classifiers.uses_bullet_points(bodies),
        uses_numbered_lists=classifiers.uses_numbered_lists(bodies),
        title_pattern=classifiers.detect_title_pattern(titles),
        title_prefix_examples=tuple(classifiers.extract_title_prefixes(titles)),
        average_body_length=classifiers.average_length(bodies),
        average_line_count=classifiers.average_line_count(bodies),
        mentions_tickets=classifiers.mentions_tickets(bodies),
        ticket_pattern=classifiers.detect_ticket_pattern([*bodies, *titles]),
        tone=classifiers.detect_tone(bodies),
        uses_first_person=classifiers.uses_first_person(bodies),
        uses_emojis=any(classifiers.has_emoji(text) for text in [*bodies, *titles]),
        always_includes=tuple(classifiers.detect_common_phrases(bodies)),
        sample_count=len(pull_requests),
        last_updated=datetime.now(tz=UTC),
        repository_info=RepositoryInfo(owner=owner, repo=repo),
    )
