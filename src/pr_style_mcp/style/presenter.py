from collections.abc import Sequence

from pr_style_mcp.models.style import StyleProfile, TicketPattern, TitlePattern

NONE_DETECTED = "None detected"


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def join_or_none(values: Sequence[str]) -> str:
    return ", ".join(values) if values else NONE_DETECTED


def render_style_profile(profile: StyleProfile) -> str:
    """Render a style profile as a markdown report.

    The output depends only on the profile, so rendering the same profile twice gives the same text."""

    repository = profile.repository_info.full_name
    updated = profile.last_updated.strftime("%Y-%m-%d")
    title_pattern = NONE_DETECTED if profile.title_pattern is TitlePattern.NONE else profile.title_pattern.value

    lines: list[str] = [
        f"## Learned PR Style for {repository}",
        f"Based on {profile.sample_count} merged PRs (updated: {updated})",
        "",
        "### Structure",
        f"- Sections: {join_or_none(profile.sections)}",
        f"- Checkboxes: {yes_no(profile.uses_checkboxes)}",
        f"- Bullet points: {yes_no(profile.uses_bullet_points)}",
        f"- Numbered lists: {yes_no(profile.uses_numbered_lists)}",
        f"- Average length: ~{profile.average_line_count} lines ({profile.average_body_length} characters)",
        f"- Always includes: {join_or_none(profile.always_includes)}",
        "",
        "### Title Style",
        f"- Pattern: {title_pattern}",
        f"- Prefixes: {join_or_none(profile.title_prefix_examples)}",
        "",
        "### Tone",
        f"- Style: {profile.tone.value}",
        f"- First person: {yes_no(profile.uses_first_person)}",
        f"- Emojis: {yes_no(profile.uses_emojis)}",
    ]

    if profile.mentions_tickets:
        ticket_pattern = NONE_DETECTED if profile.ticket_pattern is TicketPattern.NONE else profile.ticket_pattern.value
        lines.extend(["", "### Tickets", f"- Pattern: {ticket_pattern}"])

    return "\n".join(lines)
