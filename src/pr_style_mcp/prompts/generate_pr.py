from pr_style_mcp.models.change import ChangeData
from pr_style_mcp.models.style import StyleProfile
from pr_style_mcp.prompts.builder import PromptBuilder, PromptSection
from pr_style_mcp.style.presenter import render_style_profile
from pr_style_mcp.utilities.description import DESCRIPTION_FILENAME

MAX_DIFF_CHARACTERS = 6000
TRUNCATION_MARKER = "\n... (truncated)"

GOAL = "Generate a pull request title and description based on the following."

NO_STYLE_NOTE = PromptSection(
    title="Note",
    level=2,
    section="No learned style found. Run `learn_pr_style` first for better results.",
)

INSTRUCTIONS = PromptSection(
    title="Instructions",
    level=2,
    section=f"""Generate:
1. **Title** - concise, following the team style if available
2. **Description** - the full PR body with the sections the team usually includes

After generating, call `save_pr_description` with the title and body to save them as {DESCRIPTION_FILENAME}.""",
)


def truncate_diff(diff: str, max_characters: int = MAX_DIFF_CHARACTERS) -> str:
    """Cut the diff to `max_characters` and mark it as truncated if it is longer."""

    if len(diff) > max_characters:
        return diff[:max_characters] + TRUNCATION_MARKER

    return diff


def build_generate_pr_prompt(change_data: ChangeData, style_profile: StyleProfile | None, include_diff: bool = False) -> str:
    """Assemble the instructions a language model follows to write the pull request title and description."""

    prompt_builder = PromptBuilder().add_text_section(title=None, text=GOAL)

    if style_profile:
        _ = prompt_builder.add_text_section(title="Team PR Style (follow this exactly)", text=render_style_profile(style_profile), level=2)
    else:
        _ = prompt_builder.add_prompt_section(NO_STYLE_NOTE)

    _ = prompt_builder.add_text_section(title="Branch", text=f"`{change_data.branch_name}`", level=2)

    if change_data.commit_messages:
        _ = prompt_builder.add_list_section(title="Commits", items=list(change_data.commit_messages), level=2)

    _ = prompt_builder.add_code_section(title="Files Changed", code=change_data.change_summary, level=2)

    if include_diff and change_data.diff:
        _ = prompt_builder.add_code_section(title="Diff", code=truncate_diff(change_data.diff), language="diff", level=2)

    _ = prompt_builder.add_prompt_section(INSTRUCTIONS)

    return prompt_builder.render_text()
