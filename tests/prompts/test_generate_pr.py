from pathlib import Path

from inline_snapshot import snapshot

from pr_style_mcp.models.change import ChangeData
from pr_style_mcp.models.style import StyleProfile
from pr_style_mcp.prompts.generate_pr import MAX_DIFF_CHARACTERS, TRUNCATION_MARKER, build_generate_pr_prompt, truncate_diff
from pr_style_mcp.style.presenter import render_style_profile

CHANGE_DATA = ChangeData(
    repository_root=Path("/work/widgets"),
    branch_name="feature/add-gadget",
    commit_messages=("feat: add gadget", "docs: describe gadget"),
    change_summary=" src/gadget.py | 2 ++\n 1 file changed, 2 insertions(+)",
    diff="+def gadget():\n+    return 42",
)


def test_prompt_without_style():
    assert build_generate_pr_prompt(change_data=CHANGE_DATA, style_profile=None) == snapshot("""\
Generate a pull request title and description based on the following.

## Note
No learned style found. Run `learn_pr_style` first for better results.

## Branch
`feature/add-gadget`

## Commits
- feat: add gadget
- docs: describe gadget

## Files Changed
```
 src/gadget.py | 2 ++
 1 file changed, 2 insertions(+)
```

## Instructions
Generate:
1. **Title** - concise, following the team style if available
2. **Description** - the full PR body with the sections the team usually includes

After generating, call `save_pr_description` with the title and body to save them as PR_DESCRIPTION.md.\
""")


def test_prompt_with_style(style_profile: StyleProfile):
    prompt = build_generate_pr_prompt(change_data=CHANGE_DATA, style_profile=style_profile)

    assert "## Team PR Style (follow this exactly)\n" + render_style_profile(style_profile) in prompt
    assert "No learned style found" not in prompt


def test_prompt_with_diff():
    prompt = build_generate_pr_prompt(change_data=CHANGE_DATA, style_profile=None, include_diff=True)

    assert "## Diff\n```diff\n+def gadget():\n+    return 42\n```" in prompt
    assert prompt.index("## Diff") < prompt.index("## Instructions")


def test_prompt_diff_not_requested():
    prompt = build_generate_pr_prompt(change_data=CHANGE_DATA, style_profile=None, include_diff=False)

    assert "## Diff" not in prompt


def test_prompt_empty_diff_is_omitted():
    change_data = CHANGE_DATA.model_copy(update={"diff": ""})

    prompt = build_generate_pr_prompt(change_data=change_data, style_profile=None, include_diff=True)

    assert "## Diff" not in prompt
    assert "```diff" not in prompt


def test_prompt_without_commits():
    change_data = CHANGE_DATA.model_copy(update={"commit_messages": ()})

    prompt = build_generate_pr_prompt(change_data=change_data, style_profile=None)

    assert "## Commits" not in prompt


def test_truncate_diff():
    short_diff = "x" * MAX_DIFF_CHARACTERS
    long_diff = "x" * (MAX_DIFF_CHARACTERS + 1)

    assert truncate_diff(short_diff) == short_diff
    assert truncate_diff(long_diff) == "x" * MAX_DIFF_CHARACTERS + TRUNCATION_MARKER
    assert truncate_diff(long_diff).endswith("\n... (truncated)")


def test_prompt_truncates_long_diff():
    change_data = CHANGE_DATA.model_copy(update={"diff": "+" * 7000})

    prompt = build_generate_pr_prompt(change_data=change_data, style_profile=None, include_diff=True)

    assert "+" * 6000 + "\n... (truncated)\n```" in prompt
    assert "+" * 6001 not in prompt
