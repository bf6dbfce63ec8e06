from pathlib import Path

from anyio import Path as AsyncPath

from pr_style_mcp.servers.shared.errors import MissingInputError

DESCRIPTION_FILENAME = "PR_DESCRIPTION.md"


def render_description(title: str, body: str) -> str:
    return f"# {title}\n\n{body}\n"


def require_description(title: str | None, body: str | None) -> None:
    """Raise a MissingInputError naming every empty field."""

    if missing := [name for name, value in (("title", title), ("body", body)) if not value or not value.strip()]:
        raise MissingInputError(*missing)


async def write_pull_request_description(repository_root: Path, title: str, body: str) -> Path:
    """Write the pull request title and body to `PR_DESCRIPTION.md` at the root of the repository.

    Raises:
        MissingInputError: If the title or the body is empty. Nothing is written.
    """

    require_description(title=title, body=body)

    description_path: AsyncPath = AsyncPath(repository_root) / DESCRIPTION_FILENAME

    _ = await description_path.write_text(render_description(title=title, body=body), encoding="utf-8")

    return Path(description_path)
