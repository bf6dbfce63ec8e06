from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from git.repo import Repo

from pr_style_mcp.models.pull_request import PullRequestRecord
from pr_style_mcp.models.style import RepositoryInfo, StyleProfile, TicketPattern, TitlePattern, Tone

E2E_OWNER = "octo-org"
E2E_REPO = "widgets"
E2E_REMOTE_URL = f"git@github.com:{E2E_OWNER}/{E2E_REPO}.git"

PullRequestFactory = Callable[..., PullRequestRecord]


@pytest.fixture
def make_pull_request() -> PullRequestFactory:
    """Build pull request records with sequential numbers."""

    numbers = iter(range(1, 10_000))

    def _make_pull_request(title: str = "Update widgets", body: str = "", **kwargs: object) -> PullRequestRecord:
        return PullRequestRecord.model_validate({"number": next(numbers), "title": title, "body": body, **kwargs})

    return _make_pull_request


@pytest.fixture
def style_profile() -> StyleProfile:
    return StyleProfile(
        sections=("## Description", "## Testing"),
        uses_checkboxes=True,
        uses_bullet_points=True,
        uses_numbered_lists=False,
        title_pattern=TitlePattern.CONVENTIONAL,
        title_prefix_examples=("feat:", "fix:"),
        average_body_length=240,
        average_line_count=12,
        mentions_tickets=True,
        ticket_pattern=TicketPattern.JIRA,
        tone=Tone.FORMAL,
        uses_first_person=False,
        uses_emojis=False,
        always_includes=("## Description",),
        sample_count=10,
        last_updated=datetime(2026, 10, 1, 12, 30, tzinfo=UTC),
        repository_info=RepositoryInfo(owner=E2E_OWNER, repo=E2E_REPO),
    )


def commit_file(repository: Repo, path: str, content: str, message: str) -> None:
    file_path = Path(repository.working_tree_dir or "") / path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    _ = file_path.write_text(content)
    _ = repository.index.add([path])
    _ = repository.index.commit(message)


@pytest.fixture
def git_repository(tmp_path: Path) -> Repo:
    """A repository with one commit on `main` and a GitHub `origin` remote."""

    repository: Repo = Repo.init(tmp_path / "widgets")

    with repository.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")

    commit_file(repository, "README.md", "# Widgets\n", "Initial commit")
    _ = repository.git.branch("-M", "main")
    _ = repository.create_remote("origin", E2E_REMOTE_URL)

    return repository


@pytest.fixture
def feature_repository(git_repository: Repo) -> Repo:
    """The `git_repository` checked out on a feature branch with two commits."""

    _ = git_repository.git.checkout("-b", "feature/add-gadget")
    commit_file(git_repository, "src/gadget.py", "def gadget():\n    return 42\n", "feat: add gadget")
    commit_file(git_repository, "docs/gadget.md", "# Gadget\n", "docs: describe gadget")

    return git_repository


@pytest.fixture
def repository_root(git_repository: Repo) -> Path:
    return Path(git_repository.working_tree_dir or "")
