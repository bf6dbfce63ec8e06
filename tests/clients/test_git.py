from pathlib import Path

import pytest
from git.repo import Repo

from pr_style_mcp.clients.errors.git import MissingRemoteError, NotAGitRepositoryError
from pr_style_mcp.clients.git import WorkingCopy
from tests.conftest import E2E_REMOTE_URL, commit_file


def working_copy_of(repository: Repo) -> WorkingCopy:
    return WorkingCopy.discover(Path(repository.working_tree_dir or ""))


def test_discover_from_subdirectory(feature_repository: Repo):
    root = Path(feature_repository.working_tree_dir or "")

    working_copy = WorkingCopy.discover(root / "src")

    assert working_copy.local_path == root.resolve()


def test_discover_outside_repository(tmp_path: Path):
    with pytest.raises(NotAGitRepositoryError, match="Not a git repository"):
        _ = WorkingCopy.discover(tmp_path)


def test_remote_url(git_repository: Repo):
    assert working_copy_of(git_repository).get_remote_url() == E2E_REMOTE_URL


def test_remote_url_falls_back_to_upstream(git_repository: Repo):
    git_repository.delete_remote(git_repository.remote("origin"))
    _ = git_repository.create_remote("upstream", "https://github.com/octo-org/upstream-widgets.git")

    assert working_copy_of(git_repository).get_remote_url() == "https://github.com/octo-org/upstream-widgets.git"


def test_missing_remote(git_repository: Repo):
    git_repository.delete_remote(git_repository.remote("origin"))

    with pytest.raises(MissingRemoteError):
        _ = working_copy_of(git_repository).get_remote_url()


def test_change_data(feature_repository: Repo):
    change_data = working_copy_of(feature_repository).get_change_data(base_branch="main")

    assert change_data.branch_name == "feature/add-gadget"
    assert change_data.commit_messages == ("docs: describe gadget", "feat: add gadget")
    assert "src/gadget.py" in change_data.change_summary
    assert "docs/gadget.md" in change_data.change_summary
    assert "2 files changed" in change_data.change_summary
    assert "+def gadget():" in change_data.diff
    assert "README.md" not in change_data.diff


def test_unknown_base_falls_back_to_working_tree(feature_repository: Repo):
    readme = Path(feature_repository.working_tree_dir or "") / "README.md"
    _ = readme.write_text("# Widgets\n\nUnstaged change\n")

    working_copy = working_copy_of(feature_repository)

    assert working_copy.get_commit_messages(base_branch="missing") == []
    assert "+Unstaged change" in working_copy.get_diff(base_branch="missing")
    assert "README.md" in working_copy.get_change_summary(base_branch="missing")


def test_staged_and_unstaged_changes_are_combined(git_repository: Repo):
    root = Path(git_repository.working_tree_dir or "")
    _ = (root / "staged.txt").write_text("staged\n")
    _ = git_repository.index.add(["staged.txt"])
    _ = (root / "README.md").write_text("# Widgets\nunstaged\n")

    diff = working_copy_of(git_repository).get_diff(base_branch="main")

    assert "+staged" in diff
    assert "+unstaged" in diff


def test_no_changes(git_repository: Repo):
    commit_file(git_repository, "notes.txt", "notes\n", "chore: notes")

    working_copy = working_copy_of(git_repository)

    assert working_copy.get_branch_name() == "main"
    assert working_copy.get_commit_messages(base_branch="main") == []
    assert working_copy.get_diff(base_branch="main") == ""
