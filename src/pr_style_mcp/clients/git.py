from collections.abc import Callable
from functools import cached_property
from logging import Logger
from pathlib import Path
from typing import Self

from fastmcp.utilities.logging import get_logger
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.repo import Repo
from pydantic import BaseModel, field_validator

from pr_style_mcp.clients.errors.git import MissingRemoteError, NotAGitRepositoryError
from pr_style_mcp.models.change import ChangeData

logger: Logger = get_logger(name=__name__)

REMOTE_NAMES = ("origin", "upstream")


class WorkingCopy(BaseModel):
    """A local git working copy whose current branch is being turned into a pull request."""

    local_path: Path

    @field_validator("local_path")
    @classmethod
    def validate_local_path(cls, local_path: Path) -> Path:
        return local_path.resolve()

    @classmethod
    def discover(cls, path: Path) -> Self:
        """Find the working copy that contains `path`.

        Raises:
            NotAGitRepositoryError: If `path` is not inside a git repository.
        """

        try:
            repository: Repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepositoryError(path=path) from e

        if repository.working_tree_dir is None:
            raise NotAGitRepositoryError(path=path)

        return cls(local_path=Path(repository.working_tree_dir))

    @cached_property
    def repository(self) -> Repo:
        return Repo(self.local_path)

    def _git(self, *args: str) -> str:
        output: str = self.repository.git.execute(["git", *args])  # pyright: ignore[reportAssignmentType]
        return output.strip()

    def _git_with_base_fallback(self, base_branch: str, build_args: Callable[[str], list[str]]) -> str | None:
        """Run a git command against `base_branch` and then `origin/<base_branch>`, returning the first non-empty output."""

        for base in (base_branch, f"origin/{base_branch}"):
            try:
                if output := self._git(*build_args(base)):
                    return output
            except GitCommandError as e:
                logger.debug(f"git {' '.join(build_args(base))} failed in {self.local_path}: {e}")

        return None

    def get_branch_name(self) -> str:
        return self._git("branch", "--show-current")

    def get_remote_url(self) -> str:
        """Get the URL of the `origin` remote, or of the `upstream` remote when there is no `origin`.

        Raises:
            MissingRemoteError: If neither remote exists.
        """

        for remote_name in REMOTE_NAMES:
            try:
                return self._git("remote", "get-url", remote_name)
            except GitCommandError:
                continue

        raise MissingRemoteError(path=self.local_path)

    def get_diff(self, base_branch: str = "main") -> str:
        if diff := self._git_with_base_fallback(base_branch, lambda base: ["diff", f"{base}...HEAD"]):
            return diff

        staged: str = self._git("diff", "--cached")
        unstaged: str = self._git("diff")

        return "\n".join(diff for diff in (staged, unstaged) if diff)

    def get_commit_messages(self, base_branch: str = "main") -> list[str]:
        for base in (base_branch, f"origin/{base_branch}"):
            try:
                log: str = self._git("log", f"{base}..HEAD", "--pretty=format:%s")
            except GitCommandError:
                continue

            return [line for line in log.split("\n") if line]

        return []

    def get_change_summary(self, base_branch: str = "main") -> str:
        if summary := self._git_with_base_fallback(base_branch, lambda base: ["diff", f"{base}...HEAD", "--stat"]):
            return summary

        return self._git("diff", "--stat")

    def get_change_data(self, base_branch: str = "main") -> ChangeData:
        """Collect everything needed to describe the changes on the current branch relative to `base_branch`."""

        logger.info(f"Collecting changes in {self.local_path} against {base_branch}")

        return ChangeData(
            repository_root=self.local_path,
            branch_name=self.get_branch_name(),
            commit_messages=tuple(self.get_commit_messages(base_branch)),
            change_summary=self.get_change_summary(base_branch),
            diff=self.get_diff(base_branch),
        )
