import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from logging import Logger
from pathlib import Path
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger
from git.exc import GitError

from pr_style_mcp.clients.errors.git import WorkingCopyError
from pr_style_mcp.clients.errors.github import ClientError
from pr_style_mcp.clients.git import WorkingCopy
from pr_style_mcp.clients.github import DEFAULT_PULL_REQUEST_COUNT, GitHubPullRequestClient, parse_remote_url
from pr_style_mcp.models.change import ChangeData
from pr_style_mcp.models.pull_request import PullRequestRecord
from pr_style_mcp.models.style import RepositoryInfo, StyleProfile
from pr_style_mcp.prompts.generate_pr import build_generate_pr_prompt
from pr_style_mcp.servers.shared.annotations import BASE_BRANCH, BODY, COUNT, INCLUDE_DIFF, TITLE
from pr_style_mcp.servers.shared.errors import RepositoryAccessError, ServerError, StyleNotLearnedError
from pr_style_mcp.style.errors import EmptyCorpusError, StyleError
from pr_style_mcp.style.extractor import extract_style_profile
from pr_style_mcp.style.presenter import render_style_profile
from pr_style_mcp.style.store import StyleStore
from pr_style_mcp.utilities.description import require_description, write_pull_request_description

REPORTED_ERRORS: tuple[type[Exception], ...] = (ServerError, ClientError, StyleError, WorkingCopyError, GitError, OSError)

NO_STYLE_WARNING = "⚠️ No learned style. Run learn_pr_style first."


class PullRequestStyleServer:
    """Server for learning a repository's PR writing style and drafting PR descriptions in that style."""

    working_directory: Path
    corpus_client: GitHubPullRequestClient | None
    logger: Logger

    def __init__(
        self,
        working_directory: Path | None = None,
        corpus_client: GitHubPullRequestClient | None = None,
        logger: Logger | None = None,
    ):
        self.working_directory = working_directory or Path.cwd()
        self.corpus_client = corpus_client
        self.logger = logger or get_logger(name=__name__)

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.learn_pr_style))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.generate_pr))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.save_pr_description))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_pr_style))

        return fastmcp

    @contextmanager
    def _report_errors(self, action: str) -> Iterator[None]:
        """Turn failures into tool errors so the client receives a readable failed result."""

        try:
            yield
        except REPORTED_ERRORS as e:
            self.logger.warning(f"{action} failed: {e}")
            raise ToolError(f"❌ {e}") from e

    async def _discover_working_copy(self) -> WorkingCopy:
        return await asyncio.to_thread(WorkingCopy.discover, self.working_directory)

    def _get_corpus_client(self) -> GitHubPullRequestClient:
        if self.corpus_client is None:
            self.corpus_client = GitHubPullRequestClient(logger=self.logger)

        return self.corpus_client

    async def learn_pr_style(self, count: COUNT = DEFAULT_PULL_REQUEST_COUNT) -> str:
        """Learn PR writing style from merged pull requests.
        Analyzes structure, tone, formatting, and common patterns. Run once per repo. Saves to .pr-style.json"""

        with self._report_errors(action="Learning PR style"):
            working_copy: WorkingCopy = await self._discover_working_copy()

            remote_url: str = await asyncio.to_thread(working_copy.get_remote_url)

            repository_info: RepositoryInfo | None = parse_remote_url(remote_url)
            if repository_info is None:
                raise RepositoryAccessError(message="Not a GitHub repository or invalid remote URL", remote_url=remote_url)

            corpus_client: GitHubPullRequestClient = self._get_corpus_client()

            owner, repo = repository_info.owner, repository_info.repo

            if not await corpus_client.verify_access(owner=owner, repo=repo):
                raise RepositoryAccessError(
                    message=f"Cannot access {repository_info.full_name}. Check your GITHUB_TOKEN.", repository=repository_info.full_name
                )

            pull_requests: list[PullRequestRecord] = await corpus_client.fetch_merged_pull_requests(owner=owner, repo=repo, count=count)

            if not pull_requests:
                raise EmptyCorpusError(owner=owner, repo=repo)

            style_profile: StyleProfile = extract_style_profile(pull_requests=pull_requests, owner=owner, repo=repo)

            saved_path: Path = StyleStore(repository_root=working_copy.local_path, logger=self.logger).save(style_profile)

        return "\n".join(
            [
                f"✅ Learned PR style from {style_profile.sample_count} merged PRs!",
                "",
                render_style_profile(style_profile),
                "",
                f"📁 Saved to: {saved_path}",
            ]
        )

    async def generate_pr(self, base_branch: BASE_BRANCH = "main", include_diff: INCLUDE_DIFF = False) -> str:
        """Generate PR title and description from current git changes.
        Uses learned team style if available. Analyzes branch name, commits, and file changes."""

        with self._report_errors(action="Generating PR context"):
            working_copy: WorkingCopy = await self._discover_working_copy()

            change_data: ChangeData = await asyncio.to_thread(working_copy.get_change_data, base_branch)

            style_profile: StyleProfile | None = StyleStore(repository_root=working_copy.local_path, logger=self.logger).load()

        prompt: str = build_generate_pr_prompt(change_data=change_data, style_profile=style_profile, include_diff=include_diff)

        if style_profile is None:
            return f"{NO_STYLE_WARNING}\n\n{prompt}"

        return prompt

    async def save_pr_description(self, title: TITLE, body: BODY) -> str:
        """Save generated PR title and description to PR_DESCRIPTION.md file.
        Call this after generate_pr to save the output."""

        with self._report_errors(action="Saving PR description"):
            require_description(title=title, body=body)

            working_copy: WorkingCopy = await self._discover_working_copy()

            description_path: Path = await write_pull_request_description(repository_root=working_copy.local_path, title=title, body=body)

        return f"✅ PR description saved to {description_path}"

    async def get_pr_style(self) -> str:
        """Show the learned PR style for this repository."""

        with self._report_errors(action="Getting PR style"):
            working_copy: WorkingCopy = await self._discover_working_copy()

            style_profile: StyleProfile | None = StyleStore(repository_root=working_copy.local_path, logger=self.logger).load()

            if style_profile is None:
                raise StyleNotLearnedError

        return render_style_profile(style_profile)
