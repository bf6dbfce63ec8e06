import asyncio
import os
import re
from collections.abc import Awaitable, Callable, Sequence
from logging import Logger
from typing import Any, Literal, overload

from fastmcp.utilities.logging import get_logger
from githubkit import GitHub as GitHubKit
from githubkit.auth.token import TokenAuthStrategy
from githubkit.exception import GitHubException as GitHubKitGitHubException
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from githubkit.response import Response as GitHubKitResponse
from githubkit.retry import RetryChainDecision, RetryRateLimit, RetryServerError
from githubkit.versions.v2022_11_28.models import FullRepository as GitHubKitFullRepository
from githubkit.versions.v2022_11_28.models import PullRequest as GitHubKitPullRequest
from githubkit.versions.v2022_11_28.models import PullRequestSimple as GitHubKitPullRequestSimple
from pydantic import BaseModel

from pr_style_mcp.clients.errors.github import MissingTokenError, RequestError, ResourceNotFoundError
from pr_style_mcp.models.pull_request import PullRequestRecord
from pr_style_mcp.models.style import RepositoryInfo

NOT_FOUND_ERROR = 404

GITHUBKIT_RESPONSE_TYPE = BaseModel | Sequence[BaseModel]

GITHUB_TOKEN_ENV_VARS: set[str] = {"GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN"}

DEFAULT_PULL_REQUEST_COUNT = 10
MAX_PER_PAGE = 100

SSH_REMOTE_RE = re.compile(r"git@github\.com:(?P<owner>[^/]+)/(?P<repo>.+?)(\.git)?$")
HTTPS_REMOTE_RE = re.compile(r"github\.com/(?P<owner>[^/]+)/(?P<repo>.+?)(\.git)?$")


def parse_remote_url(remote_url: str) -> RepositoryInfo | None:
    """Get the owner and repository name from an SSH or HTTPS GitHub remote URL."""

    for remote_re in (SSH_REMOTE_RE, HTTPS_REMOTE_RE):
        if match := remote_re.search(remote_url.strip()):
            return RepositoryInfo(owner=match.group("owner"), repo=match.group("repo"))

    return None


def extract_response[T: GITHUBKIT_RESPONSE_TYPE](response: GitHubKitResponse[T], /) -> T:
    """Extract the response from a response."""

    return response.parsed_data


def get_github_token() -> str:
    for env_var in sorted(GITHUB_TOKEN_ENV_VARS):
        if token := os.getenv(env_var):
            return token

    raise MissingTokenError(env_vars=GITHUB_TOKEN_ENV_VARS)


def get_githubkit_client() -> GitHubKit[Any]:
    # Retry server errors up to 3 times
    retry_server_error = RetryServerError()

    # Retry rate limit errors up to 3 times
    retry_rate_limit = RetryRateLimit(max_retry=3)

    retry_chain = RetryChainDecision(
        retry_server_error,
        retry_rate_limit,
    )

    return GitHubKit[TokenAuthStrategy](auth=TokenAuthStrategy(token=get_github_token()), auto_retry=retry_chain)


class GitHubPullRequestClient:
    """Fetches the merged pull requests that a style profile is learned from."""

    githubkit_client: GitHubKit[Any]
    logger: Logger

    def __init__(self, githubkit_client: GitHubKit[Any] | None = None, logger: Logger | None = None):
        self.githubkit_client = githubkit_client or get_githubkit_client()
        self.logger = logger or get_logger(name=__name__)

    @overload
    async def _perform_rest_request[T: GITHUBKIT_RESPONSE_TYPE](
        self,
        action: str,
        error_on_not_found: Literal[False] = False,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> T | None: ...

    @overload
    async def _perform_rest_request[T: GITHUBKIT_RESPONSE_TYPE](
        self,
        action: str,
        error_on_not_found: Literal[True] = True,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> T: ...

    async def _perform_rest_request[T: GITHUBKIT_RESPONSE_TYPE](
        self,
        action: str,
        error_on_not_found: bool = False,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> T | None:
        """Perform a request and extract the response.

        Args:
            action: The action being performed.
            error_on_not_found: Whether to raise an error if the resource is not found.

        Raises:
            ResourceNotFoundError: If the resource is not found and error_on_not_found is True.
            RequestError: If the request fails.
        """

        self.logger.info(f"Performing {action} using {method.__name__} with kwargs {request_args}")

        try:
            response: GitHubKitResponse[T] = await method(**request_args)
        except GitHubKitRequestFailed as e:
            if e.response.status_code == NOT_FOUND_ERROR:
                if error_on_not_found:
                    raise ResourceNotFoundError(action=action, resource=e.request.url.path) from e

                return None

            self.logger.exception(f"RequestFailed error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e
        except GitHubKitGitHubException as e:
            self.logger.exception(f"Error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e

        extracted_response = extract_response(response)

        self.logger.debug(f"Extracted response for {action} using {method.__name__} with kwargs {request_args}")

        return extracted_response

    async def verify_access(self, owner: str, repo: str) -> bool:
        """Whether the repository exists and can be read with the configured token."""

        try:
            repository: GitHubKitFullRepository | None = await self._perform_rest_request(
                action="Get repository",
                error_on_not_found=False,
                method=self.githubkit_client.rest.repos.async_get,
                owner=owner,
                repo=repo,
            )
        except RequestError:
            return False

        return repository is not None

    async def _get_pull_request_details(self, owner: str, repo: str, pull_request_number: int) -> GitHubKitPullRequest | None:
        """Get the detailed pull request, or None if it can not be fetched."""

        try:
            return await self._perform_rest_request(
                action="Get pull request",
                error_on_not_found=False,
                method=self.githubkit_client.rest.pulls.async_get,
                owner=owner,
                repo=repo,
                pull_number=pull_request_number,
            )
        except RequestError as e:
            self.logger.warning(f"Could not fetch details of {owner}/{repo}#{pull_request_number}, using empty statistics: {e}")

        return None

    async def fetch_merged_pull_requests(
        self, owner: str, repo: str, count: int = DEFAULT_PULL_REQUEST_COUNT
    ) -> list[PullRequestRecord]:
        """Fetch up to `count` merged pull requests, most recently updated first.

        Addition, deletion and changed file counts are best effort and are zero for any pull request whose
        details could not be fetched.

        Args:
            owner: The owner of the repository.
            repo: The name of the repository.
            count: The maximum number of merged pull requests to return.
        """

        pull_requests: list[GitHubKitPullRequestSimple] = await self._perform_rest_request(
            action="List pull requests",
            error_on_not_found=True,
            method=self.githubkit_client.rest.pulls.async_list,
            owner=owner,
            repo=repo,
            state="closed",
            sort="updated",
            direction="desc",
            per_page=min(count * 2, MAX_PER_PAGE),
        )

        merged_pull_requests = [pull_request for pull_request in pull_requests if pull_request.merged_at is not None][:count]

        details: list[GitHubKitPullRequest | None] = await asyncio.gather(
            *[
                self._get_pull_request_details(owner=owner, repo=repo, pull_request_number=pull_request.number)
                for pull_request in merged_pull_requests
            ]
        )

        self.logger.info(f"Fetched {len(merged_pull_requests)} merged pull requests from {owner}/{repo}")

        return [
            PullRequestRecord.from_pull_request(pull_request=pull_request, details=pull_request_details)
            for pull_request, pull_request_details in zip(merged_pull_requests, details, strict=True)
        ]
