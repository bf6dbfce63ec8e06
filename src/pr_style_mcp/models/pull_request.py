from datetime import datetime
from typing import Self

from githubkit.versions.v2022_11_28.models import PullRequest as GitHubKitPullRequest
from githubkit.versions.v2022_11_28.models import PullRequestSimple as GitHubKitPullRequestSimple
from pydantic import BaseModel, ConfigDict, Field


class PullRequestRecord(BaseModel):
    """A merged pull request used as a sample for style learning."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(description="The number of the pull request.")
    title: str = Field(description="The title of the pull request.")
    body: str = Field(default="", description="The body of the pull request, empty if it has none.")
    merged_at: datetime | None = Field(default=None, description="The date and time the pull request was merged.")
    author: str = Field(default="unknown", description="The login of the pull request author.")
    labels: tuple[str, ...] = Field(default=(), description="The names of the labels on the pull request.")
    additions: int = Field(default=0, description="The number of added lines.")
    deletions: int = Field(default=0, description="The number of deleted lines.")
    changed_files: int = Field(default=0, description="The number of changed files.")

    @classmethod
    def from_pull_request(cls, pull_request: GitHubKitPullRequestSimple, details: GitHubKitPullRequest | None = None) -> Self:
        """Build a record from a listed pull request and, when available, its detailed counterpart."""

        return cls(
            number=pull_request.number,
            title=pull_request.title,
            body=pull_request.body or "",
            merged_at=pull_request.merged_at,
            author=pull_request.user.login if pull_request.user else "unknown",
            labels=tuple(label.name for label in pull_request.labels if label.name),
            additions=details.additions if details else 0,
            deletions=details.deletions if details else 0,
            changed_files=details.changed_files if details else 0,
        )
