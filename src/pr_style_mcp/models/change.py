from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ChangeData(BaseModel):
    """The changes on the current branch of a working copy."""

    model_config = ConfigDict(frozen=True)

    repository_root: Path = Field(description="The root directory of the working copy.")
    branch_name: str = Field(description="The name of the checked out branch, empty when HEAD is detached.")
    commit_messages: tuple[str, ...] = Field(default=(), description="The subject lines of the commits on the branch.")
    change_summary: str = Field(default="", description="The `git diff --stat` summary of the changes.")
    diff: str = Field(default="", description="The full diff of the changes.")
