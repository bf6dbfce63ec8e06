from typing import Annotated

from pydantic import Field

COUNT = Annotated[int, Field(description="Number of merged PRs to analyze.", ge=1, le=100)]
BASE_BRANCH = Annotated[str, Field(description="Base branch to compare the current branch against.")]
INCLUDE_DIFF = Annotated[bool, Field(description="Whether to include the code diff in the context.")]
TITLE = Annotated[str, Field(description="The PR title.")]
BODY = Annotated[str, Field(description="The PR description body (markdown).")]
