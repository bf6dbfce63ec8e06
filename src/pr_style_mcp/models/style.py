from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class TitlePattern(str, Enum):
    """The convention followed by a majority of pull request titles."""

    CONVENTIONAL = "conventional"
    TICKET_PREFIX = "ticket-prefix"
    NONE = "none"


class TicketPattern(str, Enum):
    """The regular expression describing the ticket identifiers mentioned in pull requests."""

    JIRA = r"JIRA-\d+"
    GENERIC = r"[A-Z]{2,}-\d+"
    NONE = "none"


class Tone(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    MIXED = "mixed"


class RepositoryInfo(BaseModel):
    """The GitHub repository a style profile belongs to."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(description="The owner of the repository.")
    repo: str = Field(description="The name of the repository.")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class StyleProfile(BaseModel):
    """The pull request writing conventions learned from a repository's merged pull requests.

    Serialized with camelCase keys. The `NONE` members of `TitlePattern` and `TicketPattern`
    are stored as `null`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    sections: tuple[str, ...] = Field(description="Markdown headings recurring across pull request bodies, most common first.")
    uses_checkboxes: bool = Field(description="Whether any body contains a markdown checkbox.")
    uses_bullet_points: bool = Field(description="Whether any body contains a bulleted list.")
    uses_numbered_lists: bool = Field(description="Whether any body contains a numbered list.")
    title_pattern: TitlePattern = Field(description="The convention followed by most titles.")
    title_prefix_examples: tuple[str, ...] = Field(description="The conventional commit prefixes seen in titles.")
    average_body_length: int = Field(ge=0, description="The average number of characters in a non-empty body.")
    average_line_count: int = Field(ge=0, description="The average number of lines in a non-empty body.")
    mentions_tickets: bool = Field(description="Whether any body mentions a ticket identifier.")
    ticket_pattern: TicketPattern = Field(description="The shape of the ticket identifiers mentioned.")
    tone: Tone = Field(description="The register of the pull request bodies.")
    uses_first_person: bool = Field(description="Whether any body is written in the first person.")
    uses_emojis: bool = Field(description="Whether any title or body contains an emoji.")
    always_includes: tuple[str, ...] = Field(description="Phrases that appear in a majority of bodies.")
    sample_count: int = Field(ge=1, description="The number of pull requests the profile was learned from.")
    last_updated: datetime = Field(description="When the profile was learned.")
    repository_info: RepositoryInfo = Field(description="The repository the profile belongs to.")

    @field_validator("title_pattern", mode="before")
    @classmethod
    def validate_title_pattern(cls, value: Any) -> Any:  # pyright: ignore[reportAny]
        return TitlePattern.NONE if value is None else value

    @field_validator("ticket_pattern", mode="before")
    @classmethod
    def validate_ticket_pattern(cls, value: Any) -> Any:  # pyright: ignore[reportAny]
        return TicketPattern.NONE if value is None else value

    @field_serializer("title_pattern", "ticket_pattern")
    def serialize_pattern(self, value: TitlePattern | TicketPattern) -> str | None:
        if value in (TitlePattern.NONE, TicketPattern.NONE):
            return None
        return value.value
