from textwrap import dedent
from typing import Self

from pydantic import BaseModel, Field


class PromptSection(BaseModel):
    title: str | None = Field(default=None, description="The title of the section, untitled sections render their text only.")
    level: int = Field(default=1, description="The level of the section.")
    section: str = Field(description="The section of the prompt.")

    def render_text(self) -> str:
        if self.title is None:
            return self.section

        return f"{'#' * self.level} {self.title}\n{self.section}"


class PromptBuilder(BaseModel):
    sections: list[PromptSection] = Field(default_factory=list, description="The sections of the prompt.")

    def add_text_section(self, title: str | None, text: str | list[str], level: int = 1) -> Self:
        if not isinstance(text, list):
            text = [text]

        text_block = "\n".join([dedent(text).strip("\n") for text in text])

        self.sections.append(PromptSection(title=title, level=level, section=text_block))

        return self

    def add_list_section(self, title: str, items: list[str], level: int = 1) -> Self:
        list_block = "\n".join(f"- {item}" for item in items)

        self.sections.append(PromptSection(title=title, level=level, section=list_block))

        return self

    def add_code_section(self, title: str, code: str, language: str = "", level: int = 1) -> Self:
        code_block = f"```{language}\n{code}\n```"

        self.sections.append(PromptSection(title=title, level=level, section=code_block))

        return self

    def add_prompt_section(self, section: PromptSection) -> Self:
        self.sections.append(section)
        return self

    def render_text(self) -> str:
        return "\n\n".join(section.render_text() for section in self.sections)
