from pathlib import Path


class StyleError(Exception):
    """An error from the style engine."""


class EmptyCorpusError(StyleError):
    """A style profile was requested for zero pull requests."""

    def __init__(self, owner: str, repo: str):
        super().__init__(f"No merged pull requests found for {owner}/{repo}")


class StyleStoreError(StyleError):
    """The style profile could not be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not save style profile to {path}: {reason}")
