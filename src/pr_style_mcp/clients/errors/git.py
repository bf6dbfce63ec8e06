from pathlib import Path


class WorkingCopyError(Exception):
    """The local git working copy could not be used."""

    def __init__(self, message: str, path: Path | None = None):
        msg = f"{message} ({path})" if path else message
        super().__init__(msg)


class NotAGitRepositoryError(WorkingCopyError):
    """The path is not inside a git repository."""

    def __init__(self, path: Path):
        super().__init__(message="Not a git repository", path=path)


class MissingRemoteError(WorkingCopyError):
    """The repository has neither an `origin` nor an `upstream` remote."""

    def __init__(self, path: Path):
        super().__init__(message="No `origin` or `upstream` remote is configured", path=path)
