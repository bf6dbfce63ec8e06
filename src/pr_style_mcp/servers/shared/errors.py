ExtraInfoType = dict[str, str | None]


class ServerError(Exception):
    """A request error from the PR Style server."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class MissingInputError(ServerError):
    """A required tool argument was missing or empty."""

    def __init__(self, *names: str):
        super().__init__(message=f"{' and '.join(name.capitalize() for name in names)} {'are' if len(names) > 1 else 'is'} required")


class RepositoryAccessError(ServerError):
    """The GitHub repository could not be identified or accessed."""

    def __init__(self, message: str, remote_url: str | None = None, repository: str | None = None):
        super().__init__(message=message, extra_info={"remote_url": remote_url, "repository": repository})


class StyleNotLearnedError(ServerError):
    """No style profile has been learned for the repository yet."""

    def __init__(self):
        super().__init__(message="No learned style. Run `learn_pr_style` first.")
