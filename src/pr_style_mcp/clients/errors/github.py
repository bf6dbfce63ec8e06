ExtraInfoType = dict[str, str | None]


class ClientError(Exception):
    """An error from the GitHub pull request client."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class MissingTokenError(ClientError):
    """No GitHub token is available in the environment."""

    def __init__(self, env_vars: set[str]):
        super().__init__(message=f"{' or '.join(sorted(env_vars))} must be set")


class RequestError(ClientError):
    """A request error from the GitHub pull request client."""

    def __init__(self, action: str, message: str | None = None, extra_info: ExtraInfoType | None = None):
        if not extra_info:
            extra_info = {}
        super().__init__(message="A request error occured.", extra_info={"action": action, "message": message, **extra_info})


class ResourceNotFoundError(RequestError):
    """A not found error from the GitHub pull request client."""

    def __init__(self, action: str, resource: str | None = None, extra_info: ExtraInfoType | None = None):
        if not extra_info:
            extra_info = {}
        super().__init__(
            action=action,
            message="The resource could not be found.",
            extra_info={"resource": resource, **extra_info},
        )
