import os
import tempfile
from logging import Logger
from pathlib import Path

from fastmcp.utilities.logging import get_logger
from pydantic import ValidationError

from pr_style_mcp.models.style import StyleProfile
from pr_style_mcp.style.errors import StyleStoreError

STYLE_PROFILE_FILENAME = ".pr-style.json"

DEFAULT_FILE_MODE = 0o666


def get_umask() -> int:
    umask = os.umask(0)
    _ = os.umask(umask)
    return umask


class StyleStore:
    """Stores the one learned style profile of a working copy as a JSON file at its root."""

    repository_root: Path
    logger: Logger

    def __init__(self, repository_root: Path, logger: Logger | None = None):
        self.repository_root = repository_root
        self.logger = logger or get_logger(name=__name__)

    @property
    def path(self) -> Path:
        return self.repository_root / STYLE_PROFILE_FILENAME

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> StyleProfile | None:
        """Load the stored style profile.

        Returns None if no profile has been saved, or if the stored file can not be read or is not a valid profile."""

        if not self.exists():
            return None

        try:
            return StyleProfile.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Could not read style profile from {self.path}: {e}")
        except ValidationError as e:
            self.logger.warning(f"Ignoring invalid style profile at {self.path}: {e.error_count()} validation errors")

        return None

    def save(self, profile: StyleProfile) -> Path:
        """Replace the stored style profile with `profile`.

        The profile is written to a temporary file next to the destination and then moved into place.

        Raises:
            StyleStoreError: If the profile can not be written.
        """

        content: str = profile.model_dump_json(by_alias=True, indent=2)

        try:
            file_descriptor, temp_name = tempfile.mkstemp(prefix=f"{STYLE_PROFILE_FILENAME}.", suffix=".tmp", dir=self.repository_root)
        except OSError as e:
            raise StyleStoreError(path=self.path, reason=str(e)) from e

        temp_path = Path(temp_name)

        try:
            with os.fdopen(file_descriptor, "w", encoding="utf-8") as temp_file:
                _ = temp_file.write(content + "\n")
            os.chmod(temp_path, DEFAULT_FILE_MODE & ~get_umask())
            os.replace(temp_path, self.path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise StyleStoreError(path=self.path, reason=str(e)) from e

        self.logger.info(f"Saved style profile for {profile.repository_info.full_name} to {self.path}")

        return self.path
