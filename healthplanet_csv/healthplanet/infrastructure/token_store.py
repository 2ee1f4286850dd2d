"""File-backed credential store."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ...errors import ParseError
from ...models.token import Credential

logger = logging.getLogger(__name__)


class JsonFileTokenStore:
    """Persist the credential as pretty-printed JSON.

    Writes go to a temporary file in the target directory which is then
    renamed over the token file, so a reader sees either the old or the new
    credential and never a truncated one. There is no locking: only one
    process may write the file at a time.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Optional[Credential]:
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"Token file {self._path} could not be read: {exc}") from exc

        try:
            return Credential.model_validate_json(content)
        except ValidationError as exc:
            raise ParseError(f"Token file {self._path} is malformed") from exc

    def save(self, credential: Credential) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as stream:
                stream.write(credential.to_json())
                stream.flush()
                os.fsync(stream.fileno())
            os.chmod(temp_path, 0o600)
            os.replace(temp_path, self._path)
        except BaseException:
            Path(temp_path).unlink(missing_ok=True)
            raise
        logger.debug("Saved credential to %s", self._path)


__all__ = ["JsonFileTokenStore"]
