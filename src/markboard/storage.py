"""File storage for board documents and task detail files."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class FileStorage(Protocol):
    """What the task-file resolver needs from storage.

    Paths are "/"-separated and relative to the storage root.
    create_folder raises FileExistsError if the folder is already there.
    """

    def read_file(self, path: str) -> str: ...

    def write_file(self, path: str, text: str) -> None: ...

    def create_folder(self, path: str) -> None: ...


class LocalStorage:
    """FileStorage over a directory on disk."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Absolute filesystem path for a storage path."""
        return self.root / path

    def read_file(self, path: str) -> str:
        # newline="" keeps CRLF intact; the parsers normalize it themselves
        with open(self.resolve(path), encoding="utf-8", newline="") as f:
            return f.read()

    def write_file(self, path: str, text: str) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("wrote %s (%d chars)", path, len(text))

    def create_folder(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True)
