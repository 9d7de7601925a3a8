"""A markdown file held in memory for one editing session."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from markboard.board import TodoBoard, is_board_file, parse_board
from markboard.git import commit_files, find_repo, read_config
from markboard.storage import LocalStorage

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """Board text plus where it lives.

    text is the latest known snapshot; every save replaces it wholesale.
    """

    storage: LocalStorage
    path: str
    text: str = ""
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def board(self) -> TodoBoard:
        return parse_board(self.text)

    @property
    def is_board(self) -> bool:
        """Whether this file opens as a board by default."""
        return is_board_file(self.path, self.config.get("board_names", ()))

    def reload(self) -> str:
        self.text = self.storage.read_file(self.path)
        return self.text

    def save(self, text: str) -> None:
        self.storage.write_file(self.path, text)
        self.text = text

    def commit(self, paths: list[str], message: str) -> str:
        """Commit storage paths to git. Returns the commit hash."""
        return commit_files(self.storage.root, [self.storage.resolve(p) for p in paths], message)


def storage_root(file: Path) -> Path:
    """Repository working tree containing file, or its folder."""
    repo = find_repo(file.parent)
    if repo is not None and repo.working_tree_dir:
        return Path(repo.working_tree_dir).resolve()
    return file.parent


def open_document(file: str | Path) -> Document:
    """Open a file, rooting storage at its repository when there is one.

    Raises OSError if the file can't be read.
    """
    resolved = Path(file).resolve()
    root = storage_root(resolved)
    doc = Document(
        storage=LocalStorage(root),
        path=resolved.relative_to(root).as_posix(),
        config=read_config(root),
    )
    doc.reload()
    logger.debug("opened %s under %s", doc.path, root)
    return doc
