"""Git config and commits for markboard documents."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

CONFIG_SECTION = "markboard"

MARKBOARD_DEFAULTS = {
    "board-names": "todo.md,to-do.md",
    "tasks-dir": ".tasks",
    "auto-commit": False,
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(git_key: str, raw: str) -> Any:
    """Type-coerce markboard values using the defaults' types."""
    if git_key == "board-names":
        return [name.strip().lower() for name in raw.split(",") if name.strip()]
    default = MARKBOARD_DEFAULTS.get(git_key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    return raw


def find_repo(path: str | Path) -> Repo | None:
    """The repository containing path, or None outside git."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    return find_repo(path) is not None


def read_config(path: str | Path) -> dict[str, Any]:
    """Read the [markboard] section with defaults merged in.

    Keys come back python-style (underscores). Outside a repository this is
    just the defaults.
    """
    config = {_python_key(k): _coerce_value(k, str(v)) for k, v in MARKBOARD_DEFAULTS.items()}
    repo = find_repo(path)
    if repo is None:
        return config
    reader = repo.config_reader()
    if reader.has_section(CONFIG_SECTION):
        for git_k, raw in reader.items(CONFIG_SECTION):
            config[_python_key(git_k)] = _coerce_value(git_k, raw)
    return config


def write_config_key(path: str | Path, key: str, value) -> None:
    """Write one key to repository git config. key is python-style."""
    repo = find_repo(path)
    if repo is None:
        raise ValueError(f"{path} is not inside a git repository")
    git_k = _git_key(key)
    if isinstance(value, (list, tuple)):
        value = ",".join(value)
    writer = repo.config_writer("repository")
    try:
        if isinstance(value, bool):
            writer.set_value(CONFIG_SECTION, git_k, str(value).lower())
        else:
            writer.set_value(CONFIG_SECTION, git_k, str(value))
    finally:
        writer.release()


def commit_files(path: str | Path, files: list[str | Path], message: str) -> str:
    """Stage files and commit them. Returns the new commit hash."""
    repo = find_repo(path)
    if repo is None:
        raise ValueError(f"{path} is not inside a git repository")
    root = Path(repo.working_tree_dir)
    relative = [str(Path(f).resolve().relative_to(root.resolve())) for f in files]
    repo.index.add(relative)
    commit = repo.index.commit(message)
    return commit.hexsha
