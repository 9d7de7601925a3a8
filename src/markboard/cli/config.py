"""Handlers for 'markboard config' commands."""

from pathlib import Path

from markboard.cli._common import error, output_json, output_result
from markboard.git import MARKBOARD_DEFAULTS, is_git_repo, read_config, write_config_key

_BOOL_WORDS = {"true", "false", "yes", "no", "1", "0"}


def config_show(args) -> int:
    """Show the effective [markboard] settings."""
    config = read_config(Path(args.repo).resolve())

    if args.json:
        output_json(config)
    else:
        for key, value in config.items():
            shown = ",".join(value) if isinstance(value, list) else str(value).lower()
            print(f"{key.replace('_', '-')} = {shown}")

    return 0


def config_set(args) -> int:
    """Write one [markboard] key to the repository's git config."""
    repo_path = Path(args.repo).resolve()
    key = args.key.replace("_", "-")

    if key not in MARKBOARD_DEFAULTS:
        error(f"Unknown key '{args.key}'. Known: {', '.join(MARKBOARD_DEFAULTS)}", args.json)
    if isinstance(MARKBOARD_DEFAULTS[key], bool) and args.value.lower() not in _BOOL_WORDS:
        error(f"'{key}' takes true or false, not '{args.value}'", args.json)
    if not is_git_repo(repo_path):
        error(f"{repo_path} is not inside a git repository", args.json)

    write_config_key(repo_path, key.replace("-", "_"), args.value)
    value = read_config(repo_path)[key.replace("-", "_")]

    output_result(
        {"key": key, "value": value},
        f"{key} = {args.value}",
        args.json,
    )
    return 0
