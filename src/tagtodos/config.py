"""Configuration management for tagtodos."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .models import GroupBy, SortDirection

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

CONFIG_DIR = ".tagtodos"
DEFAULT_EXCLUDE_GLOBS = [".git/**", ".obsidian/**", ".trash/**"]

# config key -> environment variable
_ENV_KEYS = {
    "tag": "TAGTODOS_TAG",
    "sort": "TAGTODOS_SORT",
    "group_by": "TAGTODOS_GROUP_BY",
    "ignore_folder": "TAGTODOS_IGNORE_FOLDER",
    "max_workers": "TAGTODOS_MAX_WORKERS",
}


def _find_repo_root(start_dir: Path) -> Path:
    """Find repository root by walking upward looking for .git or pyproject.toml."""
    current_dir = start_dir
    while True:
        if (current_dir / ".git").exists() or (current_dir / "pyproject.toml").exists():
            return current_dir
        parent_dir = current_dir.parent
        if parent_dir == current_dir:
            return start_dir
        current_dir = parent_dir


def _load_repo_config_data(repo_root: Path) -> Optional[dict]:
    """Load .tagtodos/config.toml from the repo root if it exists."""
    config_file = repo_root / CONFIG_DIR / "config.toml"
    if not config_file.exists():
        return None
    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Ignoring malformed {config_file}: {e}")
        return None


def resolve_vault_root(cli_vault_path: Optional[str], repo_config: Optional[dict]) -> Path:
    """Resolve the vault root with the following precedence:

    1. CLI --vault option
    2. ``vault_root`` in .tagtodos/config.toml
    3. TAGTODOS_VAULT environment variable
    4. Current working directory

    Raises:
        FileNotFoundError: If the resolved path is missing or not a directory
    """
    if cli_vault_path:
        source, raw = "--vault", cli_vault_path
    elif repo_config and isinstance(repo_config.get("vault_root"), str):
        source, raw = f"{CONFIG_DIR}/config.toml", repo_config["vault_root"]
    elif os.environ.get("TAGTODOS_VAULT"):
        source, raw = "TAGTODOS_VAULT", os.environ["TAGTODOS_VAULT"]
    else:
        source, raw = "current directory", str(Path.cwd())

    vault_path = Path(raw).expanduser().resolve()
    if not vault_path.exists():
        raise FileNotFoundError(f"Vault path from {source} does not exist: {vault_path}")
    if not vault_path.is_dir():
        raise FileNotFoundError(f"Vault path from {source} is not a directory: {vault_path}")
    return vault_path


class TodoConfig(BaseModel):
    """Configuration for collecting and presenting todos."""

    vault_path: Path = Field(default_factory=Path.cwd)
    tag: str = Field(default="", description="Main tag to filter on; empty disables filtering")
    sort: SortDirection = Field(default=SortDirection.NEW_TO_OLD)
    group_by: GroupBy = Field(default=GroupBy.PAGE)
    ignore_folder: str = Field(default="", description="Path segment to skip; empty disables")
    exclude_globs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_GLOBS))
    max_workers: int = Field(default=8, ge=1)

    model_config = {"frozen": True}

    @field_validator("tag")
    @classmethod
    def _strip_hash(cls, value: str) -> str:
        return value.strip().lstrip("#")

    @classmethod
    def from_env(cls, cli_vault_path: Optional[str] = None, **overrides: Any) -> "TodoConfig":
        """Load configuration.

        Each setting comes from, in order: ``overrides`` (CLI options, None means
        unset), the ``[todos]`` table of .tagtodos/config.toml, TAGTODOS_*
        environment variables, then the field default.

        Raises:
            FileNotFoundError: If the vault path cannot be resolved
            ValueError: If a setting has an invalid value
        """
        repo_config = _load_repo_config_data(_find_repo_root(Path.cwd()))
        vault_path = resolve_vault_root(cli_vault_path, repo_config)

        todos_section = (repo_config or {}).get("todos", {})
        if not isinstance(todos_section, dict):
            raise ValueError(f"Invalid config: [todos] in {CONFIG_DIR}/config.toml must be a table")

        values: dict[str, Any] = {"vault_path": vault_path}
        for key, env_name in _ENV_KEYS.items():
            if overrides.get(key) is not None:
                values[key] = overrides[key]
            elif key in todos_section:
                values[key] = todos_section[key]
            elif os.environ.get(env_name):
                values[key] = os.environ[env_name]

        exclude_globs = todos_section.get("exclude_globs")
        if exclude_globs is not None:
            if not isinstance(exclude_globs, list) or not all(isinstance(x, str) for x in exclude_globs):
                raise ValueError("Invalid config: [todos].exclude_globs must be a list of strings")
            values["exclude_globs"] = exclude_globs

        return cls(**values)
