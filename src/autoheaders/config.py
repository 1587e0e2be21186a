"""
Options for heading numbering, and TOML-based config file loading.

`AutoHeadersConfig` holds the four numbering options. `resolved()` validates them and
returns a `ResolvedConfig` ready for the engine.

Config files are searched for as `.autoheaders.toml`, `autoheaders.toml`, or
`pyproject.toml [tool.autoheaders]`, walking up from the current directory. Values are
merged with CLI flags using three-way precedence: explicit CLI flags > config file >
built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from autoheaders.errors import ConfigurationNotSet, InvalidSidebarFlag
from autoheaders.numbering.level_range import LevelScope, LevelSpec, resolve_levels

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)

# Friendly names accepted for `separator`
SEPARATOR_ALIASES: dict[str, str] = {
    "decimal": ".",
    "dot": ".",
    "dash": "-",
    "hyphen": "-",
    "bracket": ")",
    "parenthesis": ")",
}

DEFAULT_SEPARATOR = "-"
DEFAULT_LEVELS = 6


@dataclass
class AutoHeadersConfig:
    """
    Numbering options.

    - `separator`: character joining label segments (or an alias like "dot").
    - `levels`: max level to label (`3`), or a `{"start": 2, "finish": 4}` range.
    - `sidebar`: `True` numbers the Markdown source, `False` numbers the parsed tree.
    - `debug`: `True` raises on errors, `False` logs them and leaves input unchanged.
    """

    separator: str | None = DEFAULT_SEPARATOR
    levels: LevelSpec | None = DEFAULT_LEVELS
    sidebar: bool = True
    debug: bool = True

    def resolved(self) -> ResolvedConfig:
        """
        Validate options and return them in normalized form.

        Raises:
            ConfigurationNotSet: `separator` or `levels` is missing, or the separator is
                not a single character.
            InvalidSidebarFlag: `sidebar` is not a bool.
            InvalidLevelType, InvalidLevelRange: `levels` is invalid.
        """
        if not self.separator or self.levels is None:
            raise ConfigurationNotSet()
        if not isinstance(self.separator, str):
            raise ConfigurationNotSet(
                f"Config settings not set: separator must be a string, got {self.separator!r}"
            )
        separator = SEPARATOR_ALIASES.get(self.separator, self.separator)
        if len(separator) != 1:
            raise ConfigurationNotSet(
                f"Config settings not set: separator must be a single character, "
                f"got {self.separator!r}"
            )
        if not isinstance(self.sidebar, bool):
            raise InvalidSidebarFlag()
        return ResolvedConfig(
            separator=separator,
            scope=resolve_levels(self.levels),
            sidebar=self.sidebar,
            debug=bool(self.debug),
        )


@dataclass(frozen=True)
class ResolvedConfig:
    """Validated options: a single-character separator and a resolved level scope."""

    separator: str
    scope: LevelScope
    sidebar: bool
    debug: bool


@dataclass
class FileConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    separator: str | None = None
    levels: int | dict[str, Any] | None = None
    sidebar: bool | None = None
    debug: bool | None = None
    # File discovery
    extend_include: list[str] | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".autoheaders.toml", "autoheaders.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "extend-include": "extend_include",
    "extend-exclude": "extend_exclude",
    "respect-gitignore": "respect_gitignore",
}

# Sections whose keys are merged into the top level
_SECTIONS = {"numbering", "file-discovery"}

_VALID_FIELDS = {f.name for f in fields(FileConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.autoheaders.toml` >
    `autoheaders.toml` > `pyproject.toml` (only if it has `[tool.autoheaders]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.autoheaders] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "autoheaders" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> FileConfig:
    """
    Load a `FileConfig` from a TOML file. Supports both standalone
    `autoheaders.toml` / `.autoheaders.toml` and `pyproject.toml` (extracts
    `[tool.autoheaders]`). A malformed file is logged and yields an empty config.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed config file %s: %s", config_path, e)
        return FileConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("autoheaders", {})

    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> FileConfig:
    """Parse a flat or sectioned TOML dict into FileConfig."""
    # Flatten [numbering] and [file-discovery]; other tables (like `levels`) are values
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if key in _SECTIONS and isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value
        else:
            logger.warning("Ignoring unrecognized config key: %s", key)

    return FileConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: FileConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(FileConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
