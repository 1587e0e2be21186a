"""
Resolves a mix of files, directories and glob patterns into a sorted, deduplicated
list of Markdown files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

from autoheaders.file_resolver.types import FileResolverConfig

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


def _read_spec(path: Path) -> pathspec.GitIgnoreSpec | None:
    """Compile a gitignore-style file, or `None` if it is missing or has no patterns."""
    if not path.is_file():
        return None
    lines = [
        line
        for line in path.read_text().splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def find_ignore_file(name: str, start_dir: Path) -> pathspec.GitIgnoreSpec | None:
    """Walk up from `start_dir` and compile the first `name` file found."""
    current = start_dir.resolve()
    while True:
        candidate = current / name
        if candidate.is_file():
            return _read_spec(candidate)
        if current.parent == current:
            return None
        current = current.parent


class FileResolver:
    """
    Finds files matching the include patterns, pruning excluded and gitignored
    directories while walking.
    """

    def __init__(self, config: FileResolverConfig) -> None:
        self._config: FileResolverConfig = config
        self._include_spec: pathspec.GitIgnoreSpec = pathspec.GitIgnoreSpec.from_lines(
            config.effective_include
        )
        self._exclude_spec: pathspec.GitIgnoreSpec = pathspec.GitIgnoreSpec.from_lines(
            config.effective_exclude
        )
        self._gitignore_cache: dict[Path, pathspec.GitIgnoreSpec | None] = {}

    def resolve(self, paths: Sequence[str | Path]) -> list[Path]:
        """
        Resolve input paths:
        - existing file: included as is
        - directory: walked recursively with all filters applied
        - glob pattern: expanded, then filtered by the include patterns
        - anything else: `FileNotFoundError`
        """
        seen: set[Path] = set()
        result: list[Path] = []

        def add(found: Iterable[Path]) -> None:
            for path in found:
                resolved = path.resolve()
                if resolved not in seen:
                    seen.add(resolved)
                    result.append(resolved)

        for raw_path in paths:
            p = Path(raw_path)
            if p.is_file():
                add([p])
            elif p.is_dir():
                add(self._walk_directory(p))
            elif any(c in str(raw_path) for c in _GLOB_CHARS):
                add(self._expand_glob(str(raw_path)))
            else:
                raise FileNotFoundError(f"Path not found: {raw_path}")

        result.sort()
        return result

    def _walk_directory(self, root: Path) -> Iterable[Path]:
        tool_ignore = find_ignore_file(self._config.ignore_file, root)

        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root)
            specs = self._ignore_chain(current, root)
            if tool_ignore is not None:
                specs.append(tool_ignore)

            # Prune in place so excluded directories are never entered
            dirnames[:] = sorted(
                d for d in dirnames if not self._is_dir_excluded(d, rel_dir / d, specs)
            )

            for filename in sorted(filenames):
                if not self._include_spec.match_file(filename):
                    continue
                rel_file = str(rel_dir / filename)
                if any(spec.match_file(rel_file) for spec in specs):
                    logger.debug("Skipping ignored file: %s", current / filename)
                    continue
                yield current / filename

    def _is_dir_excluded(
        self, dirname: str, rel_path: Path, specs: list[pathspec.GitIgnoreSpec]
    ) -> bool:
        candidates = (dirname + "/", f"{rel_path}/")
        if any(self._exclude_spec.match_file(c) for c in candidates):
            return True
        return any(spec.match_file(c) for spec in specs for c in candidates)

    def _ignore_chain(self, directory: Path, walk_root: Path) -> list[pathspec.GitIgnoreSpec]:
        """Gitignore specs from `walk_root` down to `directory`, if enabled."""
        if not self._config.respect_gitignore:
            return []
        specs: list[pathspec.GitIgnoreSpec] = []
        current = walk_root
        for part in ("", *directory.relative_to(walk_root).parts):
            current = current / part if part else current
            if current not in self._gitignore_cache:
                self._gitignore_cache[current] = _read_spec(current / ".gitignore")
            spec = self._gitignore_cache[current]
            if spec is not None:
                specs.append(spec)
        return specs

    def _expand_glob(self, pattern: str) -> Iterable[Path]:
        parts = Path(pattern).parts
        root = Path(".")
        glob_part = pattern
        for i, part in enumerate(parts):
            if any(c in part for c in _GLOB_CHARS):
                root = Path(*parts[:i]) if i > 0 else Path(".")
                glob_part = str(Path(*parts[i:]))
                break

        for path in root.glob(glob_part):
            if path.is_file() and self._include_spec.match_file(path.name):
                yield path
