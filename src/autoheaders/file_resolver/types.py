"""Configuration for Markdown file discovery."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_INCLUDES: list[str] = ["*.md"]

# Gitignore syntax; directory patterns end with `/` and are pruned during the walk.
DEFAULT_EXCLUDES: list[str] = [
    ".git/",
    ".hg/",
    ".svn/",
    ".venv/",
    "venv/",
    "__pycache__/",
    ".tox/",
    "*.egg-info/",
    "build/",
    "dist/",
    "node_modules/",
    "_book/",
    "site/",
    ".idea/",
    ".vscode/",
]


@dataclass
class FileResolverConfig:
    """
    `exclude=None` means use `DEFAULT_EXCLUDES`; providing a list replaces them entirely.
    `ignore_file` is looked up from each walked directory upward.
    """

    ignore_file: str = ".autoheadersignore"
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    extend_include: list[str] = field(default_factory=list)
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True

    @property
    def effective_include(self) -> list[str]:
        return self.include + self.extend_include

    @property
    def effective_exclude(self) -> list[str]:
        base = self.exclude if self.exclude is not None else list(DEFAULT_EXCLUDES)
        return base + self.extend_exclude
