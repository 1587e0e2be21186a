"""
Discovery of Markdown files under documentation directories, honoring `.gitignore`,
an `.autoheadersignore` file and default exclusions.

Usage::

    from autoheaders.file_resolver import FileResolver, FileResolverConfig

    resolver = FileResolver(FileResolverConfig(extend_exclude=["drafts/"]))
    files = resolver.resolve(["docs", "README.md"])
"""

from autoheaders.file_resolver.resolver import FileResolver
from autoheaders.file_resolver.types import DEFAULT_EXCLUDES, DEFAULT_INCLUDES, FileResolverConfig

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "FileResolver",
    "FileResolverConfig",
]
