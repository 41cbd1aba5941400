"""blogpage - Permalinks for blog page articles and their attached files."""

__version__ = "0.1.0"
__title__ = "BlogPage"
__license__ = "MIT"

from .models import (
    ArticleNotFoundError,
    BlogPageError,
    PatternConfigError,
    PatternOptions,
    PermalinkDataError,
    Resource,
    ResourceKind,
    SourceFileError,
)
from .pattern import CompiledPattern, compile_pattern
from .resolver import PermalinkResolver
from .sitemap import Sitemap

__all__ = [
    "ArticleNotFoundError",
    "BlogPageError",
    "CompiledPattern",
    "PatternConfigError",
    "PatternOptions",
    "PermalinkDataError",
    "PermalinkResolver",
    "Resource",
    "ResourceKind",
    "Sitemap",
    "SourceFileError",
    "compile_pattern",
    "__version__",
    "__title__",
]
