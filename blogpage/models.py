"""Data models for blogpage."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union


class BlogPageError(Exception):
    """Base class for blogpage errors."""


class PatternConfigError(BlogPageError, ValueError):
    """Raised when a sources pattern or permalink template is unusable."""


class PermalinkDataError(PatternConfigError):
    """Raised when a permalink placeholder has no value in the resource data."""

    def __init__(self, resource_path: str, field_name: str):
        self.resource_path = resource_path
        self.field_name = field_name
        super().__init__(
            f"Permalink field ':{field_name}' is missing from the data of {resource_path}"
        )


class ArticleNotFoundError(BlogPageError, LookupError):
    """Raised when an attached file has no owning article in the sitemap."""

    def __init__(self, resource_path: str, article_path: str):
        self.resource_path = resource_path
        self.article_path = article_path
        super().__init__(f"Article for {resource_path} not found (expected {article_path})")


class SourceFileError(BlogPageError):
    """Raised when a source file cannot be read or its front matter parsed."""

    def __init__(self, file_path: Path, reason: str):
        self.file_path = file_path
        super().__init__(f"Could not load {file_path}: {reason}")


class ResourceKind(Enum):
    """How the resolver classified a resource."""
    PLAIN = "plain"
    ARTICLE = "article"


@dataclass(frozen=True)
class PatternOptions:
    """Configured source pattern and permalink template of a blog."""

    sources: str = "/:title.html"
    permalink: str = "/:title/"

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        for name in ("sources", "permalink"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise PatternConfigError(f"{name} must be a non-empty string, got {value!r}")


@dataclass
class Resource:
    """A sitemap entry handed to the resolver by the host."""

    path: str
    slug: str
    data: Dict[str, Any] = field(default_factory=dict)
    published: bool = True
    priority: Union[int, float] = 0
    destination_path: Optional[str] = None
    kind: ResourceKind = ResourceKind.PLAIN
    controller: Optional[Any] = None
    source_file: Optional[Path] = None

    @property
    def is_article(self) -> bool:
        return self.kind == ResourceKind.ARTICLE
