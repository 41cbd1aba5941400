"""Permalink resolution for blog page articles and their attached files."""

import re
from typing import Any, Callable, Iterable, List, Optional

from .logger import logger
from .models import (
    ArticleNotFoundError,
    PatternConfigError,
    PatternOptions,
    PermalinkDataError,
    Resource,
    ResourceKind,
)
from .pattern import PLACEHOLDER_RE, CompiledPattern, compile_pattern
from .utils import normalize_path, parameterize

ResourceLookup = Callable[[str], Optional[Resource]]


class PermalinkResolver:
    """A store of all the blog articles of a site.

    Rewrites the destination path of every resource matching the sources
    pattern to its permalink, and moves files attached to an article next
    to the article's permalink.
    """

    def __init__(
        self,
        options: PatternOptions,
        find_resource_by_path: ResourceLookup,
        preview: bool = False,
        index_file: str = "index.html",
        controller: Optional[Any] = None,
        normalize: Callable[[str], str] = normalize_path,
    ):
        """Initialize resolver and compile the sources pattern.

        Args:
            options: Sources pattern and permalink template
            find_resource_by_path: Host lookup of a resource by source path
            preview: Also resolve unpublished articles
            index_file: Index file name stripped from article permalinks
                before appending an attached file's subpath
            controller: Optional object attached to every article
            normalize: Path canonicalization applied to destinations

        Raises:
            PatternConfigError: If the options cannot be compiled, or the
                permalink has no suffix to replace with an attached file's subpath
        """
        self.options = options
        self.pattern: CompiledPattern = compile_pattern(options)
        self.find_resource_by_path = find_resource_by_path
        self.preview = preview
        self.index_file = index_file
        self.controller = controller
        self.normalize = normalize

        self._articles: List[Resource] = []
        self._subdir_suffix_re = re.compile(
            rf"(/{re.escape(index_file)}$)|(\.[^./]+$)|(/$)"
        )
        if not self._subdir_suffix_re.search(options.permalink):
            raise PatternConfigError(
                f"Permalink {options.permalink!r} must end in '/', a file extension "
                f"or '/{index_file}' so attached files can be placed under it"
            )

    def pages(self) -> List[Resource]:
        """All accepted articles, sorted by descending priority."""
        return sorted(self._articles, key=lambda article: article.priority, reverse=True)

    def lookup_article(self, path: str) -> Optional[Resource]:
        """Return the article at the given source path, or None if there is none."""
        resource = self.find_resource_by_path(str(path))
        if resource is not None and resource.is_article:
            return resource
        return None

    def manipulate_resource_list(self, resources: Iterable[Resource]) -> List[Resource]:
        """Update blog articles' destination paths to be their permalinks.

        Args:
            resources: Sitemap resources, in sitemap order

        Returns:
            The same resources, in the same order

        Raises:
            ArticleNotFoundError: If an attached file has no owning article
            PermalinkDataError: If an article lacks a permalink field
        """
        self._articles = []
        used_resources = []
        skipped = 0

        for resource in resources:
            if self.pattern.match_article(resource.path):
                self._mark_article(resource)

                if self._is_hidden(resource):
                    logger.debug(f"Skipping unpublished article {resource.path}")
                    skipped += 1
                else:
                    resource.destination_path = self.normalize(
                        self.parse_permalink_options(resource)
                    )
                    logger.debug(f"Article {resource.path} -> {resource.destination_path}")
                    self._articles.append(resource)

            else:
                match = self.pattern.match_subdir(resource.path)
                if match:
                    if self._resolve_attached(resource, match.groups()):
                        logger.debug(f"Attached {resource.path} -> {resource.destination_path}")
                    else:
                        skipped += 1

            used_resources.append(resource)

        logger.info(
            f"Resolved {len(self._articles)} articles"
            + (f", skipped {skipped} unpublished resources" if skipped else "")
        )
        return used_resources

    def _resolve_attached(self, resource: Resource, captures: tuple) -> bool:
        """Place a file attached to an article under the article's permalink.

        Returns:
            False if the owning article is unpublished and was skipped
        """
        article_path = self.pattern.article_path(captures)
        article = self.find_resource_by_path(article_path)
        if article is None:
            raise ArticleNotFoundError(resource.path, article_path)
        self._mark_article(article)

        if self._is_hidden(article):
            logger.debug(f"Skipping {resource.path} of unpublished article {article.path}")
            return False

        # The subdir path is the article path with the index file name
        # or file extension stripped off.
        subpath = self.pattern.subpath(captures)
        destination = self._subdir_suffix_re.sub(
            lambda _: subpath, self.parse_permalink_options(article), count=1
        )
        resource.destination_path = self.normalize(destination)
        return True

    def _mark_article(self, resource: Resource) -> None:
        resource.kind = ResourceKind.ARTICLE
        if self.controller is not None:
            resource.controller = self.controller

    def _is_hidden(self, resource: Resource) -> bool:
        return not (self.preview or resource.published)

    def parse_permalink_options(self, resource: Resource) -> str:
        """Fill the permalink template in for a resource.

        Args:
            resource: Article resource

        Returns:
            Permalink with every placeholder substituted (not normalized)

        Raises:
            PermalinkDataError: If a custom placeholder has no value
        """

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            if name == "title":
                return resource.slug
            value = resource.data.get(name)
            if value is None:
                raise PermalinkDataError(resource.path, name)
            return parameterize(value)

        return PLACEHOLDER_RE.sub(substitute, self.options.permalink)

    def custom_permalink_components(self) -> List[str]:
        return [name for name in self.permalink_url_components() if name != "title"]

    def permalink_url_components(self) -> List[str]:
        return PLACEHOLDER_RE.findall(self.options.permalink)

    def __repr__(self) -> str:
        return f"<PermalinkResolver: {self._articles!r}>"
