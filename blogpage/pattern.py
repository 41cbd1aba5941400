"""Compilation of a blog's sources pattern into path matchers.

A sources pattern such as ``/:year/:month/:title.html`` describes where
article files live. It compiles into two anchored regular expressions:

* the primary matcher, which recognizes the article files themselves;
* the subdir matcher, which recognizes files nested under an article's own
  directory (``2020/05/post/image.png``), with the extension of the article
  file replaced by a group capturing the remaining subpath.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .models import PatternConfigError, PatternOptions

PLACEHOLDER_RE = re.compile(r":([A-Za-z0-9_]+)")
EXTENSION_RE = re.compile(r"\.[^./]+$")
SEGMENT_GROUP = r"([^/]+)"
SUBPATH_GROUP = r"(/.*)$"
PATH_KEY = "path"


@dataclass(frozen=True)
class CompiledPattern:
    """Matchers and capture bookkeeping derived from a sources pattern."""

    sources: str
    primary_matcher: re.Pattern
    subdir_matcher: re.Pattern
    capture_index_by_name: Dict[str, int] = field(default_factory=dict)

    @property
    def placeholders(self) -> List[str]:
        """Placeholder names of the sources pattern, in capture order."""
        return [name for name in self.capture_index_by_name if name != PATH_KEY]

    def match_article(self, path: str) -> Optional[re.Match]:
        return self.primary_matcher.match(path.lstrip("/"))

    def match_subdir(self, path: str) -> Optional[re.Match]:
        return self.subdir_matcher.match(path.lstrip("/"))

    def article_path(self, captures: Tuple[str, ...]) -> str:
        """Rebuild the source path of the article owning a subdir match.

        Args:
            captures: Groups of a subdir matcher match

        Returns:
            The sources pattern with every placeholder filled in
        """

        def fill(match: re.Match) -> str:
            index = self.capture_index_by_name.get(match.group(1))
            if index is None:
                return match.group(0)
            return captures[index]

        return PLACEHOLDER_RE.sub(fill, self.sources)

    def subpath(self, captures: Tuple[str, ...]) -> str:
        return captures[self.capture_index_by_name[PATH_KEY]]


def compile_pattern(options: PatternOptions) -> CompiledPattern:
    """Compile the sources pattern of the given options.

    Args:
        options: Blog pattern options

    Returns:
        Compiled pattern

    Raises:
        PatternConfigError: If the sources pattern cannot be used
    """
    sources = options.sources
    relative = sources[1:] if sources.startswith("/") else sources

    names = PLACEHOLDER_RE.findall(relative)
    title_count = names.count("title")
    if title_count == 0:
        raise PatternConfigError(f"Sources pattern {sources!r} has no :title placeholder")
    if title_count > 1:
        raise PatternConfigError(f"Sources pattern {sources!r} has more than one :title placeholder")
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise PatternConfigError(
            f"Sources pattern {sources!r} repeats placeholders: {', '.join(duplicates)}"
        )
    if PATH_KEY in names:
        raise PatternConfigError(f"Sources pattern {sources!r} uses the reserved :{PATH_KEY} placeholder")

    extension = EXTENSION_RE.search(relative)
    if extension is None or PLACEHOLDER_RE.search(relative[extension.start():]):
        raise PatternConfigError(f"Sources pattern {sources!r} must end in a literal file extension")

    primary = _to_regex(relative)
    subdir = _to_regex(relative[:extension.start()]) + SUBPATH_GROUP

    try:
        primary_matcher = re.compile("^" + primary)
        subdir_matcher = re.compile("^" + subdir)
    except re.error as e:
        raise PatternConfigError(f"Sources pattern {sources!r} is invalid: {e}") from e

    capture_index_by_name = {name: i for i, name in enumerate(names)}
    # The subpath group always comes last
    capture_index_by_name[PATH_KEY] = len(capture_index_by_name)

    return CompiledPattern(
        sources=sources,
        primary_matcher=primary_matcher,
        subdir_matcher=subdir_matcher,
        capture_index_by_name=capture_index_by_name,
    )


def _to_regex(pattern: str) -> str:
    """Escape literal text and turn placeholders into capture groups."""
    pieces = []
    position = 0
    for match in PLACEHOLDER_RE.finditer(pattern):
        pieces.append(re.escape(pattern[position:match.start()]))
        pieces.append(SEGMENT_GROUP)
        position = match.end()
    pieces.append(re.escape(pattern[position:]))
    return "".join(pieces)
