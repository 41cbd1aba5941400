"""In-memory sitemap feeding source files to resource manipulators."""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import frontmatter
import toml
import yaml
from slugify import slugify

from .logger import logger
from .models import Resource, SourceFileError
from .utils import yield_files

Manipulator = Callable[[List[Resource]], List[Resource]]

# Files whose front matter is parsed into resource data
TEMPLATE_EXTENSIONS = [".md", ".markdown", ".html"]


class Sitemap:
    """Ordered collection of site resources, indexed by source path."""

    def __init__(self, resources: Optional[Iterable[Resource]] = None):
        self._resources: List[Resource] = []
        self._by_path: Dict[str, Resource] = {}
        self._manipulators: List[tuple] = []
        for resource in resources or []:
            self.add(resource)

    @property
    def resources(self) -> List[Resource]:
        return list(self._resources)

    def add(self, resource: Resource) -> None:
        key = _lookup_key(resource.path)
        if key in self._by_path:
            raise ValueError(f"Duplicate resource path: {resource.path}")
        self._by_path[key] = resource
        self._resources.append(resource)

    def find_resource_by_path(self, path: str) -> Optional[Resource]:
        """Find a resource by source path; a leading slash is ignored."""
        return self._by_path.get(_lookup_key(path))

    def register(self, name: str, manipulator: Manipulator) -> None:
        """Register a resource list manipulator, run in registration order."""
        self._manipulators.append((name, manipulator))

    def rebuild(self) -> List[Resource]:
        """Run the resource list through every registered manipulator.

        Returns:
            The resource list returned by the last manipulator
        """
        resources = list(self._resources)
        for name, manipulator in self._manipulators:
            logger.debug(f"Running manipulator {name} on {len(resources)} resources")
            resources = manipulator(resources)
        return resources

    @classmethod
    def from_directory(
        cls,
        source_dir: Path,
        excludes: Optional[List[str]] = None,
    ) -> "Sitemap":
        """Build a sitemap from the files of a source directory.

        Args:
            source_dir: Directory holding the site sources
            excludes: Regex patterns of file or folder names to skip

        Returns:
            Sitemap with one resource per file
        """
        if excludes is None:
            excludes = [r"^\."]

        sitemap = cls()
        for file_path in yield_files(source_dir, excludes=excludes):
            sitemap.add(load_resource(file_path, source_dir))

        logger.info(f"Loaded {len(sitemap._resources)} resources from {source_dir}")
        return sitemap


def load_resource(file_path: Path, source_dir: Path) -> Resource:
    """Create a resource for a source file.

    Template files have their front matter parsed into the resource data,
    and their template extension dropped from the resource path
    (``post.html.md`` and ``post.md`` both become ``post.html``).

    Args:
        file_path: Source file
        source_dir: Root of the site sources

    Returns:
        Resource for the file
    """
    rel_path = file_path.relative_to(source_dir).as_posix()

    if file_path.suffix.lower() not in TEMPLATE_EXTENSIONS:
        return Resource(
            path=rel_path,
            slug=slugify(file_path.stem),
            source_file=file_path,
        )

    try:
        post = frontmatter.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
        raise SourceFileError(file_path, str(e)) from e
    data = dict(post.metadata)

    path = resource_path_for(rel_path)
    stem = Path(path).stem
    slug = data.get("slug")
    if not slug:
        slug = slugify(stem)

    return Resource(
        path=path,
        slug=str(slug),
        data=data,
        published=data.get("published") is not False,
        priority=_priority_from(data.get("priority"), file_path),
        source_file=file_path,
    )


def resource_path_for(rel_path: str) -> str:
    """Drop the template extension of a source file path."""
    parent, _, name = rel_path.rpartition("/")
    base, dot, extension = name.rpartition(".")
    if not dot or "." + extension.lower() == ".html":
        return rel_path

    if "." not in base:
        base += ".html"
    return f"{parent}/{base}" if parent else base


def _priority_from(value: Any, file_path: Path) -> Union[int, float]:
    """Convert a front matter priority to a number, falling back to 0."""
    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                return float(value)
            except ValueError:
                pass
    logger.warning(f"Invalid priority {value!r} in {file_path}, using 0")
    return 0


def _lookup_key(path: str) -> str:
    return str(path).lstrip("/")
