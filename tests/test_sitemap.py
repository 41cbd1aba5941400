from pathlib import Path

import pytest

from blogpage.models import PatternOptions, Resource, SourceFileError
from blogpage.resolver import PermalinkResolver
from blogpage.sitemap import Sitemap, load_resource, resource_path_for


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    _write(tmp_path / "blog" / "post.md", "---\ntitle: Post\npriority: 2\n---\nBody\n")
    _write(tmp_path / "blog" / "draft.html.md", "---\ntitle: Draft\npublished: false\n---\nWIP\n")
    _write(tmp_path / "blog" / "custom.md", "---\nslug: my-custom-slug\n---\nText\n")
    (tmp_path / "blog" / "post").mkdir()
    (tmp_path / "blog" / "post" / "image.png").write_bytes(b"\x89PNG")
    _write(tmp_path / ".cache" / "ignored.md", "ignored\n")
    return tmp_path


def test_resource_path_drops_template_extension() -> None:
    assert resource_path_for("blog/post.md") == "blog/post.html"
    assert resource_path_for("blog/post.html.md") == "blog/post.html"
    assert resource_path_for("feed.xml.markdown") == "feed.xml"
    assert resource_path_for("about.html") == "about.html"


def test_from_directory_loads_front_matter(source_dir: Path) -> None:
    sitemap = Sitemap.from_directory(source_dir)

    paths = {r.path for r in sitemap.resources}
    assert paths == {
        "blog/post.html",
        "blog/draft.html",
        "blog/custom.html",
        "blog/post/image.png",
    }

    post = sitemap.find_resource_by_path("/blog/post.html")
    assert post.data["title"] == "Post"
    assert post.priority == 2
    assert post.slug == "post"
    assert post.published is True
    assert post.source_file == source_dir / "blog" / "post.md"

    assert sitemap.find_resource_by_path("blog/draft.html").published is False
    assert sitemap.find_resource_by_path("blog/custom.html").slug == "my-custom-slug"


def test_directory_sitemap_resolves_permalinks(source_dir: Path) -> None:
    sitemap = Sitemap.from_directory(source_dir)
    resolver = PermalinkResolver(
        PatternOptions(sources="blog/:title.html", permalink="/articles/:title/"),
        sitemap.find_resource_by_path,
    )
    sitemap.register("blog_page", resolver.manipulate_resource_list)

    resources = sitemap.rebuild()

    destinations = {r.path: r.destination_path for r in resources}
    assert destinations == {
        "blog/post.html": "/articles/post/",
        "blog/draft.html": None,
        "blog/custom.html": "/articles/my-custom-slug/",
        "blog/post/image.png": "/articles/post/image.png",
    }
    assert [a.path for a in resolver.pages()] == ["blog/post.html", "blog/custom.html"]


def test_load_resource_for_plain_file(tmp_path: Path) -> None:
    (tmp_path / "Logo File.PNG").write_bytes(b"png")

    resource = load_resource(tmp_path / "Logo File.PNG", tmp_path)

    assert resource.path == "Logo File.PNG"
    assert resource.slug == "logo-file"
    assert resource.data == {}


def test_duplicate_paths_are_rejected() -> None:
    sitemap = Sitemap([Resource(path="a.html", slug="a")])

    with pytest.raises(ValueError):
        sitemap.add(Resource(path="/a.html", slug="a"))


def test_rebuild_runs_manipulators_in_order() -> None:
    sitemap = Sitemap([Resource(path="a.html", slug="a"), Resource(path="b.html", slug="b")])
    calls = []

    def first(resources):
        calls.append("first")
        return list(reversed(resources))

    def second(resources):
        calls.append("second")
        return resources[:1]

    sitemap.register("first", first)
    sitemap.register("second", second)

    result = sitemap.rebuild()

    assert calls == ["first", "second"]
    assert [r.path for r in result] == ["b.html"]
    assert [r.path for r in sitemap.resources] == ["a.html", "b.html"]


@pytest.mark.parametrize(
    "front_matter, expected",
    [
        ("priority: '5'", 5),
        ("priority: '2.5'", 2.5),
        ("priority:", 0),
        ("priority: high", 0),
        ("priority: true", 0),
        ("title: No priority", 0),
    ],
)
def test_priority_is_converted_to_a_number(tmp_path: Path, front_matter: str, expected) -> None:
    _write(tmp_path / "post.md", f"---\n{front_matter}\n---\nBody\n")

    resource = load_resource(tmp_path / "post.md", tmp_path)

    assert resource.priority == expected


def test_string_priorities_sort_with_numeric_ones(tmp_path: Path) -> None:
    _write(tmp_path / "a.md", "---\npriority: '5'\n---\nA\n")
    _write(tmp_path / "b.md", "---\npriority:\n---\nB\n")
    _write(tmp_path / "c.md", "---\npriority: 3\n---\nC\n")
    sitemap = Sitemap.from_directory(tmp_path)
    resolver = PermalinkResolver(PatternOptions(), sitemap.find_resource_by_path)

    resolver.manipulate_resource_list(sitemap.resources)

    assert [a.path for a in resolver.pages()] == ["a.html", "c.html", "b.html"]


def test_non_utf8_source_file_raises_source_file_error(tmp_path: Path) -> None:
    (tmp_path / "a.html").write_bytes("<p>caf\xe9</p>".encode("latin-1"))

    with pytest.raises(SourceFileError) as exc_info:
        Sitemap.from_directory(tmp_path)

    assert exc_info.value.file_path == tmp_path / "a.html"
    assert "a.html" in str(exc_info.value)


def test_broken_front_matter_raises_source_file_error(tmp_path: Path) -> None:
    _write(tmp_path / "post.md", "---\ntitle: [unclosed\n---\nBody\n")

    with pytest.raises(SourceFileError) as exc_info:
        load_resource(tmp_path / "post.md", tmp_path)

    assert exc_info.value.file_path == tmp_path / "post.md"
