"""Command-line interface for blogpage."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __title__, __version__
from .config import BlogConfigReader
from .logger import setup_logger
from .models import BlogPageError, PatternOptions, Resource
from .resolver import PermalinkResolver
from .sitemap import Sitemap


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    description = f"""{__title__} ver {__version__}

Preview the permalinks of blog page articles and their attached files.

Examples:
  # Use the blog_page section of config.yml/config.toml in the current directory
  blogpage source

  # Explicit patterns
  blogpage source --sources "blog/:year/:title.html" --permalink "/:year/:title/"

  # Include unpublished articles
  blogpage source --preview
"""

    parser = argparse.ArgumentParser(
        prog=__title__.lower(),
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "source_dir",
        help="Path to the site source directory",
        type=Path,
    )

    parser.add_argument(
        "--config-dir",
        help="Directory holding config.yml/config.yaml/config.toml (default: current directory)",
        type=Path,
        default=Path("."),
        metavar="DIR",
    )

    parser.add_argument(
        "--sources",
        help="Sources pattern, overrides the config file (e.g. 'blog/:title.html')",
        type=str,
        metavar="PATTERN",
    )

    parser.add_argument(
        "--permalink",
        help="Permalink template, overrides the config file (e.g. '/:title/')",
        type=str,
        metavar="TEMPLATE",
    )

    parser.add_argument(
        "--preview",
        help="Resolve unpublished articles too",
        action="store_true",
    )

    parser.add_argument(
        "--index-file",
        help="Index file name (default: index.html)",
        type=str,
        default="index.html",
        metavar="NAME",
    )

    parser.add_argument(
        "--verbose", "-v",
        help="Enable verbose logging",
        action="store_true",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"{__title__} {__version__}"
    )

    return parser


def create_options_from_args(args: argparse.Namespace) -> PatternOptions:
    """Create PatternOptions from the config file and command line flags.

    Args:
        args: Parsed command line arguments

    Returns:
        PatternOptions instance
    """
    options = BlogConfigReader.read_options(args.config_dir) or PatternOptions()
    return PatternOptions(
        sources=args.sources or options.sources,
        permalink=args.permalink or options.permalink,
    )


def format_report(resources: List[Resource], resolver: PermalinkResolver) -> str:
    lines = []
    for resource in resources:
        if resource.destination_path is not None:
            lines.append(f"{resource.path} -> {resource.destination_path}")

    lines.append("")
    lines.append(f"Articles ({len(resolver.pages())}):")
    for article in resolver.pages():
        lines.append(f"  [{article.priority}] {article.destination_path}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(verbose=args.verbose)

    if not args.source_dir.is_dir():
        print(f"Error: Source directory not found: {args.source_dir}", file=sys.stderr)
        sys.exit(1)

    try:
        options = create_options_from_args(args)
        sitemap = Sitemap.from_directory(args.source_dir)
        resolver = PermalinkResolver(
            options,
            sitemap.find_resource_by_path,
            preview=args.preview,
            index_file=args.index_file,
        )
        sitemap.register("blog_page", resolver.manipulate_resource_list)
        resources = sitemap.rebuild()
    except BlogPageError as e:
        logger.error(str(e))
        sys.exit(1)

    print(format_report(resources, resolver))


if __name__ == "__main__":
    main()
