"""
Command line entry point for gamepages.
Usage: python -m gamepages PAGE [--name NAME] [--objects "key=value; ..."] [--json]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import ConfigError, PageError
from .pages import PageService, parse_used_objects
from .pages.models import PageView
from .settings import PipelineSettings
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gamepages", description="Render a game page")
    p.add_argument("page", help="page name in the pages directory, or a path to a page file")
    p.add_argument("--pages-dir", help="directory holding page documents")
    p.add_argument("--name", default="", help="player name bound to {{.Name}}")
    p.add_argument("--objects", default="", help='used objects, e.g. "key=gold; note=torn"')
    p.add_argument("--json", action="store_true", help="print the JSON page view")
    p.add_argument("--profile", default="default", help="settings profile")
    p.add_argument("--settings-file", help="INI file to store settings in")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def render(args: argparse.Namespace, settings: PipelineSettings) -> PageView:
    """Render the requested page through the page service."""
    used = parse_used_objects(args.objects)
    candidate = Path(args.page)

    if candidate.is_file():
        # A direct path: serve it from its own directory
        service = PageService(candidate.parent, settings=settings)
        service.page_extension = candidate.suffix
        return service.render_page(candidate.stem, args.name, used)

    service = PageService(args.pages_dir, settings=settings)
    return service.render_page(args.page, args.name, used)


def main(argv: Optional[List[str]] = None) -> int:
    """Main command line entry point."""
    logger = logging.getLogger(f"{__name__}.main")
    args = build_parser().parse_args(argv)

    try:
        settings = PipelineSettings(profile=args.profile, settings_file=args.settings_file)
        setup_logging(settings)

        validation = settings.validate()
        for warning in validation.warnings:
            logger.warning(f"  {warning}")
        if not validation.is_valid:
            for error in validation.errors:
                logger.error(f"  {error}")
            return 1

        view = render(args, settings)
    except (PageError, ConfigError, FileNotFoundError, ValueError) as e:
        logger.debug(f"Could not render page '{args.page}': {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(view.to_json().decode("utf-8") + "\n")
    else:
        sys.stdout.write(view.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
