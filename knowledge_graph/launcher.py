from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from .app.graph_window import GraphWindow
from .config import APP_NAME, ORGANIZATION, load_settings, save_settings
from .graph.catalog import CatalogError, default_catalog, load_catalog

logger = logging.getLogger("knowledge_graph.launcher")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def _level_name(value: str) -> str:
    return value.upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive force-directed knowledge graph")
    parser.add_argument("--catalog", help="JSON file with nodes, edges and group colours")
    parser.add_argument("--no-particles", action="store_true", help="disable the particle background")
    parser.add_argument("--fps", type=_positive_int, help="target frames per second")
    parser.add_argument("--log-level", type=_level_name, choices=LOG_LEVELS)
    parser.add_argument("--save", action="store_true", help="remember these options for the next launch")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setOrganizationName(ORGANIZATION)
    app.setApplicationName(APP_NAME)

    settings = load_settings()
    if args.catalog:
        settings.catalog_path = args.catalog
    if args.no_particles:
        settings.show_particles = False
    if args.fps:
        settings.frame_interval_ms = max(1, round(1000 / args.fps))
    if args.log_level:
        settings.log_level = args.log_level
    if settings.log_level not in LOG_LEVELS:
        settings.log_level = "INFO"

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    catalog = default_catalog()
    if settings.catalog_path:
        try:
            catalog = load_catalog(settings.catalog_path)
        except (OSError, CatalogError) as e:
            logger.error("Could not load catalog %s: %s", settings.catalog_path, e)
            return 2

    if args.save:
        save_settings(settings)

    window = GraphWindow(catalog, settings)
    window.show()
    logger.info("Knowledge graph window shown (%d nodes)", len(catalog.nodes))
    return app.exec()
