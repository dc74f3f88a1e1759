"""Application entry point for Recipe Explorer."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from .config.manager import ConfigManager
from .core.controller import RecipeController
from .infra.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="recipe-explorer", description="Resolve recipes, searches and images")
    parser.add_argument("--language", default=None, help="Language code, e.g. en, es, hi, ja, th")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("recipe", help="Show recipe details").add_argument("name")
    commands.add_parser("search", help="Search recipes").add_argument("query")
    commands.add_parser("categories", help="List categories")
    image = commands.add_parser("image", help="Resolve a photo URL")
    image.add_argument("subject")
    image.add_argument("--width", type=int, default=800)
    image.add_argument("--height", type=int, default=600)
    return parser


async def run_command(controller: RecipeController, args: argparse.Namespace) -> Optional[Any]:
    if args.command == "recipe":
        recipe = await controller.resolve_recipe(args.name, args.language)
        return recipe.to_payload() if recipe is not None else None
    if args.command == "search":
        results = await controller.resolve_search_results(args.query, args.language)
        return [summary.to_payload() for summary in results]
    if args.command == "categories":
        return [category.to_payload() for category in await controller.resolve_categories(args.language)]
    return {"url": await controller.resolve_image(args.subject, args.width, args.height)}


def main(argv: Optional[list[str]] = None) -> int:
    """Run one resolution from the command line and print it as JSON.

    Args:
        argv: Optional command line arguments; defaults to ``sys.argv``.

    Returns:
        Process exit code: 1 when a recipe could not be found.
    """
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    config_manager = ConfigManager(config_path=args.config) if args.config else ConfigManager()
    controller = RecipeController.from_config(config_manager.config)

    result = asyncio.run(run_command(controller, args))
    if result is None:
        print(json.dumps({"error": "recipe not found"}))
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
