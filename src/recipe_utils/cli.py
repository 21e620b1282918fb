"""
Renders recipe JSON files into a categorized, scaled prep list (CSV).

Example:
    recipe-prep-list recipes/*.json --servings 6 --output prep_list.csv
"""

import argparse
import json
import logging
import pathlib
import sys
from typing import List, Optional

from tqdm.auto import tqdm

from recipe_utils.ingredients.scaling import MAX_SERVINGS, MIN_SERVINGS
from recipe_utils.recipes import Recipe, prep_list_dataframe

logger = logging.getLogger(__name__)


def load_recipe_file(path: pathlib.Path) -> Recipe:
    """Load one recipe JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return Recipe.from_dict(json.load(f))


def _servings(value: str) -> float:
    servings = float(value)
    if not MIN_SERVINGS <= servings <= MAX_SERVINGS:
        raise argparse.ArgumentTypeError(
            f"servings must be between {MIN_SERVINGS} and {MAX_SERVINGS}"
        )
    return servings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render recipe JSON files into a scaled, categorized prep list."
    )
    parser.add_argument(
        "recipes", nargs="+", type=pathlib.Path, help="Recipe JSON files"
    )
    parser.add_argument(
        "--servings",
        type=_servings,
        default=None,
        help="Scale every recipe to this many servings (default: recipe yield)",
    )
    parser.add_argument(
        "--output", type=pathlib.Path, default=None, help="CSV file (default: stdout)"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to render recipe files into a prep-list CSV."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    recipes = []
    for path in tqdm(
        args.recipes, desc="Rendering recipes", disable=len(args.recipes) < 2
    ):
        try:
            recipes.append(load_recipe_file(path))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"⚠ Skipping {path}: {e}")
            continue
        logger.info(f"✓ Loaded {recipes[-1].title}")

    if not recipes:
        logger.error("No recipes could be rendered")
        return 1

    df = prep_list_dataframe(recipes, servings=args.servings)
    if args.output is None:
        df.to_csv(sys.stdout, index=False)
    else:
        df.to_csv(args.output, index=False)
        logger.info(f"Wrote {len(df)} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
