#!/usr/bin/env python3
"""Ad hoc advanced search runner for PantryChef.

Run one advanced search directly against TheMealDB without starting the API server.

Usage:
    python query.py chicken rice
    python query.py --cuisine Indian chicken
    python query.py --exclude peanut --exclude shrimp noodles
    python query.py --max-time 30 egg
    python query.py --debug chicken  # Show full JSON response

Features:
- Same pipeline as POST /api/recipes/advanced-search
- Results rendered as a table with estimated cook times
- Debug mode to display the full {"meals": [...]} envelope
"""

import asyncio
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from src.models.errors import SearchError
from src.models.models import NO_TIME_LIMIT, Recipe, SearchCriteria, SearchResponse
from src.search.estimator import estimate_cook_time
from src.search.orchestrator import advanced_search
from src.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--cuisine NAME] [--exclude ITEM]... [--max-time MIN] <ingredient>...'


def render_results(recipes: List[Recipe], criteria: SearchCriteria) -> Table:
    """Build a rich table summarizing matched recipes."""
    title = f"{len(recipes)} recipe(s) with {', '.join(criteria.ingredients)}"
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Recipe", style="bold")
    table.add_column("Cuisine")
    table.add_column("Category")
    table.add_column("Est. minutes", justify="right")
    table.add_column("Ingredients", justify="right")

    for recipe in recipes:
        table.add_row(
            recipe.id,
            recipe.name or "(untitled)",
            recipe.area or "-",
            recipe.category or "-",
            str(estimate_cook_time(recipe)),
            str(len(recipe.ingredients)),
        )
    return table


def run_query(
    ingredients: List[str],
    cuisine: Optional[str] = None,
    exclusions: Optional[List[str]] = None,
    max_time: int = NO_TIME_LIMIT,
    debug: bool = False,
) -> int:
    """Execute a single advanced search and print the results.

    Args:
        ingredients: Ingredients every recipe must contain.
        cuisine: Optional cuisine/area filter.
        exclusions: Optional ingredients to avoid.
        max_time: Maximum estimated cook time in minutes.
        debug: If True, display the full JSON response.

    Returns:
        Process exit code (0 on success, 1 on error).
    """
    try:
        criteria = SearchCriteria(
            ingredients=ingredients,
            cuisine=cuisine,
            exclusions=exclusions or [],
            max_time=max_time,
        )
        recipes = asyncio.run(advanced_search(criteria))
    except SearchError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        return 0

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print_json(data=SearchResponse.from_recipes(recipes).model_dump())
        console.print()

    if recipes:
        console.print(render_results(recipes, criteria))
    else:
        console.print("[yellow]No recipes found matching all your criteria. Try removing a filter.[/yellow]")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py chicken rice")
        print("  python query.py --cuisine Italian --max-time 45 tomato")
        print("  python query.py --exclude peanut noodles")
        sys.exit(1)

    debug_mode = False
    cuisine_arg = None
    exclusion_args: List[str] = []
    max_time_arg = NO_TIME_LIMIT
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
            continue

        if flag not in ("--cuisine", "--exclude", "--max-time"):
            print(f"Unknown flag: {flag}")
            sys.exit(1)
        if argv_start + 1 >= len(sys.argv):
            print(f"Error: {flag} flag requires a value")
            sys.exit(1)

        value = sys.argv[argv_start + 1]
        if flag == "--cuisine":
            cuisine_arg = value
        elif flag == "--exclude":
            exclusion_args.append(value)
        else:
            try:
                max_time_arg = int(value)
            except ValueError:
                print(f"Error: --max-time expects minutes, got: {value}")
                sys.exit(1)
        argv_start += 2

    if argv_start >= len(sys.argv):
        print("Error: No ingredients provided")
        print(USAGE)
        sys.exit(1)

    sys.exit(
        run_query(
            sys.argv[argv_start:],
            cuisine=cuisine_arg,
            exclusions=exclusion_args,
            max_time=max_time_arg,
            debug=debug_mode,
        )
    )
