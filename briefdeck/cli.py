"""Command line helpers for BriefDeck."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path
from random import Random

from rich.console import Console
from rich.table import Table

from .app import BriefApp
from .config import BriefDeckConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .diagnostics.draw_simulator import DrawSimulator
from .domain.briefs import compose_brief
from .domain.cards import CATEGORY_ORDER
from .domain.levels import level_table
from .loaders import load_catalog_from_json, validate_catalog_file
from .validators import validate_app

console = Console()

_SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "cyan"}


def run_draw() -> None:
    parser = _source_parser("Draw one card per category and print the brief")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible draw")
    args = parser.parse_args()

    app = _build_app(args)
    drawn = app.draw()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("ID")
    table.add_column("Prompt")
    table.add_column("Difficulty")
    for category in CATEGORY_ORDER:
        card = drawn[category]
        if card is None:
            table.add_row(category.value, "-", "[dim]no cards[/dim]", "-")
        else:
            table.add_row(category.value, str(card.card_id), card.prompt_text, card.difficulty.value)
    console.print(table)

    brief = compose_brief(drawn)
    if brief is None:
        console.print("Catalog is incomplete; no brief can be composed.", style="red")
        sys.exit(1)
    console.print(f"[bold]Brief:[/bold] {brief.text}")


def run_levels() -> None:
    parser = argparse.ArgumentParser(description="Print the BriefDeck level curve")
    parser.add_argument("--max-level", type=int, default=10, help="Highest level to list")
    args = parser.parse_args()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Level", justify="right")
    table.add_column("Points needed", justify="right")
    for level, points in level_table(args.max_level):
        table.add_row(str(level), str(points))
    console.print(table)


def run_simulate() -> None:
    parser = _source_parser("BriefDeck draw simulator")
    parser.add_argument("--draws", type=int, default=1000, help="Number of draws to simulate")
    parser.add_argument("--seed", type=int, help="Seed for the simulation RNG")
    parser.add_argument("--no-reroll", action="store_true", help="Skip rerolling every card")
    args = parser.parse_args()

    app = _build_app(args)
    rng = Random(args.seed) if args.seed is not None else None
    result = DrawSimulator(app, rng=rng).simulate(draws=args.draws, reroll=not args.no_reroll)

    console.print(f"Simulated {result.draws} draws, {result.complete_briefs} complete briefs.")
    if result.rerolls:
        console.print(f"Rerolls: {result.rerolls}, unchanged: {result.unchanged_rerolls}")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Card")
    table.add_column("Share", justify="right")
    for category in CATEGORY_ORDER:
        for card_id, _ in sorted(result.frequencies[category].items()):
            table.add_row(category.value, str(card_id), f"{result.share(category, card_id):.1%}")
    console.print(table)


def run_checklist() -> None:
    parser = _source_parser("BriefDeck sanity checks")
    args = parser.parse_args()

    app = _build_app(args)
    issues = checklist_run(app)
    if not issues:
        console.print("No issues found ✅", style="green")
        return
    for issue in issues:
        style = _SEVERITY_STYLES.get(issue.severity, "")
        console.print(f"[{issue.severity.upper()}] {issue.message}", style=style, markup=False)
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def run_validate() -> None:
    parser = argparse.ArgumentParser(description="BriefDeck validator")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--catalog",
        help="Path to catalog JSON file for validation",
    )
    group.add_argument(
        "--module",
        help="Python module with register(app) function to validate",
    )
    args = parser.parse_args()

    if args.catalog:
        errors = validate_catalog_file(Path(args.catalog))
        if errors:
            console.print("Catalog errors:", style="red")
            for err in errors:
                console.print(f"- {err}", markup=False)
            sys.exit(1)
        console.print("Catalog is valid ✅", style="green")
        return

    app = BriefApp(BriefDeckConfig.from_env())
    _load_module(args.module, app)
    issues = validate_app(app)
    if issues:
        console.print("Configuration errors:", style="red")
        for issue in issues:
            console.print(f"- {issue}", markup=False)
        sys.exit(1)
    console.print("Bot configuration is valid ✅", style="green")


def _source_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--catalog", help="Path to catalog JSON file")
    group.add_argument("--module", help="Python module with register(app) function")
    return parser


def _build_app(args: argparse.Namespace) -> BriefApp:
    config = BriefDeckConfig.from_env()
    if getattr(args, "seed", None) is not None:
        config.rng_seed = args.seed
    if not args.catalog and not args.module:
        config.seed_sample_data = True
    app = BriefApp(config)
    if args.catalog:
        load_catalog_from_json(app, Path(args.catalog))
    elif args.module:
        _load_module(args.module, app)
    return app


def _load_module(path: str, app: BriefApp) -> None:
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(path)
    if hasattr(module, "register"):
        module.register(app)
    else:
        raise RuntimeError(f"Module {path} has no register(app) function.")
