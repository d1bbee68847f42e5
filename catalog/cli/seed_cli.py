"""
Command-line interface for seeding the catalog database.

Creates the tables if needed and fills them with sample authors and books.
Useful against a persistent database; the default in-memory database is
seeded by the API at startup instead.

Usage:
    python -m catalog.cli.seed_cli --authors 10 --books 100
    python -m catalog.cli.seed_cli --seed 42 --reset
    python -m catalog.cli.seed_cli --help
"""

import argparse
import asyncio
import logging
import random
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from catalog.config import Settings, settings as default_settings
from catalog.db import Database
from catalog.seed import CatalogSeeder, SeedResult

logger = logging.getLogger(__name__)

console = Console()


async def run_seed(
    config: Settings,
    authors: int,
    books: int,
    random_seed: Optional[int],
    reset: bool,
) -> SeedResult:
    """Initialize the database, create tables and seed it."""
    database = Database(config.db)
    await database.initialize()
    try:
        await database.create_tables()
        async with database.session() as session:
            seeder = CatalogSeeder(session, random.Random(random_seed))
            return await seeder.seed(authors=authors, books=books, reset=reset)
    finally:
        await database.close()


def build_parser(config: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the book catalog with sample data")
    parser.add_argument("--authors", type=int, default=config.seed.authors,
                        help="Number of authors to create (default: %(default)s)")
    parser.add_argument("--books", type=int, default=config.seed.books,
                        help="Number of books to create (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=config.seed.random_seed,
                        help="Random seed for reproducible data")
    parser.add_argument("--reset", action="store_true",
                        help="Delete existing data before seeding")
    return parser


def main(argv: Optional[List[str]] = None, config: Optional[Settings] = None) -> int:
    config = config or default_settings
    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=config.app.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if config.db.is_memory:
        console.print("[yellow]⚠️  Seeding an in-memory database; data is discarded on exit[/yellow]")

    console.print(f"\n[bold cyan]📚 Seeding catalog[/bold cyan] [dim]({config.db.connection_string.split('://')[0]})[/dim]")

    try:
        result = asyncio.run(run_seed(config, args.authors, args.books, args.seed, args.reset))
    except ValueError as exc:
        console.print(f"[red]❌ {exc}[/red]")
        return 2

    if result.skipped:
        console.print("[yellow]Catalog already contains books; use --reset to reseed[/yellow]")
        return 0

    table = Table(title="Seed Results")
    table.add_column("Entity", style="cyan")
    table.add_column("Created", justify="right", style="green")
    table.add_row("Authors", str(result.authors_created))
    table.add_row("Books", str(result.books_created))
    console.print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
