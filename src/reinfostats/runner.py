"""CLI runner for condominium price reports.

Run via: python -m reinfostats.runner 13101 13102 --year 2024
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .analysis.pipeline import PriceDataBuilder
from .collectors.base import DataSourceError
from .collectors.reinfolib import ReinfolibClient
from .config import config
from .models.trade import PriceStats
from .storage.cache import ResponseCache

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def render_table(stats: dict[str, PriceStats], title: str) -> Table:
    """Build a Rich table of price stats (prices in 10k JPY)."""
    table = Table(title=title)
    table.add_column("City", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("Q25", justify="right")
    table.add_column("Median", justify="right", style="bold")
    table.add_column("Q75", justify="right")

    for code, s in stats.items():
        table.add_row(
            code,
            str(s.count),
            f"{s.q25 / 10_000:,.0f}",
            f"{s.median / 10_000:,.0f}",
            f"{s.q75 / 10_000:,.0f}",
        )
    return table


async def run_report(
    cities: Sequence[str],
    year: str,
    quarter: Optional[str] = None,
    area: Optional[str] = None,
) -> int:
    """Build and print the price report.

    Returns:
        0 on success, 1 if the API failed
    """
    logger = logging.getLogger(__name__)
    cache = ResponseCache.from_settings(config)

    async with ReinfolibClient.from_settings(config) as client:
        builder = PriceDataBuilder(client, cache)
        try:
            if area:
                stats = await builder.build_for_area(area, year, quarter)
            else:
                stats = await builder.build(cities, year, quarter)
        except DataSourceError as e:
            logger.error(f"Price report failed: {e}")
            return 1

    period = f"{year} Q{quarter}" if quarter else year
    if not stats:
        console.print(f"[yellow]No condominium trades found for {period}.[/yellow]")
        return 0

    console.print(render_table(stats, f"Condominium prices {period} (10k JPY)"))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="reinfostats condominium price report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m reinfostats.runner 13101 13102 --year 2024
  python -m reinfostats.runner --area 13 --year 2024 --quarter 2
        """,
    )

    parser.add_argument(
        "cities",
        nargs="*",
        help="Municipality codes (e.g., 13101)",
    )
    parser.add_argument(
        "--year",
        required=True,
        help="Four-digit transaction year",
    )
    parser.add_argument(
        "--quarter",
        choices=["1", "2", "3", "4"],
        help="Restrict to one quarter",
    )
    parser.add_argument(
        "--area",
        help="Prefecture code; report every municipality in it",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    if not args.cities and not args.area:
        parser.error("give at least one city code or --area")

    setup_logging(verbose=args.verbose)

    try:
        result = asyncio.run(run_report(
            cities=args.cities,
            year=args.year,
            quarter=args.quarter,
            area=args.area,
        ))
        sys.exit(result)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
