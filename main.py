"""
mongoconn - Main Entry Point

Demonstrates building a connection from settings, creating a collection with
its declared indexes, and dropping it again.
"""

import asyncio
import logging
import sys

import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mongoconn.config.settings import get_settings
from mongoconn.db.connection import Connection, ConnectionBuilder
from mongoconn.models.collection import CollectionSpec

DEMO_COLLECTION = "mongoconn_demo_orders"

DEMO_SPEC = CollectionSpec.model_validate(
    {
        "indexes": [
            {"index": {"sku": 1}, "options": {"unique": True, "name": "idx_orders_sku_unique"}},
            {"index": {"customer_id": 1, "created_at": -1}, "options": {"name": "idx_orders_customer"}},
            {"index": {"status": 1}, "options": {"name": "idx_orders_status"}},
        ]
    }
)


def configure_logging(level: str) -> None:
    """Configure structured logging on top of the standard library."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(__name__)
console = Console()


async def show_health(connection: Connection) -> None:
    """Print connection health."""
    health = await connection.health_check()

    if health["healthy"]:
        console.print(
            Panel(
                f"[green]Connected[/green]\n"
                f"Server: MongoDB {health.get('server_version', 'unknown')}\n"
                f"Latency: {health.get('latency_ms', 'N/A')} ms",
                title="Database Status",
                border_style="green",
            )
        )
    else:
        console.print(
            Panel(
                f"[red]Unhealthy[/red]\nError: {health.get('error', 'Unknown')}",
                title="Database Status",
                border_style="red",
            )
        )


async def demo_collection(connection: Connection) -> None:
    """Create the demo collection with its indexes, list them, then drop it."""
    console.print(f"\n[bold cyan]Creating collection {DEMO_COLLECTION}...[/bold cyan]")

    collection = await connection.create_collection(DEMO_COLLECTION, DEMO_SPEC)
    indexes = await collection.index_information()

    table = Table(title=f"Indexes on {DEMO_COLLECTION}")
    table.add_column("Name", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Unique", justify="center")

    for name, info in indexes.items():
        key = ", ".join(f"{field}: {direction}" for field, direction in info["key"])
        table.add_row(name, key, "✓" if info.get("unique") else "")

    console.print(table)

    await connection.drop_collection(DEMO_COLLECTION)
    console.print(f"  [green]✓[/green] Dropped {DEMO_COLLECTION}")


async def run_demo() -> None:
    """Run the connection demo."""
    settings = get_settings()
    configure_logging(settings.app.log_level)

    console.print(
        Panel.fit(
            "[bold blue]mongoconn demo[/bold blue]\nMongoDB + Motor + Pydantic",
            border_style="blue",
        )
    )
    console.print(f"\n[dim]Environment: {settings.app.environment}[/dim]")

    connection = await ConnectionBuilder().build(settings.mongo)
    async with connection:
        await show_health(connection)
        await demo_collection(connection)

    console.print("\n[green]Demo completed![/green]")


async def main() -> None:
    """Main entry point."""
    try:
        await run_demo()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    except Exception as e:
        logger.exception("Application error")
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
