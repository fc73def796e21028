"""Operator command line: database setup, the API server and review moderation."""

import typer
from fastapi import HTTPException
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.sustainareview.core.services import DbSessionService, PhotoStorageService, ReviewService
from src.sustainareview.entities.service.review import ModerationStatus
from src.sustainareview.runtime.context import get_config
from src.sustainareview.runtime.init_db import init_db

console = Console()

app = typer.Typer(
    name="sustainareview",
    help="SustainaReview operator CLI",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
reviews_app = typer.Typer(help="📝 Review moderation commands", no_args_is_help=True)
app.add_typer(reviews_app, name="reviews")


def _review_service(session) -> ReviewService:
    return ReviewService(session, PhotoStorageService())


@app.command(name="init-db")
def init_db_command(
    seed: bool = typer.Option(False, "--seed", help="Load the demo catalog"),
) -> None:
    """🗄️ Create the database schema."""
    console.print(Panel.fit("[bold cyan]Initializing database[/bold cyan]", border_style="cyan"))
    seeded = init_db(seed=seed)
    console.print("[green]✅ Tables created[/green]")
    if seed:
        if seeded:
            console.print("[green]✅ Demo data loaded[/green]")
        else:
            console.print("[yellow]Demo data already present; nothing loaded[/yellow]")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (defaults to app.host)"),
    port: int | None = typer.Option(None, help="Port to bind (defaults to app.port)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Run the API server."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port
    console.print(
        Panel.fit("[bold green]Starting SustainaReview API[/bold green]", border_style="green")
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    uvicorn.run(
        "src.sustainareview.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )


@reviews_app.command(name="list")
def list_reviews(
    status: ModerationStatus | None = typer.Option(
        ModerationStatus.PENDING, "--status", help="Moderation status to show"
    ),
) -> None:
    """📋 List reviews by moderation status."""
    db_service = DbSessionService()
    with db_service.session_scope() as session:
        reviews = _review_service(session).list_by_status(status)

    if not reviews:
        console.print(f"[yellow]📭 No {status.value if status else ''} reviews[/yellow]")
        return

    table = Table(title=f"Reviews ({status.value if status else 'all'})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Product")
    table.add_column("User")
    table.add_column("Rating", justify="right")
    table.add_column("Title")
    table.add_column("Status")
    for review in reviews:
        table.add_row(
            review.id,
            review.product_id,
            review.user_id,
            str(review.overall_rating),
            review.title,
            review.moderation_status.value,
        )
    console.print(table)


def _moderate(review_id: str, status: ModerationStatus) -> None:
    db_service = DbSessionService()
    try:
        with db_service.session_scope() as session:
            _review_service(session).moderate(review_id, status)
    except HTTPException as e:
        console.print(f"[red]❌ {e.detail}: {review_id}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]✅ Review {review_id} {status.value}[/green]")


@reviews_app.command()
def approve(review_id: str = typer.Argument(..., help="Review to publish")) -> None:
    """✅ Approve a review so it appears on the product page."""
    _moderate(review_id, ModerationStatus.APPROVED)


@reviews_app.command()
def reject(review_id: str = typer.Argument(..., help="Review to reject")) -> None:
    """🚫 Reject a review."""
    _moderate(review_id, ModerationStatus.REJECTED)


if __name__ == "__main__":
    app()
