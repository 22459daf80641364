"""CLI interface for the API data explorer."""

import asyncio
import json

import typer

from .config import settings
from .controller import DataFetchController, parse_source
from .exceptions import UnknownSourceError
from .models import FetchFailure, Query, Source, ViewState
from .observability import setup_structured_logging
from .render import render_state

app = typer.Typer(help="Browse JSONPlaceholder and DummyJSON collections from the terminal")


def _source_or_exit(name: str) -> Source:
    try:
        return parse_source(name)
    except UnknownSourceError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=2) from e


@app.command()
def fetch(
    source: str = typer.Argument(..., help="Collection to browse: posts, users, products or quotes"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)"),
    page_size: int = typer.Option(None, "--page-size", "-n", min=1, help="Items per page"),
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive search text"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """Fetch one page of a collection."""
    setup_structured_logging(settings.logging_level)
    selected = _source_or_exit(source)
    query = Query(source=selected, page=page, page_size=page_size or settings.explorer.page_size, search_text=search)

    async def _fetch():
        async with DataFetchController.create() as controller:
            return await controller.fetch(query)

    outcome = asyncio.run(_fetch())

    if isinstance(outcome, FetchFailure):
        print(f"Error: {outcome.message}")
        raise typer.Exit(code=1)

    if as_json:
        print(json.dumps(outcome.model_dump(), indent=2))
        return

    state = ViewState(
        source=selected,
        page=query.page,
        page_size=query.page_size,
        search_text=query.search_text,
        items=outcome.items,
        total=outcome.total,
    )
    print(render_state(state))


@app.command()
def get(
    source: str = typer.Argument(..., help="Collection: posts, users, products or quotes"),
    item_id: int = typer.Argument(..., help="Record id"),
) -> None:
    """Fetch a single record by id."""
    setup_structured_logging(settings.logging_level)
    selected = _source_or_exit(source)

    async def _get():
        async with DataFetchController.create() as controller:
            return await controller.fetch_item(selected, item_id)

    outcome = asyncio.run(_get())
    if isinstance(outcome, FetchFailure):
        print(f"Error: {outcome.message}")
        raise typer.Exit(code=1)
    print(json.dumps(outcome, indent=2))


@app.command()
def sources() -> None:
    """List the collections that can be browsed."""
    for s in Source:
        print(f"{s.value:<10} {s.label}")


@app.command()
def config() -> None:
    """Show current configuration."""
    print(f"JSONPlaceholder: {settings.http.jsonplaceholder_url}")
    print(f"DummyJSON: {settings.http.dummyjson_url}")
    print(f"Timeout: {settings.http.timeout}s")
    print(f"Page Size: {settings.explorer.page_size}")
    print(f"Debounce: {settings.explorer.debounce_ms}ms")
    print(f"Default Source: {settings.explorer.default_source.value}")
    print(f"Log Level: {settings.logging_level}")


if __name__ == "__main__":
    app()
