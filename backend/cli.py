"""
Menu Studio CLI.

Command-line interface for database setup, health checks and batch
translation of a menu through a running API.
"""

import asyncio
import sys
import time

import httpx
import typer
from rich.console import Console
from rich.table import Table
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from shared.config.constants import (
    ContentKind,
    LANGUAGE_NAMES_EN,
    LANGUAGE_NATIVE_LABELS,
    Languages,
    RESTAURANT_TYPES,
)
from shared.config.settings import settings

app = typer.Typer(
    name="menu-studio",
    help="Menu Studio CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init(
    drop: bool = typer.Option(False, "--drop", help="Drop all tables first"),
):
    """Create database tables."""
    from shared.infrastructure.db import engine
    from rest_api.models import Base

    if drop and settings.environment == "production":
        console.print("[red]Refusing to drop tables in production[/red]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        if drop:
            progress.add_task("Dropping tables...", total=None)
            Base.metadata.drop_all(bind=engine)
        progress.add_task("Creating tables...", total=None)
        Base.metadata.create_all(bind=engine)

    console.print(f"[green]✓ {len(Base.metadata.tables)} tables ready[/green]")


# =============================================================================
# Reference Data
# =============================================================================

@app.command()
def languages():
    """List supported languages."""
    table = Table(title="Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Native")
    table.add_column("Role", style="yellow")

    for code in Languages.ALL:
        role = "source" if code == Languages.SOURCE else "target"
        table.add_row(code, LANGUAGE_NAMES_EN[code], LANGUAGE_NATIVE_LABELS[code], role)

    console.print(table)


@app.command()
def presets(
    restaurant_type: str = typer.Argument(..., help="Restaurant type code"),
):
    """Show the starter sections for a restaurant type."""
    from rest_api.services.domain import get_section_presets

    if restaurant_type not in RESTAURANT_TYPES:
        console.print(f"[red]Unknown restaurant type: {restaurant_type}[/red]")
        console.print(f"Known types: {', '.join(RESTAURANT_TYPES)}")
        raise typer.Exit(1)

    table = Table(title=f"Sections for '{restaurant_type}'")
    table.add_column("#", style="cyan")
    table.add_column("Icon")
    table.add_column("Name", style="green")
    table.add_column("Description")

    for preset in get_section_presets(restaurant_type):
        table.add_row(str(preset.display_order), preset.icon or "", preset.name, preset.description or "")

    console.print(table)


# =============================================================================
# Translation Commands
# =============================================================================

@app.command()
def translate_menu(
    menu_id: str = typer.Argument(..., help="Menu to translate"),
    email: str = typer.Option(..., envvar="MENU_STUDIO_EMAIL", help="Owner email"),
    password: str = typer.Option(
        ..., envvar="MENU_STUDIO_PASSWORD", prompt=True, hide_input=True, help="Owner password"
    ),
    lang: list[str] = typer.Option(
        list(Languages.DEFAULT_SELECTION), "--lang", "-l", help="Target language (repeatable)"
    ),
    include_names: bool = typer.Option(
        False, "--include-names", help="Also translate section and item names"
    ),
    include_menu: bool = typer.Option(
        False, "--include-menu", help="Send menu name/description too (the API rejects them)"
    ),
    max_in_flight: int = typer.Option(
        settings.translation_max_in_flight, min=1, help="Concurrent translation requests"
    ),
    api_url: str = typer.Option(settings.api_base_url, envvar="MENU_STUDIO_API_URL", help="API base URL"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="List the selection without translating"),
):
    """Translate a menu's content through the translation endpoint."""
    from rest_api.services.translation import (
        BatchDispatcher,
        DispatchProgress,
        MenuApiClient,
        MenuApiError,
        TranslationSelection,
        collect_units,
        group_by_kind,
    )

    for code in lang:
        if code not in Languages.TARGETS:
            console.print(f"[red]Unsupported language: {code}[/red]")
            raise typer.Exit(1)

    async def _translate() -> int:
        async with httpx.AsyncClient(
            base_url=api_url, timeout=settings.translation_request_timeout
        ) as client:
            api = MenuApiClient(client)
            try:
                await api.login(email, password)
                menu = await api.get_menu(menu_id)
                items = await api.items_by_section(menu_id)
            except (MenuApiError, httpx.HTTPError) as e:
                console.print(f"[red]✗ {e}[/red]")
                return 1

            units = await collect_units(menu, menu.sections, items, api.load_item)
            selection = TranslationSelection(units, languages=lang)
            if include_names:
                for kind in (ContentKind.SECTION_NAME, ContentKind.ITEM_NAME):
                    selection.toggle_kind(kind)
            if include_menu and include_names:
                selection.toggle_kind(ContentKind.MENU_NAME)
            if not include_menu:
                for unit in selection.selected_units:
                    if unit.kind in ContentKind.MENU_KINDS:
                        selection.toggle_unit(unit.id)

            table = Table(title=f"{menu.name}: {selection.selected_count}/{selection.total_count} selected")
            table.add_column("Category", style="cyan")
            table.add_column("Selected", style="green")
            for group in group_by_kind(units):
                chosen = sum(1 for unit in group.units if selection.is_selected(unit.id))
                table.add_row(group.label, f"{chosen}/{len(group.units)}")
            console.print(table)
            console.print(
                f"Languages: {', '.join(selection.languages)} "
                f"({selection.pair_count} translations)"
            )

            if dry_run or selection.pair_count == 0:
                if selection.pair_count == 0:
                    console.print("[yellow]Nothing selected[/yellow]")
                return 0

            dispatcher = BatchDispatcher(client, max_in_flight=max_in_flight)
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Translating...", total=selection.pair_count)

                def on_progress(state: DispatchProgress) -> None:
                    progress.update(
                        task,
                        completed=state.completed,
                        description=f"Translating... ({state.failed} failed)",
                    )

                result = await dispatcher.dispatch(selection, menu_id, on_progress=on_progress)

            if result.success:
                console.print(f"[green]✓ {result.completed} translations stored[/green]")
                return 0

            console.print(f"[yellow]{result.summary}[/yellow]")
            for failure in result.failures[:20]:
                console.print(f"  [red]✗[/red] {failure.unit_id} → {failure.language_code}: {failure.reason}")
            return 1

    code = asyncio.run(_translate())
    if code:
        raise typer.Exit(code)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    api_url: str = typer.Option(settings.api_base_url, envvar="MENU_STUDIO_API_URL", help="API base URL"),
):
    """Check API health and its dependencies."""

    async def _health() -> bool:
        table = Table(title="Service Health")
        table.add_column("Component", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Response Time", style="yellow")

        async with httpx.AsyncClient(base_url=api_url, timeout=10.0) as client:
            start = time.perf_counter()
            try:
                response = await client.get("/api/health/detailed")
            except httpx.HTTPError as e:
                table.add_row("REST API", f"✗ {type(e).__name__}", "-")
                console.print(table)
                return False
            elapsed = (time.perf_counter() - start) * 1000

        body = response.json()
        table.add_row("REST API", f"{'✓' if response.status_code == 200 else '✗'} {body.get('status')}", f"{elapsed:.0f}ms")
        for name, component in body.get("dependencies", {}).items():
            latency = component.get("latency_ms")
            table.add_row(
                f"  {name}",
                component.get("status", "?") + (f" ({component['error']})" if component.get("error") else ""),
                f"{latency:.0f}ms" if latency is not None else "-",
            )

        console.print(table)
        return response.status_code == 200

    if not asyncio.run(_health()):
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Menu Studio Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
