"""
factdeck: Terminal fact deck.

A Rich terminal interface over the deck engine.

Commands:
- factdeck play      - Swipe through facts interactively
- factdeck fetch     - Fetch one batch and print it
- factdeck subjects  - List subject keys
- factdeck cache     - Inspect or clear cached facts
"""
from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from ..config import Settings, get_settings
from ..deck import CacheStore, Card, ContentQueue, DeckController, SwipeDirection, share_item
from ..models import SUBJECTS, CategoryKey, subject_label
from ..sources import build_default_registry

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="factdeck",
    help="factdeck: swipe through short facts",
    no_args_is_help=True,
)
console = Console()

KEY_HELP = "k keep | s skip | m more/less | j scroll | o share | r reshuffle | c category | q quit"


def parse_subject(value: Optional[str], store: CacheStore) -> CategoryKey:
    """Subject from the command line, else the saved preference."""
    if value is None:
        return store.load_subject()
    try:
        return CategoryKey.parse(value)
    except ValueError:
        keys = ", ".join(key.value for key, _ in SUBJECTS)
        raise typer.BadParameter(f"unknown subject '{value}' (choose from: {keys})")


def open_store(settings: Settings) -> CacheStore:
    return CacheStore(db_path=settings.cache_db_path, capacity=settings.cache_capacity)


def make_queue(settings: Settings, store: CacheStore):
    """Content queue wired to the default sources. Close the returned source when done."""
    registry, source = build_default_registry(settings)
    queue = ContentQueue(
        registry,
        cache=store,
        visible=settings.visible_cards,
        prime_timeout=settings.prime_timeout_seconds,
        provider_timeout=settings.provider_timeout_seconds,
    )
    return queue, source


# =============================================================================
# Display Helpers
# =============================================================================

def render_card(card: Card, deck: DeckController) -> Panel:
    """Panel for the top card, painted with its generated colors."""
    item = card.item
    colors = card.colors
    lines = card.clamp.visible_lines()
    body = "\n".join(lines)
    if card.clamp.line_limit is not None and card.clamp.overflowing:
        body += " …"

    text = Text()
    if item.title:
        text.append(item.title + "\n", style="bold")
    text.append(f"image: {item.image_url}\n" if card.has_image else f"({item.icon})\n", style="italic")
    text.append("\n" + body + "\n")
    footer = []
    if item.source_url:
        footer.append(item.source_url)
    if card.clamp.affordance_visible:
        footer.append(f"[{card.clamp.affordance_label}]")
    if footer:
        text.append("\n" + "  ".join(footer), style="underline")

    return Panel(
        text,
        title=f"{item.category.value}  |  {card.id}",
        subtitle=f"{len(deck.cards)} in deck  |  {len(deck.queue)} queued",
        style=f"{colors.foreground_hex} on {colors.background_hex}",
        border_style=colors.foreground_hex,
        padding=(1, 2),
        width=deck.settings.text_width_chars + 6,
    )


async def console_clipboard(text: str) -> None:
    console.print(Panel(text, title="Copied", border_style="green"))


# =============================================================================
# Interactive Session
# =============================================================================

async def run_session(deck: DeckController) -> None:
    await deck.start()
    swipe_dx = deck.settings.swipe_threshold_px * 1.25

    while True:
        top = deck.top_card()
        console.clear()
        console.print(f"[bold cyan]factdeck[/bold cyan] - {subject_label(deck.subject)}")
        if top is None:
            console.print("\n[yellow]Nothing to show right now.[/yellow] Press r to reshuffle.\n")
        else:
            console.print(render_card(top, deck))
        console.print(Text(KEY_HELP, style="dim"))

        choice = (await asyncio.to_thread(Prompt.ask, ">", default="")).strip().lower()

        if choice == "q":
            break
        if choice == "r":
            await deck.reshuffle()
        elif choice == "c":
            keys = [key.value for key, _ in SUBJECTS]
            picked = await asyncio.to_thread(Prompt.ask, "Subject", choices=keys, default=deck.subject.value)
            await deck.select_subject(CategoryKey(picked))
        elif top is None:
            continue
        elif choice in ("k", "s"):
            dx = swipe_dx if choice == "k" else -swipe_dx
            outcome = deck.gestures.swipe(top, dx)
            if outcome.exit_task is not None:
                await outcome.exit_task
        elif choice == "m":
            deck.toggle_text(top)
        elif choice == "j":
            top.clamp.scroll(deck.settings.clamp_lines)
        elif choice == "o":
            await share_item(top.item, clipboard=console_clipboard)
            await asyncio.to_thread(Prompt.ask, "Press enter", default="")

    kept = sum(1 for _, d in deck.committed if d is SwipeDirection.RIGHT)
    console.print(f"\nKept {kept}, skipped {len(deck.committed) - kept}.")


# =============================================================================
# Commands
# =============================================================================

@app.command()
def play(
    subject: Optional[str] = typer.Option(None, "--subject", "-s", help="Subject key"),
) -> None:
    """
    Start an interactive deck.

    Cards are primed instantly (live, cached or built-in facts) and the
    backlog keeps refilling in the background while you swipe.
    """
    settings = get_settings()
    store = open_store(settings)
    chosen = parse_subject(subject, store)
    store.save_subject(chosen)

    async def _run() -> None:
        queue, source = make_queue(settings, store)
        deck = DeckController(queue, settings=settings, cache=store, subject=chosen)
        try:
            await run_session(deck)
        finally:
            await deck.reset()
            await source.close()

    try:
        asyncio.run(_run())
    finally:
        store.close()


@app.command()
def fetch(
    subject: Optional[str] = typer.Option(None, "--subject", "-s", help="Subject key"),
    count: int = typer.Option(12, "--count", "-n", help="Provider calls to make"),
) -> None:
    """Fetch one batch of facts and print it."""
    settings = get_settings()
    store = open_store(settings)
    chosen = parse_subject(subject, store)

    async def _run():
        queue, source = make_queue(settings, store)
        try:
            return await queue.fetch_batch(chosen, count)
        finally:
            await source.close()

    try:
        items = asyncio.run(_run())
    finally:
        store.close()

    if not items:
        console.print(f"[yellow]No facts fetched for {chosen.value}.[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"{len(items)}/{count} facts - {subject_label(chosen)}")
    table.add_column("Category", style="cyan")
    table.add_column("Title")
    table.add_column("Text", overflow="fold")
    for item in items:
        text = item.text if len(item.text) <= 120 else item.text[:117] + "..."
        table.add_row(item.category.value, item.title or "", text)
    console.print(table)


@app.command()
def subjects() -> None:
    """List subject keys."""
    settings = get_settings()
    store = open_store(settings)
    try:
        current = store.load_subject()
    finally:
        store.close()

    table = Table()
    table.add_column("Key")
    table.add_column("Label")
    for key, label in SUBJECTS:
        marker = " [green]*[/green]" if key is current else ""
        table.add_row(f"{key.value}{marker}", label)
    console.print(table)


@app.command()
def cache(
    subject: Optional[str] = typer.Option(None, "--subject", "-s", help="Category to inspect"),
    clear: bool = typer.Option(False, "--clear", help="Remove cached facts"),
) -> None:
    """Inspect or clear cached facts."""
    settings = get_settings()
    store = open_store(settings)
    try:
        chosen = parse_subject(subject, store) if subject else None
        if clear:
            removed = store.clear_cache(chosen if chosen is not None and chosen.is_concrete else None)
            console.print(f"Cleared {removed} cache record(s).")
            return

        table = Table(title="Cached facts")
        table.add_column("Category", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("Newest")
        categories = [chosen] if chosen is not None and chosen.is_concrete else CategoryKey.concrete()
        for key in categories:
            items = store.load_cache(key)
            newest = items[-1].title or items[-1].text[:40] if items else "-"
            table.add_row(key.value, str(len(items)), newest)
        console.print(table)
    finally:
        store.close()


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level.upper(),
        format="<level>{message}</level>",
    )

    app()


if __name__ == "__main__":
    main()
