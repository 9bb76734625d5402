import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from wikitide.capabilities.console import (
    BrowserLinkOpener,
    ConsolePromptSurface,
    ConsoleRenderingSurface,
)
from wikitide.config import WikiConfig
from wikitide.controller import NavigationController
from wikitide.events import EventBus, SessionEvent
from wikitide.logging_config import setup_logging
from wikitide.navigation import UrlClassifier
from wikitide.search import filter_titles
from wikitide.wiki import LiveWikiService


app = typer.Typer(help="Browse and search a MediaWiki wiki family from the terminal.")
console = Console()
logger = logging.getLogger(__name__)


def _load_config() -> WikiConfig:
    config = WikiConfig.from_env()
    setup_logging(level=config.log_level)
    return config


@app.command()
def titles(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Only print the first N titles.",
    ),
):
    """
    Fetch and print every non-redirect page title.
    """
    config = _load_config()
    result = asyncio.run(LiveWikiService(config).fetch_titles_result())

    shown = result.titles if limit is None else result.titles[:limit]
    for title in shown:
        console.print(title, markup=False, highlight=False)

    summary = f"{len(result.titles)} titles in {result.requests_made} requests"
    if result.error is not None:
        summary += f" (incomplete: {result.error.value})"
    console.print(f"[dim]{summary}[/]")


@app.command()
def search(query: str = typer.Argument(..., help="Text to look for in page titles.")):
    """
    Fetch all titles and print the ones containing QUERY (case-insensitive).
    """
    config = _load_config()
    all_titles = asyncio.run(LiveWikiService(config).fetch_all_titles())
    matches = filter_titles(all_titles, query)
    if not matches:
        console.print("[yellow]No matching pages[/]")
        raise typer.Exit(code=1)
    for title in matches:
        console.print(title, markup=False, highlight=False)


@app.command("main-page")
def main_page():
    """
    Resolve the wiki's main page and print its title and URL.
    """
    config = _load_config()
    result = asyncio.run(LiveWikiService(config).resolve_main_page_result())
    if result.info is None:
        console.print(f"[red]Main page unavailable[/] ({result.error.value if result.error else 'unknown'})")
        raise typer.Exit(code=1)
    console.print(result.info.title, markup=False, highlight=False)
    console.print(result.info.url, markup=False, highlight=False)


@app.command()
def classify(url: str = typer.Argument(..., help="Navigation target to classify.")):
    """
    Show how an in-app navigation to URL would be handled.
    """
    config = _load_config()
    classifier = UrlClassifier.from_config(config)
    decision = classifier.intercept(url)

    table = Table(show_header=False)
    table.add_row("class", classifier.classify(url).value)
    table.add_row("action", decision.action.value)
    table.add_row("url", decision.url)
    if decision.scale_hint is not None:
        table.add_row("initial scale", str(decision.scale_hint.initial_scale))
    console.print(table)


@app.command()
def browse():
    """
    Interactive session: /TEXT searches, a number opens a result, 'go URL'
    follows a link, 'back', 'reload', 'clear-cache' and 'quit'.
    """
    config = _load_config()
    asyncio.run(run_browser_async(config))


async def run_browser_async(config: WikiConfig):
    rendering = ConsoleRenderingSurface(console)
    event_bus = EventBus()

    async def on_titles_loaded(event: SessionEvent):
        console.print(f"[green]{event.data['count']} pages available for search[/]")

    event_bus.subscribe("titles_loaded", on_titles_loaded)

    controller = NavigationController(
        wiki_service=LiveWikiService(config),
        rendering=rendering,
        prompt=ConsolePromptSurface(console),
        link_opener=BrowserLinkOpener(),
        event_bus=event_bus,
    )
    controller.start()
    results = []

    try:
        while True:
            line = (await asyncio.to_thread(Prompt.ask, "wikitide", console=console)).strip()
            if line in ("quit", "q"):
                break
            elif line.startswith("/"):
                if not controller.search_enabled:
                    console.print("[dim]Titles are still loading[/]")
                    continue
                results = controller.on_query_changed(line[1:])
                for i, title in enumerate(results, start=1):
                    console.print(f"{i:>3}. {title}", markup=False, highlight=False)
            elif line.isdigit() and results:
                index = int(line) - 1
                if 0 <= index < len(results):
                    controller.on_title_selected(results[index])
                    results = []
            elif line.startswith("go "):
                target = line[3:].strip()
                # the external-link prompt blocks on stdin
                if not await asyncio.to_thread(controller.should_override_url_loading, target):
                    rendering.load_url(target)
            elif line == "back":
                if not controller.handle_back():
                    console.print("[dim]Nothing to go back to[/]")
            elif line == "reload":
                controller.refresh()
            elif line == "clear-cache":
                controller.clear_cache()
            elif line:
                console.print("[dim]Unknown command[/]")
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        await controller.close()


if __name__ == "__main__":
    app()
