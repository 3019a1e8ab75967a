"""Typer CLI application for the SEO Keyword Suggester.

Provides commands to generate categorized keyword suggestions, browse and
analyse the saved search history, export/import it, and manage settings.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from seo_keywords.modules.keyword_generation.types import KeywordFocus

console = Console()
app = typer.Typer(
    name="seo-keywords",
    help="SEO Keyword Suggester -- categorized keyword ideas, tips, and search history.",
    add_completion=False,
    no_args_is_help=True,
)

_state: dict[str, Any] = {"config_path": "config/settings.yaml"}

EXAMPLES = {
    "pet": {
        "business": "Professional pet grooming services offering baths, haircuts, "
                    "nail trimming for dogs and cats",
        "industry": "pet-care",
        "location": "Downtown Seattle",
        "keyword_type": KeywordFocus.LOCAL,
    },
    "fitness": {
        "business": "Personal fitness training and nutrition coaching for weight loss "
                    "and muscle building",
        "industry": "fitness",
        "location": "Los Angeles",
        "keyword_type": KeywordFocus.COMMERCIAL,
    },
    "restaurant": {
        "business": "Authentic Italian restaurant serving fresh pasta, pizza, and "
                    "traditional Italian dishes",
        "industry": "food-restaurant",
        "location": "Chicago",
        "keyword_type": KeywordFocus.LOCAL,
    },
    "dentist": {
        "business": "Modern dental clinic offering general dentistry, teeth cleaning, "
                    "cosmetic dentistry",
        "industry": "healthcare",
        "location": "Miami",
        "keyword_type": KeywordFocus.LOCAL,
    },
}

CATEGORY_TITLES = (
    ("primary_keywords", "Primary Keywords"),
    ("long_tail_keywords", "Long-tail Keywords"),
    ("local_keywords", "Local Keywords"),
    ("content_ideas", "Content Ideas"),
)

SCORE_STYLES = {"excellent": "green", "good": "cyan", "fair": "yellow", "poor": "red"}


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _get_app():
    """Lazy-import and return an initialised KeywordToolApp."""
    from seo_keywords.app import KeywordToolApp
    tool = KeywordToolApp(config_path=_state["config_path"])
    tool.initialize()
    return tool


def _score_markup(score: Any) -> str:
    from seo_keywords.modules.search_history.metrics import get_seo_score_class
    try:
        value = int(score)
    except (TypeError, ValueError):
        return str(score)
    style = SCORE_STYLES[get_seo_score_class(value)]
    return f"[{style}]{value}/100[/{style}]"


def _print_keyword_results(results: dict) -> None:
    """Pretty-print a keyword result set using Rich."""
    for key, title in CATEGORY_TITLES:
        keywords = results.get(key) or []
        if key == "content_ideas" and not keywords:
            keywords = results.get("content_keywords") or []
        if not keywords:
            continue
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Keyword", style="cyan", min_width=30)
        table.add_column("Volume", justify="right")
        table.add_column("Competition")
        table.add_column("Intent")
        for kw in keywords:
            if not isinstance(kw, dict):
                continue
            table.add_row(
                str(kw.get("keyword", "")),
                str(kw.get("search_volume", "")),
                str(kw.get("competition", "")),
                str(kw.get("intent", "")),
            )
        console.print(table)

    tips = results.get("seo_tips") or []
    if tips:
        table = Table(title="SEO Tips", show_header=True, header_style="bold magenta")
        table.add_column("Tip", max_width=50)
        table.add_column("Example", style="cyan")
        table.add_column("Placement")
        for tip in tips:
            if not isinstance(tip, dict):
                continue
            table.add_row(
                str(tip.get("tip", "")),
                str(tip.get("keyword_example", "")),
                str(tip.get("placement", "")),
            )
        console.print(table)


@app.callback()
def _global_options(
    config: str = typer.Option(
        "config/settings.yaml", "--config", "-c", help="Path to the YAML settings file.",
    ),
) -> None:
    """SEO Keyword Suggester -- categorized keyword ideas, tips, and search history."""
    _state["config_path"] = config


# ------------------------------------------------------------------
# generate
# ------------------------------------------------------------------
@app.command()
def generate(
    business: Optional[str] = typer.Argument(None, help="Business description."),
    industry: str = typer.Option("", "--industry", "-i", help="Industry id (see 'industries')."),
    location: str = typer.Option("", "--location", "-l", help="Target city or area."),
    keyword_type: KeywordFocus = typer.Option(
        KeywordFocus.MIXED, "--type", "-t", help="Keyword focus.",
    ),
    example: Optional[str] = typer.Option(
        None, "--example", "-e", help="Use a canned example: pet, fitness, restaurant, dentist.",
    ),
    local_only: bool = typer.Option(False, "--local-only", help="Skip the remote AI service."),
    save: bool = typer.Option(True, "--save/--no-save", help="Record the search in history."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate categorized keyword suggestions for a business."""
    _setup_logging(verbose)
    if example:
        preset = EXAMPLES.get(example)
        if preset is None:
            console.print(f"[red]Unknown example:[/red] {example}")
            raise typer.Exit(code=1)
        business = preset["business"]
        industry = preset["industry"]
        location = preset["location"]
        keyword_type = preset["keyword_type"]

    from seo_keywords.utils.validators import validate_form_inputs
    errors = validate_form_inputs(business, industry, keyword_type.value)
    if errors:
        for err in errors:
            console.print(f"[red]✘[/red] {err}")
        raise typer.Exit(code=1)

    tool = _get_app()
    service = tool.get_generation_service(use_remote=not local_only)

    async def _run():
        try:
            return await service.generate(business, industry, location, keyword_type)
        finally:
            await service.close()

    if as_json:
        results = asyncio.run(_run())
    else:
        console.print(Panel(f"[bold cyan]Keyword Suggestions: {industry}[/bold cyan]"))
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
            progress.add_task(description="Generating keywords...", total=None)
            results = asyncio.run(_run())

    search_id = None
    if save:
        search_id = tool.get_history_store().add_search(
            {
                "business": business,
                "industry": industry,
                "location": location,
                "keywordType": keyword_type.value,
            },
            results,
        )

    if as_json:
        typer.echo(json.dumps(results, indent=2))
        return

    _print_keyword_results(results)
    source = "AI service" if service.last_source == "remote" else "local generator"
    console.print(f"[green]✔[/green] Keywords generated by the {source}.")
    if search_id:
        console.print(f"Saved to history as [bold]{search_id}[/bold]")


# ------------------------------------------------------------------
# history
# ------------------------------------------------------------------
@app.command()
def history(
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum entries to show."),
    business: Optional[str] = typer.Option(None, "--business", "-b", help="Filter by business text."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """List saved searches, most recent first."""
    _setup_logging(verbose)
    store = _get_app().get_history_store()
    if business:
        entries = list(reversed(store.get_searches_by_business(business)))[:limit]
    else:
        entries = store.get_recent_searches(limit)

    if not entries:
        console.print("[yellow]No searches in history.[/yellow]")
        return

    table = Table(title="Search History", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date")
    table.add_column("Business", max_width=40)
    table.add_column("Industry")
    table.add_column("Keywords", justify="right")
    table.add_column("SEO Score", justify="right")
    for entry in entries:
        params = entry.get("searchParams") or {}
        metrics = entry.get("seoMetrics") or {}
        table.add_row(
            str(entry.get("id", "")),
            str(entry.get("timestamp", ""))[:10],
            str(params.get("business", "")),
            str(params.get("industry", "")),
            str(metrics.get("totalKeywords", 0)),
            _score_markup(metrics.get("seoScore", 0)),
        )
    console.print(table)


# ------------------------------------------------------------------
# show
# ------------------------------------------------------------------
@app.command()
def show(
    search_id: str = typer.Argument(..., help="History entry id."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show one saved search with its keywords, metrics, and backlinks."""
    _setup_logging(verbose)
    entry = _get_app().get_history_store().get_search_by_id(search_id)
    if entry is None:
        console.print(f"[yellow]Search not found:[/yellow] {search_id}")
        raise typer.Exit(code=1)

    params = entry.get("searchParams") or {}
    metrics = entry.get("seoMetrics") or {}
    breakdown = metrics.get("competitionBreakdown") or {}
    console.print(Panel(
        f"[bold]{params.get('business', '')}[/bold]\n"
        f"Industry: {params.get('industry', '')}  Location: {params.get('location') or '-'}  "
        f"Type: {params.get('keywordType', '')}\n"
        f"Keywords: {metrics.get('totalKeywords', 0)}  Volume: {metrics.get('totalVolume', 0)}  "
        f"Avg volume: {metrics.get('averageVolume', 0)}\n"
        f"Competition: easy={breakdown.get('easy', 0)} medium={breakdown.get('medium', 0)} "
        f"hard={breakdown.get('hard', 0)}  SEO score: {_score_markup(metrics.get('seoScore', 0))}",
        title=str(entry.get("timestamp", "")),
    ))
    _print_keyword_results(entry.get("results") or {})

    backlinks = entry.get("backlinks") or []
    if backlinks:
        table = Table(title="Top Backlinks", show_header=True, header_style="bold magenta")
        table.add_column("URL", style="cyan")
        table.add_column("Anchor")
        table.add_column("Authority", justify="right")
        table.add_column("Type")
        for link in backlinks[:10]:
            table.add_row(
                str(link.get("url", "")),
                str(link.get("anchorText", "")),
                str(link.get("authority", "")),
                str(link.get("followType", "")),
            )
        console.print(table)


# ------------------------------------------------------------------
# stats
# ------------------------------------------------------------------
@app.command()
def stats(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show aggregate statistics over the search history."""
    from seo_keywords.modules.search_history.metrics import get_percentage

    _setup_logging(verbose)
    store = _get_app().get_history_store()
    summary = store.get_search_stats()
    overview = store.get_dashboard_summary()

    table = Table(title="Search Statistics", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan", min_width=25)
    table.add_column("Value")
    table.add_row("Total searches", str(summary["totalSearches"]))
    table.add_row("Unique businesses", str(summary["uniqueBusinesses"]))
    table.add_row("Most used industry", str(summary["mostUsedIndustry"] or "-"))
    table.add_row("Avg keywords / search", str(summary["averageKeywordsPerSearch"]))
    table.add_row("First search", str(summary["firstSearchDate"] or "-"))
    table.add_row("Latest search", str(summary["latestSearchDate"] or "-"))
    table.add_row("Avg SEO score (recent)", _score_markup(overview["averageSeoScore"]))
    breakdown = overview["competitionBreakdown"]
    tier_total = sum(breakdown.values())
    table.add_row(
        "Competition mix (recent)",
        "  ".join(
            f"{tier}={count} ({get_percentage(count, tier_total)}%)"
            for tier, count in breakdown.items()
        ),
    )
    console.print(table)


# ------------------------------------------------------------------
# chart
# ------------------------------------------------------------------
@app.command()
def chart(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show searches per day as a text bar chart."""
    _setup_logging(verbose)
    series = _get_app().get_history_store().get_history_for_chart()
    if not series["labels"]:
        console.print("[yellow]No searches in history.[/yellow]")
        return
    table = Table(title="Searches per Day", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("")
    for label, count in zip(series["labels"], series["data"]):
        table.add_row(label, str(count), "█" * count)
    console.print(table)


# ------------------------------------------------------------------
# export / import
# ------------------------------------------------------------------
@app.command()
def export(
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Export directory."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Export the search history to a JSON file."""
    _setup_logging(verbose)
    tool = _get_app()
    path = tool.get_history_store().export_history(tool.get_exporter(output_dir))
    console.print(f"[green]✔[/green] History exported to {path}")


@app.command("import")
def import_history(
    path: Path = typer.Argument(..., help="JSON file produced by 'export'."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Import searches from a history export file."""
    _setup_logging(verbose)
    if not path.exists():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)
    try:
        imported = _get_app().get_history_store().import_history(path.read_bytes())
    except ValueError as exc:
        console.print(f"[red]✘[/red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[green]✔[/green] Imported {imported} searches.")


# ------------------------------------------------------------------
# clear
# ------------------------------------------------------------------
@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Delete all saved searches."""
    _setup_logging(verbose)
    if not yes and not typer.confirm("Delete the entire search history?"):
        raise typer.Abort()
    if _get_app().get_history_store().clear_history():
        console.print("[green]✔[/green] Search history cleared.")
    else:
        console.print("[red]✘[/red] Failed to clear search history.")
        raise typer.Exit(code=1)


# ------------------------------------------------------------------
# settings
# ------------------------------------------------------------------
@app.command()
def settings(
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Save an OpenAI API key."),
    clear_key: bool = typer.Option(False, "--clear-api-key", help="Remove the saved API key."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show or update saved settings."""
    _setup_logging(verbose)
    store = _get_app().get_settings_store()
    if clear_key:
        if not store.clear():
            console.print("[red]✘[/red] Failed to remove saved settings.")
            raise typer.Exit(code=1)
        console.print("[green]✔[/green] API key removed.")
    elif api_key is not None:
        if store.set_api_key(api_key):
            console.print("[green]✔[/green] API key saved.")
        else:
            console.print("[red]✘[/red] Failed to save API key.")
            raise typer.Exit(code=1)

    key = store.get_api_key()
    masked = key[:3] + "..." + key[-4:] if len(key) > 8 else ("set" if key else "not set")
    console.print(f"API key: {masked}")


# ------------------------------------------------------------------
# industries
# ------------------------------------------------------------------
@app.command()
def industries() -> None:
    """List the built-in industry vocabularies."""
    from seo_keywords.modules.keyword_generation.industry_catalog import (
        get_industry_keywords,
        list_industries,
    )
    table = Table(title="Industries", show_header=True, header_style="bold magenta")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Services")
    table.add_column("Terms")
    for industry_id in list_industries():
        bundle = get_industry_keywords(industry_id)
        table.add_row(industry_id, ", ".join(bundle.services), ", ".join(bundle.terms))
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
