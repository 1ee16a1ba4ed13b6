"""CLI for the fair_rent ethical pricing engine."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from project root (FAIR_RENT_CONFIG may live there)
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .batch import quote_documents, rank_quotes
from .config import default_config_path
from .errors import FairRentError
from .intake import check_property, load_documents
from .models import HousingType, Location, PricingRecommendation, PropertyCharacteristics, PropertyType
from .pricing import EthicalPricingEngine, get_pricing_breakdown, get_pricing_guidance
from .storage import export_csv, export_json

app = typer.Typer(
    name="fair-rent",
    help="Ethical rent guidance - suggested rent and a fair price band for a listing",
)
console = Console()

EXIT_SPECULATIVE = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _get_engine(config_path: Optional[Path]) -> EthicalPricingEngine:
    """Engine from --config, $FAIR_RENT_CONFIG or config.yaml; built-in tables otherwise."""
    if config_path is None and not default_config_path().exists():
        return EthicalPricingEngine()
    return EthicalPricingEngine.from_config_file(config_path)


def _run_id() -> str:
    """Generate run ID from timestamp."""
    return datetime.utcnow().strftime("%Y%m%d_%H%M%S")


def _display_recommendation(rec: PricingRecommendation, proposed_rent: Optional[float]) -> None:
    table = Table(title="Pricing Steps")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    for i, line in enumerate(rec.reasoning, 1):
        table.add_row(str(i), line)
    console.print(table)

    console.print(
        f"[bold]Suggested rent:[/bold] ${rec.suggested_rent:,}/month  "
        f"[dim](ethical range ${rec.min_rent:,} - ${rec.max_rent:,})[/dim]"
    )
    if proposed_rent is not None:
        if rec.is_within_ethical_range:
            console.print(f"[green]✓ ${proposed_rent:,.0f} is within the ethical range[/green]")
        else:
            console.print(f"[red]✗ ${proposed_rent:,.0f} exceeds the ethical maximum[/red]")
    for w in rec.warnings:
        console.print(f"[yellow]Warning: {w}[/yellow]")


def _display_quotes(quotes: list, run_id: str, limit: int = 20) -> None:
    """Display ranked batch quotes."""
    if not quotes:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(title=f"Pricing Report (Run {run_id})")
    table.add_column("Rank", style="dim")
    table.add_column("Property", style="cyan")
    table.add_column("Type", style="dim")
    table.add_column("City", style="dim")
    table.add_column("Asking", justify="right")
    table.add_column("Suggested", justify="right")
    table.add_column("Range", justify="right")
    table.add_column("Fair", justify="center")
    table.add_column("Warn", justify="right")

    for i, q in enumerate(quotes[:limit], 1):
        rec = q.recommendation
        asking = "-" if q.proposed_rent is None else f"${q.proposed_rent:,.0f}"
        fair = "-" if q.proposed_rent is None else ("✓" if rec.is_within_ethical_range else "✗")
        table.add_row(
            str(i),
            q.property_id,
            q.characteristics.type.value,
            q.characteristics.location.city,
            asking,
            f"${rec.suggested_rent:,}",
            f"${rec.min_rent:,} - ${rec.max_rent:,}",
            fair,
            str(len(rec.warnings)),
        )

    console.print(table)


@app.command()
def quote(
    property_type: PropertyType = typer.Option(..., "--type", "-t", help="Accommodation type"),
    square_footage: float = typer.Option(0, "--sqft", "-s", help="Living area in sqft"),
    bedrooms: int = typer.Option(1, "--bedrooms", "-b"),
    bathrooms: float = typer.Option(1, "--bathrooms", "-B", help="Half steps allowed, e.g. 1.5"),
    city: str = typer.Option("", "--city"),
    state: str = typer.Option("", "--state"),
    amenities: Optional[List[str]] = typer.Option(None, "--amenity", "-a", help="Repeat for each amenity (wifi, gym, ...)"),
    housing_type: HousingType = typer.Option(HousingType.PRIVATE, "--housing-type"),
    floor: Optional[int] = typer.Option(None, "--floor"),
    year_built: Optional[int] = typer.Option(None, "--year-built"),
    parking_spaces: Optional[int] = typer.Option(None, "--parking"),
    has_elevator: bool = typer.Option(False, "--elevator"),
    is_furnished: bool = typer.Option(False, "--furnished"),
    pet_friendly: bool = typer.Option(False, "--pets"),
    utilities_included: bool = typer.Option(False, "--utilities"),
    near_transport: bool = typer.Option(False, "--near-transport"),
    near_schools: bool = typer.Option(False, "--near-schools"),
    near_shopping: bool = typer.Option(False, "--near-shopping"),
    rent: Optional[float] = typer.Option(None, "--rent", "-r", help="Asking rent to check against the ethical maximum"),
    breakdown: bool = typer.Option(False, "--breakdown", help="Print the per-stage dollar breakdown"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Price a single property; with --rent, check the asking rent too."""
    _setup_logging(verbose)
    prop = PropertyCharacteristics(
        type=property_type,
        housing_type=housing_type,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        square_footage=square_footage,
        amenities=frozenset(amenities or []),
        location=Location(city=city, state=state),
        floor=floor,
        year_built=year_built,
        parking_spaces=parking_spaces,
        has_elevator=has_elevator,
        is_furnished=is_furnished,
        pet_friendly=pet_friendly,
        utilities_included=utilities_included,
        proximity_to_transport=near_transport,
        proximity_to_schools=near_schools,
        proximity_to_shopping=near_shopping,
    )
    problems = check_property(prop)
    if problems:
        for p in problems:
            console.print(f"[red]Invalid property: {escape(p)}[/red]")
        raise typer.Exit(1)

    try:
        engine = _get_engine(config_path)
    except (FairRentError, FileNotFoundError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if rent is None:
        rec = engine.calculate_ethical_rent(prop)
    else:
        rec = engine.validate_ethical_pricing(rent, prop)

    _display_recommendation(rec, rent)
    if breakdown:
        console.print()
        console.print(get_pricing_breakdown(prop, engine), markup=False)
    console.print(f"\n[dim]{get_pricing_guidance(prop, engine)}[/dim]")

    if rent is not None and not rec.is_within_ethical_range:
        raise typer.Exit(EXIT_SPECULATIVE)


@app.command()
def batch(
    input_path: Path = typer.Argument(..., help="YAML/JSON file with one or more property documents"),
    out_dir: Path = typer.Option(Path("output"), "--out", "-o", help="Directory for CSV/JSON reports"),
    limit: int = typer.Option(20, "--limit", "-n", help="Max rows to show"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Price every property in a file and write CSV/JSON reports."""
    _setup_logging(verbose)
    try:
        engine = _get_engine(config_path)
        documents = load_documents(input_path)
    except (FairRentError, FileNotFoundError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not documents:
        console.print("[yellow]No properties in input file.[/yellow]")
        raise typer.Exit(1)

    result = quote_documents(documents, engine)
    for e in result.errors:
        console.print(f"[yellow]Skipped {escape(e)}[/yellow]")

    ranked = rank_quotes(result.quotes)
    run_id = _run_id()
    csv_path = out_dir / f"pricing_{run_id}.csv"
    json_path = out_dir / f"pricing_{run_id}.json"
    export_csv(ranked, csv_path)
    export_json(ranked, json_path, errors=result.errors)

    _display_quotes(ranked, run_id, limit=limit)
    console.print(
        f"[green]Priced {len(result.quotes)} of {len(documents)} properties, "
        f"{len(result.speculative)} above the ethical maximum.[/green]"
    )
    console.print(f"  CSV:  {csv_path}")
    console.print(f"  JSON: {json_path}")


@app.command()
def tables(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Show the coefficient tables the engine is using."""
    try:
        t = _get_engine(config_path).tables
    except (FairRentError, FileNotFoundError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    rates = Table(title="Base rates ($/sqft/month)")
    rates.add_column("Type", style="cyan")
    rates.add_column("Rate", justify="right")
    for name, rate in t.base_rates.items():
        rates.add_row(name, f"{rate:g}")
    console.print(rates)
    console.print(f"Room base price: ${t.room_base_price:g}")

    steps = [
        ("Bedrooms", t.bedroom_adjustments),
        ("Bathrooms", t.bathroom_adjustments),
        ("Size efficiency (sqft <=)", t.size_efficiency),
        ("Year built (>=)", t.quality_by_year),
        ("Floor (<=)", t.floor_adjustments),
    ]
    for title, step_table in steps:
        st = Table(title=title)
        st.add_column("Threshold", justify="right")
        st.add_column("Multiplier", justify="right")
        for threshold, multiplier in step_table.steps:
            st.add_row(f"{threshold:g}", f"{multiplier:g}x")
        console.print(st)

    loc = Table(title="Location multipliers")
    loc.add_column("City / State", style="cyan")
    loc.add_column("Multiplier", justify="right")
    for name, m in t.location_multipliers.items():
        loc.add_row(name, f"{m:g}x")
    loc.add_row("(default)", f"{t.default_location_multiplier:g}x")
    console.print(loc)

    amen = Table(title="Amenity additions ($/month)")
    amen.add_column("Amenity", style="cyan")
    amen.add_column("Value", justify="right")
    for name, v in {**t.amenity_values, **t.feature_values}.items():
        amen.add_row(name, f"${v:g}")
    console.print(amen)


if __name__ == "__main__":
    app()
