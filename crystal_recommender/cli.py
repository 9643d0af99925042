"""
Crystal Recommender - CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (catalog check, energy estimate, recommendation, ...).
  5. Report result to stdout.

Install and run::

    pip install -e .
    crystal-recommender --help
    crystal-recommender validate-config
    crystal-recommender validate-catalog
    crystal-recommender energy --at 2026-10-17T08:30 --type ENFP
    crystal-recommender recommend --mood tired --energy-level 4
    crystal-recommender intelligent --type INFJ --chakra-text "heart: 30" --mood stressed
    crystal-recommender list --category calming
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from crystal_recommender.taxonomy.crystal_taxonomy import Chakra, Mood, Scenario, TimeBucket

app = typer.Typer(
    name="crystal-recommender",
    help="Deterministic crystal recommendation engine - local CLI.",
    add_completion=False,
)

_CONFIG_OPTION_HELP = "Path to TOML config file (default: config/default.toml)."


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from crystal_recommender.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from crystal_recommender.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _build_engine_or_exit(config):
    """Build a RecommendationEngine from config, exiting on catalog errors."""
    from crystal_recommender.errors import CatalogError
    from crystal_recommender.recommendations.engine import RecommendationEngine

    try:
        return RecommendationEngine.from_config(config)
    except CatalogError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _moment_or_exit(at: Optional[str]) -> datetime:
    from crystal_recommender.utils.time_utils import SystemClock, parse_timestamp

    if at is None:
        return SystemClock().now()
    try:
        return parse_timestamp(at)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog file:     {config.catalog.catalog_file or '(bundled)'}")
    typer.echo(f"  Preferences file: {config.catalog.preferences_file or '(bundled)'}")
    typer.echo(
        "  Default caps:     "
        f"basic={config.scoring.basic_max_recommendations} "
        f"intelligent={config.scoring.intelligent_max_recommendations} "
        f"extended={config.scoring.extended_max_recommendations}"
    )
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-catalog")
def validate_catalog(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Load the catalog and preference tables and cross-check their ids.

    Exits with code 1 if either file is invalid or a preferred id is missing
    from the catalog.
    """
    from crystal_recommender.catalog.loader import validate_preference_tables

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)

    typer.echo(f"  Catalog entries:   {len(engine.store)}")
    typer.echo(f"  Categories:        {', '.join(engine.store.categories())}")
    typer.echo(f"  Referenced ids:    {len(engine.tables.referenced_ids())}")

    missing = validate_preference_tables(engine.tables, engine.store)
    if missing:
        typer.echo(
            f"[ERROR] Preference tables reference unknown ids: {', '.join(missing)}",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo("")
    typer.echo("[OK] Catalog valid.")


@app.command("energy")
def energy(
    at: Optional[str] = typer.Option(
        None, "--at", help="ISO-8601 timestamp (default: now, local time)."
    ),
    personality_type: Optional[str] = typer.Option(
        None, "--type", help="Personality letters, e.g. ENFP."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Estimate the 3-axis energy state for a moment."""
    from crystal_recommender.energy.estimator import estimate_energy_state
    from crystal_recommender.profile.parser import parse_profile
    from crystal_recommender.reporting.formatters import format_energy_state

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    moment  = _moment_or_exit(at)
    profile = parse_profile(personality_type) if personality_type else None
    typer.echo(format_energy_state(estimate_energy_state(moment, profile)))


@app.command("recommend")
def recommend(
    mood: Optional[Mood] = typer.Option(None, "--mood", help="Current mood."),
    energy_level: Optional[int] = typer.Option(
        None, "--energy-level", min=1, max=5, help="Energy level 1-5."
    ),
    chakra: Optional[Chakra] = typer.Option(None, "--chakra", help="Chakra to match."),
    personality_type: Optional[str] = typer.Option(
        None, "--type", help="Personality letters, e.g. ENFP."
    ),
    scenario: Optional[Scenario] = typer.Option(None, "--scenario", help="Usage scenario."),
    time_bucket: Optional[TimeBucket] = typer.Option(
        None, "--time", help="Part of the day (usage advice)."
    ),
    max_recommendations: Optional[int] = typer.Option(
        None, "--max", min=0, help="Maximum number of results (default from config)."
    ),
    extended: bool = typer.Option(
        False, "--extended", help="Score the full catalog instead of the core tier."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Basic-mode recommendations from explicit context fields."""
    from crystal_recommender.errors import CrystalRecommenderError
    from crystal_recommender.models.recommendation import RecommendationContext
    from crystal_recommender.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)

    context = RecommendationContext(
        mood=mood,
        energy_level=energy_level,
        chakra=chakra,
        personality_type=personality_type,
        scenario=scenario,
        time_bucket=time_bucket,
        max_recommendations=max_recommendations,
    )
    try:
        if extended:
            results = engine.extended_recommend(context)
        else:
            results = engine.recommend(context)
    except CrystalRecommenderError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    title = "Extended Recommendations" if extended else "Crystal Recommendations"
    typer.echo(format_recommendations(results, title=title))


@app.command("intelligent")
def intelligent(
    personality_type: Optional[str] = typer.Option(
        None, "--type", help="Personality letters, e.g. INFJ."
    ),
    chakra_text: Optional[str] = typer.Option(
        None, "--chakra-text", help='Chakra narrative, e.g. "root: 35, heart: 70".'
    ),
    insight_text: Optional[str] = typer.Option(
        None, "--insight-text", help="Energy / personality insight narrative."
    ),
    mood: Optional[Mood] = typer.Option(None, "--mood", help="Current mood."),
    at: Optional[str] = typer.Option(
        None, "--at", help="ISO-8601 timestamp (default: now, local time)."
    ),
    max_recommendations: Optional[int] = typer.Option(
        None, "--max", min=0, help="Maximum number of results (default from config)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Intelligent-mode recommendations from a profile, energy state and mood."""
    from crystal_recommender.energy.estimator import estimate_energy_state
    from crystal_recommender.errors import CrystalRecommenderError
    from crystal_recommender.profile.parser import parse_profile
    from crystal_recommender.reporting.formatters import (
        format_energy_state,
        format_recommendations,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)

    profile = parse_profile(personality_type, chakra_text, insight_text)
    state   = estimate_energy_state(_moment_or_exit(at), profile)

    try:
        results = engine.intelligent_recommend(
            profile, state, mood=mood, max_recommendations=max_recommendations
        )
    except CrystalRecommenderError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_energy_state(state))
    typer.echo(format_recommendations(results, title="Personalised Recommendations"))


@app.command("list")
def list_catalog(
    category: Optional[str] = typer.Option(
        None, "--category", help="Only show entries of this category."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """List catalog entries, optionally filtered by category."""
    from crystal_recommender.reporting.formatters import format_catalog

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _build_engine_or_exit(config)

    if category is None:
        entries = engine.store.all()
    else:
        entries = engine.store.by_category(category)
        if not entries:
            typer.echo(
                f"[ERROR] Unknown category '{category}'. "
                f"Known: {', '.join(engine.store.categories())}",
                err=True,
            )
            raise typer.Exit(code=1)

    typer.echo(format_catalog(entries))


if __name__ == "__main__":
    app()
