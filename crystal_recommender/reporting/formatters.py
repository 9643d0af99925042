"""
ASCII terminal formatters for CLI commands.

All formatters accept model objects and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Recommendation table
--------------------
::

  Rank  Crystal              Score  Confidence  Evidence
  ------------------------------------------------------
     1  Citrine                100        high      high
        - Replenishes energy and restores vitality
        Usage: Carry it with you ...
"""

from __future__ import annotations

from crystal_recommender.models.catalog import CatalogEntry
from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.recommendation import RecommendationResult

_DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(
    results: list[RecommendationResult],
    title: str = "Crystal Recommendations",
    show_usage: bool = True,
) -> str:
    """Format ranked results as an ASCII table with reasons beneath each row.

    Args:
        results:    Ranked results (already ordered by the ranker).
        title:      Header line text.
        show_usage: Include the contextual usage line per row.

    Returns:
        Multi-line string.
    """
    lines: list[str] = ["", f"=== {title} ==="]

    if not results:
        lines.append("")
        lines.append("  (no recommendations)")
        return "\n".join(lines)

    header = (
        f"  {'Rank':>4}  {'Crystal':<20}  {'Score':>5}  "
        f"{'Confidence':>10}  {'Evidence':>8}"
    )
    lines.append("")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, res in enumerate(results, start=1):
        lines.append(
            f"  {rank:>4}  {res.name[:20]:<20}  {res.match_score:>5}  "
            f"{res.confidence.value:>10}  {res.evidence_level.value:>8}"
        )
        for reason in res.reasons:
            lines.append(f"        - {reason}")
        if show_usage:
            lines.append(f"        Usage: {res.usage}")

    return "\n".join(lines)


# ── Energy state ──────────────────────────────────────────────────────────────


def _bar(value: int, width: int = 20) -> str:
    filled = round(value / 100 * width)
    return "#" * filled + "." * (width - filled)


def format_energy_state(state: EnergyState3D) -> str:
    """Format a 3-axis energy state with simple bars."""
    lines = [
        "",
        "=== Energy State ===",
        f"  Physical:   {state.physical:>3}  [{_bar(state.physical)}]",
        f"  Mental:     {state.mental:>3}  [{_bar(state.mental)}]",
        f"  Spiritual:  {state.spiritual:>3}  [{_bar(state.spiritual)}]",
        f"  Balance:    {state.balance:>5.1f}",
        f"  Trend:      {state.trend.value}",
        f"  Time:       {state.time_bucket.value} ({_DAY_NAMES[state.day_of_week]})",
    ]
    return "\n".join(lines)


# ── Catalog ───────────────────────────────────────────────────────────────────


def format_catalog(entries: list[CatalogEntry]) -> str:
    """Format catalog entries as an ASCII table in catalog order."""
    lines: list[str] = ["", "=== Crystal Catalog ==="]
    if not entries:
        lines.append("")
        lines.append("  (no entries)")
        return "\n".join(lines)

    header = (
        f"  {'Id':<18}  {'Name':<18}  {'Tier':<8}  {'Category':<18}  "
        f"{'Chakra':<12}  {'Base':>4}  {'Evidence':>8}"
    )
    lines.append("")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for e in entries:
        lines.append(
            f"  {e.id[:18]:<18}  {e.name[:18]:<18}  {e.tier.value:<8}  "
            f"{e.category[:18]:<18}  {e.chakra.value:<12}  {e.base_score:>4}  "
            f"{e.evidence_level.value:>8}"
        )
    lines.append("")
    lines.append(f"  {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
    return "\n".join(lines)
