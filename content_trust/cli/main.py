"""Operator CLI for the content trust scoring subsystem using Typer and Rich."""

import json
import math
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.tree import Tree

from content_trust.config.logging import get_logger
from content_trust.config.rate_limits import RATE_LIMITS
from content_trust.config.scoring import TIER_THRESHOLDS
from content_trust.config.settings import settings
from content_trust.hierarchy import TreeValidationError, build_tree
from content_trust.schemas import TreeNode
from content_trust.scoring import ScoringEngine, claim_weight, compute_score
from content_trust.scoring.analysis import (
    histogram,
    percentile,
    suggest_thresholds,
    tier_distribution,
)
from content_trust.scoring.levels import TIER_INFOS, get_tier_color, get_tier_name

app = typer.Typer(
    help="Content Trust CLI - claim scoring, source hierarchies and rate limits",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")


def _load_json_list(path: Path) -> list[Any]:
    """Read a JSON file that must contain a top-level list."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]✗[/red] Cannot read {escape(str(path))}: {escape(str(e))}")
        logger.error(f"Failed to load {path}: {e}")
        raise typer.Exit(1)
    if not isinstance(data, list):
        console.print(f"[red]✗[/red] {escape(str(path))} must contain a JSON list")
        raise typer.Exit(1)
    return data


def _tier_label(tier: int) -> str:
    return f"[{get_tier_color(tier)}]{tier} {get_tier_name(tier)}[/]"


@app.command()
def status() -> None:
    """
    Display configuration.

    Shows logging settings, rate limit sweep settings and the presets.
    """
    table = Table(title="Content Trust Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=22)
    table.add_column("Details", style="yellow")

    table.add_row("Logging", f"Level: {settings.log_level}, Format: {settings.log_format}")
    table.add_row(
        "Rate limit sweep",
        f"every {settings.rate_limit_cleanup_interval_ms}ms, "
        f"expiry buffer {settings.rate_limit_expiry_buffer_ms}ms",
    )
    for action, config in RATE_LIMITS.items():
        table.add_row(
            f"  {action.value}",
            f"{config.limit} per {config.window_ms // 1000}s",
        )
    table.add_row("Recalculation", f"batch size {settings.recalculation_batch_size}")

    console.print(table)


@app.command()
def tiers() -> None:
    """Display the tier ladder."""
    table = Table(title="Tier Ladder", show_header=True, header_style="bold magenta")
    table.add_column("Tier", justify="right")
    table.add_column("Name")
    table.add_column("Normalized score")

    bounds = [0.0] + list(TIER_THRESHOLDS.values())
    for info in TIER_INFOS:
        lower = bounds[info.tier]
        if info.tier < len(TIER_THRESHOLDS):
            score_range = f"[{lower:g}, {bounds[info.tier + 1]:g})"
        else:
            score_range = f">= {lower:g}"
        table.add_row(str(info.tier), f"[{info.color}]{info.name}[/]", score_range)

    console.print(table)


@app.command()
def score(
    claims_file: Path = typer.Argument(..., help="JSON list of claims for one source"),
    show_claims: bool = typer.Option(False, "--claims", help="List per-claim weights"),
) -> None:
    """
    Compute the score and tier for one source's claims.

    Each claim needs impact, confidence and helpful_votes (or helpfulVotes).
    """
    raw_claims = _load_json_list(claims_file)

    try:
        result = compute_score(raw_claims)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid claim data:\n{escape(str(e))}")
        raise typer.Exit(1)

    if show_claims:
        table = Table(title="Claims", show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("Impact", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Helpful", justify="right")
        table.add_column("Weight", justify="right")
        for i, claim in enumerate(raw_claims, start=1):
            table.add_row(
                str(i),
                str(claim.get("impact")),
                str(claim.get("confidence")),
                str(claim.get("helpful_votes", claim.get("helpfulVotes", 0))),
                f"{claim_weight(claim):.2f}",
            )
        console.print(table)

    console.print(Panel(
        f"Tier: {_tier_label(result.tier)}\n"
        f"Raw score: {result.raw_score:.2f}\n"
        f"Normalized score: {result.normalized_score:.2f}\n"
        f"Claims: {result.claim_count}",
        title=claims_file.name,
        border_style="green",
    ))
    logger.info(f"Scored {claims_file}: tier {result.tier}")


def _add_branch(branch: Tree, node: TreeNode) -> None:
    child_branch = branch.add(f"{escape(node.name)} [dim]({escape(node.id)})[/dim]")
    for child in node.children:
        _add_branch(child_branch, child)


@app.command()
def tree(
    nodes_file: Path = typer.Argument(..., help="JSON list of {id, name, parent_id} rows"),
) -> None:
    """Display a flat source listing as a sorted hierarchy."""
    rows = _load_json_list(nodes_file)

    try:
        roots = build_tree(rows)
    except (ValidationError, TreeValidationError) as e:
        console.print(f"[red]✗[/red] Cannot build tree: {escape(str(e))}")
        raise typer.Exit(1)

    forest = Tree(f"[bold]{nodes_file.name}[/bold] ({len(roots)} roots)")
    for root in roots:
        _add_branch(forest, root)
    console.print(forest)


@app.command()
def tune(
    scores_file: Path = typer.Argument(..., help="JSON list of normalized scores"),
    buckets: int = typer.Option(10, min=1, help="Histogram bucket count"),
) -> None:
    """
    Analyze normalized scores to tune tier thresholds.

    Prints percentiles, a histogram, the distribution under the current
    thresholds and a suggested ladder.
    """
    values = _load_json_list(scores_file)
    try:
        scores = [float(v) for v in values]
    except (TypeError, ValueError) as e:
        console.print(f"[red]✗[/red] Scores must be numbers: {escape(str(e))}")
        raise typer.Exit(1)
    if not all(math.isfinite(s) for s in scores):
        console.print("[red]✗[/red] Scores must be finite (no NaN or Infinity)")
        raise typer.Exit(1)
    if not scores:
        console.print("[yellow]⚠[/yellow] No scores to analyze")
        raise typer.Exit(1)

    stats = Table(title=f"Percentiles ({len(scores)} sources)", header_style="bold magenta")
    stats.add_column("Percentile", justify="right")
    stats.add_column("Normalized score", justify="right")
    for p in (10, 25, 50, 75, 90, 95, 99):
        stats.add_row(f"p{p}", f"{percentile(scores, p):.2f}")
    console.print(stats)

    hist = Table(title="Histogram", header_style="bold magenta")
    hist.add_column("Range")
    hist.add_column("Count", justify="right")
    hist.add_column("")
    bucket_list = histogram(scores, buckets)
    peak = max(b.count for b in bucket_list) or 1
    for bucket in bucket_list:
        hist.add_row(bucket.label, str(bucket.count), "█" * round(40 * bucket.count / peak))
    console.print(hist)

    suggested = suggest_thresholds(scores)
    current = tier_distribution(scores)
    try:
        proposed = tier_distribution(scores, ScoringEngine(suggested))
    except ValueError:
        proposed = None

    dist = Table(title="Tier distribution", header_style="bold magenta")
    dist.add_column("Tier")
    dist.add_column("Current", justify="right")
    dist.add_column("Suggested", justify="right")
    for tier, count in current.items():
        dist.add_row(
            _tier_label(tier),
            str(count),
            str(proposed[tier]) if proposed is not None else "-",
        )
    console.print(dist)

    console.print(
        "Suggested thresholds: "
        + ", ".join(f"{key}={value:g}" for key, value in suggested.items())
    )
    if proposed is None:
        console.print("[yellow]⚠[/yellow] Suggested ladder is not strictly ascending")


if __name__ == "__main__":
    app()
