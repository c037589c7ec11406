"""
gentree CLI

1) Read person records from a CSV or GEDCOM file.
2) Build a child -> parent graph.
3) Pick a generation-zero anchor and assign a generation to everyone.
4) Validate the result (optional).
5) Render one same-rank band per generation as Graphviz Dot.
"""

import logging
from pathlib import Path

import click
import networkx as nx

from config import get_settings
from errors import GenealogyError
from generations import GenerationResult, assign_generations
from graph import build_graph
from logging_config import setup_logger
from parsing import load_records
from plotting import build_dot, generation_bands, render_graph, show_graph
from validation import validate_graph

logger = logging.getLogger(__name__)

MAX_WARNINGS = 10


def build_family_tree(
    input_path: Path, strict: bool = False, convergence: str = "overwrite"
) -> tuple[nx.MultiDiGraph, GenerationResult]:
    """Load records and return the generation-labelled graph."""
    persons = load_records(input_path)

    G = build_graph(persons)
    logger.info("Graph has %d people and %d parent links", G.number_of_nodes(), G.number_of_edges())

    result = assign_generations(G, strict=strict, convergence=convergence)
    logger.info("Anchored generations at person %s", result.anchor)
    return G, result


def _pipeline_options(f):
    f = click.option(
        "--convergence",
        type=click.Choice(["overwrite", "error"]),
        default=None,
        help="What to do when two children give one parent different generations",
    )(f)
    f = click.option(
        "--strict-parents/--lenient-parents",
        default=None,
        help="Require every leaf person to have both parents in the data",
    )(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, verbose):
    """gentree - generation-ranked ancestry diagrams"""
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level
    setup_logger(None, level, settings.log_file)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Write to .dot/.gv (text) or .png/.svg/.pdf (Graphviz)")
@_pipeline_options
@click.option("--rankdir", type=click.Choice(["TB", "BT", "LR", "RL"]), default=None,
              help="Graphviz rank direction")
@click.option("--no-unresolved", is_flag=True, help="Leave out people without a generation")
@click.option("--show", is_flag=True, help="Display the diagram in a window")
@click.pass_context
def render(ctx, input_path, output_path, strict_parents, convergence, rankdir, no_unresolved, show):
    """Render INPUT_PATH as a generation-ranked Graphviz diagram"""
    settings = ctx.obj["settings"]
    strict = settings.strict_parents if strict_parents is None else strict_parents
    include_unresolved = settings.include_unresolved and not no_unresolved
    rankdir = rankdir or settings.rankdir

    try:
        G, _ = build_family_tree(input_path, strict, convergence or settings.convergence)
    except GenealogyError as e:
        raise click.ClickException(str(e))

    text = render_graph(G, output_path, rankdir=rankdir, include_unresolved=include_unresolved)
    if output_path is None:
        click.echo(text)

    if show:
        show_graph(build_dot(G, rankdir=rankdir, include_unresolved=include_unresolved))


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_pipeline_options
@click.pass_context
def check(ctx, input_path, strict_parents, convergence):
    """Report generations and validation warnings for INPUT_PATH"""
    settings = ctx.obj["settings"]
    strict = settings.strict_parents if strict_parents is None else strict_parents

    try:
        G, result = build_family_tree(input_path, strict, convergence or settings.convergence)
    except GenealogyError as e:
        raise click.ClickException(str(e))

    anchor_name = " ".join(
        p for p in (G.nodes[result.anchor]["given_name"], G.nodes[result.anchor]["surname"]) if p
    )
    click.echo(f"Anchor: {result.anchor} {anchor_name}".rstrip())
    for generation, members in generation_bands(G):
        label = "unresolved" if generation is None else f"generation {generation}"
        click.echo(f"  {label}: {len(members)}")

    warnings = validate_graph(G)
    if warnings:
        click.echo(f"Found {len(warnings)} validation warnings:")
        for w in warnings[:MAX_WARNINGS]:
            click.echo(f"  - {w}")
        if len(warnings) > MAX_WARNINGS:
            click.echo(f"  ... and {len(warnings) - MAX_WARNINGS} more")
    else:
        click.echo("No validation issues found")


if __name__ == "__main__":
    cli()
