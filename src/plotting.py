"""Visualization functions for generation-labelled family tree graphs."""

import logging
from pathlib import Path

import networkx as nx
import pydot

from models import MOTHER

logger = logging.getLogger(__name__)

TEXT_FORMATS = ("dot", "gv")
IMAGE_FORMATS = ("png", "svg", "pdf")


def generation_bands(
    G: nx.MultiDiGraph, include_unresolved: bool = True
) -> list[tuple[int | None, list[int]]]:
    """
    Group people by generation, oldest generation first.

    Bands run from the highest assigned generation down to the lowest one
    (back-filled generations below 0 included); generations with nobody in
    them are skipped. People without a generation form one final band keyed
    by None when `include_unresolved` is set.
    """
    by_generation: dict[int, list[int]] = {}
    unresolved: list[int] = []
    for node, generation in G.nodes(data="generation"):
        if generation is None:
            unresolved.append(node)
        else:
            by_generation.setdefault(generation, []).append(node)

    bands: list[tuple[int | None, list[int]]] = [
        (generation, by_generation[generation])
        for generation in sorted(by_generation, reverse=True)
    ]
    if include_unresolved and unresolved:
        bands.append((None, unresolved))
    return bands


def person_label(data: dict) -> str:
    """Two-line label: name, then birth - death."""
    given_name = data.get("given_name") or "?"
    surname = data.get("surname") or "?"
    birth = data.get("birth_date_string") or "?"
    death = data.get("death_date_string") or "?"
    return f"{given_name} {surname}\n{birth} - {death}"


def build_dot(
    G: nx.MultiDiGraph, rankdir: str = "BT", include_unresolved: bool = True
) -> pydot.Dot:
    """
    Build a Graphviz document with one same-rank cluster per generation.

    Edges point from each person to their mother and father. With the default
    bottom-to-top rank direction ancestors sit at the top.

    Args:
        G: Graph with `generation` node attributes
        rankdir: Graphviz rank direction
        include_unresolved: Draw people without a generation as a final band
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", rankdir)
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    drawn: set[int] = set()
    for index, (generation, members) in enumerate(generation_bands(G, include_unresolved)):
        sg = pydot.Subgraph(f"generation_{index}", rank="same")
        for node in members:
            data = G.nodes[node]

            # Color by sex
            sex = data.get("sex")
            if sex == "M":
                fillcolor = "lightblue"
            elif sex == "F":
                fillcolor = "lightpink"
            else:
                fillcolor = "lightgray"

            style = "rounded,filled" if generation is not None else "rounded,dashed"
            sg.add_node(
                pydot.Node(
                    str(node),
                    label=person_label(data),
                    shape="box",
                    style=style,
                    fillcolor=fillcolor,
                    fontsize="10",
                )
            )
            drawn.add(node)
        P.add_subgraph(sg)

    for child, parent, data in G.edges(data=True):
        if child not in drawn or parent not in drawn:
            continue
        color = "palevioletred" if data.get("relationship_type") == MOTHER else "steelblue"
        P.add_edge(pydot.Edge(str(child), str(parent), color=color))

    return P


def render_graph(
    G: nx.MultiDiGraph,
    output_path: Path | None = None,
    rankdir: str = "BT",
    include_unresolved: bool = True,
) -> str:
    """
    Render the graph to Dot text, optionally writing it to `output_path`.

    `.dot` and `.gv` files get the Dot text; `.png`, `.svg` and `.pdf` are
    drawn by Graphviz, which must be installed.
    """
    P = build_dot(G, rankdir=rankdir, include_unresolved=include_unresolved)
    text = P.to_string()

    if output_path:
        ext = output_path.suffix.lower().lstrip(".")
        if ext in TEXT_FORMATS:
            output_path.write_text(text, encoding="utf-8")
        else:
            if ext not in IMAGE_FORMATS:
                ext = "png"
            P.write(str(output_path), format=ext)
        logger.info("Graph saved to %s", output_path)

    return text


def show_graph(P: pydot.Dot):
    """Display a rendered graph interactively."""
    import tempfile

    import matplotlib.image as mpimg
    import matplotlib.pyplot as plt

    with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
        P.write(f.name, format="png")
        img = mpimg.imread(f.name)
        plt.figure(figsize=(20, 16))
        plt.imshow(img)
        plt.axis("off")
        plt.tight_layout()
        plt.show()
