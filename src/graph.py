"""NetworkX graph building and lookups."""

from collections.abc import Iterable
from dataclasses import asdict
import logging

import networkx as nx

from models import FATHER, MOTHER, Person

logger = logging.getLogger(__name__)


def build_graph(persons: Iterable[Person]) -> nx.MultiDiGraph:
    """
    Build a directed child -> parent graph keyed by person id.

    Nodes carry the Person fields as attributes. Edges are added in a second
    pass once every person is a node, so a parent may appear anywhere in the
    input. A mother/father id that is not among the loaded persons is treated
    as an unknown parent: no edge is created and no error is raised.
    """
    G = nx.MultiDiGraph()

    # Add nodes (persons)
    for person in persons:
        if person.id in G:
            logger.warning("Duplicate person id %s, keeping the last record", person.id)
        G.add_node(person.id, **asdict(person))
        G.nodes[person.id]["generation"] = None

    # Collect edges (relationships) before mutating the graph
    edges = []
    for node, data in G.nodes(data=True):
        for key, relationship_type in (("mother_id", MOTHER), ("father_id", FATHER)):
            parent_id = data.get(key)
            if parent_id is None:
                continue
            if parent_id in G:
                edges.append((node, parent_id, relationship_type))
            else:
                logger.debug(
                    "Person %s names %s %s which is not in the dataset",
                    node,
                    relationship_type.lower(),
                    parent_id,
                )

    for child, parent, relationship_type in edges:
        # Keyed by label so one id named as both mother and father keeps two edges
        G.add_edge(child, parent, key=relationship_type, relationship_type=relationship_type)

    return G


def get_parent(G: nx.MultiDiGraph, node: int, relationship_type: str) -> int | None:
    """Return the parent of `node` along the edge labelled `relationship_type`."""
    for _, parent, key in G.out_edges(node, keys=True):
        if key == relationship_type:
            return parent
    return None


def get_parents(G: nx.MultiDiGraph, node: int) -> tuple[int | None, int | None]:
    """Return (mother, father) node ids, either of which may be None."""
    return get_parent(G, node, MOTHER), get_parent(G, node, FATHER)


def candidate_leaves(G: nx.MultiDiGraph) -> list[int]:
    """
    Find every person that no other person names as a mother or father.

    These are the terminal descendants in the dataset. Order follows node
    insertion order, i.e. the order of the input records.
    """
    return [
        node
        for node in G.nodes()
        if all(child == node for child in G.predecessors(node))
    ]
