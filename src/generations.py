"""Generation assignment: anchor selection, propagation and back-fill."""

from dataclasses import dataclass, field
import logging
from typing import Literal

import networkx as nx

from errors import AnchorError, GenerationConflictError
from graph import candidate_leaves, get_parents

logger = logging.getLogger(__name__)

Convergence = Literal["overwrite", "error"]


@dataclass
class GenerationResult:
    anchor: int
    unresolved: set[int] = field(default_factory=set)


def generation_of(G: nx.MultiDiGraph, node: int) -> int | None:
    return G.nodes[node]["generation"]


def reference_parents(G: nx.MultiDiGraph, leaves: list[int], strict: bool = False) -> set[int]:
    """
    Collect the mothers and fathers of every candidate leaf.

    With `strict` every leaf must have both parents present in the graph,
    otherwise an AnchorError is raised. Without it a missing parent simply
    adds nothing to the set.
    """
    parents: set[int] = set()
    for leaf in leaves:
        mother, father = get_parents(G, leaf)
        if strict and (mother is None or father is None):
            raise AnchorError(
                f"Person {leaf} has no recorded descendants and is missing a "
                f"{'mother' if mother is None else 'father'} in the dataset"
            )
        parents.update(p for p in (mother, father) if p is not None)
    return parents


def ancestry_overlap(G: nx.MultiDiGraph, leaf: int, reference: set[int]) -> int:
    """
    Count the nodes a depth-first walk from `leaf` visits before leaving `reference`.

    The walk follows both mother and father edges. The first visited node is
    the leaf itself, so the count is 0 unless the leaf is also somebody's
    listed parent.
    """
    count = 0
    for node in nx.dfs_preorder_nodes(G, leaf):
        if node not in reference:
            break
        count += 1
    return count


def select_anchor(G: nx.MultiDiGraph, strict: bool = False) -> int:
    """
    Choose the generation-zero person and set their generation to 0.

    The default anchor is the last candidate leaf in input order. Every other
    candidate leaf replaces it only with a strictly larger ancestry overlap
    with the reference-parent set, so the choice is stable for a given input.
    All other generations are reset to unassigned.

    Raises:
        AnchorError: If the graph has no candidate leaves, or if `strict` is set
            and a candidate leaf lacks a mother or father.
    """
    leaves = candidate_leaves(G)
    if not leaves:
        raise AnchorError("No candidate leaves found in family tree")
    logger.debug("Candidate leaves: %s", leaves)

    reference = reference_parents(G, leaves, strict=strict)
    logger.debug("Reference parents: %s", sorted(reference))

    anchor = leaves.pop()
    if leaves:
        best = ancestry_overlap(G, anchor, reference)
        for leaf in leaves:
            score = ancestry_overlap(G, leaf, reference)
            if score > best:
                anchor, best = leaf, score

    for node in G.nodes():
        G.nodes[node]["generation"] = None
    G.nodes[anchor]["generation"] = 0

    logger.debug("Anchor: %s", anchor)
    return anchor


def propagate_generations(
    G: nx.MultiDiGraph, anchor: int, convergence: Convergence = "overwrite"
) -> None:
    """
    Walk parent edges depth-first from the anchor, giving each parent its child's generation + 1.

    A parent reached again from a second child is overwritten by the later
    visit under `convergence="overwrite"`. Under `convergence="error"` a
    differing value raises GenerationConflictError instead.
    """
    if convergence not in ("overwrite", "error"):
        raise ValueError(f"Unknown convergence policy: {convergence}")

    for node in nx.dfs_preorder_nodes(G, anchor):
        candidate = G.nodes[node]["generation"] + 1
        for parent in get_parents(G, node):
            if parent is None:
                continue
            current = G.nodes[parent]["generation"]
            if convergence == "error" and current is not None and current != candidate:
                raise GenerationConflictError(
                    f"Person {parent} is generation {current} via one child "
                    f"but {candidate} via {node}"
                )
            G.nodes[parent]["generation"] = candidate


def backfill_generations(G: nx.MultiDiGraph) -> set[int]:
    """
    Resolve unassigned people from their parents' generations.

    Each pass gives an unassigned person their mother's generation - 1, or
    their father's when the mother is not yet known. Values written during a
    pass are visible to the rest of it. Passes repeat until everyone is
    assigned or a pass resolves nobody.

    Returns:
        The ids that remain unassigned.
    """
    unassigned = [n for n, gen in G.nodes(data="generation") if gen is None]
    passes = 0

    while unassigned:
        passes += 1
        resolved = 0
        for node in unassigned:
            for parent in get_parents(G, node):
                if parent is None:
                    continue
                parent_generation = G.nodes[parent]["generation"]
                if parent_generation is not None:
                    G.nodes[node]["generation"] = parent_generation - 1
                    resolved += 1
                    break

        logger.debug("Back-fill pass %d resolved %d of %d", passes, resolved, len(unassigned))
        if not resolved:
            break
        unassigned = [n for n, gen in G.nodes(data="generation") if gen is None]

    return set(unassigned)


def assign_generations(
    G: nx.MultiDiGraph, strict: bool = False, convergence: Convergence = "overwrite"
) -> GenerationResult:
    """Select an anchor, propagate from it, and back-fill whatever was not reached."""
    anchor = select_anchor(G, strict=strict)
    propagate_generations(G, anchor, convergence=convergence)
    unresolved = backfill_generations(G)

    if unresolved:
        logger.warning(
            "%d person(s) could not be given a generation: %s",
            len(unresolved),
            sorted(unresolved),
        )

    return GenerationResult(anchor=anchor, unresolved=unresolved)
