"""Graph validation for generation-labelled family tree data."""

import networkx as nx

from parsing import parse_date_string


def validate_graph(G: nx.MultiDiGraph) -> list[str]:
    """
    Validate the family tree graph for:
    - Cycles in parent relationships
    - Impossible ages (child born before parent)
    - Death before birth
    - Generations that do not step by one along a parent edge
    - People left without a generation

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    # Check for cycles
    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Edges run child -> parent; one id named as both parents is checked once
    for child, parent in dict.fromkeys(G.edges()):
        child_data = G.nodes[child]
        parent_data = G.nodes[parent]
        child_name = _name(child, child_data)
        parent_name = _name(parent, parent_data)

        # ISO dates can be string-compared
        child_birth = parse_date_string(child_data.get("birth_date_string"))
        parent_birth = parse_date_string(parent_data.get("birth_date_string"))
        if parent_birth and child_birth:
            if child_birth < parent_birth:
                warnings.append(f"Impossible: {child_name} born before parent {parent_name}")
            elif int(child_birth[:4]) - int(parent_birth[:4]) < 12:
                warnings.append(
                    f"Suspicious: {parent_name} was less than 12 years old "
                    f"when {child_name} was born"
                )

        child_generation = child_data.get("generation")
        parent_generation = parent_data.get("generation")
        if (
            child_generation is not None
            and parent_generation is not None
            and parent_generation != child_generation + 1
        ):
            warnings.append(
                f"Inconsistent generations: {child_name} is generation {child_generation} "
                f"but parent {parent_name} is generation {parent_generation}"
            )

    # Check death before birth
    for node, data in G.nodes(data=True):
        birth = parse_date_string(data.get("birth_date_string"))
        death = parse_date_string(data.get("death_date_string"))
        if birth and death and death < birth:
            warnings.append(f"Impossible: {_name(node, data)} died before being born")

    unresolved = sorted(n for n, gen in G.nodes(data="generation") if gen is None)
    if unresolved:
        warnings.append(f"No generation could be assigned to {len(unresolved)} person(s): {unresolved}")

    return warnings


def _name(node: int, data: dict) -> str:
    parts = [p for p in (data.get("given_name"), data.get("surname")) if p]
    return f"{' '.join(parts) or 'Unknown'} ({node})"
