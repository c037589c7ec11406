"""
Tests for graph validation warnings
"""

from conftest import person
from generations import assign_generations
from graph import build_graph
from validation import validate_graph


def test_clean_tree_has_no_warnings(three_generations):
    G = build_graph(three_generations)
    assign_generations(G)

    assert validate_graph(G) == []


def test_cycle_is_reported():
    G = build_graph([person(1, mother=2), person(2, mother=1)])

    warnings = validate_graph(G)

    assert any(w.startswith("Cycle detected") for w in warnings)


def test_child_born_before_parent():
    G = build_graph([
        person(1, mother=2, birth_date_string="1900"),
        person(2, birth_date_string="12 MAR 1950"),
    ])

    warnings = validate_graph(G)

    assert any("born before parent" in w for w in warnings)


def test_young_parent_is_suspicious():
    G = build_graph([
        person(1, mother=2, birth_date_string="1960"),
        person(2, birth_date_string="1950"),
    ])

    warnings = validate_graph(G)

    assert any(w.startswith("Suspicious") for w in warnings)


def test_death_before_birth():
    G = build_graph([person(1, birth_date_string="1900", death_date_string="ABT 1850")])

    warnings = validate_graph(G)

    assert warnings[0] == "Impossible: P1 Doe (1) died before being born"


def test_inconsistent_generations_and_unresolved():
    G = build_graph([person(1, mother=2), person(2), person(3)])
    G.nodes[1]["generation"] = 0
    G.nodes[2]["generation"] = 3

    warnings = validate_graph(G)

    assert any(w.startswith("Inconsistent generations") for w in warnings)
    assert warnings[-1] == "No generation could be assigned to 1 person(s): [3]"
