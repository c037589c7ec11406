"""
Tests for graph construction and lookups
"""

from conftest import person
from graph import build_graph, candidate_leaves, get_parent, get_parents
from models import FATHER, MOTHER


def test_parent_edges_are_labelled(three_generations):
    G = build_graph(three_generations)

    assert G.number_of_nodes() == 5
    assert G.edges[1, 2, MOTHER]["relationship_type"] == MOTHER
    assert G.edges[1, 3, FATHER]["relationship_type"] == FATHER
    assert G.edges[2, 4, MOTHER]["relationship_type"] == MOTHER
    assert G.edges[2, 5, FATHER]["relationship_type"] == FATHER
    assert G.number_of_edges() == 4


def test_forward_references_resolve_regardless_of_order():
    G = build_graph([person(3), person(1, mother=2), person(2, father=3)])

    assert get_parent(G, 1, MOTHER) == 2
    assert get_parent(G, 2, FATHER) == 3


def test_dangling_parent_creates_no_edge():
    G = build_graph([person(1, mother=99)])

    assert 99 not in G
    assert G.number_of_edges() == 0
    assert get_parents(G, 1) == (None, None)


def test_all_generations_start_unassigned(three_generations):
    three_generations[0].generation = 7
    G = build_graph(three_generations)

    assert all(gen is None for _, gen in G.nodes(data="generation"))


def test_duplicate_id_keeps_last_record():
    G = build_graph([person(1, given_name="First"), person(1, given_name="Second")])

    assert G.number_of_nodes() == 1
    assert G.nodes[1]["given_name"] == "Second"


def test_candidate_leaves(three_generations):
    G = build_graph(three_generations)

    assert candidate_leaves(G) == [1]


def test_candidate_leaves_follow_input_order():
    G = build_graph([person(5, mother=3), person(1, mother=3), person(3)])

    assert candidate_leaves(G) == [5, 1]


def test_self_reference_does_not_hide_leaf():
    G = build_graph([person(1, mother=1)])

    assert candidate_leaves(G) == [1]


def test_same_id_as_mother_and_father_keeps_both_edges():
    G = build_graph([person(1, mother=2, father=2), person(2)])

    assert G.number_of_edges() == 2
    assert G.edges[1, 2, MOTHER]["relationship_type"] == MOTHER
    assert G.edges[1, 2, FATHER]["relationship_type"] == FATHER
    assert get_parents(G, 1) == (2, 2)
