"""NetworkX views of a population, used for validation and diagrams."""

import itertools
from collections.abc import Iterable

import networkx as nx

from gedrelate.models import MutualRelationship, Person

PARENT_OF = "PARENT_OF"
SPOUSE_OF = "SPOUSE_OF"


def build_graph(people: Iterable[Person]) -> nx.DiGraph:
    """Build a NetworkX directed graph from a population.

    PARENT_OF edges go from parent to child, SPOUSE_OF edges are added in
    both directions. Links to IDs outside the population are dropped.
    """
    people = list(people)
    G = nx.DiGraph()

    # 'name' would clash with the pydot node name
    for p in people:
        G.add_node(
            p.id,
            person_name=p.name,
            sex=p.sex,
            birth_date=p.birth_date,
            death_date=p.death_date,
            given_name=p.given_name,
            surname=p.surname,
        )

    for p in people:
        for parent_id in p.parents:
            if parent_id in G:
                G.add_edge(parent_id, p.id, relationship_type=PARENT_OF)
        for spouse_id in p.spouses:
            if spouse_id in G:
                G.add_edge(p.id, spouse_id, relationship_type=SPOUSE_OF)
                G.add_edge(spouse_id, p.id, relationship_type=SPOUSE_OF)

    return G


def get_ego_subgraph(G: nx.DiGraph, center_id: str, radius: int = 2) -> nx.DiGraph:
    """
    Everyone within `radius` links of one person.

    Parent, child and spouse links all count as one step, whichever way the
    edge points.

    Raises:
        ValueError: center_id is not in the graph.
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    nearby = nx.ego_graph(G, center_id, radius=radius, undirected=True)
    return G.subgraph(nearby.nodes).copy()


def get_relationship_subgraph(G: nx.DiGraph, mutual: MutualRelationship) -> nx.DiGraph:
    """
    Extract the people that connect the two sides of a relationship.

    Covers both relationship paths plus the common ancestor or both partners
    of the connecting union.
    """
    nodes: set[str] = set()
    for rel in (mutual.r1, mutual.r2):
        nodes.update(rel.path_ids())
        nodes.update((rel.source_id, rel.target_id))
    if mutual.common_person is not None:
        nodes.add(mutual.common_person.id)
    if mutual.union is not None:
        nodes.update(mutual.union.partner_ids())

    missing = sorted(n for n in nodes if n not in G)
    if missing:
        raise ValueError(f"Person IDs {missing} not found in graph")

    return G.subgraph(nodes).copy()


def _edges_of_type(G: nx.DiGraph, relationship_type: str):
    for u, v, d in G.edges(data=True):
        if d.get("relationship_type") == relationship_type:
            yield u, v


def build_union_layout_graph(G: nx.DiGraph) -> nx.DiGraph:
    """
    Insert a family node between each set of parents and their children.

    Person nodes keep their attributes and get node_type="person". Each
    couple gets a node_type="family" node named FAM_<id>_<id>, linked from
    both partners by "spouse_to_family" edges; children of the couple hang
    from it by "family_to_child" edges. Children whose parents are not a
    recorded couple get a family node of their own parents. Graphviz then
    ranks couples together and lines up siblings.
    """
    H = nx.DiGraph()
    H.add_nodes_from((n, {**data, "node_type": "person"}) for n, data in G.nodes(data=True))

    def add_family(partners: tuple[str, ...]) -> str:
        family_id = "FAM_" + "_".join(partners)
        if family_id not in H:
            H.add_node(family_id, node_type="family", spouses=partners)
            H.add_edges_from(((p, family_id) for p in partners), edge_type="spouse_to_family")
        return family_id

    # both directions of a SPOUSE_OF pair collapse to one sorted tuple
    couples = sorted({tuple(sorted(edge)) for edge in _edges_of_type(G, SPOUSE_OF)})
    family_of_couple = {couple: add_family(couple) for couple in couples}

    parents_of: dict[str, set[str]] = {}
    for parent, child in _edges_of_type(G, PARENT_OF):
        parents_of.setdefault(child, set()).add(parent)

    for child in sorted(parents_of):
        parents = tuple(sorted(parents_of[child]))
        family_id = next(
            (
                family_of_couple[pair]
                for pair in itertools.combinations(parents, 2)
                if pair in family_of_couple
            ),
            None,
        )
        if family_id is None:
            family_id = add_family(parents)
        H.add_edge(family_id, child, edge_type="family_to_child")

    return H
