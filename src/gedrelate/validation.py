"""Sanity checks for family tree data before relating people."""

from collections.abc import Iterable

import networkx as nx

from gedrelate.graph import PARENT_OF
from gedrelate.models import Person

# A parent younger than this at a child's birth is suspicious.
MIN_PARENT_AGE = 12
# A child can be born the year after a father died, not later.
MAX_POSTHUMOUS_YEARS = 1


def _label(G: nx.DiGraph, node: str) -> str:
    return f"{G.nodes[node].get('person_name')} [{node}]"


def _year(date: str | None) -> int | None:
    try:
        return int(date[:4]) if date else None
    except ValueError:
        return None  # not ISO, e.g. hand-written JSON


def parent_graph(G: nx.DiGraph) -> nx.DiGraph:
    """The PARENT_OF edges of G, with every person kept as a node."""
    H = nx.DiGraph()
    H.add_nodes_from(G.nodes(data=True))
    H.add_edges_from(
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == PARENT_OF
    )
    return H


def find_ancestry_cycles(G: nx.DiGraph) -> list[list[str]]:
    """
    Groups of people who are each other's ancestors.

    Each group is a strongly connected component of the parent-child graph,
    so every member is reported once even when cycles overlap. Someone
    listed as their own parent forms a group of one.
    """
    H = parent_graph(G)
    self_parents = set(nx.nodes_with_selfloops(H))
    cycles = [
        sorted(component)
        for component in nx.strongly_connected_components(H)
        if len(component) > 1 or component & self_parents
    ]
    return sorted(cycles)


def check_ancestry_cycles(G: nx.DiGraph) -> list[str]:
    warnings = []
    for members in find_ancestry_cycles(G):
        who = ", ".join(_label(G, m) for m in members)
        verb = "is their own ancestor" if len(members) == 1 else "are their own ancestors"
        warnings.append(f"Ancestry cycle: {who} {verb}")
    return warnings


def check_parent_dates(G: nx.DiGraph) -> list[str]:
    # birth_date is ISO format (YYYY-MM-DD) which can be compared as strings
    warnings = []
    for parent, child in parent_graph(G).edges():
        parent_data = G.nodes[parent]
        child_data = G.nodes[child]
        parent_birth = parent_data.get("birth_date")
        parent_death = parent_data.get("death_date")
        child_birth = child_data.get("birth_date")
        if not child_birth:
            continue

        if parent_birth and child_birth < parent_birth:
            warnings.append(
                f"Impossible: {_label(G, child)} born {child_birth}, before parent "
                f"{_label(G, parent)} born {parent_birth}"
            )
            continue

        child_year = _year(child_birth)
        parent_year = _year(parent_birth)
        if child_year is not None and parent_year is not None:
            if child_year - parent_year < MIN_PARENT_AGE:
                warnings.append(
                    f"Suspicious: {_label(G, parent)} was {child_year - parent_year} years "
                    f"old when {_label(G, child)} was born"
                )

        death_year = _year(parent_death)
        if child_year is not None and death_year is not None:
            if child_year - death_year > MAX_POSTHUMOUS_YEARS:
                warnings.append(
                    f"Impossible: {_label(G, child)} born {child_birth}, after parent "
                    f"{_label(G, parent)} died {parent_death}"
                )
    return warnings


def check_lifespans(G: nx.DiGraph) -> list[str]:
    warnings = []
    for node, data in G.nodes(data=True):
        birth = data.get("birth_date")
        death = data.get("death_date")
        if birth and death and death < birth:
            warnings.append(
                f"Impossible: {_label(G, node)} died {death} before being born {birth}"
            )
    return warnings


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Check a family tree graph for data that cannot be right.

    Looks for people who are their own ancestors, children born before a
    parent or long after a parent died, very young parents and deaths before
    births. People are named with their ID in every message.

    Returns a list of warning messages, ancestry cycles first.
    """
    return check_ancestry_cycles(G) + check_parent_dates(G) + check_lifespans(G)


def validate_links(people: Iterable[Person]) -> list[str]:
    """
    Check the links between people.

    Reports references to unknown people and spouse links that are only
    recorded on one side; the latter are not treated as marriages when
    relating people.
    """
    people = list(people)
    by_id = {p.id: p for p in people}
    warnings: list[str] = []

    for p in people:
        for kind in ("parents", "children", "spouses"):
            for other_id in getattr(p, kind):
                if other_id not in by_id:
                    warnings.append(f"Unknown person {other_id} in {kind} of {p.id}")
        for spouse_id in p.spouses:
            spouse = by_id.get(spouse_id)
            if spouse is not None and p.id not in spouse.spouses:
                warnings.append(f"One-sided marriage: {p.id} lists {spouse_id} as spouse")

    return warnings
