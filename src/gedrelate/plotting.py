"""Graphviz diagrams of family trees and relationship paths."""

import io
import logging
from collections.abc import Iterable
from pathlib import Path

import networkx as nx
import pydot

from gedrelate.graph import build_union_layout_graph, get_relationship_subgraph
from gedrelate.models import MutualRelationship

logger = logging.getLogger(__name__)

# output suffix -> pydot format; "raw" is the DOT source itself
OUTPUT_FORMATS = {"png": "png", "svg": "svg", "pdf": "pdf", "dot": "raw"}

SEX_COLORS = {"M": "lightblue", "F": "lightpink"}

# ancestors on top, right-angled edges
GRAPH_ATTRS = {"rankdir": "TB", "splines": "ortho", "nodesep": "0.4", "ranksep": "0.6"}
FAMILY_NODE_ATTRS = {"shape": "point", "width": "0.1", "height": "0.1", "label": ""}
PERSON_NODE_ATTRS = {"shape": "box", "style": "rounded,filled", "fontsize": "10"}
EDGE_ATTRS = {
    "spouse_to_family": {"dir": "none", "color": "darkgray"},
    "family_to_child": {"color": "darkgray"},
}


def _person_label(data: dict, node: str, show_id: bool) -> str:
    given_name = data.get("given_name") or ""
    surname = data.get("surname") or ""
    if not (given_name or surname):
        given_name = data.get("person_name") or ""
    birth_year = (data.get("birth_date") or "")[:4]
    death_year = (data.get("death_date") or "")[:4]

    label = f"{given_name}\n{surname}\n{birth_year}-{death_year}"
    if show_id:
        # the ID is what `relate` takes as input
        label += f"\n{node}"
    return label


def build_dot(
    G: nx.DiGraph, highlight: Iterable[str] = (), show_id: bool = False
) -> pydot.Dot:
    """
    Lay out a family graph as a Graphviz chart.

    Couples share a rank and their children hang from a point-shaped family
    node between them (see build_union_layout_graph). People in `highlight`
    get a bold red outline.
    """
    highlight = set(highlight)
    H = build_union_layout_graph(G)

    P = pydot.Dot(graph_type="digraph", **GRAPH_ATTRS)
    couples: list[tuple[str, str]] = []

    for node, data in H.nodes(data=True):
        if data["node_type"] == "family":
            P.add_node(pydot.Node(str(node), **FAMILY_NODE_ATTRS))
            if len(data["spouses"]) == 2:
                couples.append(data["spouses"])
            continue

        attrs = dict(PERSON_NODE_ATTRS)
        attrs["label"] = _person_label(data, node, show_id)
        attrs["fillcolor"] = SEX_COLORS.get(data.get("sex"), "lightgray")
        if node in highlight:
            attrs.update(color="red", penwidth="2")
        P.add_node(pydot.Node(str(node), **attrs))

    for u, v, data in H.edges(data=True):
        P.add_edge(pydot.Edge(str(u), str(v), **EDGE_ATTRS[data["edge_type"]]))

    for i, couple in enumerate(couples):
        same_rank = pydot.Subgraph(f"couple_{i}", rank="same")
        for person in couple:
            same_rank.add_node(pydot.Node(str(person)))
        P.add_subgraph(same_rank)

    return P


def render(P: pydot.Dot, output_path: Path | None = None) -> Path | None:
    """Write the diagram to output_path, or display it when no path is given."""
    if output_path:
        fmt = OUTPUT_FORMATS.get(output_path.suffix.lower().lstrip("."), "png")
        P.write(str(output_path), format=fmt)
        logger.info("diagram saved to %s", output_path)
        return output_path

    import matplotlib.image as mpimg
    import matplotlib.pyplot as plt

    img = mpimg.imread(io.BytesIO(P.create_png()), format="png")
    plt.figure(figsize=(20, 16))
    plt.imshow(img)
    plt.axis("off")
    plt.tight_layout()
    plt.show()
    return None


def plot_graph(
    G: nx.DiGraph,
    output_path: Path | None = None,
    highlight: Iterable[str] = (),
    show_id: bool = False,
) -> Path | None:
    """Plot a family tree (or a part of one)."""
    return render(build_dot(G, highlight=highlight, show_id=show_id), output_path)


def plot_relationship(
    G: nx.DiGraph, mutual: MutualRelationship, output_path: Path | None = None
) -> Path | None:
    """Plot only the people connecting the two sides of a relationship."""
    sub = get_relationship_subgraph(G, mutual)
    return plot_graph(
        sub,
        output_path,
        highlight=(mutual.r1.source_id, mutual.r1.target_id),
        show_id=True,
    )
