from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence

from .graph import TerminalRef, UndirectedGraph, Wire

if TYPE_CHECKING:
    from ..components.base import LabComponent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeMap:
    """
    Assignment of every terminal on the bench to an electrical node.

    Node ids are dense integers starting at 0; node 0 is the reference
    (ground) node of the solve.

    Attributes:
        node_of: Mapping terminal -> node id.
        node_count: Number of distinct nodes.
    """
    node_of: Dict[TerminalRef, int]
    node_count: int

    def node(self, ref: TerminalRef) -> int:
        if ref not in self.node_of:
            raise KeyError(f"Terminal {ref.component}.{ref.terminal} is not on the bench.")
        return self.node_of[ref]

    def get(self, ref: TerminalRef) -> int | None:
        return self.node_of.get(ref)

    def terminals_at(self, node: int) -> List[TerminalRef]:
        return [ref for ref, n in self.node_of.items() if n == node]


def wire_graph(components: Sequence[LabComponent], wires: Sequence[Wire]) -> UndirectedGraph[TerminalRef]:
    """
    Build the terminal graph: one vertex per terminal, one edge per wire.

    Wires whose ends are not terminals of a component on the bench are
    skipped.
    """
    graph: UndirectedGraph[TerminalRef] = UndirectedGraph()
    for comp in components:
        for ref in comp.terminals():
            graph.add_vertex(ref)
    for wire in wires:
        if wire.a not in graph or wire.b not in graph:
            logger.debug("Ignoring wire %s: dangling end %s -> %s", wire.id, wire.a, wire.b)
            continue
        graph.add_edge(wire.a, wire.b)
    return graph


def build_node_map(components: Sequence[LabComponent], wires: Sequence[Wire]) -> NodeMap:
    """
    Group terminals into electrical nodes.

    Terminals are visited in component order and, within a component, in the
    order of its terminal layout. Each terminal not yet assigned starts a new
    node made of its whole wire cluster. Terminals of the same component are
    only merged through wires.

    Args:
        components: Components on the bench.
        wires: Point-to-point wires between terminals.

    Returns:
        NodeMap covering every terminal of every component.

    Raises:
        ValueError: If two components share the same id.
    """
    seen_ids = set()
    for comp in components:
        if comp.id in seen_ids:
            raise ValueError(f"Duplicate component id '{comp.id}'.")
        seen_ids.add(comp.id)

    graph = wire_graph(components, wires)
    node_of: Dict[TerminalRef, int] = {}
    node_count = 0
    for comp in components:
        for ref in comp.terminals():
            if ref in node_of:
                continue
            for member in graph.cluster(ref):
                node_of[member] = node_count
            node_count += 1
    return NodeMap(node_of=node_of, node_count=node_count)
