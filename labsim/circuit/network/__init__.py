from .graph import TerminalRef, UndirectedGraph, Wire  # noqa: F401
from .topology import NodeMap, build_node_map, wire_graph  # noqa: F401

__all__ = [
    "NodeMap",
    "TerminalRef",
    "UndirectedGraph",
    "Wire",
    "build_node_map",
    "wire_graph",
]
