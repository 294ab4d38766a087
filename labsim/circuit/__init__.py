"""
DC circuit engine of the virtual physics lab, based on Modified Nodal Analysis.
"""

from .circuit import CircuitSolution, assemble, solve_circuit  # noqa: F401
from .classify import (  # noqa: F401
    WiringClassification,
    check_circuit_risks,
    classify_wiring,
    fix_voltmeter_connection,
)
from .config import SolverConfig  # noqa: F401
from .engine import solve  # noqa: F401
from .network.graph import TerminalRef, Wire  # noqa: F401
from .network.topology import NodeMap, build_node_map  # noqa: F401
from .workbench import Workbench  # noqa: F401
from . import components  # noqa: F401

__all__ = [
    "CircuitSolution",
    "NodeMap",
    "SolverConfig",
    "TerminalRef",
    "Wire",
    "WiringClassification",
    "Workbench",
    "assemble",
    "build_node_map",
    "check_circuit_risks",
    "classify_wiring",
    "components",
    "fix_voltmeter_connection",
    "solve",
    "solve_circuit",
]
