from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple
import numpy as np

from .components.base import LabComponent, StampData
from .config import DEFAULT_CONFIG, SolverConfig
from .network.graph import TerminalRef, Wire
from .network.topology import NodeMap, build_node_map
from .solver.gauss import gauss_solve

logger = logging.getLogger(__name__)

GROUND = 0


@dataclass(frozen=True, eq=False)
class CircuitSolution:
    """
    DC operating point of the bench.

    Attributes:
        node_map: Terminal -> node assignment the system was built from.
        potentials: Node potentials (V), indexed by node id; node 0 is 0 V.
        source_currents: Mapping battery id -> branch current (A), MNA sign
            convention (current entering the positive terminal).
        skipped_pivots: Unknowns left indeterminate by the elimination.
    """
    node_map: NodeMap
    potentials: np.ndarray
    source_currents: Dict[str, float]
    skipped_pivots: Tuple[int, ...] = ()

    @property
    def is_indeterminate(self) -> bool:
        return bool(self.skipped_pivots)

    def potential(self, ref: TerminalRef) -> float:
        return float(self.potentials[self.node_map.node(ref)])

    def governing_potentials(self, component: LabComponent) -> Tuple[float, float]:
        t1, t2 = component.governing_terminals()
        return self.potential(t1), self.potential(t2)

    def voltage_across(self, component: LabComponent) -> float:
        """
        Potential difference V(terminal1) - V(terminal2) of a component.
        """
        v1, v2 = self.governing_potentials(component)
        return v1 - v2

    def source_current(self, component_id: str) -> float:
        if component_id not in self.source_currents:
            raise KeyError(f"No voltage source '{component_id}' in this solution.")
        return self.source_currents[component_id]


def assemble(node_map: NodeMap, components: Sequence[LabComponent], config: SolverConfig = DEFAULT_CONFIG) -> StampData:
    """
    Build the MNA system for the given node assignment.

    Unknowns are the ``node_count`` node potentials followed by one branch
    current per auxiliary variable (one per battery). After every component
    has been stamped, ``config.gmin`` is tied from each node to ground and the
    node-0 row and column are replaced by the equation V(0) = 0.

    Args:
        node_map: Output of the topology builder.
        components: Components on the bench.
        config: Solver constants.

    Returns:
        StampData holding the assembled Y and b.
    """
    aux_map: Dict[str, int] = {}
    cursor = node_map.node_count
    for comp in components:
        n_aux = comp.num_aux_vars()
        if n_aux:
            aux_map[comp.id] = cursor
            cursor += n_aux

    size = cursor
    data = StampData(
        Y=np.zeros((size, size), dtype=float),
        b=np.zeros(size, dtype=float),
        node_map=node_map,
        aux_map=aux_map,
        config=config,
    )

    for comp in components:
        comp.stamp(data)

    for n in range(node_map.node_count):
        data.Y[n, n] += config.gmin

    # reference pinning
    data.Y[GROUND, :] = 0.0
    data.Y[:, GROUND] = 0.0
    data.Y[GROUND, GROUND] = 1.0
    data.b[GROUND] = 0.0
    return data


def solve_circuit(
    components: Sequence[LabComponent],
    wires: Sequence[Wire],
    config: SolverConfig | None = None,
) -> CircuitSolution | None:
    """
    Compute the DC operating point of a bench.

    Returns:
        The solution, or None when the bench has fewer than two nodes.

    Raises:
        ValueError: On malformed component parameters or duplicate ids.
    """
    config = config or DEFAULT_CONFIG
    if not components:
        return None
    node_map = build_node_map(components, wires)
    if node_map.node_count < 2:
        logger.debug("Skipping solve: only %d node(s)", node_map.node_count)
        return None

    data = assemble(node_map, components, config)
    result = gauss_solve(data.Y, data.b, config.pivot_tolerance)

    node_count = node_map.node_count
    source_currents = {cid: float(result.x[idx]) for cid, idx in data.aux_map.items()}
    return CircuitSolution(
        node_map=node_map,
        potentials=result.x[:node_count],
        source_currents=source_currents,
        skipped_pivots=result.skipped,
    )
