from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, ClassVar, Dict, Tuple
import numpy as np

from ..network.graph import TerminalRef

if TYPE_CHECKING:
    from ..config import SolverConfig
    from ..network.topology import NodeMap

Array = np.ndarray


@dataclass
class StampData:
    """
    Shared view of the MNA system during stamping.

    Attributes:
        Y:   Conductance matrix (real, shape node_count + n_aux).
        b:   Right-hand side vector (injected currents and source EMFs).
        node_map: Terminal -> node assignment of the current bench.
        aux_map: Mapping component id -> index of its auxiliary unknown.
        config: Solver constants (GMIN, rheostat floor, ...).
    """
    Y: Array
    b: Array
    node_map: NodeMap
    aux_map: Dict[str, int]
    config: SolverConfig

    @property
    def node_count(self) -> int:
        return self.node_map.node_count

    def node(self, ref: TerminalRef) -> int:
        return self.node_map.node(ref)

    def aux(self, component_id: str) -> int:
        if component_id not in self.aux_map:
            raise KeyError(f"No auxiliary unknown allocated for '{component_id}'.")
        return self.aux_map[component_id]


def stamp_conductance(data: StampData, n1: int, n2: int, g: float) -> None:
    """
    Standard two-node conductance stamp.
    """
    if g == 0:
        return
    data.Y[n1, n1] += g
    data.Y[n2, n2] += g
    data.Y[n1, n2] -= g
    data.Y[n2, n1] -= g


def stamp_voltage_source(data: StampData, aux_idx: int, n_plus: int, n_minus: int, voltage: float) -> None:
    """
    Row ``aux_idx`` enforces V(n_plus) - V(n_minus) = voltage; the column
    injects the branch current into the two node equations.
    """
    data.Y[n_plus, aux_idx] += 1.0
    data.Y[aux_idx, n_plus] += 1.0
    data.Y[n_minus, aux_idx] -= 1.0
    data.Y[aux_idx, n_minus] -= 1.0
    data.b[aux_idx] += voltage


def finite(value, label: str) -> float:
    """
    Coerce a user-supplied parameter to a finite float.
    """
    try:
        x = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be a number, got {value!r}.") from exc
    if not math.isfinite(x):
        raise ValueError(f"{label} must be finite, got {value!r}.")
    return x


def positive(value, label: str) -> float:
    x = finite(value, label)
    if x <= 0:
        raise ValueError(f"{label} must be positive.")
    return x


class LabComponent(ABC):
    """
    Base class for workbench parts stamped into the MNA system.

    Every concrete part is a dataclass whose first field is ``id`` and whose
    remaining fields are its user-adjustable parameters and, for gauges, its
    derived reading. Each part carries a fixed terminal layout; the first two
    terminals are the governing pair whose potential difference drives the
    reading.
    """

    kind: ClassVar[str]
    terminal_names: ClassVar[Tuple[str, ...]]
    readings: ClassVar[Tuple[str, ...]] = ()
    id: str

    def terminals(self) -> Tuple[TerminalRef, ...]:
        return tuple(TerminalRef(self.id, name) for name in self.terminal_names)

    def terminal(self, name: str) -> TerminalRef:
        if name not in self.terminal_names:
            raise KeyError(f"{self.kind} '{self.id}' has no terminal '{name}'.")
        return TerminalRef(self.id, name)

    def governing_terminals(self) -> Tuple[TerminalRef, TerminalRef]:
        t = self.terminals()
        return t[0], t[1]

    def num_aux_vars(self) -> int:
        return 0

    @abstractmethod
    def stamp(self, data: StampData) -> None:
        """
        Add this component's contribution to the global Y,b system.
        """

    def annotate(self, v1: float, v2: float) -> LabComponent:
        """
        Return the component with its derived reading refreshed from the
        governing potentials ``v1`` and ``v2``. Inputs are returned as-is.
        """
        return self

    def parameters(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "id"}

    def with_parameter(self, name: str, value) -> LabComponent:
        if name == "id" or name not in {f.name for f in fields(self)}:
            raise KeyError(f"{self.kind} has no parameter '{name}'.")
        if name in self.readings:
            raise KeyError(f"{self.kind} reading '{name}' is set by the solver, not by the user.")
        return replace(self, **{name: value})

    def to_dict(self) -> dict:
        return {"id": self.id, "kind": self.kind, "parameters": self.parameters()}


class TwoTerminalResistive(LabComponent):
    """
    Two-terminal part modelled as a single resistance between its terminals.
    """

    @abstractmethod
    def resistance_model(self) -> float:
        """
        Resistance (ohm) stamped between the two terminals.
        """

    def stamp(self, data: StampData) -> None:
        r = positive(self.resistance_model(), f"{self.kind} '{self.id}' resistance")
        t1, t2 = self.governing_terminals()
        stamp_conductance(data, data.node(t1), data.node(t2), 1.0 / r)
