from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Tuple
from .base import LabComponent, StampData, TwoTerminalResistive, finite, positive, stamp_conductance


@dataclass
class Resistor(TwoTerminalResistive):
    id: str
    resistance: float = 10.0

    kind: ClassVar[str] = "resistor"
    terminal_names: ClassVar[Tuple[str, ...]] = ("left", "right")

    def resistance_model(self) -> float:
        return self.resistance


@dataclass
class ResistanceBox(TwoTerminalResistive):
    """
    Calibrated (high) resistance box; electrically identical to a resistor.
    """
    id: str
    resistance: float = 1000.0

    kind: ClassVar[str] = "resistance_box"
    terminal_names: ClassVar[Tuple[str, ...]] = ("left", "right")

    def resistance_model(self) -> float:
        return self.resistance


@dataclass
class Rheostat(LabComponent):
    """
    Tapped resistor with end terminals A, B and sliding contact C.

    The wiper position ``resistance`` (rVal) splits the track of
    ``max_resistance`` (rTotal) into A-C = rVal and C-B = rTotal - rVal. Each
    branch is floored at ``config.rheostat_floor`` so the travel extremes act as
    near-shorts instead of dividing by zero.
    """
    id: str
    resistance: float = 50.0
    max_resistance: float = 100.0

    kind: ClassVar[str] = "rheostat"
    terminal_names: ClassVar[Tuple[str, ...]] = ("A", "B", "C")

    def branch_resistances(self, floor: float) -> Tuple[float, float]:
        r_total = positive(self.max_resistance, f"rheostat '{self.id}' max_resistance")
        r_val = finite(self.resistance, f"rheostat '{self.id}' resistance")
        return max(r_val, floor), max(r_total - r_val, floor)

    def stamp(self, data: StampData) -> None:
        r_ac, r_cb = self.branch_resistances(data.config.rheostat_floor)
        a = data.node(self.terminal("A"))
        b = data.node(self.terminal("B"))
        c = data.node(self.terminal("C"))
        stamp_conductance(data, a, c, 1.0 / r_ac)
        stamp_conductance(data, c, b, 1.0 / r_cb)
