from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Tuple
from .base import LabComponent, StampData, finite, stamp_voltage_source


@dataclass
class Battery(LabComponent):
    """
    Ideal DC voltage source with EMF ``voltage`` between positive and negative.

    Allocates one auxiliary unknown: the current entering the positive
    terminal, so a battery delivering power has a negative branch current.
    """
    id: str
    voltage: float = 5.0

    kind: ClassVar[str] = "battery"
    terminal_names: ClassVar[Tuple[str, ...]] = ("positive", "negative")

    def num_aux_vars(self) -> int:
        return 1

    def stamp(self, data: StampData) -> None:
        emf = finite(self.voltage, f"battery '{self.id}' voltage")
        n_plus = data.node(self.terminal("positive"))
        n_minus = data.node(self.terminal("negative"))
        stamp_voltage_source(data, data.aux(self.id), n_plus, n_minus, emf)
