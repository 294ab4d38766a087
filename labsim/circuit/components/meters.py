from __future__ import annotations
from dataclasses import dataclass, replace
from typing import ClassVar, Tuple
from .base import TwoTerminalResistive


@dataclass
class Ammeter(TwoTerminalResistive):
    """
    Near-ideal ammeter: small internal resistance, reads |I| in amperes.
    """
    id: str
    internal_resistance: float = 0.01
    current: float = 0.0

    kind: ClassVar[str] = "ammeter"
    terminal_names: ClassVar[Tuple[str, ...]] = ("in", "out")
    readings: ClassVar[Tuple[str, ...]] = ("current",)

    def resistance_model(self) -> float:
        return self.internal_resistance

    def annotate(self, v1: float, v2: float) -> Ammeter:
        return replace(self, current=abs(v1 - v2) / self.resistance_model())


@dataclass
class Voltmeter(TwoTerminalResistive):
    """
    Near-ideal voltmeter: very large internal resistance, reads |V| in volts.
    """
    id: str
    internal_resistance: float = 1e6
    voltage: float = 0.0

    kind: ClassVar[str] = "voltmeter"
    terminal_names: ClassVar[Tuple[str, ...]] = ("positive", "negative")
    readings: ClassVar[Tuple[str, ...]] = ("voltage",)

    def resistance_model(self) -> float:
        return self.internal_resistance

    def annotate(self, v1: float, v2: float) -> Voltmeter:
        return replace(self, voltage=abs(v1 - v2))


@dataclass
class Galvanometer(TwoTerminalResistive):
    """
    Centre-zero galvanometer.

    Attributes:
        internal_resistance: Coil resistance G (ohm).
        full_scale_current: Current for full-scale deflection Ig (mA).
        current: Signed reading in mA, positive when current enters at
            ``positive``.
    """
    id: str
    internal_resistance: float = 100.0
    full_scale_current: float = 1.0
    current: float = 0.0

    kind: ClassVar[str] = "galvanometer"
    terminal_names: ClassVar[Tuple[str, ...]] = ("positive", "negative")
    readings: ClassVar[Tuple[str, ...]] = ("current",)

    def resistance_model(self) -> float:
        return self.internal_resistance

    def annotate(self, v1: float, v2: float) -> Galvanometer:
        return replace(self, current=(v1 - v2) / self.resistance_model() * 1000.0)
