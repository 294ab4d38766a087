from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import numpy as np

from .components.base import LabComponent
from .components.meters import Galvanometer
from .components.passive import ResistanceBox

Array = np.ndarray


@dataclass(frozen=True)
class DataPoint:
    """
    One row of the observation table.

    Attributes:
        voltage: Voltage across galvanometer + series resistance (V).
        current: Instrument current (mA).
        resistance: Series resistance R in use when the reading was taken (ohm).
    """
    voltage: float
    current: float
    resistance: float


@dataclass
class ObservationLog:
    """
    Bounded log of V-I readings.

    A reading closer than ``voltage_tolerance`` and ``current_tolerance`` to
    the previous one is dropped, and only the latest ``capacity`` readings are
    kept.
    """
    capacity: int = 100
    voltage_tolerance: float = 0.01
    current_tolerance: float = 0.005
    points: List[DataPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def add(self, point: DataPoint) -> bool:
        if self.points:
            last = self.points[-1]
            if (abs(last.voltage - point.voltage) < self.voltage_tolerance
                    and abs(last.current - point.current) < self.current_tolerance):
                return False
        self.points.append(point)
        del self.points[:-self.capacity]
        return True

    def clear(self) -> None:
        self.points.clear()

    def vi_arrays(self) -> Tuple[Array, Array]:
        """Return (voltage [V], current [mA]) arrays in recording order."""
        v = np.array([p.voltage for p in self.points], dtype=float)
        i = np.array([p.current for p in self.points], dtype=float)
        return v, i

    def fitted_resistance(self) -> float:
        """
        Least-squares slope of V against I, in ohm.

        Raises:
            ValueError: With fewer than two distinct current readings.
        """
        v, i = self.vi_arrays()
        if np.unique(i).size < 2:
            raise ValueError("At least two distinct current readings are required.")
        slope, _ = np.polyfit(i / 1000.0, v, 1)
        return float(slope)


@dataclass(frozen=True)
class GalvanometerConversion:
    """
    Conversion of a galvanometer into a voltmeter with a series resistance R.

    Attributes:
        internal_resistance: Coil resistance G (ohm).
        full_scale_current: Full-scale deflection current Ig (mA).
        series_resistance: Series resistance R (ohm).
        scale_divisions: Divisions on the galvanometer scale.
    """
    internal_resistance: float
    full_scale_current: float
    series_resistance: float = 0.0
    scale_divisions: int = 30

    @property
    def ig(self) -> float:
        """Full-scale current in amperes."""
        return self.full_scale_current / 1000.0

    @property
    def converted_range(self) -> float:
        """Full-scale voltage of the converted meter, Ig * (G + R)."""
        return self.ig * (self.internal_resistance + self.series_resistance)

    @property
    def figure_of_merit(self) -> float:
        """Current per scale division (mA/div)."""
        return self.ig * 1000.0 / self.scale_divisions

    def required_series_resistance(self, target_range: float) -> float:
        """
        Series resistance R = V / Ig - G for a full-scale reading of ``target_range`` volts.
        """
        if self.ig <= 0:
            raise ValueError("Full-scale current must be positive.")
        return target_range / self.ig - self.internal_resistance

    @classmethod
    def from_components(cls, components: Sequence[LabComponent]) -> GalvanometerConversion | None:
        galva = next((c for c in components if isinstance(c, Galvanometer)), None)
        if galva is None:
            return None
        box = next((c for c in components if isinstance(c, ResistanceBox)), None)
        return cls(
            internal_resistance=float(galva.internal_resistance),
            full_scale_current=float(galva.full_scale_current),
            series_resistance=float(box.resistance) if box is not None else 0.0,
        )
