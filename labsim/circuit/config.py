from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """
    Numerical constants of the DC operating-point solve.

    Attributes:
        gmin: Conductance (S) tied from every node to ground so floating
            sub-circuits keep the matrix non-singular (default: 1e-12).
        pivot_tolerance: Pivots smaller in magnitude are skipped during
            elimination and reported (default: 1e-15).
        rheostat_floor: Minimum resistance (ohm) of each rheostat branch at
            the ends of the wiper travel (default: 1e-3).
    """
    gmin: float = 1e-12
    pivot_tolerance: float = 1e-15
    rheostat_floor: float = 1e-3


DEFAULT_CONFIG = SolverConfig()
