"""
Public entry points used by the workbench, the guide engine and the tutor.

Both functions are pure: they never mutate their arguments and return fresh
values that the caller stores as the new source of truth.
"""

from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np

from .circuit import solve_circuit
from .classify import WiringClassification, classify_wiring  # noqa: F401
from .components.base import LabComponent
from .config import SolverConfig
from .network.graph import Wire
from .readback import annotate

logger = logging.getLogger(__name__)

SOLVE_ERRORS = (
    ValueError,
    KeyError,
    TypeError,
    ZeroDivisionError,
    FloatingPointError,
    np.linalg.LinAlgError,
)


def solve(
    components: Sequence[LabComponent],
    wires: Sequence[Wire],
    config: SolverConfig | None = None,
) -> List[LabComponent]:
    """
    Solve the bench and return the components with fresh gauge readings.

    The input is returned unchanged (as a list) when the bench has fewer than
    two electrical nodes, when the system is indeterminate, or when solving
    fails; readings then stay at their last valid value.

    Args:
        components: Snapshot of the components on the bench.
        wires: Snapshot of the wires on the bench.
        config: Solver constants (defaults when omitted).

    Returns:
        New component list.
    """
    try:
        solution = solve_circuit(components, wires, config)
        if solution is None:
            return list(components)
        if solution.is_indeterminate:
            logger.warning(
                "Circuit is indeterminate (skipped pivots %s); keeping previous readings",
                list(solution.skipped_pivots),
            )
            return list(components)
        return annotate(components, solution)
    except SOLVE_ERRORS:
        logger.exception("Circuit solve failed; keeping previous readings")
        return list(components)
