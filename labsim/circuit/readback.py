from __future__ import annotations
from typing import List, Sequence

from .circuit import CircuitSolution
from .components.base import LabComponent


def annotate(components: Sequence[LabComponent], solution: CircuitSolution) -> List[LabComponent]:
    """
    Refresh every gauge's derived reading from the solved node potentials.

    Gauges are replaced by updated copies; every other component is passed
    through as the same object. Running it twice on the same solution gives
    equal lists.
    """
    annotated = []
    for comp in components:
        v1, v2 = solution.governing_potentials(comp)
        annotated.append(comp.annotate(v1, v2))
    return annotated
