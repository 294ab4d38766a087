from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .components.base import LabComponent
from .components.meters import Ammeter, Galvanometer, Voltmeter
from .components.passive import ResistanceBox
from .network.graph import TerminalRef, UndirectedGraph, Wire

logger = logging.getLogger(__name__)

SERIES = "series"
PARALLEL = "parallel"
UNKNOWN = "unknown"

VOLTMETER_SERIES_WARNING = (
    "RISK: Voltmeter connected in series! This will block current flow and may damage "
    "the voltmeter. Voltmeters must be connected in parallel."
)
AMMETER_PARALLEL_WARNING = (
    "RISK: Ammeter connected in parallel! This will short the branch and may damage "
    "the ammeter. Ammeters must be connected in series."
)


@dataclass(frozen=True)
class WiringClassification:
    """
    Placement of a measuring instrument relative to the rest of the circuit.

    Attributes:
        placement: "series", "parallel" or "unknown" (not enough wiring to tell).
        is_series_risk: A voltmeter placed in series.
        is_parallel_risk: An ammeter placed in parallel.
    """
    placement: str = UNKNOWN
    is_series_risk: bool = False
    is_parallel_risk: bool = False


def component_graph(wires: Sequence[Wire]) -> UndirectedGraph[str]:
    """
    Component adjacency: two components are adjacent when a wire joins them.
    """
    graph: UndirectedGraph[str] = UndirectedGraph()
    for wire in wires:
        graph.add_edge(wire.a.component, wire.b.component)
    return graph


def placement_of(instrument: LabComponent, components: Sequence[LabComponent], wires: Sequence[Wire]) -> str:
    """
    Classify how ``instrument`` sits between its two neighbours.

    Each governing terminal must carry exactly one wire; the far ends of those
    wires name the neighbours X and Y. The instrument is in parallel when X is
    Y, or when Y can be reached from X without passing through the
    instrument. Otherwise its own wires are the only link between X and Y and
    it is in series.
    """
    by_id: Dict[str, LabComponent] = {c.id: c for c in components}
    neighbours = []
    for ref in instrument.governing_terminals():
        attached = [w for w in wires if ref in (w.a, w.b)]
        if len(attached) != 1:
            return UNKNOWN
        far = attached[0].other_end(ref)
        if far is None or far.component == instrument.id or far.component not in by_id:
            return UNKNOWN
        neighbours.append(far.component)

    x, y = neighbours
    if x == y:
        return PARALLEL
    if component_graph(wires).has_path(x, y, exclude=(instrument.id,)):
        return PARALLEL
    return SERIES


def classify_wiring(
    instrument: LabComponent,
    components: Sequence[LabComponent],
    wires: Sequence[Wire],
) -> WiringClassification:
    """
    Safety classification of a voltmeter or ammeter.

    Other kinds are classified too but never raise a risk flag.
    """
    placement = placement_of(instrument, components, wires)
    return WiringClassification(
        placement=placement,
        is_series_risk=isinstance(instrument, Voltmeter) and placement == SERIES,
        is_parallel_risk=isinstance(instrument, Ammeter) and placement == PARALLEL,
    )


def check_circuit_risks(
    components: Sequence[LabComponent],
    wires: Sequence[Wire],
    strict: bool = False,
) -> List[str]:
    """
    One warning per mis-wired instrument, in component order.

    Args:
        components: Components on the bench.
        wires: Wires on the bench.
        strict: Also report ammeters classified as parallel. Off by default:
            in a single closed loop the neighbours of any instrument stay
            connected through the rest of the loop, so a correctly placed
            ammeter classifies as parallel too.
    """
    risks = []
    for comp in components:
        if not isinstance(comp, (Voltmeter, Ammeter)):
            continue
        result = classify_wiring(comp, components, wires)
        if result.is_series_risk:
            logger.debug("Voltmeter %s is wired in series", comp.id)
            risks.append(VOLTMETER_SERIES_WARNING)
        if strict and result.is_parallel_risk:
            logger.debug("Ammeter %s is wired in parallel", comp.id)
            risks.append(AMMETER_PARALLEL_WARNING)
    return risks


def _opposite(component: LabComponent, ref: TerminalRef) -> TerminalRef:
    first, second = component.governing_terminals()
    return second if ref == first else first


def _free_terminal(component: LabComponent, partner_id: str, wires: Sequence[Wire]) -> TerminalRef:
    """
    First governing terminal of ``component`` with no wire to ``partner_id``.
    """
    for ref in component.governing_terminals():
        if not any(ref in (w.a, w.b) and w.touches(partner_id) for w in wires):
            return ref
    return component.governing_terminals()[0]


def _outer_terminals(
    galvanometer: Galvanometer,
    box: ResistanceBox,
    wires: Sequence[Wire],
) -> Tuple[TerminalRef, TerminalRef]:
    for g_ref in galvanometer.governing_terminals():
        for r_ref in box.governing_terminals():
            if any(w.ends == frozenset((g_ref, r_ref)) for w in wires):
                return _opposite(galvanometer, g_ref), _opposite(box, r_ref)
    return _free_terminal(galvanometer, box.id, wires), _free_terminal(box, galvanometer.id, wires)


def fix_voltmeter_connection(
    voltmeter: Voltmeter,
    components: Sequence[LabComponent],
    wires: Sequence[Wire],
    new_id: Callable[[int], str] | None = None,
) -> List[Wire]:
    """
    Rewire ``voltmeter`` in parallel with the galvanometer branch.

    Every wire touching the voltmeter is dropped. With a galvanometer and a
    resistance box on the bench the voltmeter goes across the pair: across
    their outer terminals when a wire joins them directly, otherwise across
    the first terminal of each that is not wired to the other. With only a
    galvanometer it goes across the galvanometer. Without a galvanometer the
    voltmeter is left unwired.

    Args:
        voltmeter: The instrument to rewire.
        components: Components on the bench.
        wires: Wires on the bench.
        new_id: Id of the k-th added wire (k = 1, 2). Defaults to
            ``"wire-fix-<voltmeter id>-<k>"``.

    Returns:
        New wire list; the inputs are not modified.
    """
    if new_id is None:
        def new_id(k: int) -> str:
            return f"wire-fix-{voltmeter.id}-{k}"

    kept = [w for w in wires if not w.touches(voltmeter.id)]
    galvanometer = next((c for c in components if isinstance(c, Galvanometer)), None)
    box = next((c for c in components if isinstance(c, ResistanceBox)), None)
    if galvanometer is None:
        logger.debug("No galvanometer to put voltmeter %s across", voltmeter.id)
        return kept

    if box is None:
        high, low = galvanometer.governing_terminals()
    else:
        high, low = _outer_terminals(galvanometer, box, kept)
    positive, negative = voltmeter.governing_terminals()
    return [*kept, Wire(new_id(1), positive, high), Wire(new_id(2), negative, low)]
