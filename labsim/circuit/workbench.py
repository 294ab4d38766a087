from __future__ import annotations
import itertools
import logging
from typing import List

from .classify import check_circuit_risks, fix_voltmeter_connection
from .components import create_component
from .components.base import LabComponent
from .components.meters import Ammeter, Galvanometer, Voltmeter
from .components.passive import ResistanceBox
from .components.sources import Battery
from .config import SolverConfig
from .engine import solve
from .network.graph import TerminalRef, Wire
from .observations import DataPoint, GalvanometerConversion, ObservationLog

logger = logging.getLogger(__name__)

MIN_RECORDED_CURRENT = 0.001  # mA


class Workbench:
    """
    Owner of the circuit state.

    Every mutating action ends with an explicit :meth:`refresh`, which solves
    the bench and replaces the component list only when the solve produced a
    different one. Risk warnings are recomputed on every refresh.

    Attributes:
        components: Components on the bench, in placement order.
        wires: Wires on the bench, in drawing order.
        risks: Current wiring warnings.
        observations: Recorded V-I readings.
    """

    def __init__(self, config: SolverConfig | None = None, strict_risks: bool = False) -> None:
        self.config = config
        self.strict_risks = strict_risks
        self.components: List[LabComponent] = []
        self.wires: List[Wire] = []
        self.risks: List[str] = []
        self.observations = ObservationLog()
        self._component_ids = itertools.count(1)
        self._wire_ids = itertools.count(1)

    # ---- queries ----
    def component(self, component_id: str) -> LabComponent:
        for comp in self.components:
            if comp.id == component_id:
                return comp
        raise KeyError(f"No component '{component_id}' on the bench.")

    def conversion(self) -> GalvanometerConversion | None:
        return GalvanometerConversion.from_components(self.components)

    # ---- mutations ----
    def add_component(self, kind: str, **parameters) -> LabComponent:
        comp = create_component(kind, f"{kind}-{next(self._component_ids)}", **parameters)
        self.components = [*self.components, comp]
        self.refresh()
        return self.component(comp.id)

    def remove_component(self, component_id: str) -> None:
        self.component(component_id)
        self.components = [c for c in self.components if c.id != component_id]
        self.wires = [w for w in self.wires if not w.touches(component_id)]
        self.refresh()

    def connect(self, a: TerminalRef, b: TerminalRef) -> Wire | None:
        """
        Draw a wire between two terminals.

        Returns:
            The new wire, or None when both ends are on the same component.

        Raises:
            KeyError: If either terminal does not exist on the bench.
        """
        self.component(a.component).terminal(a.terminal)
        self.component(b.component).terminal(b.terminal)
        if a.component == b.component:
            logger.debug("Refusing wire between terminals of the same component %s", a.component)
            return None
        wire = Wire(f"wire-{next(self._wire_ids)}", a, b)
        self.wires = [*self.wires, wire]
        self.refresh()
        return wire

    def delete_wire(self, wire_id: str) -> None:
        if not any(w.id == wire_id for w in self.wires):
            raise KeyError(f"No wire '{wire_id}' on the bench.")
        self.wires = [w for w in self.wires if w.id != wire_id]
        self.refresh()

    def clear_wires(self) -> None:
        self.wires = []
        self.refresh()

    def update_parameter(self, component_id: str, name: str, value) -> LabComponent:
        updated = self.component(component_id).with_parameter(name, value)
        self.components = [updated if c.id == component_id else c for c in self.components]
        self.refresh()
        return self.component(component_id)

    def fix_voltmeter(self, voltmeter_id: str) -> List[Wire]:
        """
        Replace the voltmeter's wiring with a parallel connection across the
        galvanometer branch.

        Raises:
            KeyError: If no component has that id.
            ValueError: If the component is not a voltmeter.
        """
        voltmeter = self.component(voltmeter_id)
        if not isinstance(voltmeter, Voltmeter):
            raise ValueError(f"Component '{voltmeter_id}' is not a voltmeter.")
        self.wires = fix_voltmeter_connection(
            voltmeter, self.components, self.wires,
            new_id=lambda _k: f"wire-{next(self._wire_ids)}",
        )
        self.refresh()
        return self.wires

    def reset(self) -> None:
        self.components = []
        self.wires = []
        self.observations.clear()
        self.refresh()

    def refresh(self) -> bool:
        """
        Re-solve the bench.

        Returns:
            True if the component list changed.
        """
        updated = solve(self.components, self.wires, self.config)
        changed = updated != self.components
        if changed:
            self.components = updated
        self.risks = check_circuit_risks(self.components, self.wires, strict=self.strict_risks)
        return changed

    # ---- experiment ----
    def is_properly_wired(self) -> bool:
        has_battery = any(isinstance(c, Battery) for c in self.components)
        has_meter = any(isinstance(c, (Galvanometer, Ammeter)) for c in self.components)
        return has_battery and has_meter and len(self.wires) >= 2

    def record_observation(self) -> DataPoint | None:
        """
        Log the current instrument reading as a V-I data point.

        The first galvanometer or ammeter in bench order is read; an ammeter
        reading is converted from A to mA. With a resistance box on the bench
        the voltage is the drop across instrument and box, I * (G + R);
        otherwise the battery EMF.

        Returns:
            The recorded point, or None when nothing was recorded.
        """
        if not self.is_properly_wired():
            return None
        meter = next(c for c in self.components if isinstance(c, (Galvanometer, Ammeter)))
        current_ma = meter.current if isinstance(meter, Galvanometer) else meter.current * 1000.0
        if abs(current_ma) <= MIN_RECORDED_CURRENT:
            return None

        box = next((c for c in self.components if isinstance(c, ResistanceBox)), None)
        if box is not None:
            series = float(box.resistance)
            voltage = current_ma / 1000.0 * (float(meter.internal_resistance) + series)
        else:
            series = 0.0
            battery = next(c for c in self.components if isinstance(c, Battery))
            voltage = float(battery.voltage)

        point = DataPoint(voltage=voltage, current=current_ma, resistance=series)
        if not self.observations.add(point):
            return None
        return point
