"""
Galvanometer-to-voltmeter conversion experiment.

Circuit:
    Battery (5 V) -> Rheostat A..C -> Galvanometer (G = 100 Ω) -> Resistance box (R) -> Battery.
    A voltmeter is connected across galvanometer + resistance box.

The series resistance R is chosen for a 5 V range, then the rheostat wiper is
swept to record V-I readings. The fitted slope of the V-I line should match
G + R.
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[3]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from labsim.circuit import TerminalRef, Workbench


def main() -> None:
    bench = Workbench()
    battery = bench.add_component("battery", voltage=5.0)
    rheostat = bench.add_component("rheostat", resistance=20.0, max_resistance=200.0)
    galva = bench.add_component("galvanometer", internal_resistance=100.0, full_scale_current=1.0)
    box = bench.add_component("resistance_box")

    target_range = 5.0
    r_series = bench.conversion().required_series_resistance(target_range)
    box = bench.update_parameter(box.id, "resistance", r_series)
    print(f"Required series resistance for a {target_range:.1f} V range: R = {r_series:.1f} Ω")

    bench.connect(TerminalRef(battery.id, "positive"), TerminalRef(rheostat.id, "A"))
    bench.connect(TerminalRef(rheostat.id, "C"), TerminalRef(galva.id, "positive"))
    bench.connect(TerminalRef(galva.id, "negative"), TerminalRef(box.id, "left"))
    bench.connect(TerminalRef(box.id, "right"), TerminalRef(battery.id, "negative"))

    voltmeter = bench.add_component("voltmeter")
    bench.connect(TerminalRef(voltmeter.id, "positive"), TerminalRef(galva.id, "positive"))
    bench.connect(TerminalRef(voltmeter.id, "negative"), TerminalRef(box.id, "right"))
    print(f"Wiring warnings: {bench.risks or 'none'}")

    for wiper in (0.0, 40.0, 80.0, 120.0, 160.0, 200.0):
        bench.update_parameter(rheostat.id, "resistance", wiper)
        point = bench.record_observation()
        v_meter = bench.component(voltmeter.id).voltage
        i_galva = bench.component(galva.id).current
        print(f"wiper {wiper:6.1f} Ω: I = {i_galva:.4f} mA, V(voltmeter) = {v_meter:.4f} V"
              + ("" if point else " (not recorded)"))

    conv = bench.conversion()
    print(f"Converted range: {conv.converted_range:.2f} V, figure of merit: {conv.figure_of_merit:.4f} mA/div")
    print(f"Fitted G + R from readings: {bench.observations.fitted_resistance():.1f} Ω")

    try:
        import matplotlib.pyplot as plt

        v, i = bench.observations.vi_arrays()
        plt.figure(figsize=(6, 4))
        plt.plot(i, v, "o-")
        plt.xlabel("Current [mA]")
        plt.ylabel("Voltage [V]")
        plt.title("Converted voltmeter V-I characteristic")
        plt.grid(True)
        plt.tight_layout()
        plt.show()
    except ImportError:
        pass


if __name__ == "__main__":
    main()
