"""End-to-end tests for solve() and solve_circuit()."""

import logging
import random

import pytest

from labsim.circuit import TerminalRef, build_node_map, solve, solve_circuit
from labsim.circuit.components import (
    Ammeter,
    Battery,
    Galvanometer,
    Resistor,
    Voltmeter,
)

from .conftest import make_wire, reading


class TestSeriesLoop:
    def test_galvanometer_reads_one_milliamp(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        out = solve(comps, wires)
        assert reading(out, "G1", "current") == pytest.approx(1.0, rel=1e-6)

    def test_reversed_galvanometer_reads_negative(self, galvanometer_loop):
        comps, _ = galvanometer_loop
        wires = [
            make_wire("B1", "positive", "G1", "negative"),
            make_wire("G1", "positive", "RB1", "left"),
            make_wire("RB1", "right", "B1", "negative"),
        ]
        out = solve(comps, wires)
        assert reading(out, "G1", "current") == pytest.approx(-1.0, rel=1e-6)

    def test_source_current_and_potentials(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        solution = solve_circuit(comps, wires)
        assert solution.potential(TerminalRef("B1", "positive")) == 0.0
        assert solution.potential(TerminalRef("B1", "negative")) == pytest.approx(-5.0)
        assert solution.voltage_across(comps[2]) == pytest.approx(4.9, rel=1e-6)
        # delivering battery: current leaves the positive terminal
        assert solution.source_current("B1") == pytest.approx(-1e-3, rel=1e-6)
        assert not solution.is_indeterminate

    def test_ammeter_and_voltmeter_readings(self):
        comps = [
            Battery("B1", voltage=6.0),
            Ammeter("A1"),
            Resistor("R1", resistance=300.0),
            Voltmeter("V1"),
        ]
        wires = [
            make_wire("B1", "positive", "A1", "in"),
            make_wire("A1", "out", "R1", "left"),
            make_wire("R1", "right", "B1", "negative"),
            make_wire("V1", "positive", "R1", "left"),
            make_wire("V1", "negative", "R1", "right"),
        ]
        out = solve(comps, wires)
        r_load = 300.0 * 1e6 / (300.0 + 1e6)
        expected_current = 6.0 / (0.01 + r_load)
        assert reading(out, "A1", "current") == pytest.approx(expected_current, rel=1e-6)
        assert reading(out, "V1", "voltage") == pytest.approx(expected_current * r_load, rel=1e-6)

    def test_inputs_are_not_mutated(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        before = list(comps)
        solve(comps, wires)
        assert comps == before
        assert comps[1].current == 0.0

    def test_non_gauges_are_passed_through(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        out = solve(comps, wires)
        assert out[0] is comps[0]
        assert out[2] is comps[2]


class TestProperties:
    def test_idempotent(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        first = solve(comps, wires)
        assert solve(comps, wires) == first
        assert solve(first, wires) == first

    def test_wire_permutation_and_duplication(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        reference = solve(comps, wires)
        shuffled = list(wires)
        random.Random(7).shuffle(shuffled)
        shuffled.append(wires[1])
        assert build_node_map(comps, shuffled).node_of == build_node_map(comps, wires).node_of
        assert solve(comps, shuffled) == reference

    def test_isolated_component(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        comps = comps + [Voltmeter("V9"), Ammeter("A9")]
        out = solve(comps, wires)
        assert reading(out, "V9", "voltage") == 0.0
        assert reading(out, "A9", "current") == 0.0
        assert reading(out, "G1", "current") == pytest.approx(1.0, rel=1e-6)

    def test_voltmeter_in_parallel_barely_loads_branch(self, resistor_loop):
        comps, wires = resistor_loop
        without = reading(solve(comps, wires), "G1", "current")
        comps = comps + [Voltmeter("V1", internal_resistance=1e6)]
        wires = wires + [
            make_wire("V1", "positive", "R1", "left"),
            make_wire("V1", "negative", "R1", "right"),
        ]
        out = solve(comps, wires)
        with_meter = reading(out, "G1", "current")
        assert without == pytest.approx(25.0, rel=1e-6)
        assert abs(with_meter - without) / without < 1e-3
        assert reading(out, "V1", "voltage") == pytest.approx(2.5, rel=1e-3)

    def test_rheostat_wiper_at_zero_shorts_a_to_c(self, rheostat_loop):
        comps, wires = rheostat_loop
        comps[1] = comps[1].with_parameter("resistance", 0.0)
        out = solve(comps, wires)
        assert reading(out, "G1", "current") == pytest.approx(50.0, rel=1e-4)

    def test_rheostat_wiper_at_end_is_full_track(self, rheostat_loop):
        comps, wires = rheostat_loop
        comps[1] = comps[1].with_parameter("resistance", 100.0)
        out = solve(comps, wires)
        assert reading(out, "G1", "current") == pytest.approx(25.0, rel=1e-6)

    def test_rheostat_wiper_at_end_shorts_c_to_b(self, rheostat_loop):
        comps, _ = rheostat_loop
        wires = [
            make_wire("B1", "positive", "RH1", "B"),
            make_wire("RH1", "C", "G1", "positive"),
            make_wire("G1", "negative", "B1", "negative"),
        ]
        comps[1] = comps[1].with_parameter("resistance", 100.0)
        assert reading(solve(comps, wires), "G1", "current") == pytest.approx(50.0, rel=1e-4)
        comps[1] = comps[1].with_parameter("resistance", 0.0)
        assert reading(solve(comps, wires), "G1", "current") == pytest.approx(25.0, rel=1e-6)


class TestDegenerateAndFailures:
    def test_empty_bench(self):
        assert solve([], []) == []
        assert solve_circuit([], []) is None

    def test_fewer_than_two_nodes_keeps_readings(self):
        comps = [Galvanometer("G1", current=0.7)]
        wires = [make_wire("G1", "positive", "G1", "negative")]
        assert solve_circuit(comps, wires) is None
        out = solve(comps, wires)
        assert out == comps
        assert out[0].current == 0.7

    def test_malformed_parameter_keeps_previous_readings(self, galvanometer_loop, caplog):
        comps, wires = galvanometer_loop
        comps[1] = Galvanometer("G1", internal_resistance=100.0, current=0.42)
        comps[2] = comps[2].with_parameter("resistance", 0.0)
        with caplog.at_level(logging.ERROR, logger="labsim.circuit.engine"):
            out = solve(comps, wires)
        assert out == comps
        assert reading(out, "G1", "current") == 0.42
        assert "Circuit solve failed" in caplog.text

    def test_solve_circuit_raises_on_malformed_parameter(self, galvanometer_loop):
        comps, wires = galvanometer_loop
        comps[2] = comps[2].with_parameter("resistance", -1.0)
        with pytest.raises(ValueError, match="must be positive"):
            solve_circuit(comps, wires)

    def test_conflicting_sources_are_indeterminate(self, caplog):
        comps = [
            Battery("B1", voltage=5.0),
            Battery("B2", voltage=3.0),
            Voltmeter("V1", voltage=1.23),
        ]
        wires = [
            make_wire("B1", "positive", "B2", "positive"),
            make_wire("B1", "negative", "B2", "negative"),
            make_wire("V1", "positive", "B1", "positive"),
            make_wire("V1", "negative", "B1", "negative"),
        ]
        solution = solve_circuit(comps, wires)
        assert solution.is_indeterminate
        with caplog.at_level(logging.WARNING, logger="labsim.circuit.engine"):
            out = solve(comps, wires)
        assert reading(out, "V1", "voltage") == 1.23
        assert "indeterminate" in caplog.text
