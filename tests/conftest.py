"""
Shared fixtures for the labsim test suite.

All fixtures build plain component and wire objects; nothing here touches a
Workbench unless the fixture name says so.
"""

import itertools

import pytest

from labsim.circuit import TerminalRef, Wire
from labsim.circuit.components import (
    Ammeter,
    Battery,
    Galvanometer,
    ResistanceBox,
    Resistor,
    Rheostat,
    Voltmeter,
)

_wire_ids = itertools.count(1)


def make_wire(a_id, a_term, b_id, b_term, wire_id=None):
    """Helper to create a Wire with minimal boilerplate."""
    return Wire(
        wire_id or f"w{next(_wire_ids)}",
        TerminalRef(a_id, a_term),
        TerminalRef(b_id, b_term),
    )


def reading(components, component_id, field):
    """Return a derived reading of the component with the given id."""
    comp = next(c for c in components if c.id == component_id)
    return getattr(comp, field)


@pytest.fixture
def galvanometer_loop():
    """
    B1(+) -- G1 -- RB1 -- B1(-)

    E = 5 V, G = 100 ohm, R = 4900 ohm, so I = 1 mA.
    """
    components = [
        Battery("B1", voltage=5.0),
        Galvanometer("G1", internal_resistance=100.0),
        ResistanceBox("RB1", resistance=4900.0),
    ]
    wires = [
        make_wire("B1", "positive", "G1", "positive"),
        make_wire("G1", "negative", "RB1", "left"),
        make_wire("RB1", "right", "B1", "negative"),
    ]
    return components, wires


@pytest.fixture
def resistor_loop():
    """
    B1(+) -- G1 -- R1 -- B1(-)

    E = 5 V, G = 100 ohm, R = 100 ohm, so I = 25 mA.
    """
    components = [
        Battery("B1", voltage=5.0),
        Galvanometer("G1", internal_resistance=100.0),
        Resistor("R1", resistance=100.0),
    ]
    wires = [
        make_wire("B1", "positive", "G1", "positive"),
        make_wire("G1", "negative", "R1", "left"),
        make_wire("R1", "right", "B1", "negative"),
    ]
    return components, wires


@pytest.fixture
def rheostat_loop():
    """
    B1(+) -- RH1(A) ... RH1(C) -- G1 -- B1(-), RH1(B) left open.
    """
    components = [
        Battery("B1", voltage=5.0),
        Rheostat("RH1", resistance=50.0, max_resistance=100.0),
        Galvanometer("G1", internal_resistance=100.0),
    ]
    wires = [
        make_wire("B1", "positive", "RH1", "A"),
        make_wire("RH1", "C", "G1", "positive"),
        make_wire("G1", "negative", "B1", "negative"),
    ]
    return components, wires


@pytest.fixture
def ammeter_and_voltmeter():
    return Ammeter("A1"), Voltmeter("V1")
