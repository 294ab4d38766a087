from __future__ import annotations
from typing import Dict, Type

from .base import LabComponent, StampData, TwoTerminalResistive  # noqa: F401
from .passive import Resistor, ResistanceBox, Rheostat  # noqa: F401
from .meters import Ammeter, Voltmeter, Galvanometer  # noqa: F401
from .sources import Battery  # noqa: F401

COMPONENT_TYPES: Dict[str, Type[LabComponent]] = {
    cls.kind: cls
    for cls in (Battery, Resistor, ResistanceBox, Rheostat, Ammeter, Voltmeter, Galvanometer)
}

# parameter names used by the browser workbench
_PARAMETER_ALIASES = {
    "internalResistance": "internal_resistance",
    "fullScaleCurrent": "full_scale_current",
    "maxResistance": "max_resistance",
}


def create_component(kind: str, component_id: str, **parameters) -> LabComponent:
    """
    Instantiate a part by kind name; omitted parameters take their defaults.
    """
    if kind not in COMPONENT_TYPES:
        raise ValueError(f"Unknown component kind '{kind}'.")
    return COMPONENT_TYPES[kind](component_id, **parameters)


def component_from_dict(data: dict) -> LabComponent:
    """
    Build a part from ``{"id", "kind", "parameters"}``.

    The workbench's own shape (``type``/``props`` with camelCase names) is
    accepted as well; unknown parameter names are ignored.
    """
    kind = data.get("kind", data.get("type"))
    if "id" not in data or kind is None:
        raise ValueError(f"Malformed component: {data!r}")
    if kind not in COMPONENT_TYPES:
        raise ValueError(f"Unknown component kind '{kind}'.")
    raw = data.get("parameters", data.get("props")) or {}
    probe = COMPONENT_TYPES[kind](str(data["id"]))
    accepted = probe.parameters()
    params = {}
    for key, value in raw.items():
        name = _PARAMETER_ALIASES.get(key, key)
        if name in accepted:
            params[name] = value
    return create_component(kind, str(data["id"]), **params)


__all__ = [
    "COMPONENT_TYPES",
    "LabComponent",
    "StampData",
    "TwoTerminalResistive",
    "Resistor",
    "ResistanceBox",
    "Rheostat",
    "Ammeter",
    "Voltmeter",
    "Galvanometer",
    "Battery",
    "component_from_dict",
    "create_component",
]
