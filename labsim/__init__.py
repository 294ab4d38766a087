"""
Top-level namespace for the virtual physics lab.

- labsim.circuit: DC circuit engine (topology, MNA solve, instrument readback
  and wiring safety checks).
"""

from . import circuit  # noqa: F401

__all__ = ["circuit"]
