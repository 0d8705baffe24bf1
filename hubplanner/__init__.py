"""
Financial Hub Planner

A deterministic cash-flow projection and pot-allocation engine.
Projects a balance day by day across twelve months, applies a schedule
of expenses, funds purpose-tagged savings pots and sweeps weekly surplus
according to a week-of-month policy table.

DESIGN PRINCIPLES:
1. Same configuration + start date → byte-identical plan
2. The engine always answers; degenerate input degrades, never raises
3. No silent losses: anything the ledger drops is reported
4. Computation is separate from presentation strings
5. The configuration is a value; the engine never writes back to it
"""

__version__ = "1.0.0"
__author__ = "Financial Hub Team"
