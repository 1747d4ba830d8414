"""
bizfin - Recurring Expense Core

The deterministic pieces under the reporting screens of a small-business
finance app: when a recurring expense is next due, and how much of a
period's spending is fixed (recurring) versus variable.

DESIGN PRINCIPLES:
1. Pure functions over in-memory data, no I/O
2. Loose backend rows are parsed once, at the boundary
3. Bad data degrades to a defined result (None, 0), it never raises in the core
4. Heuristic constants are configuration, not code
"""

__version__ = "1.0.0"
