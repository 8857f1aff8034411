"""
FinanzTracker - Source Package

A local personal finance tracker: income and expense transactions are
recorded, persisted to a single local storage slot, and summarised per
month for display.

DESIGN PRINCIPLES:
1. Reject bad input at the boundary, keep aggregations total
2. The in-memory store is authoritative for the session
3. Storage backends are swappable behind a small port
4. Every mutation is auditable
"""

__version__ = "1.0.0"
__author__ = "FinanzTracker Team"
