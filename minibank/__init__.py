"""
Mini Bank Ledger Simulator

An in-memory ledger with a no-overdraft policy, per-account transaction
histories, a global append-only log and single-depth undo.
"""

__version__ = "1.0.0"
