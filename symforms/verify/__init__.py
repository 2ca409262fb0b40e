"""
Equivalence checks.

Public API re-export:
	EquivalenceChecks — numeric fingerprint, grid equivalence and SymPy certificate
"""

from .equality import EquivalenceChecks, GRID

__all__ = ["EquivalenceChecks", "GRID"]
