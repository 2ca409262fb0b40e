"""Equivalence checks between expression trees (class-based).

Provides:
  • EquivalenceChecks.numeric_fingerprint(node, n_points) -> hex digest
  • EquivalenceChecks.numerically_equivalent(a, b) -> bool
  • EquivalenceChecks.symbolic_equal(a, b) -> bool
"""

from __future__ import annotations
import hashlib
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
import sympy as sp

from ..tree import Node, evaluate, free_variables, to_sympy
from ..tree.evaluate import CONSTANTS

logger = logging.getLogger(__name__)

GRID = np.array([-2.0, -1.0, -0.5, 0.5, 1.0, 2.0], dtype=np.float64)


class EquivalenceChecks:
	"""Numeric and symbolic equality certificates for generated forms."""

	def __init__(self, n_points: int = 8, tolerance: float = 1e-8) -> None:
		self.n_points = max(1, int(n_points))
		self.tolerance = tolerance

	@staticmethod
	def _symbols(*nodes: Node) -> List[str]:
		names = set()
		for n in nodes:
			names |= free_variables(n)
		return sorted(name for name in names if name not in CONSTANTS)

	@staticmethod
	def grid_environment(names: Sequence[str], n_points: int) -> Dict[str, np.ndarray]:
		"""
		Deterministic evaluation points: variable k at point t takes GRID[(2t + k) mod len(GRID)].
		"""
		env: Dict[str, np.ndarray] = {}
		for k, name in enumerate(names):
			col = []
			for t in range(n_points):
				col.append(GRID[(2 * t + k) % len(GRID)])
			env[name] = np.array(col, dtype=np.float64)
		return env

	def _values(self, node: Node, names: Sequence[str]) -> np.ndarray:
		env = self.grid_environment(names, self.n_points)
		out = evaluate(node, env)
		return np.broadcast_to(out, (self.n_points,))

	def numeric_fingerprint(self, node: Node, n_points: Optional[int] = None) -> str:
		"""
		BLAKE2b digest of the node's values on the fixed grid; non-finite values encode as 'nan'.
		"""
		checker = self if n_points is None else EquivalenceChecks(n_points, self.tolerance)
		values = checker._values(node, self._symbols(node))
		codes: List[str] = []
		for v in values:
			if not np.isfinite(v):
				codes.append("nan")
			else:
				codes.append(f"{float(v):.6f}")
		blob = "|".join(codes).encode("utf-8")
		return hashlib.blake2b(blob, digest_size=8).hexdigest()

	def numerically_equivalent(self, a: Node, b: Node) -> bool:
		"""
		True iff a and b agree within tolerance wherever both are finite on the grid.
		No comparable point is inconclusive and counts as equivalent.
		"""
		names = self._symbols(a, b)
		va = self._values(a, names)
		vb = self._values(b, names)
		mask = np.isfinite(va) & np.isfinite(vb)
		if not mask.any():
			logger.debug("numerically_equivalent: no comparable point for %s vs %s", a, b)
			return True
		return bool(np.allclose(va[mask], vb[mask], rtol=self.tolerance, atol=self.tolerance))

	def symbolic_equal(self, a: Node, b: Node) -> bool:
		"""
		Return True iff simplify(a - b) is exactly zero (symbolic certificate).
		"""
		d = sp.simplify(to_sympy(a) - to_sympy(b))
		if d == 0:
			return True
		else:
			return False
