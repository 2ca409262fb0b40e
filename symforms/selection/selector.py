"""
Choice of the candidate form best suited to differentiation (lowest cost, first wins ties).
"""

from __future__ import annotations
import logging
from typing import Dict, List, Sequence

from ..errors import EmptyCandidatesError
from ..forms import SimplifiedForm
from ..tree import Node, Operator, node_count, count_operator, count_functions
from .cost import DifferentiationCost

logger = logging.getLogger(__name__)


class FormSelector:
	"""Cost-based selection over candidate trees or forms."""

	def __init__(self) -> None:
		self.model = DifferentiationCost()

	def _argmin(self, nodes: Sequence[Node]) -> int:
		best_idx = 0
		best_cost = self.model.cost(nodes[0])
		for i in range(1, len(nodes)):
			c = self.model.cost(nodes[i])
			if c < best_cost:
				best_idx, best_cost = i, c
		logger.debug("select: candidate %d of %d, cost %d", best_idx, len(nodes), best_cost)
		return best_idx

	def select_best_for_differentiation(self, candidates: Sequence[Node]) -> Node:
		"""Return the lowest-cost tree; raise EmptyCandidatesError on an empty list."""
		if len(candidates) == 0:
			raise EmptyCandidatesError("no candidate expressions to select from")
		if len(candidates) == 1:
			return candidates[0]
		return candidates[self._argmin(candidates)]

	def select_best_form(self, forms: Sequence[SimplifiedForm]) -> SimplifiedForm:
		"""Same rule as select_best_for_differentiation, applied to the forms' expressions."""
		if len(forms) == 0:
			raise EmptyCandidatesError("no candidate forms to select from")
		if len(forms) == 1:
			return forms[0]
		exprs: List[Node] = [f.expression for f in forms]
		return forms[self._argmin(exprs)]

	def form_statistics(self, node: Node) -> Dict[str, int]:
		return {
			"nodes": node_count(node),
			"divisions": count_operator(node, Operator.DIVIDE),
			"powers": count_operator(node, Operator.POWER),
			"functions": count_functions(node),
			"cost": self.model.cost(node),
		}


_DEFAULT = FormSelector()


def select_best_for_differentiation(candidates: Sequence[Node]) -> Node:
	"""Proxy to FormSelector.select_best_for_differentiation."""
	return _DEFAULT.select_best_for_differentiation(candidates)


def select_best_form(forms: Sequence[SimplifiedForm]) -> SimplifiedForm:
	"""Proxy to FormSelector.select_best_form."""
	return _DEFAULT.select_best_form(forms)


def form_statistics(node: Node) -> Dict[str, int]:
	"""Proxy to FormSelector.form_statistics."""
	return _DEFAULT.form_statistics(node)
