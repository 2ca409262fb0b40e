"""
canonicalize -> generate forms -> select, plus the individual stages.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .canonical import Canonicalizer
from .config import SimplifyConfig, DEFAULT_CONFIG
from .forms import FormGenerator, SimplifiedForm, SimplificationForms
from .pipeline import StrategyOrchestrator
from .selection import FormSelector
from .tree import Node
from .trig import TrigRewriter

logger = logging.getLogger(__name__)


class SimplificationEngine:
	"""Public facade bundling one instance of each stage under a shared config."""

	def __init__(self, config: Optional[SimplifyConfig] = None) -> None:
		"""Initialize every stage with the same config."""
		self.cfg = config or DEFAULT_CONFIG
		self.canonicalizer = Canonicalizer(self.cfg)
		self.trig = TrigRewriter(self.cfg)
		self.generator = FormGenerator(self.cfg)
		self.orchestrator = StrategyOrchestrator(self.cfg)
		self.selector = FormSelector()

	def canonicalize(self, node: Node) -> Node:
		return self.canonicalizer.canonicalize(node)

	def generate_all_forms(self, node: Node) -> SimplificationForms:
		return self.generator.generate_all_forms(node)

	def simplify_trig(self, node: Node) -> Node:
		return self.trig.simplify(node)

	def iterative_simplify(self, node: Node) -> Node:
		return self.orchestrator.iterative_simplify(node)

	def generate_multiple_forms(self, node: Node) -> SimplificationForms:
		return self.orchestrator.generate_multiple_forms(node)

	def select_best_for_differentiation(self, candidates: Sequence[Node]) -> Node:
		return self.selector.select_best_for_differentiation(candidates)

	def form_statistics(self, node: Node) -> Dict[str, int]:
		return self.selector.form_statistics(node)

	def prepare_for_differentiation(self, node: Node) -> Tuple[Node, List[SimplifiedForm]]:
		"""
		Hand-off to a differentiation stage:
		  • canonicalize the input
		  • generate its alternative forms and deduplicate them
		  • pick the lowest-cost form
		Returns (best expression, displayed forms).
		"""
		canonical = self.canonicalize(node)
		forms = self.generate_all_forms(canonical).display_forms()
		best = self.selector.select_best_form(forms)
		logger.debug("prepare_for_differentiation: %s -> %s (%s)", node, best.expression, best.label)
		return best.expression, forms


_DEFAULT = SimplificationEngine()


def prepare_for_differentiation(node: Node) -> Tuple[Node, List[SimplifiedForm]]:
	"""Proxy to SimplificationEngine.prepare_for_differentiation."""
	return _DEFAULT.prepare_for_differentiation(node)
