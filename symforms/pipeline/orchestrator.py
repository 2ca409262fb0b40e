"""
Multi-strategy form generation.

Strategies (each run on the same input, each step guarded):
  • expand           canonicalize → fold → drop 0 → drop 1 → powers, to a fixed point
  • trig             as expand, plus trig rewriting each round
  • factor           canonicalize → trig, then the generator's factored candidate
  • fraction         canonicalize → trig, then the generator's exp-cancelled (or last) candidate
  • full             iterative_simplify

Results are deduplicated by structure_key (snapped numbers, flattened sum and product
chains). While fewer than min_forms distinct forms exist, two reduced strategies pad
the set. A failed step keeps its input; a failure of the whole run returns the input as
the single "original form".
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from ..canonical import Canonicalizer
from ..config import SimplifyConfig, DEFAULT_CONFIG, LogEvent
from ..errors import SymFormsError
from ..forms import (
	FormGenerator, FormKind, SimplifiedForm, SimplificationForms,
	NUMERATOR_FACTORED, COMMON_FACTOR_EXTRACTED, EXP_CANCELLED,
	EXPANDED_LABEL, TRIG_SIMPLIFIED, FACTORED_LABEL, FRACTION_REDUCED, FULLY_SIMPLIFIED,
	INTERMEDIATE_STEP, ALTERNATIVE_FORM, ORIGINAL_FORM,
)
from ..tree import Node, Operator, is_op, structure_key
from ..trig import TrigRewriter
from ..verify import EquivalenceChecks
from .passes import fold_constants, remove_zero_terms, remove_one_factors, simplify_powers

logger = logging.getLogger(__name__)

Step = Tuple[str, Callable[[Node], Node]]


class StrategyOrchestrator:
	"""Runs the simplification strategies and collects their distinct results."""

	def __init__(self, config: Optional[SimplifyConfig] = None) -> None:
		self.cfg = config or DEFAULT_CONFIG
		self.canonicalizer = Canonicalizer(self.cfg)
		self.trig = TrigRewriter(self.cfg)
		self.generator = FormGenerator(self.cfg)
		self.checks = EquivalenceChecks(self.cfg.fingerprint_points)

	# Steps

	def _steps(self, *names: str) -> List[Step]:
		eps = self.cfg.epsilon
		table = {
			"canonicalize": self.canonicalizer.canonicalize,
			"fold_constants": lambda n: fold_constants(n, eps),
			"remove_zero_terms": lambda n: remove_zero_terms(n, eps),
			"remove_one_factors": lambda n: remove_one_factors(n, eps),
			"trig_simplify": self.trig.simplify,
			"simplify_powers": lambda n: simplify_powers(n, eps),
		}
		return [(name, table[name]) for name in names]

	def _try_apply(self, name: str, node: Node, fn: Callable[[Node], Node], events: List[LogEvent]) -> Node:
		"""Apply fn; on failure log, record an event and return node unchanged."""
		try:
			return fn(node)
		except Exception as exc:
			logger.warning("%s: %s; keeping previous value", name, exc)
			events.append(LogEvent("step_failed", {"step": name, "error": repr(exc), "input": str(node)}))
			return node

	def _run_once(self, node: Node, steps: Sequence[Step], events: List[LogEvent]) -> Node:
		current = node
		for name, fn in steps:
			current = self._try_apply(name, current, fn, events)
		return current

	def _run_to_fixed_point(self, node: Node, steps: Sequence[Step], events: List[LogEvent]) -> Node:
		current = node
		for round_no in range(1, self.cfg.max_rounds + 1):
			before = current
			current = self._run_once(current, steps, events)
			if current == before:
				logger.debug("fixed point after %d round(s): %s", round_no, current)
				break
		return current

	# Strategies

	def expand_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		steps = self._steps("canonicalize", "fold_constants", "remove_zero_terms", "remove_one_factors", "simplify_powers")
		return self._run_to_fixed_point(node, steps, events)

	def trig_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		steps = self._steps(
			"canonicalize", "fold_constants", "remove_zero_terms", "remove_one_factors",
			"trig_simplify", "simplify_powers",
		)
		return self._run_to_fixed_point(node, steps, events)

	def _generated(self, node: Node, events: List[LogEvent]) -> Optional[SimplificationForms]:
		try:
			forms = self.generator.generate_all_forms(node)
		except Exception as exc:
			logger.warning("generate_all_forms: %s; no candidates", exc)
			events.append(LogEvent("step_failed", {"step": "generate_all_forms", "error": repr(exc), "input": str(node)}))
			return None
		events.extend(forms.events)
		return forms

	def factor_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		current = self._run_once(node, self._steps("canonicalize", "trig_simplify"), events)
		forms = self._generated(current, events)
		if forms is None:
			return current
		if is_op(current, Operator.DIVIDE):
			label = NUMERATOR_FACTORED
		else:
			label = COMMON_FACTOR_EXTRACTED
		found = forms.find(label)
		if found:
			return found[0].expression
		return current

	def fraction_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		current = self._run_once(node, self._steps("canonicalize", "trig_simplify"), events)
		if not is_op(current, Operator.DIVIDE):
			return current
		forms = self._generated(current, events)
		if forms is None or not forms.forms:
			return current
		found = forms.find(EXP_CANCELLED)
		if found:
			return found[0].expression
		return forms.forms[-1].expression

	def partial_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		return self._run_once(node, self._steps("canonicalize", "fold_constants", "trig_simplify"), events)

	def alternative_strategy(self, node: Node, events: List[LogEvent]) -> Node:
		return self._run_once(node, self._steps("canonicalize", "remove_zero_terms", "remove_one_factors"), events)

	def iterative_simplify(self, node: Node, events: Optional[List[LogEvent]] = None) -> Node:
		"""Full clean-up pipeline repeated until structurally unchanged or max_rounds."""
		if events is None:
			events = []
		steps = self._steps(
			"canonicalize", "fold_constants", "remove_zero_terms", "remove_one_factors",
			"trig_simplify", "simplify_powers",
		)
		return self._run_to_fixed_point(node, steps, events)

	# Collection

	def _accept(self, original: Node, candidate: Node, events: List[LogEvent]) -> bool:
		if not self.cfg.verify_forms:
			return True
		try:
			ok = self.checks.numerically_equivalent(original, candidate)
		except SymFormsError as exc:
			logger.debug("verify: %s; keeping %s unverified", exc, candidate)
			return True
		if not ok:
			logger.warning("verify: %s is not equivalent to %s; dropped", candidate, original)
			events.append(LogEvent("form_rejected", {"input": str(original), "candidate": str(candidate)}))
		return ok

	def _generate(self, node: Node) -> SimplificationForms:
		result = SimplificationForms()
		seen: Set[tuple] = set()

		def add(expression: Node, kind: FormKind, label: str) -> None:
			key = structure_key(expression)
			if key in seen:
				return
			if not self._accept(node, expression, result.events):
				return
			seen.add(key)
			result.forms.append(SimplifiedForm(expression, kind, label))

		ev = result.events
		add(self.expand_strategy(node, ev), FormKind.EXPANDED, EXPANDED_LABEL)
		add(self.trig_strategy(node, ev), FormKind.STRUCTURAL, TRIG_SIMPLIFIED)
		add(self.factor_strategy(node, ev), FormKind.FACTORED, FACTORED_LABEL)
		add(self.fraction_strategy(node, ev), FormKind.FACTORED, FRACTION_REDUCED)
		add(self.iterative_simplify(node, ev), FormKind.FACTORED, FULLY_SIMPLIFIED)

		if len(result.forms) < self.cfg.min_forms:
			add(self.partial_strategy(node, ev), FormKind.STRUCTURAL, INTERMEDIATE_STEP)
		if len(result.forms) < self.cfg.min_forms:
			add(self.alternative_strategy(node, ev), FormKind.STRUCTURAL, ALTERNATIVE_FORM)
		return result

	def generate_multiple_forms(self, node: Node) -> SimplificationForms:
		"""Distinct forms of node from every strategy; never raises for a well-formed tree."""
		try:
			result = self._generate(node)
		except Exception as exc:
			logger.warning("generate_multiple_forms: %s; returning the input unchanged", exc)
			return SimplificationForms(
				[SimplifiedForm(node, FormKind.STRUCTURAL, ORIGINAL_FORM)],
				[LogEvent("pipeline_failed", {"input": str(node), "error": repr(exc)})],
			)
		if not result.forms:
			result.forms.append(SimplifiedForm(node, FormKind.STRUCTURAL, ORIGINAL_FORM))
		logger.debug("generate_multiple_forms: %d form(s) for %s", len(result.forms), node)
		return result


_DEFAULT = StrategyOrchestrator()


def generate_multiple_forms(node: Node) -> SimplificationForms:
	"""Proxy to StrategyOrchestrator.generate_multiple_forms."""
	return _DEFAULT.generate_multiple_forms(node)


def iterative_simplify(node: Node) -> Node:
	"""Proxy to StrategyOrchestrator.iterative_simplify."""
	return _DEFAULT.iterative_simplify(node)
