"""
Alternative-form generation: common-factor extraction and exponential cancellation in fractions.

Forms emitted by generate_all_forms:
  • the input itself ("standard form", EXPANDED), always first
  • for a division: the fraction with a factored numerator ("numerator factored") and the
    result of cancelling exp(u)^a / exp(u)^b ("exp cancelled"), each only when it differs
  • otherwise: the whole sum with its greatest common factor pulled out ("common factor extracted")
"""

from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Tuple

from ..config import SimplifyConfig, DEFAULT_CONFIG, LogEvent
from ..terms import FunctionKey, Term
from ..tree import (
	Node, Number, Function, BinaryOp, Operator,
	is_op, flatten_product, flatten_sum, product_of, sum_of,
)
from .types import (
	FormKind, SimplifiedForm, SimplificationForms,
	STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED, COMMON_FACTOR_EXTRACTED,
)

logger = logging.getLogger(__name__)


def _function_power(factor: Node) -> Optional[Tuple[Function, float]]:
	"""(f, e) when factor is f(u) or f(u)^e with numeric e."""
	if isinstance(factor, Function):
		return factor, 1.0
	if is_op(factor, Operator.POWER) and isinstance(factor.left, Function) and isinstance(factor.right, Number):
		return factor.left, factor.right.value
	return None


class FormGenerator:
	"""GCD factoring and fraction reduction over canonical trees."""

	def __init__(self, config: Optional[SimplifyConfig] = None) -> None:
		self.cfg = config or DEFAULT_CONFIG

	def _is_trivial(self, t: Term) -> bool:
		return abs(t.coefficient - 1.0) < self.cfg.epsilon and not t.variables and not t.functions

	# Common factor

	def normalize_powers_in_term(self, node: Node) -> Node:
		"""
		Merge repeated factors of the same function within one product:
		f(u)·f(u)^2·a → a·f(u)^3. Divisions are left alone.
		"""
		if is_op(node, Operator.DIVIDE):
			return node
		factors = flatten_product(node)
		if len(factors) <= 1:
			return node

		groups: Dict[FunctionKey, List[Tuple[Function, float]]] = {}
		others: List[Node] = []
		for factor in factors:
			fp = _function_power(factor)
			if fp is None:
				others.append(factor)
				continue
			groups.setdefault(FunctionKey.of(fp[0]), []).append(fp)

		merged: List[Node] = []
		for instances in groups.values():
			total = sum(e for _, e in instances)
			base = instances[0][0]
			if abs(total - 1.0) < self.cfg.epsilon:
				merged.append(base)
			elif abs(total) < self.cfg.epsilon:
				merged.append(Number(1.0))
			else:
				merged.append(BinaryOp(Operator.POWER, base, Number(total)))

		if len(others) + len(merged) == len(factors):
			return node
		return product_of(others + merged)

	def coefficient_gcd(self, a: float, b: float) -> float:
		"""Euclid on absolute values with tolerance; rounded to 10 decimals."""
		a, b = abs(a), abs(b)
		while b >= self.cfg.epsilon:
			a, b = b, math.fmod(a, b)
		return round(a, 10)

	def find_gcd(self, terms: List[Term]) -> Term:
		"""
		Greatest common Term of a list:
		  • coefficient: iterative Euclid across all coefficients
		  • variables/functions: only those present in every term, at the minimum positive exponent
		"""
		if not terms:
			return Term(1.0)
		eps = self.cfg.epsilon

		coeff = abs(terms[0].coefficient)
		for t in terms[1:]:
			coeff = self.coefficient_gcd(coeff, t.coefficient)
		if coeff < eps:
			coeff = 1.0
		else:
			for t in terms:
				q = t.coefficient / coeff
				if abs(q - round(q)) >= 1e-9:
					coeff = 1.0
					break

		variables: Dict[str, float] = {}
		for name in terms[0].variables:
			if all(name in t.variables for t in terms):
				low = min(t.variables[name] for t in terms)
				if low > eps:
					variables[name] = low

		functions: Dict[FunctionKey, float] = {}
		for key in terms[0].functions:
			if all(key in t.functions for t in terms):
				low = min(t.functions[key] for t in terms)
				if low > eps:
					functions[key] = low

		return Term(coeff, variables, functions)

	def extract_common_factor(self, node: Node) -> Node:
		"""Rewrite a sum of two or more addends as GCD × Σ(addend / GCD); other input is returned unchanged."""
		if not is_op(node, Operator.ADD, Operator.SUBTRACT):
			return node
		addends = []
		for a in flatten_sum(node):
			addends.append(self.normalize_powers_in_term(a))
		terms = [Term.from_node(a) for a in addends]
		if len(terms) < 2:
			return node

		gcd = self.find_gcd(terms)
		if self._is_trivial(gcd):
			logger.debug("extract_common_factor: no common factor in %s", node)
			return node

		eps = self.cfg.epsilon
		for name, e in gcd.variables.items():
			for t in terms:
				if t.variables.get(name, 0.0) < e - eps:
					logger.debug("extract_common_factor: %s exponent check failed; coefficient only", name)
					return self.build_factored_expression(terms, Term(gcd.coefficient))
		for key, e in gcd.functions.items():
			for t in terms:
				if t.functions.get(key, 0.0) < e - eps:
					logger.debug("extract_common_factor: %s exponent check failed; coefficient only", key)
					return self.build_factored_expression(terms, Term(gcd.coefficient))

		return self.build_factored_expression(terms, gcd)

	def build_factored_expression(self, terms: List[Term], gcd: Term) -> Node:
		remaining = []
		for t in terms:
			remaining.append(t.divide(gcd, self.cfg.epsilon).to_node())
		total = sum_of(remaining)
		if self._is_trivial(gcd):
			return total
		return BinaryOp(Operator.MULTIPLY, gcd.to_node(), total)

	# Exponential cancellation

	@staticmethod
	def _exp_info(factor: Node) -> Optional[Tuple[FunctionKey, float]]:
		fp = _function_power(factor)
		if fp is None or fp[0].name != "exp":
			return None
		return FunctionKey.of(fp[0]), fp[1]

	def _split_exp(self, side: Node) -> Tuple[Dict[FunctionKey, float], List[Node]]:
		powers: Dict[FunctionKey, float] = {}
		rest: List[Node] = []
		for factor in flatten_product(side):
			info = self._exp_info(factor)
			if info is None:
				rest.append(factor)
			else:
				powers[info[0]] = powers.get(info[0], 0.0) + info[1]
		return powers, rest

	def _exp_factors(self, powers: Dict[FunctionKey, float]) -> List[Node]:
		out: List[Node] = []
		for key, e in powers.items():
			if abs(e - 1.0) < self.cfg.epsilon:
				out.append(key.to_node())
			else:
				out.append(BinaryOp(Operator.POWER, key.to_node(), Number(e)))
		return out

	def cancel_exp_once(self, node: Node) -> Node:
		"""One cancellation pass of exp(u)^a in the numerator against exp(u)^b in the denominator."""
		if not is_op(node, Operator.DIVIDE):
			return node
		num_exp, num_rest = self._split_exp(node.left)
		den_exp, den_rest = self._split_exp(node.right)
		common = [k for k in num_exp if k in den_exp]
		if not common:
			return node

		for key in common:
			diff = num_exp[key] - den_exp[key]
			if abs(diff) < self.cfg.epsilon:
				del num_exp[key]
				del den_exp[key]
			elif diff > 0:
				num_exp[key] = diff
				del den_exp[key]
			else:
				del num_exp[key]
				den_exp[key] = -diff

		numerator = product_of(num_rest + self._exp_factors(num_exp))
		denominator = product_of(den_rest + self._exp_factors(den_exp))
		return BinaryOp(Operator.DIVIDE, numerator, denominator)

	def simplify_exp_in_fraction(self, node: Node) -> Node:
		"""Repeat cancel_exp_once until the fraction stops changing or exp_cancel_rounds passes ran."""
		current = self.cancel_exp_once(node)
		last = node
		rounds = 0
		while current != last and rounds < self.cfg.exp_cancel_rounds:
			last = current
			current = self.cancel_exp_once(current)
			rounds += 1
		return current

	# Entry point

	def _attempt(self, name: str, fn, node: Node, events: List[LogEvent]) -> Node:
		try:
			return fn(node)
		except Exception as exc:
			logger.warning("%s: %s; keeping %s", name, exc, node)
			events.append(LogEvent("form_step_failed", {"step": name, "error": repr(exc), "input": str(node)}))
			return node

	def generate_all_forms(self, node: Node) -> SimplificationForms:
		forms = [SimplifiedForm(node, FormKind.EXPANDED, STANDARD_FORM)]
		events: List[LogEvent] = []

		if is_op(node, Operator.DIVIDE):
			numerator = self._attempt("extract_common_factor", self.extract_common_factor, node.left, events)
			factored = node
			if numerator != node.left:
				factored = BinaryOp(Operator.DIVIDE, numerator, node.right)
			cancelled = self._attempt("simplify_exp_in_fraction", self.simplify_exp_in_fraction, factored, events)

			if factored != node:
				forms.append(SimplifiedForm(factored, FormKind.FACTORED, NUMERATOR_FACTORED))
			if cancelled != node and cancelled != factored:
				forms.append(SimplifiedForm(cancelled, FormKind.FACTORED, EXP_CANCELLED))
		else:
			factored = self._attempt("extract_common_factor", self.extract_common_factor, node, events)
			if factored != node:
				forms.append(SimplifiedForm(factored, FormKind.FACTORED, COMMON_FACTOR_EXTRACTED))

		logger.debug("generate_all_forms: %d form(s) for %s", len(forms), node)
		return SimplificationForms(forms, events)


_DEFAULT = FormGenerator()


def generate_all_forms(node: Node) -> SimplificationForms:
	"""Proxy to FormGenerator.generate_all_forms."""
	return _DEFAULT.generate_all_forms(node)


def extract_common_factor(node: Node) -> Node:
	"""Proxy to FormGenerator.extract_common_factor."""
	return _DEFAULT.extract_common_factor(node)


def simplify_exp_in_fraction(node: Node) -> Node:
	"""Proxy to FormGenerator.simplify_exp_in_fraction."""
	return _DEFAULT.simplify_exp_in_fraction(node)
