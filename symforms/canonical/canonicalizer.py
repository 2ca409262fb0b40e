"""
Canonical polynomial form for expression trees (expand → extract → merge → sort → rebuild).

Transforms:
  • Fully expand products over sums and small non-negative integer powers of sums
  • Collapse power-of-power with numeric exponents; fold Number^Number
  • Flatten the top-level sum into signed addends and decompose each into a Term
  • Merge like terms (grouped by base key, confirmed by structural similarity), drop zeros
  • Order terms: non-constants first, total degree descending, base key, coefficient
  • Rebuild a left-associative sum

A top-level division is never crossed: numerator and denominator are canonicalized independently.
"""

from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional

from ..config import SimplifyConfig, DEFAULT_CONFIG
from ..terms import Term
from ..tree import (
	Node, Number, Variable, Function, BinaryOp, Operator,
	is_number, is_op, is_sum, is_integral, flatten_sum, sum_of,
)

logger = logging.getLogger(__name__)


class Canonicalizer:
	"""Stateless canonicalizer; the config only carries tolerances and limits."""

	def __init__(self, config: Optional[SimplifyConfig] = None) -> None:
		self.cfg = config or DEFAULT_CONFIG

	def canonicalize(self, node: Node) -> Node:
		"""Return the canonical form of node (numerator/denominator separately for a top-level division)."""
		if is_op(node, Operator.DIVIDE):
			numerator = self.canonicalize_non_fraction(node.left)
			denominator = self.canonicalize_non_fraction(node.right)
			result = BinaryOp(Operator.DIVIDE, numerator, denominator)
		else:
			result = self.canonicalize_non_fraction(node)
		logger.debug("canonicalize: %s -> %s", node, result)
		return result

	def canonicalize_non_fraction(self, node: Node) -> Node:
		expanded = self.fully_expand(node)
		terms = self.extract_terms(expanded)
		merged = self.merge_terms(terms)
		return self.build_expression(self.sort_terms(merged))

	def fully_expand(self, node: Node) -> Node:
		"""Distribute products over sums everywhere except across a division bar or inside a function."""
		if isinstance(node, (Number, Variable)):
			return node
		if isinstance(node, Function):
			return Function(node.name, self.fully_expand(node.argument))
		if isinstance(node, BinaryOp):
			left = self.fully_expand(node.left)
			right = self.fully_expand(node.right)
			op = node.operator
			if op is Operator.MULTIPLY:
				return self.expand_multiplication(left, right)
			if op is Operator.POWER:
				return self.simplify_power(left, right)
			return BinaryOp(op, left, right)
		return node

	def expand_multiplication(self, left: Node, right: Node) -> Node:
		"""Cross-multiply the addends of both sides (a non-sum counts as a single addend)."""
		if not is_sum(left) and not is_sum(right):
			return self.multiply_simple(left, right)
		products: List[Node] = []
		for lt in flatten_sum(left):
			for rt in flatten_sum(right):
				products.append(self.multiply_simple(lt, rt))
		return sum_of(products)

	def multiply_simple(self, left: Node, right: Node) -> Node:
		"""Multiply two non-sum factors through their Term decompositions."""
		eps = self.cfg.epsilon
		if isinstance(left, Number) and isinstance(right, Number):
			return Number(left.value * right.value)
		if is_number(left, 0.0, eps) or is_number(right, 0.0, eps):
			return Number(0.0)
		if is_number(left, 1.0, eps):
			return right
		if is_number(right, 1.0, eps):
			return left
		try:
			return Term.from_node(left).multiply(Term.from_node(right)).to_node()
		except ArithmeticError as exc:
			logger.warning("multiply_simple: %s; keeping %s*%s unexpanded", exc, left, right)
			return BinaryOp(Operator.MULTIPLY, left, right)

	def simplify_power(self, base: Node, exponent: Node) -> Node:
		"""Collapse (b^m)^n to b^(m*n) for numeric m, n, then expand numeric powers."""
		if is_op(base, Operator.POWER) and isinstance(base.right, Number) and isinstance(exponent, Number):
			exponent = Number(base.right.value * exponent.value)
			base = base.left
		if isinstance(exponent, Number):
			return self.expand_power(base, exponent)
		return BinaryOp(Operator.POWER, base, exponent)

	def expand_power(self, base: Node, exponent: Number) -> Node:
		"""
		Expand base^n for numeric n:
		  • Variable^n stays as is
		  • Number^n folds when real
		  • (sum)^k for integer 0 <= k <= max_expand_exponent multiplies out
		  • anything else stays an opaque Power
		"""
		n = exponent.value
		opaque = BinaryOp(Operator.POWER, base, exponent)
		if isinstance(base, Variable):
			return opaque
		if isinstance(base, Number):
			try:
				return Number(math.pow(base.value, n))
			except (ValueError, OverflowError):
				return opaque
		if not is_integral(n) or n < 0 or n > self.cfg.max_expand_exponent:
			return opaque
		k = int(round(n))
		if k == 0:
			return Number(1.0)
		if k == 1:
			return base
		if is_sum(base):
			result = base
			for _ in range(k - 1):
				result = self.expand_multiplication(result, base)
			return result
		return opaque

	def extract_terms(self, node: Node) -> List[Term]:
		"""Decompose each signed addend of the top-level sum into a Term."""
		terms: List[Term] = []
		for addend in flatten_sum(node):
			terms.append(Term.from_node(addend))
		return terms

	def merge_terms(self, terms: List[Term]) -> List[Term]:
		"""
		Sum like terms. Terms are bucketed by base key; inside a bucket a Term joins the
		first structurally similar accumulator or starts its own. Zero results are dropped.
		"""
		eps = self.cfg.epsilon
		groups: Dict[str, List[Term]] = {}
		for term in terms:
			bucket = groups.setdefault(term.base_key(), [])
			for i, existing in enumerate(bucket):
				merged = existing.merge(term, eps)
				if merged is not None:
					bucket[i] = merged
					break
			else:
				bucket.append(term)

		out: List[Term] = []
		for bucket in groups.values():
			for term in bucket:
				if not term.is_zero(eps):
					out.append(term)
		return out

	@staticmethod
	def sort_terms(terms: List[Term]) -> List[Term]:
		"""Highest degree first, constants last; base key, coefficient, then exact structure break ties."""
		return sorted(terms, key=lambda t: (t.is_constant(), -t.total_degree(), t.base_key(), t.coefficient, t.structure_key()))

	@staticmethod
	def build_expression(terms: List[Term]) -> Node:
		"""Left-associative sum of the rendered Terms; Number(0) when empty."""
		nodes: List[Node] = []
		for t in terms:
			nodes.append(t.to_node())
		return sum_of(nodes)


_DEFAULT = Canonicalizer()


def canonicalize(node: Node) -> Node:
	"""Proxy to Canonicalizer.canonicalize with the default config."""
	return _DEFAULT.canonicalize(node)


def sort_terms(terms: List[Term]) -> List[Term]:
	"""Proxy to Canonicalizer.sort_terms."""
	return Canonicalizer.sort_terms(terms)
