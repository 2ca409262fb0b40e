"""
Trigonometric identity rewriting, bottom-up and iterated to a fixed point.

Rounds apply, in order:
  • Double angle:  k·sin(θ)·cos(θ) → (k/2)·sin(2θ);  k·cos(θ)² − k·sin(θ)² → k·cos(2θ)
  • Pythagorean:   k·sin(θ)² + k·cos(θ)² → k  (either order)
  • Quotients:     sin/cos → tan, cos/sin → cot, 1/cos → sec, 1/sin → csc

Rounds stop when the tree is structurally unchanged or after max_rounds. A final
pass multiplies out runs of adjacent numeric factors inside product chains.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import List, Optional

from ..config import SimplifyConfig, DEFAULT_CONFIG
from ..tree import (
	Node, Number, Variable, Function, BinaryOp, Operator,
	is_number, is_op, nodes_equal, flatten_product, product_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrigMatch:
	"""Numeric coefficient and angle of a matched trig pattern."""
	coefficient: float
	angle: Node


def _double(angle: Node) -> Node:
	return BinaryOp(Operator.MULTIPLY, Number(2.0), angle)


class TrigRewriter:
	"""Fixed-point trig rewriting with tolerance taken from the config."""

	def __init__(self, config: Optional[SimplifyConfig] = None) -> None:
		self.cfg = config or DEFAULT_CONFIG

	def simplify(self, node: Node) -> Node:
		"""Rewrite node until no identity applies, then fold numeric coefficients."""
		result = node
		for round_no in range(1, self.cfg.max_rounds + 1):
			previous = result
			result = self.apply_double_angle(result)
			result = self.apply_pythagorean(result)
			result = self.apply_basic_identities(result)
			if result == previous:
				logger.debug("simplify: fixed point after %d round(s)", round_no)
				break
		return self.fold_numeric_coefficients(result)

	def _coeff_term(self, coefficient: float, body: Node) -> Node:
		if abs(coefficient - 1.0) < self.cfg.epsilon:
			return body
		return BinaryOp(Operator.MULTIPLY, Number(coefficient), body)

	# Double angle

	def apply_double_angle(self, node: Node) -> Node:
		if isinstance(node, (Number, Variable)):
			return node
		if isinstance(node, Function):
			return Function(node.name, self.apply_double_angle(node.argument))
		if not isinstance(node, BinaryOp):
			return node
		left = self.apply_double_angle(node.left)
		right = self.apply_double_angle(node.right)
		op = node.operator
		if op is Operator.MULTIPLY:
			m = self.match_sin_cos_product(left, right)
			if m is not None:
				logger.debug("double angle: %s*sin(%s)*cos(%s)", m.coefficient, m.angle, m.angle)
				return self._coeff_term(m.coefficient / 2.0, Function("sin", _double(m.angle)))
		elif op is Operator.SUBTRACT:
			m = self.match_cos_squared_minus_sin_squared(left, right, negate_right=False)
			if m is not None:
				return self._coeff_term(m.coefficient, Function("cos", _double(m.angle)))
		elif op is Operator.ADD:
			# canonical sums carry the minus sign on the sin² coefficient
			m = self.match_cos_squared_minus_sin_squared(left, right, negate_right=True)
			if m is not None:
				return self._coeff_term(m.coefficient, Function("cos", _double(m.angle)))
		return BinaryOp(op, left, right)

	def match_sin_cos_product(self, left: Node, right: Node) -> Optional[TrigMatch]:
		"""Match a product made only of numbers, exactly one sin and exactly one cos of the same angle."""
		coefficient = 1.0
		sin_fn: Optional[Function] = None
		cos_fn: Optional[Function] = None
		for factor in flatten_product(BinaryOp(Operator.MULTIPLY, left, right)):
			if isinstance(factor, Number):
				coefficient *= factor.value
			elif isinstance(factor, Function) and factor.name == "sin" and sin_fn is None:
				sin_fn = factor
			elif isinstance(factor, Function) and factor.name == "cos" and cos_fn is None:
				cos_fn = factor
			else:
				return None
		if sin_fn is None or cos_fn is None:
			return None
		if not nodes_equal(sin_fn.argument, cos_fn.argument, self.cfg.epsilon):
			return None
		return TrigMatch(coefficient, sin_fn.argument)

	def match_cos_squared_minus_sin_squared(self, left: Node, right: Node, negate_right: bool) -> Optional[TrigMatch]:
		cos_sq = self.extract_squared_trig(left, "cos")
		sin_sq = self.extract_squared_trig(right, "sin")
		if cos_sq is None or sin_sq is None:
			return None
		sin_coeff = -sin_sq.coefficient if negate_right else sin_sq.coefficient
		if not nodes_equal(cos_sq.angle, sin_sq.angle, self.cfg.epsilon):
			return None
		if abs(cos_sq.coefficient - sin_coeff) >= self.cfg.epsilon:
			return None
		return TrigMatch(cos_sq.coefficient, cos_sq.angle)

	def extract_squared_trig(self, node: Node, name: str) -> Optional[TrigMatch]:
		"""
		Decompose node as k·name(θ)^2: numeric factors plus exactly one factor
		that is name(θ)^2 (a bare name(θ) counts as exponent 1 and fails).
		"""
		coefficient = 1.0
		angle: Optional[Node] = None
		power = 0.0
		for factor in flatten_product(node):
			if isinstance(factor, Number):
				coefficient *= factor.value
				continue
			if angle is not None:
				return None
			if is_op(factor, Operator.POWER) and isinstance(factor.left, Function) \
					and factor.left.name == name and isinstance(factor.right, Number):
				angle = factor.left.argument
				power = factor.right.value
			elif isinstance(factor, Function) and factor.name == name:
				angle = factor.argument
				power = 1.0
			else:
				return None
		if angle is None or abs(power - 2.0) >= self.cfg.epsilon:
			return None
		return TrigMatch(coefficient, angle)

	# Pythagorean

	def apply_pythagorean(self, node: Node) -> Node:
		if isinstance(node, (Number, Variable)):
			return node
		if isinstance(node, Function):
			return Function(node.name, self.apply_pythagorean(node.argument))
		if not isinstance(node, BinaryOp):
			return node
		left = self.apply_pythagorean(node.left)
		right = self.apply_pythagorean(node.right)
		if node.operator is Operator.ADD:
			for first, second in (("sin", "cos"), ("cos", "sin")):
				a = self.extract_squared_trig(left, first)
				b = self.extract_squared_trig(right, second)
				if a is None or b is None:
					continue
				if nodes_equal(a.angle, b.angle, self.cfg.epsilon) and abs(a.coefficient - b.coefficient) < self.cfg.epsilon:
					logger.debug("pythagorean: %s^2 + %s^2 of %s", first, second, a.angle)
					return Number(a.coefficient)
		return BinaryOp(node.operator, left, right)

	# Quotient identities

	def apply_basic_identities(self, node: Node) -> Node:
		if isinstance(node, (Number, Variable)):
			return node
		if isinstance(node, Function):
			return Function(node.name, self.apply_basic_identities(node.argument))
		if not isinstance(node, BinaryOp):
			return node
		left = self.apply_basic_identities(node.left)
		right = self.apply_basic_identities(node.right)
		if node.operator is Operator.DIVIDE:
			rewritten = self.simplify_trig_division(left, right)
			if rewritten is not None:
				return rewritten
		return BinaryOp(node.operator, left, right)

	def simplify_trig_division(self, numerator: Node, denominator: Node) -> Optional[Node]:
		if isinstance(numerator, Function) and isinstance(denominator, Function) \
				and nodes_equal(numerator.argument, denominator.argument, self.cfg.epsilon):
			if numerator.name == "sin" and denominator.name == "cos":
				return Function("tan", numerator.argument)
			if numerator.name == "cos" and denominator.name == "sin":
				return Function("cot", numerator.argument)
		if is_number(numerator, 1.0, self.cfg.epsilon) and isinstance(denominator, Function):
			if denominator.name == "cos":
				return Function("sec", denominator.argument)
			if denominator.name == "sin":
				return Function("csc", denominator.argument)
		return None

	# Numeric coefficients

	def fold_numeric_coefficients(self, node: Node) -> Node:
		"""
		Multiply adjacent Number factors in each product chain; a product of exactly 1 disappears.
		A chain with nothing to fold keeps its grouping; a folded chain with a leading coefficient
		is rebuilt as coefficient × (rest), the shape Term.to_node produces.
		"""
		if isinstance(node, Function):
			return Function(node.name, self.fold_numeric_coefficients(node.argument))
		if not isinstance(node, BinaryOp):
			return node
		if node.operator is not Operator.MULTIPLY:
			return BinaryOp(node.operator, self.fold_numeric_coefficients(node.left), self.fold_numeric_coefficients(node.right))

		chain = flatten_product(node)
		factors: List[Node] = []
		run: Optional[float] = None
		for factor in chain:
			if isinstance(factor, Number):
				run = factor.value if run is None else run * factor.value
				continue
			if run is not None:
				if abs(run - 1.0) >= self.cfg.epsilon:
					factors.append(Number(run))
				run = None
			factors.append(self.fold_numeric_coefficients(factor))
		if run is not None and (abs(run - 1.0) >= self.cfg.epsilon or not factors):
			factors.append(Number(run))
		if len(factors) == len(chain):
			return BinaryOp(Operator.MULTIPLY, self.fold_numeric_coefficients(node.left), self.fold_numeric_coefficients(node.right))
		if len(factors) > 1 and isinstance(factors[0], Number):
			return BinaryOp(Operator.MULTIPLY, factors[0], product_of(factors[1:]))
		return product_of(factors)


_DEFAULT = TrigRewriter()


def simplify(node: Node) -> Node:
	"""Proxy to TrigRewriter.simplify with the default config."""
	return _DEFAULT.simplify(node)
